"""
Output pixel buffer and the hand-off to the image encoder.

The buffer stores 8-bit RGB with a top-left origin, the convention image
codecs expect. Render jobs write disjoint rectangular regions, so no
locking is needed.
"""

from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import Union

import numpy as np

from .errors import PixelWriteError
from .vec3 import Color

logger = logging.getLogger(__name__)


def to_rgb8_array(pixel_sums: np.ndarray, samples: int) -> np.ndarray:
    """Average accumulated samples, gamma correct and quantize to 8 bits.

    The last axis holds RGB sums. Gamma 2 is applied by taking the square
    root of each channel; the result is scaled by 255 and truncated,
    saturating at [0, 255].
    """
    averaged = np.clip(pixel_sums / samples, 0.0, None)
    return np.clip(np.sqrt(averaged) * 255, 0, 255).astype(np.uint8)


class PixelBuffer:
    """A width x height grid of 8-bit RGB pixels.

    Every cell is written exactly once; a second write to the same cell
    raises PixelWriteError.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._written = np.zeros((height, width), dtype=bool)

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._pixels.shape

    def write_region(self, x0: int, y0: int, block: np.ndarray) -> None:
        """Write a block of pixels with its top-left corner at (x0, y0)."""
        h, w = block.shape[:2]
        if self._written[y0:y0 + h, x0:x0 + w].any():
            raise PixelWriteError(f"region at ({x0}, {y0}) size {w}x{h} overlaps written pixels")
        self._pixels[y0:y0 + h, x0:x0 + w] = block
        self._written[y0:y0 + h, x0:x0 + w] = True

    def is_complete(self) -> bool:
        """True once every pixel has been written."""
        return bool(self._written.all())

    def to_array(self) -> np.ndarray:
        """Return a copy of the pixels as a (height, width, 3) uint8 array."""
        return self._pixels.copy()


def save_image(buffer: PixelBuffer, filename: Union[str, Path]) -> None:
    """Encode the buffer to disk; the file extension selects the format.

    Raises:
        OSError: if Pillow cannot write the file
        ValueError: if the extension names no known format
    """
    from PIL import Image as PILImage

    pil_image = PILImage.fromarray(buffer.to_array())
    pil_image.save(filename)
    logger.info("Saved %dx%d image to %s", buffer.width, buffer.height, filename)
