"""
Renderer module - drives the path tracer over every pixel.

Implements:
- Per-pixel Monte Carlo sampling with jittered sample positions
- Tile-based work distribution over a thread pool
- Gamma-corrected 8-bit output into a shared pixel buffer
"""

from __future__ import annotations
import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor, Future, as_completed
from dataclasses import dataclass
from typing import Optional, Callable, Tuple

import numpy as np

from .errors import ConfigurationError
from .vec3 import Color, get_rng
from .camera import Camera
from .shapes import Hittable
from .integrator import ray_color
from .image import PixelBuffer, to_rgb8_array

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer.

    Attributes:
        width, height: Output size in pixels (both at least 2)
        samples_per_pixel: Camera rays averaged into each pixel
        max_depth: Maximum number of surface interactions per path
        tile_size: Edge length of the square unit of work (1 = per pixel)
        num_threads: Worker count, 0 = one per CPU
        seed: Fixes all random draws when set; None renders from fresh entropy
    """
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = None

    def __post_init__(self):
        # Sample positions are normalized by (size - 1)
        if self.width < 2 or self.height < 2:
            raise ConfigurationError(
                f"image must be at least 2x2 pixels, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ConfigurationError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ConfigurationError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.tile_size < 1:
            raise ConfigurationError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_threads < 0:
            raise ConfigurationError(f"num_threads must be non-negative, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @classmethod
    def from_aspect_ratio(cls, height: int, aspect_ratio: float, **kwargs) -> RenderSettings:
        """Derive the width from a height and an aspect ratio."""
        if not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
            raise ConfigurationError(f"aspect_ratio must be positive, got {aspect_ratio}")
        return cls(width=int(height * aspect_ratio), height=height, **kwargs)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def sample_pixel(
    scene: Hittable,
    camera: Camera,
    i: int,
    j: int,
    width: int,
    height: int,
    samples: int,
    max_depth: int,
    rng: Optional[np.random.Generator] = None
) -> Color:
    """Sum `samples` radiance estimates for pixel column i, row j.

    Rows count upward from the bottom of the image. Each sample jitters the
    pixel position independently in both axes.

    Returns:
        The unaveraged linear color sum
    """
    rng = rng if rng is not None else get_rng()
    pixel_color = Color(0, 0, 0)

    for _ in range(samples):
        u_jitter, v_jitter = rng.random(2)
        u = (i + u_jitter) / (width - 1)
        v = (j + v_jitter) / (height - 1)

        ray = camera.get_ray(u, v, rng)
        pixel_color = pixel_color + ray_color(ray, scene, max_depth, rng)

    return pixel_color


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> PixelBuffer:
        """Render the scene and return the finished 8-bit image.

        The scene and camera are only read, and are shared by all workers.
        The first exception raised by any tile aborts the render and is
        re-raised here.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            PixelBuffer with every pixel written
        """
        settings = self.settings
        buffer = PixelBuffer(settings.width, settings.height)

        tiles = self._generate_tiles(settings.width, settings.height)
        seeds = np.random.SeedSequence(settings.seed).spawn(len(tiles))
        total_tiles = len(tiles)

        logger.info(
            "Rendering %dx%d, %d spp, depth %d, %d threads, %d tiles",
            settings.width, settings.height, settings.samples_per_pixel,
            settings.max_depth, settings.num_threads, total_tiles
        )
        start_time = time.perf_counter()

        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                futures = [
                    executor.submit(self._render_tile, scene, camera, buffer, tile, seed)
                    for tile, seed in zip(tiles, seeds)
                ]
                self._wait_for_tiles(futures)
        else:
            for completed, (tile, seed) in enumerate(zip(tiles, seeds), start=1):
                self._render_tile(scene, camera, buffer, tile, seed)
                self._report_progress(completed, total_tiles)

        elapsed = time.perf_counter() - start_time
        rays = settings.width * settings.height * settings.samples_per_pixel
        logger.info(
            "Render took %.2f s (%.0f camera rays/s)",
            elapsed, rays / elapsed if elapsed > 0 else float('inf')
        )
        return buffer

    def _wait_for_tiles(self, futures: list[Future]) -> None:
        """Block until every tile is done, propagating the first failure."""
        total = len(futures)
        completed = 0
        try:
            for future in as_completed(futures):
                future.result()
                completed += 1
                self._report_progress(completed, total)
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    def _report_progress(self, completed: int, total: int) -> None:
        if self._progress_callback:
            self._progress_callback(completed / total)

    def _render_tile(
        self,
        scene: Hittable,
        camera: Camera,
        buffer: PixelBuffer,
        tile: Tile,
        seed: np.random.SeedSequence
    ) -> None:
        """Render one tile into its own region of the buffer.

        Tile bounds are in image coordinates (top-left origin); image row y
        corresponds to camera row height - 1 - y.
        """
        settings = self.settings
        rng = np.random.default_rng(seed)
        x0, y0, x1, y1 = tile
        sums = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

        for y in range(y0, y1):
            j = settings.height - 1 - y
            for x in range(x0, x1):
                pixel_color = sample_pixel(
                    scene, camera, x, j,
                    settings.width, settings.height,
                    settings.samples_per_pixel, settings.max_depth, rng
                )
                sums[y - y0, x - x0] = pixel_color.to_array()

        buffer.write_region(x0, y0, to_rgb8_array(sums, settings.samples_per_pixel))
        logger.debug("Finished tile %s", tile)

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
