"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (thin-lens defocus blur)
- Configurable field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .errors import ConfigurationError
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A thin-lens camera with perspective projection and depth of field.

    All state is computed once in the constructor; `get_ray` only reads it,
    so one camera can be shared by every render thread.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        vup: Vec3 = Vec3(0, 1, 0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float = 1.0
    ):
        """Create a camera.

        Args:
            look_from: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            vfov: Vertical field of view in degrees
            aspect_ratio: Width / Height ratio
            aperture: Lens aperture for depth of field (0 = pinhole)
            focus_dist: Distance to the focus plane

        Raises:
            ConfigurationError: if the parameters cannot define a viewport
        """
        self._validate(look_from, look_at, vup, vfov, aspect_ratio, aperture, focus_dist)

        theta = math.radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Compute orthonormal camera basis
        self.w = (look_from - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()       # Points right
        self.v = self.w.cross(self.u)                # Points up

        self.origin = look_from
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = aperture / 2
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.focus_dist = focus_dist

    @staticmethod
    def _validate(look_from, look_at, vup, vfov, aspect_ratio, aperture, focus_dist) -> None:
        for name, vec in (('look_from', look_from), ('look_at', look_at), ('vup', vup)):
            if not vec.is_finite():
                raise ConfigurationError(f"{name} must be finite, got {vec}")
        for name, value in (('vfov', vfov), ('aspect_ratio', aspect_ratio),
                            ('aperture', aperture), ('focus_dist', focus_dist)):
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if not 0 < vfov < 180:
            raise ConfigurationError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0:
            raise ConfigurationError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if aperture < 0:
            raise ConfigurationError(f"aperture must be non-negative, got {aperture}")
        if focus_dist <= 0:
            raise ConfigurationError(f"focus_dist must be positive, got {focus_dist}")

        view = look_from - look_at
        if view.near_zero():
            raise ConfigurationError("look_from and look_at must be distinct points")
        if vup.cross(view).near_zero():
            raise ConfigurationError("vup must not be parallel to the viewing direction")

    def get_ray(self, s: float, t: float, rng: Optional[np.random.Generator] = None) -> Ray:
        """Generate a ray for the given coordinates on the image plane.

        Args:
            s: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            t: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
            rng: Random generator for the lens sample

        Returns:
            A ray from a point on the lens through the focus plane
        """
        if self.lens_radius > 0:
            rd = Vec3.random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )
        return Ray(self.origin + offset, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
