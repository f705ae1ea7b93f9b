"""
Light transport: the color carried back along a camera ray.

The only light source is an ambient sky dome. A path is followed bounce by
bounce, multiplying in each surface's attenuation, until it escapes to the
sky, is absorbed, or runs out of depth.
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .vec3 import Color
from .ray import Ray
from .shapes import Hittable

# Lower bound on hit distance so a scattered ray does not re-hit the
# surface it just left (shadow acne).
T_MIN = 0.001

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient seen by rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def ray_color(
    ray: Ray,
    world: Hittable,
    depth: int,
    rng: Optional[np.random.Generator] = None
) -> Color:
    """Compute the color for a ray using path tracing.

    Equivalent to the recursive form
    ``attenuation * ray_color(scattered, world, depth - 1)`` with black
    returned at depth 0 or on absorption, but evaluated as a loop.

    Args:
        ray: The ray to trace
        world: The scene to trace against
        depth: Maximum number of surface interactions
        rng: Random generator used by material scattering

    Returns:
        The linear radiance carried by this ray
    """
    throughput = WHITE

    while depth > 0:
        rec = world.hit(ray, T_MIN, math.inf)
        if rec is None:
            return throughput * sky_color(ray)

        result = rec.material.scatter(ray, rec, rng)
        if result is None:
            return BLACK

        throughput = throughput * result.attenuation
        ray = result.scattered_ray
        depth -= 1

    return BLACK
