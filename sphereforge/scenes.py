"""Ready-made scenes and the cameras that frame them."""

from __future__ import annotations
import logging
from typing import Callable, Optional

import numpy as np

from .vec3 import Vec3, Point3, Color, get_rng
from .camera import Camera
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric

logger = logging.getLogger(__name__)


def random_scene(rng: Optional[np.random.Generator] = None) -> HittableList:
    """A ground plane covered in small random spheres around three large ones."""
    rng = rng if rng is not None else get_rng()
    world = HittableList()

    ground_material = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground_material))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = Color.random(rng=rng) * Color.random(rng=rng)
                sphere_material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = Color.random(0.5, 1, rng)
                fuzz = float(rng.uniform(0, 0.5))
                sphere_material = Metal(albedo, fuzz)
            else:
                # glass
                sphere_material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, sphere_material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    logger.debug("Built random scene with %d spheres", len(world))
    return world


def random_scene_camera(aspect_ratio: float) -> Camera:
    return Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )


def bubble_scene(rng: Optional[np.random.Generator] = None) -> HittableList:
    """Three spheres on a ground sphere; the left one is a hollow glass bubble.

    The bubble is a glass sphere with a smaller negative-radius sphere
    inside it, whose normals point inward. The layout is fixed; `rng` is
    accepted only so every entry in SCENES can be called the same way and
    is ignored.
    """
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.3)

    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, center))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, glass))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.4, glass))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, metal))
    return world


def bubble_scene_camera(aspect_ratio: float) -> Camera:
    look_from = Point3(3, 3, 2)
    look_at = Point3(0, 0, -1)
    return Camera(
        look_from=look_from,
        look_at=look_at,
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=2.0,
        focus_dist=(look_from - look_at).length()
    )


SceneFactory = Callable[[Optional[np.random.Generator]], HittableList]
CameraFactory = Callable[[float], Camera]

SCENES: dict[str, tuple[SceneFactory, CameraFactory]] = {
    'random': (random_scene, random_scene_camera),
    'bubble': (bubble_scene, bubble_scene_camera),
}
