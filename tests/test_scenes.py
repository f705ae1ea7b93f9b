"""Tests for the ready-made scenes."""

import pytest
import numpy as np

from sphereforge.vec3 import Point3
from sphereforge.shapes import Sphere, HittableList
from sphereforge.materials import Lambertian, Metal, Dielectric
from sphereforge.camera import Camera
from sphereforge.scenes import (
    SCENES, random_scene, random_scene_camera, bubble_scene, bubble_scene_camera
)


class TestRandomScene:
    """Test the many-spheres scene."""

    def test_contents(self):
        world = random_scene(np.random.default_rng(0))
        spheres = list(world)

        assert isinstance(world, HittableList)
        # Ground, at most 22x22 small spheres, three feature spheres
        assert 4 < len(world) <= 1 + 22 * 22 + 3
        assert spheres[0].radius == 1000
        assert [s.radius for s in spheres[-3:]] == [1.0, 1.0, 1.0]
        assert isinstance(spheres[-3].material, Dielectric)
        assert isinstance(spheres[-2].material, Lambertian)
        assert isinstance(spheres[-1].material, Metal)

    def test_small_spheres(self):
        world = random_scene(np.random.default_rng(1))
        small = [s for s in world if s.radius == 0.2]

        assert small
        for sphere in small:
            assert sphere.center.y == 0.2
            assert (sphere.center - Point3(4, 0.2, 0)).length() > 0.9
            if isinstance(sphere.material, Metal):
                assert 0 <= sphere.material.fuzz < 0.5
            elif isinstance(sphere.material, Dielectric):
                assert sphere.material.ior == 1.5

    def test_seeded_is_repeatable(self):
        a = random_scene(np.random.default_rng(7))
        b = random_scene(np.random.default_rng(7))
        assert [s.center for s in a] == [s.center for s in b]

    def test_camera(self):
        cam = random_scene_camera(16 / 9)
        assert cam.origin == Point3(13, 2, 3)
        assert cam.lens_radius == 0.05


class TestBubbleScene:
    """Test the hollow glass scene."""

    def test_hollow_sphere(self):
        world = bubble_scene()
        glass = [s for s in world if isinstance(s.material, Dielectric)]

        assert len(glass) == 2
        outer, inner = sorted(glass, key=lambda s: s.radius, reverse=True)
        assert outer.center == inner.center
        assert outer.radius == 0.5
        assert inner.radius == -0.4
        assert outer.material is inner.material

    def test_layout_ignores_generator(self):
        default = bubble_scene()
        seeded = bubble_scene(np.random.default_rng(0))
        assert [(s.center, s.radius) for s in default] == [(s.center, s.radius) for s in seeded]

    def test_camera_focuses_on_center_sphere(self):
        cam = bubble_scene_camera(1.5)
        assert abs(cam.focus_dist - (Point3(3, 3, 2) - Point3(0, 0, -1)).length()) < 1e-12


class TestRegistry:

    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_factories(self, name):
        scene_factory, camera_factory = SCENES[name]
        assert len(scene_factory(np.random.default_rng(0))) > 0
        assert isinstance(camera_factory(2.0), Camera)
