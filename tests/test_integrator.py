"""Tests for the light transport integrator."""

import pytest
import numpy as np

from sphereforge.vec3 import Vec3, Point3, Color
from sphereforge.ray import Ray
from sphereforge.shapes import Sphere, HittableList
from sphereforge.materials import Material, Lambertian, Metal, Dielectric, ScatterResult
from sphereforge.integrator import ray_color, sky_color, T_MIN


class Absorber(Material):
    def scatter(self, ray_in, rec, rng=None):
        return None


class Mirror(Material):
    """Reflects along the normal with a fixed attenuation."""

    def __init__(self, attenuation):
        self.attenuation = attenuation
        self.calls = 0

    def scatter(self, ray_in, rec, rng=None):
        self.calls += 1
        return ScatterResult(self.attenuation, Ray(rec.point, rec.normal))


class TestSkyColor:
    """Test the background gradient."""

    def test_straight_up_is_sky_blue(self):
        assert sky_color(Ray(Point3(0, 0, 0), Vec3(0, 1, 0))) == Color(0.5, 0.7, 1.0)

    def test_straight_down_is_white(self):
        assert sky_color(Ray(Point3(0, 0, 0), Vec3(0, -5, 0))) == Color(1.0, 1.0, 1.0)

    def test_horizon_is_midpoint(self):
        assert sky_color(Ray(Point3(0, 0, 0), Vec3(1, 0, 0))) == Color(0.75, 0.85, 1.0)


class TestRayColor:
    """Test ray_color()."""

    def test_miss_returns_sky(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(1, 0, 0)))])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 1, 0)), world, 10)
        assert color == Color(0.5, 0.7, 1.0)

    @pytest.mark.parametrize("world", [
        HittableList(),
        HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(1, 1, 1)))]),
    ])
    def test_depth_zero_is_black(self, world):
        for direction in (Vec3(0, 1, 0), Vec3(0, 0, -1)):
            color = ray_color(Ray(Point3(0, 0, 0), direction), world, 0)
            assert color.x == 0.0 and color.y == 0.0 and color.z == 0.0

    def test_absorbed_is_black(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Absorber())])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), world, 10)
        assert color == Color(0, 0, 0)

    def test_attenuation_multiplies_sky(self):
        mirror = Mirror(Color(0.5, 0.25, 1.0))
        world = HittableList([Sphere(Point3(0, -1, 0), 0.5, mirror)])
        # Hits the top of the sphere and is sent straight up into the sky
        color = ray_color(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), world, 5)
        assert color == Color(0.25, 0.175, 1.0)
        assert mirror.calls == 1

    def test_depth_bounds_bounces(self):
        mirror = Mirror(Color(0.9, 0.9, 0.9))
        # Inside a sphere every bounce hits the wall again
        world = HittableList([Sphere(Point3(0, 0, 0), 5.0, mirror)])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(1, 0, 0)), world, 7)
        assert color == Color(0, 0, 0)
        assert mirror.calls == 7

    def test_one_bounce_budget_ends_black(self):
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(1, 1, 1)))])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), world, 1)
        assert color == Color(0, 0, 0)

    def test_diffuse_bounce_bounded_by_albedo(self):
        albedo = Color(0.5, 0.5, 0.5)
        world = HittableList([Sphere(Point3(0, 0, -1), 0.5, Lambertian(albedo))])
        rng = np.random.default_rng(0)
        for _ in range(20):
            color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), world, 2, rng)
            # One bounce off a convex sphere always escapes to the sky
            assert 0.25 <= color.x <= 0.5
            assert 0.35 <= color.y <= 0.5
            assert abs(color.z - 0.5) < 1e-12

    def test_glass_passes_sky_through(self):
        world = HittableList([Sphere(Point3(0, 0, -2), 0.5, Dielectric(1.0))])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0.1, -1)), world, 10, np.random.default_rng(1))
        assert color == sky_color(Ray(Point3(0, 0, 0), Vec3(0, 0.1, -1)))

    @pytest.mark.parametrize("depth", [1, 2, 5])
    def test_surfaces_do_not_emit(self, depth):
        # Only the sky adds light; a hit surface that absorbs stays black
        world = HittableList([Sphere(Point3(0, 0, -2), 1.0, Absorber())])
        color = ray_color(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)), world, depth)
        assert color.x == 0.0 and color.y == 0.0 and color.z == 0.0

    def test_ignores_hits_closer_than_t_min(self):
        world = HittableList([Sphere(Point3(0, 0, 0), 1.0, Absorber())])
        # Leaving from just under the surface must not re-hit it
        start = Point3(0, 1 - T_MIN / 10, 0)
        color = ray_color(Ray(start, Vec3(0, 1, 0)), world, 3)
        assert color == Color(0.5, 0.7, 1.0)
