"""Tests for Ray class."""

import pytest
from sphereforge.vec3 import Vec3, Point3
from sphereforge.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin

    def test_stores_direction_unnormalized(self):
        direction = Vec3(1, 2, 3)
        ray = Ray(Point3(0, 0, 0), direction)
        assert ray.direction == direction


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.at(5) == Point3(5, 0, 0)

    def test_at_scales_with_direction_length(self):
        ray = Ray(Point3(1, 1, 1), Vec3(0, 2, 0))
        assert ray.at(1.5) == Point3(1, 4, 1)
