"""
Geometric shapes for the path tracer.

Each shape implements the Hittable interface with a `hit` method that
returns the closest intersection within a parametric interval.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Point3
from .ray import Ray

if TYPE_CHECKING:
    from .materials import Material


@dataclass(frozen=True)
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The surface normal at the intersection (always points against ray)
        t: The ray parameter at intersection
        front_face: True if ray hit from outside the object
        material: The material at the hit point
    """
    point: Point3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def with_face_normal(
        cls,
        ray: Ray,
        point: Point3,
        t: float,
        outward_normal: Vec3,
        material: Material
    ) -> HitRecord:
        """Build a record whose normal points against the incoming ray.

        Args:
            ray: The incoming ray
            point: Intersection point
            t: Ray parameter at the intersection
            outward_normal: The geometric normal pointing outward from surface
            material: Material of the object hit
        """
        front_face = ray.direction.dot(outward_normal) < 0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test if ray intersects this object.

        Args:
            ray: The ray to test
            t_min: Minimum t value to consider (avoid self-intersection)
            t_max: Maximum t value to consider

        Returns:
            HitRecord if intersection found, None otherwise
        """


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere. A negative radius keeps the shape
                but flips the outward normal, giving a hollow shell.
            material: Material for shading
        """
        self.center = center
        self.radius = radius
        self.material = material

    def outward_normal(self, point: Point3) -> Vec3:
        """Geometric normal at a surface point; its sign follows the radius."""
        return (point - self.center) / self.radius

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is solved with the half-b form of the quadratic formula.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (-half_b - sqrtd) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrtd) / a
            if root < t_min or root > t_max:
                return None

        point = ray.at(root)
        return HitRecord.with_face_normal(
            ray, point, root, self.outward_normal(point), self.material
        )

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class HittableList(Hittable):
    """A collection of hittable objects; the closest hit wins."""

    def __init__(self, objects: Optional[list[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the list."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        Each object is tested against the closest hit found so far, so the
        result does not depend on insertion order.
        """
        closest_hit: Optional[HitRecord] = None
        closest_t = t_max

        for obj in self.objects:
            hit_record = obj.hit(ray, t_min, closest_t)
            if hit_record is not None:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)
