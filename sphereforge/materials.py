"""
Surface materials and their scattering behavior.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzziness)
- Dielectric (glass, water - with refraction)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import math

import numpy as np

from .vec3 import Vec3, Color, random_double
from .ray import Ray
from .shapes import HitRecord


@dataclass(frozen=True)
class ScatterResult:
    """Result of a material scatter operation."""
    attenuation: Color
    scattered_ray: Ray


class Material(ABC):
    """Abstract base class for materials.

    Materials are immutable after construction and may be shared by any
    number of objects and render threads.
    """

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: Optional[np.random.Generator] = None
    ) -> Optional[ScatterResult]:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray
            rec: Intersection that produced the scatter event
            rng: Random generator (defaults to the calling thread's)

        Returns:
            ScatterResult if ray scatters, None if absorbed
        """


class Lambertian(Material):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Optional[np.random.Generator] = None) -> Optional[ScatterResult]:
        scatter_direction = rec.normal + Vec3.random_unit_vector(rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterResult(
            attenuation=self.albedo,
            scattered_ray=Ray(rec.point, scatter_direction)
        )

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(Material):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Surface roughness, clamped to [0, 1] (0 = mirror)
        """
        self.albedo = albedo
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Optional[np.random.Generator] = None) -> Optional[ScatterResult]:
        reflected = ray_in.direction.normalize().reflect(rec.normal)
        if self.fuzz > 0:
            reflected = reflected + Vec3.random_in_unit_sphere(rng) * self.fuzz

        scattered = Ray(rec.point, reflected)

        # Reflections below the surface are absorbed
        if scattered.direction.dot(rec.normal) > 0:
            return ScatterResult(attenuation=self.albedo, scattered_ray=scattered)
        return None

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, ior: float = 1.5):
        """Create a dielectric material.

        Args:
            ior: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        self.ior = ior

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: Optional[np.random.Generator] = None) -> Optional[ScatterResult]:
        # Glass does not tint
        attenuation = Color(1.0, 1.0, 1.0)
        refraction_ratio = 1.0 / self.ior if rec.front_face else self.ior

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or random_double(rng=rng) < self._reflectance(cos_theta, refraction_ratio):
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, refraction_ratio)

        return ScatterResult(attenuation=attenuation, scattered_ray=Ray(rec.point, direction))

    @staticmethod
    def _reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        # Matched indices form no optical interface
        if ref_idx == 1.0:
            return 0.0
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
