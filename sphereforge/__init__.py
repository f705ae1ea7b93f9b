"""
SphereForge - A Python Path Tracer for Sphere Scenes

Renders static scenes of spheres with recursive Monte Carlo path tracing:
- Lambertian, metal and dielectric (glass) materials
- Thin-lens camera with depth of field
- Sky-dome lighting
- Multi-threaded tile rendering into an 8-bit RGB buffer
"""

__version__ = "0.1.0"
__author__ = "SphereForge Team"

from .vec3 import Vec3, Point3, Color, get_rng, random_double
from .ray import Ray
from .shapes import Sphere, HittableList, HitRecord, Hittable
from .materials import Material, ScatterResult, Lambertian, Metal, Dielectric
from .camera import Camera
from .integrator import ray_color, sky_color
from .image import PixelBuffer, save_image, to_rgb8_array
from .renderer import Renderer, RenderSettings, sample_pixel
from .scenes import SCENES, random_scene, random_scene_camera, bubble_scene, bubble_scene_camera
from .errors import SphereForgeError, ConfigurationError, PixelWriteError
