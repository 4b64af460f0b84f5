# camera/camera.py
import math
from dataclasses import dataclass, field
import numpy as np
from core.vector import Vector3
from core.ray import Ray
from core.utils import random_in_unit_disk, sample_square


@dataclass
class CameraConfig:
    """
    User-facing camera and sampling settings. Angles are in degrees.
    """
    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    max_depth: int = 10
    vfov: float = 90.0
    look_from: Vector3 = field(default_factory=lambda: Vector3(0, 0, 0))
    look_at: Vector3 = field(default_factory=lambda: Vector3(0, 0, -1))
    up: Vector3 = field(default_factory=lambda: Vector3(0, 1, 0))
    defocus_angle: float = 0.0
    focus_distance: float = 10.0

    def validate(self):
        """
        Raises ValueError for the first setting that cannot produce an image.
        """
        if not (math.isfinite(self.aspect_ratio) and self.aspect_ratio > 0):
            raise ValueError(f"aspect_ratio must be a positive number, got {self.aspect_ratio}")
        _require_int("image_width", self.image_width, minimum=1)
        _require_int("samples_per_pixel", self.samples_per_pixel, minimum=1)
        _require_int("max_depth", self.max_depth, minimum=0)
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must lie in (0, 180) degrees, got {self.vfov}")
        view = self.look_from - self.look_at
        if view.length_squared() == 0.0:
            raise ValueError("look_from and look_at must be different points")
        if self.up.normalize().cross(view.normalize()).near_zero():
            raise ValueError("up must not be parallel to the viewing direction")
        if not self.defocus_angle >= 0.0:
            raise ValueError(f"defocus_angle must be >= 0, got {self.defocus_angle}")
        if not (math.isfinite(self.focus_distance) and self.focus_distance > 0.0):
            raise ValueError(f"focus_distance must be positive, got {self.focus_distance}")

    @property
    def image_height(self) -> int:
        # Halves round up, so 5 / 2.0 gives 3 rather than round()'s even 2.
        return max(1, int(math.floor(self.image_width / self.aspect_ratio + 0.5)))


def _require_int(name: str, value, minimum: int):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


class Camera:
    """
    Pinhole or thin-lens camera. All derived state is computed once from the config.
    """
    def __init__(self, config: CameraConfig):
        config.validate()
        self.config = config
        self.image_width = config.image_width
        self.image_height = config.image_height
        self.samples_per_pixel = config.samples_per_pixel
        self.max_depth = config.max_depth
        self.defocus_angle = config.defocus_angle
        self.center = config.look_from

        # Determine viewport dimensions.
        theta = math.radians(config.vfov)
        viewport_height = 2.0 * math.tan(theta / 2) * config.focus_distance
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal camera basis
        self.w = (config.look_from - config.look_at).normalize()  # Points backward
        self.u = config.up.cross(self.w).normalize()               # Points right
        self.v = self.w.cross(self.u)                              # Points up

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * config.focus_distance
                               - viewport_u / 2
                               - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        # Lens (defocus disk) basis vectors
        defocus_radius = config.focus_distance * math.tan(math.radians(config.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng: np.random.Generator) -> Ray:
        """
        Generates a ray from the lens towards a randomly jittered point inside
        pixel (i, j), where j counts rows from the top.
        """
        offset = sample_square(rng)
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset.x)
                        + self.pixel_delta_v * (j + offset.y))

        if self.defocus_angle <= 0:
            ray_origin = self.center
        else:
            ray_origin = self.defocus_disk_sample(rng)

        return Ray(ray_origin, pixel_sample - ray_origin)

    def defocus_disk_sample(self, rng: np.random.Generator) -> Vector3:
        """Returns a random point on the camera defocus disk."""
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, "
                f"spp={self.samples_per_pixel}, depth={self.max_depth}, center={self.center})")
