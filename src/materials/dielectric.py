# src/materials/dielectric.py
import math
import numpy as np
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, refract, schlick
from geometry.hittable import HitRecord
from materials.material import Material, Scatter

class Dielectric(Material):
    """
    Clear dielectric (glass, water). refractive_index is the index of the material
    relative to the enclosing medium.
    """
    def __init__(self, refractive_index: float):
        if not refractive_index > 0:
            raise ValueError(f"refractive_index must be positive, got {refractive_index}")
        self.refractive_index = refractive_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Scatter:
        attenuation = Vector3(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        eta_ratio = 1.0 / self.refractive_index if rec.front_face else self.refractive_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(rec.normal.dot(-unit_direction), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = eta_ratio * sin_theta > 1.0
        if cannot_refract or schlick(cos_theta, eta_ratio) > rng.random():
            direction = reflect(ray_in.direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, cos_theta, eta_ratio)

        return Scatter(attenuation, Ray(rec.p, direction))

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"
