# materials/metal.py
from typing import Optional
import numpy as np
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, Scatter

class Metal(Material):
    """
    Metal material with reflective properties. Fuzz is clamped into [0, 1].
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[Scatter]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        # The fuzzed direction is not renormalized.
        scattered = Ray(rec.p, reflected + random_unit_vector(rng) * self.fuzz)

        if scattered.direction.dot(rec.normal) > 0:
            return Scatter(self.albedo, scattered)

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"
