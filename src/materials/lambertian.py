# materials/lambertian.py
import numpy as np
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, Scatter

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Scatter:
        # Pick a random scatter direction by adding a random unit vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Scatter(self.albedo, Ray(rec.p, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"
