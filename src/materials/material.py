# materials/material.py
from typing import NamedTuple, Optional
import numpy as np
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord


class Scatter(NamedTuple):
    """Result of a successful scattering event."""
    attenuation: Vector3
    ray: Ray


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> Optional[Scatter]:
        """
        Computes the scattered ray and attenuation.
        Returns a Scatter(attenuation, ray), or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
