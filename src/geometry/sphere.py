# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    Negative radii are clamped to zero.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = max(0.0, float(radius))
        self.material = material

    def normal(self, point: Vector3) -> Vector3:
        """
        Outward unit normal at a point on the surface. A zero-radius sphere has
        no surface, so asking for its normal raises ValueError.
        """
        if self.radius == 0.0:
            raise ValueError("a zero-radius sphere has no surface normal")
        return (point - self.center) / self.radius

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # A point sphere has no surface to scatter from.
        if self.radius == 0.0:
            return None

        oc = self.center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrt_disc) / a
        if not ray_t.surrounds(root):
            root = (h + sqrt_disc) / a
            if not ray_t.surrounds(root):
                return None

        return HitRecord.from_hit(ray, self, root)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material!r})"
