# geometry/hittable.py
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.interval import Interval

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material = None):
        self.p = p              # Intersection point
        self.normal = normal    # Unit normal, always opposing the incoming ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the ray arrived from outside the surface
        self.material = material

    @classmethod
    def from_hit(cls, ray: Ray, surface: "Hittable", t: float) -> "HitRecord":
        rec = cls(t=t, material=surface.material)
        rec.p = ray.at(t)
        rec.set_face_normal(ray, surface.normal(rec.p))
        return rec

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p}, normal={self.normal}, "
                f"front_face={self.front_face})")

class Hittable:
    """
    Abstract class for surfaces that can be hit by a ray.
    """
    material = None

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """
        Returns the nearest intersection whose parameter lies strictly inside ray_t,
        or None.
        """
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def normal(self, point: Vector3) -> Vector3:
        """
        Returns the outward unit normal at a point on the surface.
        """
        raise NotImplementedError("normal() must be implemented by subclasses.")
