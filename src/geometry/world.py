# src/geometry/world.py
from typing import Iterator, List, Optional
from core.ray import Ray
from core.interval import Interval
from geometry.hittable import Hittable, HitRecord

class HittableList:
    """
    An ordered collection of Hittable objects. It is built once before rendering and
    only read while rendering; every query is a linear scan over all objects.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """
        Returns the globally nearest hit along the ray, or None.
        Each query is narrowed to the closest hit found so far, so a later object
        only replaces the record when it is strictly nearer.
        """
        hit_record = None
        closest_so_far = ray_t.max
        for obj in self.objects:
            rec = obj.hit(ray, ray_t.with_max(closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
