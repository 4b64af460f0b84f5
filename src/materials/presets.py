# materials/presets.py
from core.vector import Vector3
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def mirror() -> Metal:
        return Metal(Vector3(0.7, 0.6, 0.5), fuzz=0.0)

class DielectricPresets:
    """Predefined dielectric materials."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

class ColorPresets:
    """Colors used by the cover scene."""

    GRAY = Vector3(0.5, 0.5, 0.5)
    BROWN = Vector3(0.4, 0.2, 0.1)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
