# core/utils.py
import math
import numpy as np
from core.vector import Vector3


def random_double(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> float:
    """
    Returns a uniform draw in [low, high).
    """
    return low + (high - low) * rng.random()


def random_vector(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Vector3:
    return Vector3(random_double(rng, low, high),
                   random_double(rng, low, high),
                   random_double(rng, low, high))


def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_vector(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()


def random_in_unit_disk(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside the unit disk on the z = 0 plane.
    """
    while True:
        p = Vector3(random_double(rng, -1.0, 1.0),
                    random_double(rng, -1.0, 1.0),
                    0.0)
        if p.length_squared() < 1.0:
            return p


def sample_square(rng: np.random.Generator) -> Vector3:
    """
    Returns a random offset in the [-0.5, 0.5] x [-0.5, 0.5] unit square.
    """
    return Vector3(rng.random() - 0.5, rng.random() - 0.5, 0.0)


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * (2 * v.dot(n))


def refract(unit_v: Vector3, n: Vector3, cos_theta: float, eta_ratio: float) -> Vector3:
    """
    Snell's law refraction of a unit direction through a surface with normal n.
    The caller has already ruled out total internal reflection.
    """
    r_out_perp = (unit_v + n * cos_theta) * eta_ratio
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick(cos_theta: float, eta_ratio: float) -> float:
    """
    Schlick's approximation of Fresnel reflectance.
    """
    if eta_ratio == 1.0:
        # Matched indices form no optical interface.
        return 0.0
    r0 = (1.0 - eta_ratio) / (1.0 + eta_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
