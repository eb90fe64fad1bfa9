# core/utils.py
"""
Sampling and optics helpers.

Every function that consumes randomness takes an explicit
``numpy.random.Generator`` so that each ray owns an independent stream.
"""
import math

import numpy as np

from pathtracer.core.vector import Vector3

INFINITY = float("inf")

def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0

def random_in_unit_sphere(rng: np.random.Generator) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p

def random_unit_vector(rng: np.random.Generator) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        lensq = p.length_squared()
        # Points too close to the center would normalize to garbage.
        if lensq > 1e-160:
            return p / math.sqrt(lensq)

def random_in_unit_disk(rng: np.random.Generator) -> Vector3:
    """Random point in the unit disk on the z=0 plane (lens sampling)."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0)
        if p.dot(p) < 1:
            return p

def random_cosine_direction(rng: np.random.Generator) -> Vector3:
    """
    Cosine-weighted direction about +z: density cos(theta) / pi.
    """
    r1 = rng.random()
    r2 = rng.random()
    phi = 2 * math.pi * r1
    sqrt_r2 = math.sqrt(r2)
    x = math.cos(phi) * sqrt_r2
    y = math.sin(phi) * sqrt_r2
    z = math.sqrt(1 - r2)
    return Vector3(x, y, z)

def random_to_sphere(radius: float, distance_squared: float,
                     rng: np.random.Generator) -> Vector3:
    """
    Uniform direction inside the cone subtended by a sphere of the given
    radius seen from distance sqrt(distance_squared), about +z.
    """
    r1 = rng.random()
    r2 = rng.random()
    cos_theta_max = math.sqrt(max(0.0, 1 - radius * radius / distance_squared))
    z = 1 + r2 * (cos_theta_max - 1)
    phi = 2 * math.pi * r1
    sin_theta = math.sqrt(max(0.0, 1 - z * z))
    return Vector3(math.cos(phi) * sin_theta, math.sin(phi) * sin_theta, z)

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Snell's law for a unit incident direction ``uv`` against normal ``n``.
    Callers must rule out total internal reflection first.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel

def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
