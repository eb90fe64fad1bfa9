# core/pdf.py
"""
Directional probability densities paired with matching samplers.

A PDF must report, for any direction, exactly the density its ``generate``
draws from. The estimator divides by that value, so any mismatch biases
the image.
"""
import math

import numpy as np

from pathtracer.core.onb import ONB
from pathtracer.core.utils import random_cosine_direction, random_unit_vector
from pathtracer.core.vector import Vector3

class PDF:
    """
    Abstract directional density.
    """
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, rng: np.random.Generator) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")

class CosinePDF(PDF):
    """
    Cosine-weighted hemisphere about a normal: cos(theta) / pi.
    """
    def __init__(self, w: Vector3):
        self.uvw = ONB(w)

    def value(self, direction: Vector3) -> float:
        cosine = direction.normalize().dot(self.uvw.w)
        return cosine / math.pi if cosine > 0 else 0.0

    def generate(self, rng: np.random.Generator) -> Vector3:
        return self.uvw.local(random_cosine_direction(rng))

class SpherePDF(PDF):
    """Uniform over all directions."""

    def value(self, direction: Vector3) -> float:
        return 1.0 / (4.0 * math.pi)

    def generate(self, rng: np.random.Generator) -> Vector3:
        return random_unit_vector(rng)

class HittablePDF(PDF):
    """
    Samples directions toward a hittable (typically the light set) as seen
    from ``origin``.
    """
    def __init__(self, objects, origin: Vector3):
        self.objects = objects
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.objects.pdf_value(self.origin, direction)

    def generate(self, rng: np.random.Generator) -> Vector3:
        return self.objects.sample_direction(self.origin, rng)

class MixturePDF(PDF):
    """
    Equal-weight blend of two densities.

    ``value`` is always 0.5 * p0 + 0.5 * p1 at the queried direction, no
    matter which component produced it; that is the density of the coin-flip
    sampler in ``generate``.
    """
    def __init__(self, p0: PDF, p1: PDF):
        self.p = (p0, p1)

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p[0].value(direction) + 0.5 * self.p[1].value(direction)

    def generate(self, rng: np.random.Generator) -> Vector3:
        if rng.random() < 0.5:
            return self.p[0].generate(rng)
        return self.p[1].generate(rng)
