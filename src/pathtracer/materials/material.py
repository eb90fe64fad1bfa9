# materials/material.py
from typing import Optional

import numpy as np

from pathtracer.core.pdf import PDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord

BLACK = Vector3(0.0, 0.0, 0.0)

class ScatterRecord:
    """
    Outcome of a scatter event.

    Specular outcomes carry the continuation ray itself; diffuse outcomes
    carry the distribution the next direction should be drawn from. A
    material that absorbs returns ``None`` instead of a record.
    """
    __slots__ = ("attenuation", "is_specular", "specular_ray", "pdf")

    def __init__(self, attenuation: Vector3, is_specular: bool,
                 specular_ray: Optional[Ray] = None, pdf: Optional[PDF] = None):
        self.attenuation = attenuation
        self.is_specular = is_specular
        self.specular_ray = specular_ray
        self.pdf = pdf

    @classmethod
    def specular(cls, ray: Ray, attenuation: Vector3) -> "ScatterRecord":
        return cls(attenuation, True, specular_ray=ray)

    @classmethod
    def diffuse(cls, attenuation: Vector3, pdf: PDF) -> "ScatterRecord":
        return cls(attenuation, False, pdf=pdf)

class Material:
    """
    Abstract material class. By default a material neither emits nor
    scatters, i.e. it is a perfect absorber.
    """
    def emitted(self, ray_in: Ray, rec: HitRecord, u: float, v: float, p: Vector3) -> Vector3:
        return BLACK

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: np.random.Generator) -> Optional[ScatterRecord]:
        """
        Computes how the incoming ray continues.
        Returns a ScatterRecord, or None if the ray is absorbed.
        """
        return None

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        """
        Density with which this material sends light into ``scattered``.
        Only consulted for non-specular outcomes.
        """
        return 0.0
