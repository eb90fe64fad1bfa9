# materials/isotropic.py
import math
from typing import Union

import numpy as np

from pathtracer.core.pdf import SpherePDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture

class Isotropic(Material):
    """
    Phase function of a participating medium: scatters uniformly in every
    direction.
    """
    def __init__(self, albedo: Union[Vector3, Texture]):
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterRecord:
        attenuation = self.albedo.value(rec.u, rec.v, rec.p)
        return ScatterRecord.diffuse(attenuation, SpherePDF())

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        return 1.0 / (4.0 * math.pi)
