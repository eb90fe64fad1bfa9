# materials/lambertian.py

import math
from typing import Union

import numpy as np

from pathtracer.core.pdf import CosinePDF
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture

class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        # Store either a solid color or a texture.
        self.albedo = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: np.random.Generator) -> ScatterRecord:
        """
        Diffuse reflection: the next direction comes from a cosine lobe
        about the normal, tinted by the albedo at the hit point.
        """
        attenuation = self.albedo.value(rec.u, rec.v, rec.p)
        return ScatterRecord.diffuse(attenuation, CosinePDF(rec.normal))

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        cosine = rec.normal.dot(scattered.direction.normalize())
        # Grazing and below-surface directions carry nothing.
        return cosine / math.pi if cosine > 0 else 0.0
