# renderer/integrator.py
"""
Monte Carlo estimate of the radiance arriving along a ray.

Diffuse bounces draw their next direction from an equal mixture of a
light-directed density and the material's own lobe, and weight the
recursive estimate by ``scattering_pdf / mixture_pdf``. Specular bounces
follow their deterministic ray unweighted.
"""
import math
from typing import Optional

import numpy as np

from pathtracer.core.pdf import HittablePDF, MixturePDF
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable

# Lower bound on the hit distance, keeps rays off the surface they left.
T_MIN = 0.001
# Sampling densities below this cannot form a finite estimate.
MIN_PDF = 1e-12

def ray_color(ray: Ray, background: Vector3, world: Hittable, lights: Optional[Hittable],
              depth: int, rng: np.random.Generator) -> Vector3:
    """
    Estimate the radiance carried back along ``ray``.

    Args:
        ray: The ray to trace.
        background: Radiance of rays that leave the scene.
        world: Scene root.
        lights: Hittable(s) to importance-sample toward, or None to sample
            the material lobe only. Must not be an empty list.
        depth: Remaining bounce budget; 0 returns black.
        rng: Random source for this ray.

    Returns:
        Vector3: Non-negative linear RGB radiance.
    """
    if depth <= 0:
        return Vector3(0, 0, 0)

    rec = world.hit(ray, T_MIN, INFINITY)
    if rec is None:
        return background

    emitted = rec.material.emitted(ray, rec, rec.u, rec.v, rec.p)
    srec = rec.material.scatter(ray, rec, rng)
    if srec is None:
        return emitted

    if srec.is_specular:
        return emitted + srec.attenuation * ray_color(
            srec.specular_ray, background, world, lights, depth - 1, rng)

    if lights is not None:
        pdf = MixturePDF(HittablePDF(lights, rec.p), srec.pdf)
    else:
        pdf = srec.pdf

    direction = pdf.generate(rng)
    if direction.near_zero():
        direction = rec.normal
    scattered = Ray(rec.p, direction, ray.time)
    pdf_val = pdf.value(direction)
    if not pdf_val > MIN_PDF or math.isinf(pdf_val):
        return emitted

    scattering_pdf = rec.material.scattering_pdf(ray, rec, scattered)
    if scattering_pdf <= 0:
        return emitted

    incoming = ray_color(scattered, background, world, lights, depth - 1, rng)
    return emitted + srec.attenuation * incoming * (scattering_pdf / pdf_val)
