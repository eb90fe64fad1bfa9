import math
from typing import Optional

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Vector3

class Camera:
    """
    Thin-lens camera looking from ``lookfrom`` toward ``lookat``.

    ``vfov`` is the vertical field of view in degrees. Rays are stamped with
    a time drawn uniformly from the shutter interval [time0, time1].
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Optional[Vector3] = None,
                 vfov: float = 40.0, aspect_ratio: float = 1.0, aperture: float = 0.0,
                 focus_dist: float = 10.0, time0: float = 0.0, time1: float = 0.0):
        self.position = lookfrom
        self.lookat = lookat
        self.vup = vup if vup is not None else Vector3(0, 1, 0)
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        # Compute forward, right and up vectors
        self.forward = (self.lookat - self.position).normalize()
        self.right = self.forward.cross(self.vup).normalize()
        self.up = self.right.cross(self.forward)

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(degrees_to_radians(self.vfov) / 2)
        viewport_width = self.aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.right * viewport_width * self.focus_dist
        self.vertical = self.up * viewport_height * self.focus_dist

        self.lower_left_corner = (self.position +
                                  self.forward * self.focus_dist -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5)

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]^2."""
        time = self.time0 if self.time1 <= self.time0 else rng.uniform(self.time0, self.time1)

        if self.lens_radius <= 0:
            direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         self.position)
            return Ray(self.position, direction, time)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.right * rd.x + self.up * rd.y

        ray_origin = self.position + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction, time)
