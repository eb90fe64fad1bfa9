# geometry/sphere.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.onb import ONB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY, random_to_sphere
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

def sphere_uv(p: Vector3):
    """
    Surface coordinates of a point ``p`` on the unit sphere: u follows the
    angle around y from x=-1, v runs from the bottom pole to the top one.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi

def _solve(ray: Ray, center: Vector3, radius: float, t_min: float, t_max: float):
    oc = ray.origin - center
    a = ray.direction.dot(ray.direction)
    if a == 0:
        return None
    half_b = oc.dot(ray.direction)
    c = oc.dot(oc) - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None
    return root

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        root = _solve(ray, self.center, self.radius, t_min, t_max)
        if root is None:
            return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        # The bounding box of a sphere is center ± radius
        offset = Vector3(self.radius, self.radius, self.radius)
        return AABB(self.center - offset, self.center + offset)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if self.hit(Ray(origin, direction), 0.001, INFINITY) is None:
            return 0.0
        distance_squared = (self.center - origin).length_squared()
        cos_theta_max = math.sqrt(max(0.0, 1 - self.radius * self.radius / distance_squared))
        solid_angle = 2 * math.pi * (1 - cos_theta_max)
        if solid_angle <= 0:
            return 0.0
        return 1 / solid_angle

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        direction = self.center - origin
        uvw = ONB(direction)
        return uvw.local(random_to_sphere(self.radius, direction.length_squared(), rng))

class MovingSphere(Hittable):
    """
    Sphere whose center moves linearly from ``center0`` at ``time0`` to
    ``center1`` at ``time1``; rays carry the time they are tested at.
    """
    def __init__(self, center0: Vector3, center1: Vector3, time0: float, time1: float,
                 radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        return self.center0 + (self.center1 - self.center0) * ((time - self.time0) / (self.time1 - self.time0))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        center = self.center(ray.time)
        root = _solve(ray, center, self.radius, t_min, t_max)
        if root is None:
            return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        offset = Vector3(self.radius, self.radius, self.radius)
        box0 = AABB(self.center(time0) - offset, self.center(time0) + offset)
        box1 = AABB(self.center(time1) - offset, self.center(time1) + offset)
        return AABB.surrounding_box(box0, box1)
