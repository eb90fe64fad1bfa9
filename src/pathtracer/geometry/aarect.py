# geometry/aarect.py
from typing import Optional

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import INFINITY
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

# Half-thickness given to the bounding box along the fixed axis.
BOX_PADDING = 1e-4

class AARect(Hittable):
    """
    Axis-aligned rectangle lying in the plane ``coordinate[axis] == k``.

    Subclasses pick the fixed axis and the two free axes; the rectangle spans
    [a0, a1] on the first free axis and [b0, b1] on the second. The free
    coordinates map linearly onto (u, v) in [0, 1]^2.
    """
    axis = 2
    free_axes = (0, 1)

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material):
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material
        outward = [0.0, 0.0, 0.0]
        outward[self.axis] = 1.0
        self.outward_normal = Vector3.from_axes(outward)

    @property
    def area(self) -> float:
        return (self.a1 - self.a0) * (self.b1 - self.b0)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        d = ray.direction[self.axis]
        if abs(d) < 1e-12:
            # Ray parallel to the plane.
            return None
        t = (self.k - ray.origin[self.axis]) / d
        if t < t_min or t > t_max:
            return None

        ia, ib = self.free_axes
        a = ray.origin[ia] + t * ray.direction[ia]
        b = ray.origin[ib] + t * ray.direction[ib]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.set_face_normal(ray, self.outward_normal)
        rec.material = self.material
        rec.p = ray.at(t)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        ia, ib = self.free_axes
        minimum = [0.0, 0.0, 0.0]
        maximum = [0.0, 0.0, 0.0]
        minimum[ia], maximum[ia] = self.a0, self.a1
        minimum[ib], maximum[ib] = self.b0, self.b1
        minimum[self.axis] = self.k - BOX_PADDING
        maximum[self.axis] = self.k + BOX_PADDING
        return AABB(Vector3.from_axes(minimum), Vector3.from_axes(maximum))

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        """
        Solid-angle density of ``direction`` when sampling a uniform point on
        the rectangle from ``origin``.
        """
        rec = self.hit(Ray(origin, direction), 0.001, INFINITY)
        if rec is None:
            return 0.0
        length_squared = direction.length_squared()
        distance_squared = rec.t * rec.t * length_squared
        cosine = abs(direction.dot(rec.normal)) / length_squared ** 0.5
        if cosine < 1e-8:
            return 0.0
        return distance_squared / (cosine * self.area)

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        point = [0.0, 0.0, 0.0]
        ia, ib = self.free_axes
        point[ia] = rng.uniform(self.a0, self.a1)
        point[ib] = rng.uniform(self.b0, self.b1)
        point[self.axis] = self.k
        return Vector3.from_axes(point) - origin

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.a0}, {self.a1}, {self.b0}, {self.b1}, "
                f"k={self.k})")

class XYRect(AARect):
    """Rectangle x0..x1, y0..y1 in the plane z = k."""
    axis = 2
    free_axes = (0, 1)

    def __init__(self, x0: float, x1: float, y0: float, y1: float, k: float, material):
        super().__init__(x0, x1, y0, y1, k, material)

class XZRect(AARect):
    """Rectangle x0..x1, z0..z1 in the plane y = k."""
    axis = 1
    free_axes = (0, 2)

    def __init__(self, x0: float, x1: float, z0: float, z1: float, k: float, material):
        super().__init__(x0, x1, z0, z1, k, material)

class YZRect(AARect):
    """Rectangle y0..y1, z0..z1 in the plane x = k."""
    axis = 0
    free_axes = (1, 2)

    def __init__(self, y0: float, y1: float, z0: float, z1: float, k: float, material):
        super().__init__(y0, y1, z0, z1, k, material)
