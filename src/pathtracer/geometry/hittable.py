# geometry/hittable.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians
from pathtracer.core.vector import Vector3

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "u", "v", "front_face", "material")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, u: float = 0.0, v: float = 0.0,
                 front_face: bool = True, material = None):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal at intersection, facing the ray
        self.t = t              # Ray parameter at intersection
        self.u = u              # Surface coordinates
        self.v = v
        self.front_face = front_face  # Whether the hit was on the front side
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else outward_normal * -1

    def copy(self) -> "HitRecord":
        return HitRecord(self.p, self.normal, self.t, self.u, self.v,
                         self.front_face, self.material)

    def __repr__(self) -> str:
        return (f"HitRecord(p={self.p!r}, normal={self.normal!r}, t={self.t}, "
                f"u={self.u}, v={self.v}, front_face={self.front_face})")

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    Shapes that can act as lights also override ``pdf_value`` and
    ``sample_direction`` so the integrator can sample toward them.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return 0.0

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        return Vector3(1, 0, 0)

class Translate(Hittable):
    """
    Moves an object by ``offset`` without touching its geometry: the ray is
    moved the other way instead.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max)
        if rec is None:
            return None
        rec = rec.copy()
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return box.translated(self.offset)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        return self.obj.sample_direction(origin - self.offset, rng)

class RotateY(Hittable):
    """
    Rotates an object about the world y axis by a fixed angle in degrees.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.bbox = self._rotated_box(obj.bounding_box(0, 1))

    def _rotated_box(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        minimum = [math.inf, math.inf, math.inf]
        maximum = [-math.inf, -math.inf, -math.inf]
        for i in range(2):
            for j in range(2):
                for k in range(2):
                    x = i * box.maximum.x + (1 - i) * box.minimum.x
                    y = j * box.maximum.y + (1 - j) * box.minimum.y
                    z = k * box.maximum.z + (1 - k) * box.minimum.z
                    tester = self._to_world(Vector3(x, y, z))
                    for c in range(3):
                        minimum[c] = min(minimum[c], tester[c])
                        maximum[c] = max(maximum[c], tester[c])
        return AABB(Vector3.from_axes(minimum), Vector3.from_axes(maximum))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max)
        if rec is None:
            return None
        # A rotation keeps dot products, so front_face carries over as is.
        rec = rec.copy()
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.bbox

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(self._to_object(origin), self._to_object(direction))

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        return self._to_world(self.obj.sample_direction(self._to_object(origin), rng))

class FlipFace(Hittable):
    """
    Reports the inner object's hits as seen from the opposite side. Used to
    make one-sided lights face the intended way.
    """
    def __init__(self, obj: Hittable):
        self.obj = obj

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        rec = self.obj.hit(ray, t_min, t_max)
        if rec is None:
            return None
        rec = rec.copy()
        rec.front_face = not rec.front_face
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.obj.bounding_box(time0, time1)

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin, direction)

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        return self.obj.sample_direction(origin, rng)
