# geometry/world.py
from typing import Iterable, List, Optional

import numpy as np

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    An ordered list of Hittable objects, tested front to back.

    Also serves as the light set for importance sampling: its density is the
    mean of its members' densities, matching a uniform choice of member.
    """
    def __init__(self, objects: Iterable[Hittable] = ()):
        self.objects: List[Hittable] = list(objects)

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        if not self.objects:
            return None
        output_box = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            output_box = box if output_box is None else AABB.surrounding_box(output_box, box)
        return output_box

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        # An empty light list divides by zero here; callers validate first.
        weight = 1.0 / len(self.objects)
        total = 0.0
        for obj in self.objects:
            total += weight * obj.pdf_value(origin, direction)
        return total

    def sample_direction(self, origin: Vector3, rng: np.random.Generator) -> Vector3:
        index = int(rng.integers(len(self.objects)))
        return self.objects[index].sample_direction(origin, rng)
