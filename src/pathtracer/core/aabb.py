# core/aabb.py
from typing import Optional
from pathtracer.core.vector import Vector3

class AABB:
    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def hit(self, ray, t_min: float, t_max: float) -> bool:
        # Slab method: for each axis, find intersection intervals.
        for a in range(3):
            d = ray.direction[a]
            o = ray.origin[a]
            if d == 0.0:
                # Parallel to the slab: inside or never.
                if o < self.minimum[a] or o > self.maximum[a]:
                    return False
                continue
            invD = 1.0 / d
            t0 = (self.minimum[a] - o) * invD
            t1 = (self.maximum[a] - o) * invD
            if invD < 0:
                t0, t1 = t1, t0
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max <= t_min:
                return False
        return True

    def centroid(self, axis: int) -> float:
        return 0.5 * (self.minimum[axis] + self.maximum[axis])

    def translated(self, offset: Vector3) -> "AABB":
        return AABB(self.minimum + offset, self.maximum + offset)

    @staticmethod
    def surrounding_box(box0: Optional["AABB"], box1: Optional["AABB"]) -> Optional["AABB"]:
        """Component-wise union of two boxes; absent if either is absent."""
        if box0 is None or box1 is None:
            return None
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"
