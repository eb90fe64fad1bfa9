# geometry/bvh.py
from typing import List, Optional

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

class BVHNode(Hittable):
    """
    Bounding volume hierarchy over a list of hittables. Exposes the same
    ``hit``/``bounding_box`` contract as the objects it holds, so it can stand
    in for a HittableList as the scene root.

    Splits at the centroid median along the axis where the member centroids
    spread the most.
    """
    def __init__(self, objects: List[Hittable], start: int = 0, end: Optional[int] = None,
                 time0: float = 0.0, time1: float = 1.0):
        if end is None:
            objects = list(objects)
            end = len(objects)
        object_span = end - start
        if object_span <= 0:
            raise ValueError("BVHNode needs at least one object")

        boxes = []
        for i in range(start, end):
            box = objects[i].bounding_box(time0, time1)
            if box is None:
                raise ValueError(f"No bounding box for {objects[i]!r} in BVHNode constructor")
            boxes.append(box)

        self.box = boxes[0]
        for box in boxes[1:]:
            self.box = AABB.surrounding_box(self.box, box)

        if object_span == 1:
            self.left = self.right = objects[start]
            return
        if object_span == 2:
            self.left = objects[start]
            self.right = objects[start + 1]
            return

        # Split along the axis where the member centroids spread the most
        spans = []
        for axis in range(3):
            centroids = [box.centroid(axis) for box in boxes]
            spans.append(max(centroids) - min(centroids))
        best_axis = spans.index(max(spans))

        order = sorted(range(object_span), key=lambda i: boxes[i].centroid(best_axis))
        objects[start:end] = [objects[start + i] for i in order]

        mid = start + object_span // 2
        self.left = BVHNode(objects, start, mid, time0, time1)
        self.right = BVHNode(objects, mid, end, time0, time1)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max)

        # Update t_max for right branch if we hit something on the left
        if hit_left is not None:
            t_max = hit_left.t

        if self.right is self.left:
            return hit_left
        hit_right = self.right.hit(ray, t_min, t_max)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.box
