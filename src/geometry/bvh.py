# src/geometry/bvh.py
import logging
from typing import Optional, Sequence
from core.aabb import AABB
from core.errors import BVHConstructionError
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


def _box_of(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise BVHConstructionError(f"No bounding box for {obj!r} in BVHNode constructor")
    return box


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over a span of hittables.

    Each node picks one axis at random and orders its span by the minimum
    corner of the children's boxes along that axis, then splits at the
    midpoint. A single-object span stores the object as both children so
    traversal never has to check for a missing child. The node box is the
    union of the two child boxes and is never recomputed: the hierarchy is
    immutable once built.
    """
    def __init__(self, objects: Sequence[Hittable], start: int, end: int,
                 time0: float, time1: float, rng):
        object_span = end - start
        if object_span <= 0:
            raise BVHConstructionError("Cannot build a BVH node over an empty span")

        # Work on a copy of the span so the caller's ordering is left untouched.
        objects = list(objects[start:end])
        axis = int(rng.integers(0, 3))

        def key(obj):
            return _box_of(obj, time0, time1).minimum[axis]

        if object_span == 1:
            self.left = self.right = objects[0]
        elif object_span == 2:
            first, second = objects
            if key(first) < key(second):
                self.left, self.right = first, second
            else:
                self.left, self.right = second, first
        else:
            objects.sort(key=key)
            mid = object_span // 2
            self.left = BVHNode(objects, 0, mid, time0, time1, rng)
            self.right = BVHNode(objects, mid, object_span, time0, time1, rng)

        self.box = AABB.surrounding_box(_box_of(self.left, time0, time1),
                                        _box_of(self.right, time0, time1))

    @classmethod
    def from_objects(cls, objects: Sequence[Hittable], time0: float, time1: float, rng) -> "BVHNode":
        logger.debug("Building BVH over %d objects", len(objects))
        return cls(objects, 0, len(objects), time0, time1, rng)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)

        # Update t_max for right branch if we hit something on the left
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max, rng)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float, time1: float) -> AABB:
        return self.box

    def depth(self) -> int:
        """Height of the tree below this node, counting this node."""
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)
