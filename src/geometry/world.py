# src/geometry/world.py
import logging
from typing import Iterable, List, Optional
from core.aabb import AABB
from core.ray import Ray
from geometry.bvh import BVHNode
from geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class HittableList(Hittable):
    """
    A list of Hittable objects tested one after another. The closest hit so
    far becomes the upper bound for the remaining objects.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far, rng)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        if not self.objects:
            return None
        output_box = None
        for obj in self.objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                return None
            output_box = box if output_box is None else AABB.surrounding_box(output_box, box)
        return output_box


def build_world(primitives: Iterable[Hittable], time0: float, time1: float, rng) -> Hittable:
    """
    Wrap the scene primitives in a BVH for the shutter interval [time0, time1].

    An empty scene becomes an empty HittableList so every ray sees the
    background. Raises BVHConstructionError if any primitive is unbounded.
    """
    if isinstance(primitives, HittableList):
        objects = list(primitives.objects)
    else:
        objects = list(primitives)
    if not objects:
        logger.debug("Empty scene, skipping BVH construction")
        return HittableList()
    root = BVHNode.from_objects(objects, time0, time1, rng)
    logger.debug("BVH built: %d objects, depth %d", len(objects), root.depth())
    return root
