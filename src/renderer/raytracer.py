# renderer/raytracer.py
"""
Recursive path-tracing integrator and the image renderer built on it.

``ray_color`` estimates the light arriving along one ray; ``render_pixel``
averages many such estimates through one pixel; ``Renderer`` fills a whole
image, row by row, optionally across a pool of worker processes. The scene
is never modified while rendering, so workers share it without locking,
and every row draws from its own random stream derived from one seed.
"""
import logging
import math
import time
from concurrent import futures
from typing import Callable, Optional, Tuple, Union
import numpy as np
from camera.camera import Camera
from core.ray import Ray
from core.utils import INFINITY
from core.vector import Color
from geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Lower bound on hit distance; keeps spawned rays off their own surface.
T_MIN = 0.001
MAX_DEPTH = 50
SAMPLES_PER_PIXEL = 100

BLACK = Color(0.0, 0.0, 0.0)

Background = Union[Color, Callable[[Ray], Color]]


def sky_gradient(ray: Ray) -> Color:
    """White at the horizon blending to light blue overhead."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return Color(1.0, 1.0, 1.0) * (1.0 - t) + Color(0.5, 0.7, 1.0) * t


def _background_color(background: Background, ray: Ray) -> Color:
    if isinstance(background, Color):
        return background
    return background(ray)


def ray_color(ray: Ray, background: Background, world: Hittable, depth: int, rng) -> Color:
    """
    Light arriving along ``ray``: emission at the first hit plus the
    attenuated light arriving along the scattered ray, recursively, until
    ``depth`` bounces are used up.
    """
    # If we've exceeded the ray bounce limit, no more light is gathered.
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, INFINITY, rng)
    if rec is None:
        return _background_color(background, ray)

    emitted = rec.material.emitted(rec.u, rec.v, rec.p)
    scatter = rec.material.scatter(ray, rec, rng)
    if scatter is None:
        return emitted

    scattered, attenuation = scatter
    return emitted + attenuation * ray_color(scattered, background, world, depth - 1, rng)


def _finite(c: float) -> float:
    return c if math.isfinite(c) else 0.0


def render_pixel(camera: Camera, world: Hittable, background: Background,
                 pixel_coords: Tuple[int, int], image_size: Tuple[int, int],
                 samples_per_pixel: int, max_depth: int, rng) -> Color:
    """
    Average of ``samples_per_pixel`` jittered radiance estimates through pixel
    (i, j) of a ``(width, height)`` image, j counted from the bottom row.

    Returns linear color, not gamma corrected and not clamped. A sample that
    came back NaN or infinite contributes zero instead of poisoning the average.
    """
    i, j = pixel_coords
    width, height = image_size
    s_scale = 1.0 / max(width - 1, 1)
    t_scale = 1.0 / max(height - 1, 1)

    r = g = b = 0.0
    for _ in range(samples_per_pixel):
        du, dv = rng.random(2)
        s = (i + float(du)) * s_scale
        t = (j + float(dv)) * t_scale
        ray = camera.get_ray(s, t, rng)
        c = ray_color(ray, background, world, max_depth, rng)
        r += _finite(c.x)
        g += _finite(c.y)
        b += _finite(c.z)

    scale = 1.0 / samples_per_pixel
    return Color(r * scale, g * scale, b * scale)


def render_row(camera: Camera, world: Hittable, background: Background, j: int,
               image_size: Tuple[int, int], samples_per_pixel: int, max_depth: int,
               seed_seq: np.random.SeedSequence) -> np.ndarray:
    """Render image row ``j`` (0 = bottom) into a (width, 3) array of clamped linear colors."""
    width = image_size[0]
    rng = np.random.default_rng(seed_seq)
    row = np.zeros((width, 3), dtype=np.float64)
    for i in range(width):
        c = render_pixel(camera, world, background, (i, j), image_size,
                         samples_per_pixel, max_depth, rng)
        row[i] = (c.x, c.y, c.z)
    return np.clip(row, 0.0, 1.0)


# Scene shared by the rows rendered in one worker process.
_worker_state = {}


def _init_worker(camera, world, background, image_size, samples_per_pixel, max_depth):
    _worker_state.update(
        camera=camera,
        world=world,
        background=background,
        image_size=image_size,
        samples_per_pixel=samples_per_pixel,
        max_depth=max_depth,
    )


def _render_row_task(task):
    j, seed_seq = task
    s = _worker_state
    return j, render_row(s["camera"], s["world"], s["background"], j, s["image_size"],
                         s["samples_per_pixel"], s["max_depth"], seed_seq)


class Renderer:
    """
    Renders a full image. ``workers`` > 1 spreads rows over a process pool;
    the result is identical to a serial render with the same ``seed``.
    """
    def __init__(self, width: int, height: int, samples_per_pixel: int = SAMPLES_PER_PIXEL,
                 max_depth: int = MAX_DEPTH, workers: int = 1, seed: Optional[int] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        if samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        if max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.workers = workers
        self.seed = seed

    def row_seeds(self):
        return np.random.SeedSequence(self.seed).spawn(self.height)

    def render(self, camera: Camera, world: Hittable, background: Background) -> np.ndarray:
        """
        Returns a (height, width, 3) float64 array of linear colors in [0, 1],
        row 0 at the top of the image.
        """
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        size = (self.width, self.height)
        tasks = list(enumerate(self.row_seeds()))
        start = time.time()
        logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s)",
                    self.width, self.height, self.samples_per_pixel, self.max_depth, self.workers)

        if self.workers == 1:
            _init_worker(camera, world, background, size, self.samples_per_pixel, self.max_depth)
            results = map(_render_row_task, tasks)
            self._collect(image, results, start)
        else:
            with futures.ProcessPoolExecutor(
                    max_workers=self.workers,
                    initializer=_init_worker,
                    initargs=(camera, world, background, size,
                              self.samples_per_pixel, self.max_depth)) as executor:
                self._collect(image, executor.map(_render_row_task, tasks), start)

        logger.info("Render finished in %.2fs", time.time() - start)
        return image

    def _collect(self, image: np.ndarray, results, start: float):
        done = 0
        report_every = max(1, self.height // 10)
        for j, row in results:
            # Camera rows count up from the bottom; image rows count down from the top.
            image[self.height - 1 - j] = row
            done += 1
            if done % report_every == 0 or done == self.height:
                logger.info("Rows %d/%d (%.1fs)", done, self.height, time.time() - start)
