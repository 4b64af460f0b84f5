# renderer/raytracer.py
import logging
import math
import time
from functools import partial
from multiprocessing import Pool
from typing import Optional, Tuple

import numpy as np
from tqdm import tqdm

from camera.camera import Camera
from core.interval import Interval
from core.ray import Ray
from core.rng import spawn_rngs
from core.vector import Vector3
from geometry.world import HittableList
from renderer.tone_mapping import gamma_tone_mapping

logger = logging.getLogger(__name__)

# Offset that keeps a scattered ray from re-hitting the surface it starts on.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)


def background_color(ray: Ray) -> Vector3:
    """
    Vertical white to sky-blue gradient; the only light source in the scene.
    """
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, world: HittableList, depth: int, rng: np.random.Generator) -> Vector3:
    """
    Radiance carried back along ray. Bounces are followed iteratively, multiplying
    the attenuation of every scatter, until the ray escapes to the background,
    gets absorbed, or runs out of depth.
    """
    attenuation = WHITE
    ray_t = Interval(SHADOW_ACNE_EPSILON, math.inf)
    while depth > 0:
        rec = world.hit(ray, ray_t)
        if rec is None:
            return attenuation * background_color(ray)

        scatter = rec.material.scatter(ray, rec, rng)
        if scatter is None:
            return BLACK

        attenuation = attenuation * scatter.attenuation
        ray = scatter.ray
        depth -= 1

    return BLACK


def render_row(j: int, camera: Camera, world: HittableList, rng: np.random.Generator) -> np.ndarray:
    """
    Renders image row j (0 is the top row) into a (width, 3) uint8 array.
    """
    linear = np.empty((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        r = g = b = 0.0
        for _ in range(camera.samples_per_pixel):
            color = ray_color(camera.get_ray(i, j, rng), world, camera.max_depth, rng)
            r += color.x
            g += color.y
            b += color.z
        linear[i] = (r, g, b)
    linear /= camera.samples_per_pixel
    return gamma_tone_mapping(linear)


def _render_row_task(task: Tuple[int, np.random.Generator], camera: Camera, world: HittableList) -> np.ndarray:
    j, rng = task
    return render_row(j, camera, world, rng)


class Renderer:
    """
    Drives the camera over every pixel and assembles the final 8-bit image.
    Rows are independent: each owns a generator derived from the render seed,
    so the result does not depend on the number of workers.
    """
    def __init__(self, camera: Camera, workers: int = 1, progress: bool = True):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.camera = camera
        self.workers = workers
        self.progress = progress

    def render(self, world: HittableList, seed: Optional[int] = None) -> np.ndarray:
        camera = self.camera
        height, width = camera.image_height, camera.image_width
        logger.info("Rendering %dx%d, %d samples/pixel, max depth %d, %d object(s), %d worker(s)",
                    width, height, camera.samples_per_pixel, camera.max_depth,
                    len(world), self.workers)
        start_time = time.perf_counter()

        tasks = list(zip(range(height), spawn_rngs(seed, height)))
        task_fn = partial(_render_row_task, camera=camera, world=world)

        image = np.empty((height, width, 3), dtype=np.uint8)
        if self.workers == 1:
            rows = map(task_fn, tasks)
            self._collect(rows, image)
        else:
            with Pool(self.workers) as pool:
                rows = pool.imap(task_fn, tasks)
                self._collect(rows, image)

        elapsed = time.perf_counter() - start_time
        logger.info("Done in %.2fs", elapsed)
        return image

    def _collect(self, rows, image: np.ndarray):
        for j, row in enumerate(tqdm(rows, total=image.shape[0], desc="Scanlines",
                                     unit="row", disable=not self.progress)):
            image[j] = row
