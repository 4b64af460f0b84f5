# main.py
import logging
import sys

import click
import numpy as np

from camera.camera import Camera, CameraConfig
from core.rng import make_rng
from core.utils import random_double, random_vector
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, DielectricPresets, MetalPresets
from renderer.image_writer import save_image, write_ppm
from renderer.raytracer import Renderer

logger = logging.getLogger(__name__)

QUALITY_LEVELS = {
    "preview": {"samples": 10, "depth": 10},
    "balanced": {"samples": 100, "depth": 50},
    "final": {"samples": 500, "depth": 50},
}


def build_random_scene(rng: np.random.Generator) -> HittableList:
    """
    A large ground sphere covered with small random spheres, plus one large glass,
    one matte and one mirror sphere in the middle.
    """
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, ColorPresets.matte(ColorPresets.GRAY)))

    clearing = Vector3(4, 0.2, 0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                # diffuse
                albedo = random_vector(rng) * random_vector(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = random_vector(rng, 0.5, 1.0)
                fuzz = random_double(rng, 0.0, 0.5)
                material = Metal(albedo, fuzz)
            else:
                material = DielectricPresets.glass()
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, ColorPresets.matte(ColorPresets.BROWN)))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, MetalPresets.mirror()))

    logger.info("Scene built with %d spheres", len(world))
    return world


@click.command()
@click.option("--width", type=click.INT, default=1200, show_default=True, help="Image width in pixels.")
@click.option("--aspect-ratio", type=click.FLOAT, default=16 / 9, show_default=True)
@click.option("--quality", type=click.Choice(sorted(QUALITY_LEVELS)), default="preview", show_default=True)
@click.option("--samples", type=click.INT, default=None, help="Samples per pixel (overrides --quality).")
@click.option("--depth", type=click.INT, default=None, help="Maximum bounce depth (overrides --quality).")
@click.option("--vfov", type=click.FLOAT, default=20.0, show_default=True)
@click.option("--defocus-angle", type=click.FLOAT, default=0.6, show_default=True)
@click.option("--focus-distance", type=click.FLOAT, default=10.0, show_default=True)
@click.option("--seed", type=click.INT, default=None, help="Seed for a reproducible render.")
@click.option("--workers", type=click.INT, default=1, show_default=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Output file (.ppm, .png, ...). Defaults to PPM on stdout.")
@click.option("--verbose", "-v", is_flag=True)
def main(width, aspect_ratio, quality, samples, depth, vfov, defocus_angle, focus_distance,
         seed, workers, output, verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    preset = QUALITY_LEVELS[quality]
    config = CameraConfig(
        aspect_ratio=aspect_ratio,
        image_width=width,
        samples_per_pixel=preset["samples"] if samples is None else samples,
        max_depth=preset["depth"] if depth is None else depth,
        vfov=vfov,
        look_from=Vector3(13, 2, 3),
        look_at=Vector3(0, 0, 0),
        up=Vector3(0, 1, 0),
        defocus_angle=defocus_angle,
        focus_distance=focus_distance,
    )
    try:
        camera = Camera(config)
        renderer = Renderer(camera, workers=workers)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    logger.debug("Camera: %r", camera)
    world = build_random_scene(make_rng(seed))
    image = renderer.render(world, seed=seed)

    if output is None:
        write_ppm(image, sys.stdout)
    else:
        save_image(image, output)
        logger.info("Image saved to %s", output)


if __name__ == "__main__":
    main()
