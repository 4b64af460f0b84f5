# renderer/image_writer.py
import os
import sys
from typing import TextIO
import numpy as np
from PIL import Image


def write_ppm(image: np.ndarray, stream: TextIO = None):
    """
    Writes an (height, width, 3) uint8 image as ASCII PPM (P3), one pixel per line,
    top row first.
    """
    if stream is None:
        stream = sys.stdout
    _check_image(image)
    height, width, _ = image.shape
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))
    stream.flush()


def save_image(image: np.ndarray, path: str):
    """
    Saves the image to path. ``.ppm`` is written as ASCII P3; every other
    extension is handed to Pillow.
    """
    _check_image(image)
    if os.path.splitext(path)[1].lower() == ".ppm":
        with open(path, "w", encoding="ascii") as f:
            write_ppm(image, f)
    else:
        Image.fromarray(image).save(path)


def _check_image(image: np.ndarray):
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(f"expected a (height, width, 3) uint8 image, got {image.shape} {image.dtype}")
