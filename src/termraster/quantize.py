"""Nearest-color quantization against a fixed palette."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

import numpy as np
from PIL import Image

from .errors import ConfigurationError
from .palette import Color

logger = logging.getLogger(__name__)

# Just above sqrt(3 * 255**2), the largest distance between two 8-bit colors.
DISTANCE_SENTINEL = 442.0

Pixel = Sequence[int]


@dataclass(frozen=True)
class DitherMethod:
    """Container for a dithering strategy used when remapping an image."""

    name: str
    remap: Callable[[np.ndarray, Sequence[Color]], np.ndarray]
    description: str


def color_distance(first: Pixel, second: Pixel) -> float:
    """Return the Euclidean distance between the RGB parts of two colors."""
    return math.sqrt(
        (first[0] - second[0]) ** 2
        + (first[1] - second[1]) ** 2
        + (first[2] - second[2]) ** 2
    )


def nearest(palette: Sequence[Color], color: Pixel) -> int:
    """Return the index of the palette entry closest to *color*.

    Entries are scanned in index order and only a strictly smaller distance
    replaces the current best, so the lowest index wins ties. An empty palette
    yields index 0.
    """
    best_index = 0
    best_distance = DISTANCE_SENTINEL
    for index, candidate in enumerate(palette):
        distance = color_distance(candidate, color)
        if distance < best_distance:
            best_index = index
            best_distance = distance
    return best_index


def _palette_array(palette: Sequence[Color]) -> np.ndarray:
    return np.array([color[:3] for color in palette], dtype=np.int64).reshape(-1, 3)


def remap_nearest(pixels: np.ndarray, palette: Sequence[Color]) -> np.ndarray:
    """Map every pixel of an ``(N, 3)`` array to its nearest palette index.

    Palette entries are visited in index order and a pixel only moves to an
    entry with a strictly smaller squared distance, so this agrees with
    :func:`nearest` pixel for pixel. Memory stays linear in the pixel count.
    """
    pixels = pixels.astype(np.int64)
    best_index = np.zeros(len(pixels), dtype=np.int64)
    if len(palette) == 0:
        return best_index
    best_distance = np.full(len(pixels), np.iinfo(np.int64).max, dtype=np.int64)
    for index, color in enumerate(_palette_array(palette)):
        deltas = pixels - color
        distance = np.einsum("ij,ij->i", deltas, deltas)
        closer = distance < best_distance
        best_index[closer] = index
        best_distance[closer] = distance[closer]
    return best_index


DITHER_METHODS: Dict[str, DitherMethod] = {
    method.name: method
    for method in (
        DitherMethod(
            "none",
            remap_nearest,
            "No dithering; each pixel maps to its own nearest palette color.",
        ),
    )
}

DEFAULT_DITHER = "none"


def available_dither_methods() -> Iterable[str]:
    """Return the names of the available dithering strategies."""
    return DITHER_METHODS.keys()


def get_dither_method(name: str) -> DitherMethod:
    method = DITHER_METHODS.get(name)
    if method is None:
        raise ConfigurationError(f"Unknown dithering method: {name}")
    return method


def quantize_image(
    image: Image.Image,
    palette: Sequence[Color],
    ditherer: Optional[str] = None,
) -> list[list[int]]:
    """Return the palette index of every pixel of *image*, row by row."""
    method = get_dither_method(ditherer or DEFAULT_DITHER)
    width, height = image.size
    if width == 0 or height == 0:
        return []
    rgb = np.asarray(image.convert("RGB"), dtype=np.int64).reshape(-1, 3)
    indices = method.remap(rgb, palette)
    logger.debug(
        "Quantized %dx%d image against %d colors (dither=%s)",
        width,
        height,
        len(palette),
        method.name,
    )
    return indices.reshape(height, width).tolist()
