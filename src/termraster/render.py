"""Turn a fitted image into rows of glyphs or terminal color cells."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageOps

from .palette import Color, RenderMode, build_palette
from .quantize import get_dither_method, quantize_image

logger = logging.getLogger(__name__)


class Marker(Enum):
    """Non-color entries that can appear in a rendered row."""

    RESET = "reset"


RESET = Marker.RESET

Cell = Union[str, int, Tuple[int, int, int], Marker]


def _ansi_16_code(index: int) -> str:
    if index < 8:
        return str(40 + index)
    return str(100 + index - 8)


def _ansi_256_code(index: int) -> str:
    return f"48;5;{index}"


@dataclass(frozen=True)
class RenderStyle:
    """Everything needed to render one mode.

    ``glyphs`` is indexed by palette index for glyph modes; ``color_code``
    turns a palette index into an SGR background parameter for color modes.
    """

    mode: RenderMode
    palette: Tuple[Color, ...]
    description: str
    glyphs: Optional[str] = None
    color_code: Optional[Callable[[int], str]] = None

    def glyph(self, index: int) -> str:
        if self.glyphs is None:
            raise TypeError(f"{self.mode.value} is not a glyph mode")
        if 0 <= index < len(self.glyphs):
            return self.glyphs[index]
        return self.glyphs[0]

    def code(self, index: int) -> str:
        if self.color_code is None:
            raise TypeError(f"{self.mode.value} has no indexed colors")
        if not 0 <= index < len(self.palette):
            index = 0
        return self.color_code(index)


RENDER_STYLES: Dict[RenderMode, RenderStyle] = {
    style.mode: style
    for style in (
        RenderStyle(
            RenderMode.MONOCHROME_2,
            build_palette(RenderMode.MONOCHROME_2),
            "Pound signs on dark pixels, blanks on light ones.",
            glyphs="# ",
        ),
        RenderStyle(
            RenderMode.GRAYSCALE_RAMP_9,
            build_palette(RenderMode.GRAYSCALE_RAMP_9),
            "ASCII art with nine brightness levels.",
            glyphs="WOL;:'-  ",
        ),
        RenderStyle(
            RenderMode.GRAYSCALE_RAMP_5,
            build_palette(RenderMode.GRAYSCALE_RAMP_5),
            "Simpler ASCII art with five brightness levels.",
            glyphs="WOo: ",
        ),
        RenderStyle(
            RenderMode.ANSI_8,
            build_palette(RenderMode.ANSI_8),
            "The eight basic ANSI background colors.",
            color_code=_ansi_16_code,
        ),
        RenderStyle(
            RenderMode.ANSI_16,
            build_palette(RenderMode.ANSI_16),
            "The sixteen ANSI background colors, including bright variants.",
            color_code=_ansi_16_code,
        ),
        RenderStyle(
            RenderMode.ANSI_256,
            build_palette(RenderMode.ANSI_256),
            "The xterm 256 color palette. Not every terminal supports it.",
            color_code=_ansi_256_code,
        ),
        RenderStyle(
            RenderMode.TRUECOLOR,
            (),
            "24-bit color straight from the image.",
        ),
    )
}


def available_modes() -> Iterable[str]:
    """Return the names of the available render modes."""
    return (mode.value for mode in RENDER_STYLES)


def get_style(mode: Union[RenderMode, str]) -> RenderStyle:
    """Return the :class:`RenderStyle` for *mode*, rejecting unknown names."""
    return RENDER_STYLES[RenderMode.from_name(mode)]


def describe_mode(mode: Union[RenderMode, str]) -> str:
    """Return a user-friendly description of the render mode."""
    return get_style(mode).description


def _glyph_rows(image: Image.Image, style: RenderStyle) -> list[list[Cell]]:
    luma = np.asarray(ImageOps.grayscale(image.convert("RGB")), dtype=np.int64)
    buckets = luma * len(style.palette) // 256
    return [[style.glyph(index) for index in row] for row in buckets.tolist()]


def _indexed_rows(
    image: Image.Image, style: RenderStyle, ditherer: Optional[str]
) -> list[list[Cell]]:
    rows: list[list[Cell]] = []
    for indices in quantize_image(image, style.palette, ditherer):
        rows.append([*indices, RESET])
    return rows


def _truecolor_rows(image: Image.Image) -> list[list[Cell]]:
    pixels = np.asarray(image.convert("RGB")).tolist()
    return [[*(tuple(pixel) for pixel in row), RESET] for row in pixels]


def render(
    image: Image.Image,
    mode: Union[RenderMode, str],
    ditherer: Optional[str] = None,
) -> list[list[Cell]]:
    """Render a fitted *image* as one list of cells per pixel row.

    Glyph modes bucket each pixel's luma into as many even steps as the mode's
    palette has entries and emit the matching glyph, darkest first. Indexed
    color modes emit the nearest palette index and truecolor emits the pixel's
    own RGB. Every color row ends with :data:`RESET`.
    """
    style = get_style(mode)
    if ditherer is not None:
        get_dither_method(ditherer)
    width, height = image.size
    logger.debug("Rendering %dx%d image in %s mode", width, height, style.mode.value)
    if width == 0 or height == 0:
        return []
    if style.glyphs is not None:
        return _glyph_rows(image, style)
    if style.color_code is not None:
        return _indexed_rows(image, style, ditherer)
    return _truecolor_rows(image)

