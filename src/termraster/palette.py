"""Color palettes for every terminal render mode."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, NamedTuple

from .errors import ConfigurationError


class Color(NamedTuple):
    """An 8-bit RGBA color. Only ``r``, ``g`` and ``b`` take part in matching."""

    r: int
    g: int
    b: int
    a: int = 255


class RenderMode(Enum):
    """Closed set of output styles."""

    MONOCHROME_2 = "monochrome-2"
    GRAYSCALE_RAMP_9 = "grayscale-ramp-9"
    GRAYSCALE_RAMP_5 = "grayscale-ramp-5"
    ANSI_8 = "ansi-8"
    ANSI_16 = "ansi-16"
    ANSI_256 = "ansi-256"
    TRUECOLOR = "truecolor"

    @property
    def is_glyph_mode(self) -> bool:
        return self in _GLYPH_MODES

    @classmethod
    def from_name(cls, name: str | RenderMode) -> RenderMode:
        """Resolve a mode value or one of the short aliases (``ascii``, ``8colors``...)."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        mode = MODE_ALIASES.get(key)
        if mode is None:
            raise ConfigurationError(f"Unknown render mode: {name}")
        return mode


_GLYPH_MODES = frozenset(
    (RenderMode.MONOCHROME_2, RenderMode.GRAYSCALE_RAMP_9, RenderMode.GRAYSCALE_RAMP_5)
)

MODE_ALIASES: dict[str, RenderMode] = {
    "pound": RenderMode.MONOCHROME_2,
    "ascii": RenderMode.GRAYSCALE_RAMP_9,
    "ascii-simple": RenderMode.GRAYSCALE_RAMP_5,
    "8colors": RenderMode.ANSI_8,
    "16colors": RenderMode.ANSI_16,
    "256colors": RenderMode.ANSI_256,
}


def _grays(levels: Iterable[int]) -> tuple[Color, ...]:
    return tuple(Color(level, level, level) for level in levels)


MONOCHROME_PALETTE = _grays((0, 255))
GRAYSCALE_RAMP_9_PALETTE = _grays((0, 32, 64, 96, 128, 160, 192, 224, 255))
# Glyph modes only use the ramp lengths: luma is bucketed into even steps, so
# the uneven levels of the five step ramp do not affect which glyph is drawn.
GRAYSCALE_RAMP_5_PALETTE = _grays((0, 64, 128, 160, 255))

# xterm's values for the basic colors, in ANSI color number order.
ANSI_8_PALETTE = (
    Color(0, 0, 0),
    Color(128, 0, 0),
    Color(0, 128, 0),
    Color(128, 128, 0),
    Color(0, 0, 128),
    Color(128, 0, 128),
    Color(0, 128, 128),
    Color(192, 192, 192),
)

ANSI_16_PALETTE = ANSI_8_PALETTE + (
    Color(128, 128, 128),
    Color(255, 0, 0),
    Color(0, 255, 0),
    Color(255, 255, 0),
    Color(0, 0, 255),
    Color(255, 0, 255),
    Color(0, 255, 255),
    Color(255, 255, 255),
)

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
GRAY_RAMP_STEPS = 24


def generate_256_palette() -> tuple[Color, ...]:
    """Return the xterm 256 color palette.

    The first 16 entries are the basic colors. They are followed by every
    combination of six levels per channel (red outermost, blue innermost), so
    entry ``16 + 36*r + 6*g + b`` holds ``CUBE_LEVELS[r], CUBE_LEVELS[g],
    CUBE_LEVELS[b]``. The last 24 entries are grays of value ``10*i + 8``.
    """
    cube = tuple(
        Color(red, green, blue)
        for red in CUBE_LEVELS
        for green in CUBE_LEVELS
        for blue in CUBE_LEVELS
    )
    ramp = _grays(10 * i + 8 for i in range(GRAY_RAMP_STEPS))
    return ANSI_16_PALETTE + cube + ramp


ANSI_256_PALETTE = generate_256_palette()

_PALETTES: dict[RenderMode, tuple[Color, ...]] = {
    RenderMode.MONOCHROME_2: MONOCHROME_PALETTE,
    RenderMode.GRAYSCALE_RAMP_9: GRAYSCALE_RAMP_9_PALETTE,
    RenderMode.GRAYSCALE_RAMP_5: GRAYSCALE_RAMP_5_PALETTE,
    RenderMode.ANSI_8: ANSI_8_PALETTE,
    RenderMode.ANSI_16: ANSI_16_PALETTE,
    RenderMode.ANSI_256: ANSI_256_PALETTE,
}


def build_palette(mode: RenderMode | str) -> tuple[Color, ...]:
    """Return the palette used by *mode*, ordered by palette index."""
    mode = RenderMode.from_name(mode)
    palette = _PALETTES.get(mode)
    if palette is None:
        raise ConfigurationError(f"Render mode {mode.value} has no palette")
    return palette


def palette_size(mode: RenderMode | str) -> int:
    """Return the number of palette entries for *mode*, 0 for truecolor."""
    mode = RenderMode.from_name(mode)
    return len(_PALETTES.get(mode, ()))


def describe_palette(palette: Iterable[Color]) -> list[str]:
    """Return one ``"r g b a"`` line per palette entry."""
    return [f"{color.r} {color.g} {color.b} {color.a}" for color in palette]
