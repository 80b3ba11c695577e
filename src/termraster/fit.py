"""Fit an image into a grid of terminal character cells."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from PIL import Image

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ASPECT = 0.5


@dataclass(frozen=True)
class TerminalGeometry:
    """Size of the terminal in cells and the width/height ratio of one cell."""

    columns: int
    rows: int
    aspect: float = DEFAULT_ASPECT

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ConfigurationError(
                f"Terminal size must be positive, got {self.columns}x{self.rows}"
            )
        if not self.aspect > 0:
            raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect}")


def effective_size(width: int, height: int, aspect: float) -> tuple[float, float]:
    """Stretch the image along the axis that the cell shape compresses."""
    if aspect > 1.0:
        return float(width), height * aspect
    if aspect < 1.0:
        return width / aspect, float(height)
    return float(width), float(height)


def fit_dimensions(
    width: int, height: int, columns: int, rows: int, aspect: float
) -> tuple[int, int]:
    """Return the pixel size that fits a *width* x *height* image in the cell box.

    With a square cell the image is resized straight to ``(columns, rows)``
    without keeping its proportions, unlike a proportional fit into the box.
    Otherwise the aspect-corrected size is scaled uniformly by
    the smaller of the two axis scales. The limiting axis is set to its bound
    and the other is ``floor(eff_other * bound / eff_limiting)``, the exact
    truncation rather than ``floor(eff * scale)``, which can land one cell
    short. The result never exceeds the box and may be zero along an axis.
    """
    if aspect == 1.0:
        return columns, rows

    xeff, yeff = effective_size(width, height, aspect)
    xscale = columns / xeff
    yscale = rows / yeff
    # The limiting axis is exactly its bound; scale the other one by it.
    if xscale <= yscale:
        xf, yf = columns, math.floor(yeff * columns / xeff)
    else:
        xf, yf = math.floor(xeff * rows / yeff), rows
    return min(xf, columns), min(yf, rows)


def fit(image: Image.Image, columns: int, rows: int, aspect: float) -> Image.Image:
    """Return a new RGBA image resampled to fit the terminal cell box."""
    source = image.convert("RGBA")
    target = fit_dimensions(source.width, source.height, columns, rows, aspect)
    logger.debug(
        "Fitting %dx%d image into %dx%d cells (aspect %.3f): %dx%d",
        source.width,
        source.height,
        columns,
        rows,
        aspect,
        *target,
    )
    if target[0] == 0 or target[1] == 0:
        return Image.new("RGBA", target)
    # Nearest neighbour only; source pixels are never blended.
    return source.resize(target, Image.NEAREST)


def fit_to_geometry(image: Image.Image, geometry: TerminalGeometry) -> Image.Image:
    """Fit *image* to a validated :class:`TerminalGeometry`."""
    return fit(image, geometry.columns, geometry.rows, geometry.aspect)
