"""Load, fit and render an image in one call."""

from __future__ import annotations

from typing import Optional, Union

from PIL import Image

from .fit import TerminalGeometry, fit_to_geometry
from .palette import RenderMode
from .render import Cell, get_style, render


def load_image(path: str) -> Image.Image:
    """Load an image from *path* into an RGBA Pillow image."""
    with Image.open(path) as image:
        return image.convert("RGBA")


def render_image(
    image: Image.Image,
    geometry: TerminalGeometry,
    mode: Union[RenderMode, str],
    ditherer: Optional[str] = None,
) -> list[list[Cell]]:
    """Fit *image* to *geometry* and render it in *mode*."""
    # Unknown modes fail before any resampling.
    style = get_style(mode)
    fitted = fit_to_geometry(image, geometry)
    return render(fitted, style.mode, ditherer)
