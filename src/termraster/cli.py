"""Command line interface for printing images in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from PIL import Image

from . import __version__
from .ansi import write_rows
from .errors import ConfigurationError
from .fit import DEFAULT_ASPECT
from .palette import MODE_ALIASES, RenderMode, build_palette, describe_palette
from .pipeline import load_image, render_image
from .quantize import DEFAULT_DITHER, available_dither_methods
from .render import available_modes, get_style
from .terminal import resolve_geometry

LOG = logging.getLogger("termraster")

DEFAULT_MODE = RenderMode.GRAYSCALE_RAMP_9


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    LOG.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    LOG.handlers[:] = [handler]
    LOG.propagate = False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termraster",
        description="Print images in the terminal using text characters.",
    )
    parser.add_argument("image", type=Path, nargs="?", help="Path to the source image file.")
    parser.add_argument(
        "-m",
        "--mode",
        default=DEFAULT_MODE.value,
        choices=[*available_modes(), *MODE_ALIASES],
        help=f"Visual style to print the image with (default: {DEFAULT_MODE.value}).",
    )
    parser.add_argument(
        "-x",
        "--width",
        help="Terminal width in columns (default: autodetect, or 80).",
    )
    parser.add_argument(
        "-y",
        "--height",
        help="Terminal height in rows (default: autodetect, or 24).",
    )
    parser.add_argument(
        "-r",
        "--ratio",
        help=(
            "Aspect ratio (width divided by height) of the terminal's characters "
            f"(default: {DEFAULT_ASPECT})."
        ),
    )
    parser.add_argument(
        "--dither",
        default=DEFAULT_DITHER,
        choices=list(available_dither_methods()),
        help=f"Dithering used by the color modes (default: {DEFAULT_DITHER}).",
    )
    parser.add_argument(
        "--show-palette",
        action="store_true",
        help="Print the palette of the selected mode as 'r g b a' lines and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _parse_dimension(
    parser: argparse.ArgumentParser, value: Optional[str], label: str
) -> Optional[int]:
    """Return the integer in *value*, or None to fall back to autodetection."""
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        LOG.warning("Invalid value `%s' for %s, attempting to autodetect.", value, label)
        return None
    if number <= 0:
        parser.error(f"{label} must be positive")
    return number


def _parse_ratio(parser: argparse.ArgumentParser, value: Optional[str]) -> float:
    if value is None:
        return DEFAULT_ASPECT
    try:
        ratio = float(value)
    except ValueError:
        LOG.warning(
            "Invalid value `%s' for aspect ratio, defaulting to %s.", value, DEFAULT_ASPECT
        )
        return DEFAULT_ASPECT
    if not ratio > 0:
        parser.error("aspect ratio must be positive")
    return ratio


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    mode = RenderMode.from_name(args.mode)
    if args.show_palette:
        if mode is RenderMode.TRUECOLOR:
            parser.error("truecolor mode has no palette")
        print("\n".join(describe_palette(build_palette(mode))))
        return 0

    if args.image is None:
        parser.error("the following arguments are required: image")
    if not args.image.exists():
        parser.error(f"Image not found: {args.image}")

    columns = _parse_dimension(parser, args.width, "terminal width")
    rows = _parse_dimension(parser, args.height, "terminal height")
    ratio = _parse_ratio(parser, args.ratio)

    try:
        geometry = resolve_geometry(columns, rows, ratio)
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        image = load_image(str(args.image))
    except (OSError, Image.DecompressionBombError) as exc:
        LOG.error("Opening image failed: %s", exc)
        return 1

    cells = render_image(image, geometry, mode, args.dither)
    write_rows(cells, get_style(mode), sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
