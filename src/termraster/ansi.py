"""ANSI escape output for rendered rows."""

from __future__ import annotations

from typing import Iterable, Sequence, TextIO

from .render import Cell, Marker, RenderStyle

CSI = "\x1b["
RESET_BACKGROUND = f"{CSI}49m"


def background(code: str) -> str:
    """Return the escape sequence selecting background color *code*."""
    return f"{CSI}{code}m"


def truecolor_background(red: int, green: int, blue: int) -> str:
    return background(f"48;2;{red};{green};{blue}")


def format_cell(cell: Cell, style: RenderStyle) -> str:
    """Return the text a terminal needs to draw one rendered cell."""
    if isinstance(cell, Marker):
        return RESET_BACKGROUND
    if isinstance(cell, str):
        return cell
    if isinstance(cell, tuple):
        return truecolor_background(*cell) + " "
    return background(style.code(cell)) + " "


def format_rows(rows: Iterable[Sequence[Cell]], style: RenderStyle) -> list[str]:
    """Return one printable line per rendered row."""
    return ["".join(format_cell(cell, style) for cell in row) for row in rows]


def write_rows(
    rows: Iterable[Sequence[Cell]], style: RenderStyle, stream: TextIO
) -> None:
    """Write rendered rows to *stream*, one line each, and flush it."""
    for line in format_rows(rows, style):
        stream.write(line)
        stream.write("\n")
    stream.flush()
