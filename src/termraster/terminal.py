"""Terminal size detection."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .fit import DEFAULT_ASPECT, TerminalGeometry

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


def detect_terminal_size(
    fallback: tuple[int, int] = (DEFAULT_COLUMNS, DEFAULT_ROWS)
) -> tuple[int, int, bool]:
    """Return ``(columns, rows, detected)`` for the terminal attached to stdout."""
    try:
        size = os.get_terminal_size(sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):
        return fallback[0], fallback[1], False
    if size.columns <= 0 or size.lines <= 0:
        return fallback[0], fallback[1], False
    return size.columns, size.lines, True


def resolve_geometry(
    columns: Optional[int] = None,
    rows: Optional[int] = None,
    aspect: Optional[float] = None,
) -> TerminalGeometry:
    """Combine explicit overrides with the detected terminal size.

    Axes without an override use the detected size, or 80x24 when detection
    fails, with a warning for each axis that had to fall back.
    """
    detected_columns, detected_rows, detected = detect_terminal_size()
    if columns is None:
        if not detected:
            logger.warning("Can't autodetect terminal width, assuming %d.", detected_columns)
        columns = detected_columns
    if rows is None:
        if not detected:
            logger.warning("Can't autodetect terminal height, assuming %d.", detected_rows)
        rows = detected_rows
    return TerminalGeometry(columns, rows, DEFAULT_ASPECT if aspect is None else aspect)
