"""Shared fixtures for termraster tests"""
import logging

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def reset_termraster_logger():
    """Undo logging changes made by the CLI between tests"""
    logger = logging.getLogger("termraster")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_image():
    """Build an RGB image from a list of pixel rows"""

    def _make(rows, mode="RGB"):
        height = len(rows)
        width = len(rows[0])
        image = Image.new(mode, (width, height))
        for y, row in enumerate(rows):
            for x, pixel in enumerate(row):
                image.putpixel((x, y), pixel)
        return image

    return _make
