"""Print raster images in a text terminal using glyphs or ANSI colors."""

__version__ = "0.3.0"
