"""Tests for nearest-color quantization"""
import itertools
import math
import tracemalloc

import numpy as np
import pytest
from PIL import Image

from termraster.errors import ConfigurationError
from termraster.palette import Color, RenderMode, build_palette
from termraster.quantize import (
    DISTANCE_SENTINEL,
    available_dither_methods,
    color_distance,
    nearest,
    quantize_image,
)


SAMPLE_COLORS = [
    (0, 0, 0),
    (255, 255, 255),
    (12, 200, 37),
    (128, 64, 250),
    (95, 96, 97),
    (250, 5, 130),
    (40, 40, 40),
]


class TestNearest:
    """Test single-color lookups"""

    def test_distance_ignores_alpha(self):
        """Test alpha does not contribute to distance"""
        assert color_distance((1, 2, 3, 0), (1, 2, 3, 255)) == 0
        assert color_distance((0, 0, 0), (3, 4, 0)) == 5

    def test_sentinel_exceeds_largest_distance(self):
        """Test the starting distance is beaten by any real color"""
        assert DISTANCE_SENTINEL > math.sqrt(3 * 255 ** 2)
        assert nearest([Color(255, 255, 255)], (0, 0, 0)) == 0

    def test_exact_match(self):
        """Test a palette color maps to itself"""
        palette = build_palette(RenderMode.ANSI_16)
        assert nearest(palette, (255, 0, 0)) == 9
        assert nearest(palette, (0, 128, 128, 17)) == 6

    def test_ties_resolve_to_lowest_index(self):
        """Test equidistant entries favour the first one"""
        palette = [Color(10, 0, 0), Color(0, 10, 0), Color(0, 0, 10)]
        assert nearest(palette, (0, 0, 0)) == 0
        assert nearest([Color(5, 5, 5), Color(5, 5, 5)], (5, 5, 5)) == 0

    def test_empty_palette_falls_back_to_zero(self):
        """Test index 0 is returned when nothing matches"""
        assert nearest([], (1, 2, 3)) == 0

    @pytest.mark.parametrize("mode", [RenderMode.ANSI_8, RenderMode.ANSI_16, RenderMode.ANSI_256])
    def test_no_entry_is_strictly_closer(self, mode):
        """Test the chosen entry is a minimum and the first such minimum"""
        palette = build_palette(mode)
        for color in SAMPLE_COLORS:
            index = nearest(palette, color)
            best = color_distance(palette[index], color)
            distances = [color_distance(entry, color) for entry in palette]
            assert min(distances) == best
            assert distances.index(best) == index


class TestQuantizeImage:
    """Test whole-image quantization"""

    def test_matches_per_pixel_rule(self, make_image):
        """Test batch results equal nearest() for every pixel"""
        palette = build_palette(RenderMode.ANSI_256)
        rows = [SAMPLE_COLORS[:4], SAMPLE_COLORS[3:7]]
        indices = quantize_image(make_image(rows), palette)
        assert indices == [[nearest(palette, pixel) for pixel in row] for row in rows]

    def test_batch_ties_resolve_to_lowest_index(self, make_image):
        """Test batch quantization keeps the first-minimum rule"""
        palette = [Color(10, 0, 0), Color(0, 10, 0)]
        assert quantize_image(make_image([[(0, 0, 0)]]), palette) == [[0]]

    def test_palette_colors_are_fixed_points(self, make_image):
        """Test re-quantizing quantized colors gives the same indices"""
        palette = build_palette(RenderMode.ANSI_256)
        colors = list(itertools.product((0, 60, 130, 200, 255), repeat=3))
        rows = [colors[i:i + 25] for i in range(0, len(colors), 25)]
        first = quantize_image(make_image(rows), palette)
        mapped = [[palette[index][:3] for index in row] for row in first]
        second = quantize_image(make_image(mapped), palette)
        assert second == first

    def test_accepts_rgba_images(self, make_image):
        """Test alpha is dropped before matching"""
        image = make_image([[(0, 0, 128, 0), (192, 192, 192, 10)]], mode="RGBA")
        assert quantize_image(image, build_palette("ansi-8")) == [[4, 7]]

    def test_empty_image(self):
        """Test a zero-area image quantizes to no rows"""
        assert quantize_image(Image.new("RGBA", (0, 3)), build_palette("ansi-8")) == []

    def test_default_dithering_is_none(self):
        """Test the only strategy is the no-op one"""
        assert list(available_dither_methods()) == ["none"]

    def test_unknown_dither_method(self, make_image):
        """Test unknown dithering strategies are rejected"""
        with pytest.raises(ConfigurationError):
            quantize_image(make_image([[(0, 0, 0)]]), build_palette("ansi-8"), "atkinson")


class TestQuantizeMemory:
    """Test batch quantization on terminal-sized images"""

    @staticmethod
    def _gradient(width, height):
        image = Image.new("RGB", (width, height))
        image.putdata(
            [
                ((x * 7) % 256, (y * 11) % 256, (x * y) % 256)
                for y in range(height)
                for x in range(width)
            ]
        )
        return image

    def test_matches_nearest_on_gradient(self):
        """Test every pixel of a varied image agrees with nearest()"""
        palette = build_palette(RenderMode.ANSI_256)
        image = self._gradient(40, 30)
        indices = quantize_image(image, palette)
        pixels = np.asarray(image).reshape(-1, 3).tolist()
        assert [index for row in indices for index in row] == [
            nearest(palette, pixel) for pixel in pixels
        ]

    def test_wide_terminal_stays_small(self):
        """Test a 320x90 render in 256 colors needs little memory"""
        image = self._gradient(320, 90)
        palette = build_palette(RenderMode.ANSI_256)
        tracemalloc.start()
        try:
            indices = quantize_image(image, palette)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert len(indices) == 90 and len(indices[0]) == 320
        assert peak < 32 * 1024 * 1024
