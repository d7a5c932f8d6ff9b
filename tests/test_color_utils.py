"""
Unit tests for color value and distance utilities.
"""
import math

import numpy as np
import pytest

from palette_studio.services.colors.utils import (
    Color, brightness, distance, hex_to_rgb, hue, hue_saturation_arrays,
    luma, rgb_to_hex, rgb_to_hsl, saturation
)


class TestColor:
    """Test the Color value type"""

    def test_channels_must_be_in_range(self):
        """Test channel range validation"""
        with pytest.raises(ValueError):
            Color(256, 0, 0)
        with pytest.raises(ValueError):
            Color(0, -1, 0)

    def test_channels_must_be_integers(self):
        """Test that floats and bools are rejected as channels"""
        with pytest.raises(ValueError):
            Color(1.5, 0, 0)
        with pytest.raises(ValueError):
            Color(True, 0, 0)

    def test_numpy_integers_are_normalized(self):
        """Test that numpy integer channels become plain ints"""
        color = Color(np.uint8(10), np.uint8(20), np.uint8(30))
        assert color == Color(10, 20, 30)
        assert type(color.r) is int
        assert hash(color) == hash(Color(10, 20, 30))

    def test_from_float_rounds_half_up_and_clamps(self):
        """Test float construction rounding and clamping"""
        assert Color.from_float(254.5, -3.0, 0.49) == Color(255, 0, 0)
        assert Color.from_float(0.5, 1.5, 2.5) == Color(1, 2, 3)
        assert Color.from_float(300.0, 127.4, 127.6) == Color(255, 127, 128)

    def test_immutable(self):
        """Test that colors cannot be modified"""
        color = Color(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 5


class TestHexConversion:
    """Test hex <-> RGB conversion"""

    def test_rgb_to_hex_basic_colors(self):
        """Test hex formatting of basic colors"""
        assert rgb_to_hex(255, 0, 0) == "#FF0000"
        assert rgb_to_hex(0, 0, 0) == "#000000"
        assert rgb_to_hex(31, 78, 121) == "#1F4E79"
        assert Color(211, 181, 143).hex == "#D3B58F"

    def test_hex_to_rgb(self):
        """Test hex parsing with and without '#'"""
        assert hex_to_rgb("#1F4E79") == (31, 78, 121)
        assert hex_to_rgb("d3b58f") == (211, 181, 143)
        assert hex_to_rgb("#GGGGGG") is None
        assert hex_to_rgb("#FFF") is None

    def test_from_hex_rejects_malformed(self):
        """Test malformed hex strings"""
        assert Color.from_hex("#0a2a43") == Color(10, 42, 67)
        with pytest.raises(ValueError):
            Color.from_hex("not-a-color")


class TestDistanceAndHsv:
    """Test distance, hue, saturation, brightness and luma"""

    def test_distance(self):
        """Test Euclidean RGB distance"""
        assert distance(Color(0, 0, 0), Color(3, 4, 0)) == 5.0
        assert distance(Color(10, 20, 30), Color(10, 20, 30)) == 0.0
        assert math.isclose(distance(Color(0, 0, 0), Color(255, 255, 255)), 441.6729559300637)

    @pytest.mark.parametrize("rgb,expected", [
        ((255, 0, 0), 0.0),
        ((255, 255, 0), 60.0),
        ((0, 255, 0), 120.0),
        ((0, 255, 255), 180.0),
        ((0, 0, 255), 240.0),
        ((255, 0, 255), 300.0),
        ((128, 128, 128), 0.0),
        ((0, 0, 0), 0.0),
    ])
    def test_hue(self, rgb, expected):
        """Test HSV hue of primaries and grays"""
        assert hue(Color(*rgb)) == pytest.approx(expected)

    def test_hue_wraps_below_360(self):
        """Test that hue stays below 360 degrees"""
        h = hue(Color(255, 0, 128))
        assert 329.0 < h < 360.0

    def test_saturation(self):
        """Test HSV saturation percentage"""
        assert saturation(Color(0, 0, 0)) == 0.0
        assert saturation(Color(255, 0, 0)) == 100.0
        assert saturation(Color(200, 100, 100)) == 50.0
        assert saturation(Color(90, 90, 90)) == 0.0

    def test_brightness(self):
        """Test mid-range brightness percentage"""
        assert brightness(Color(255, 0, 0)) == pytest.approx(50.0)
        assert brightness(Color(255, 255, 255)) == pytest.approx(100.0)
        assert brightness(Color(0, 0, 0)) == 0.0

    def test_luma(self):
        """Test perceptual luma weights"""
        assert luma(Color(255, 255, 255)) == pytest.approx(255.0)
        assert luma(Color(255, 255, 0)) > luma(Color(0, 255, 0)) > luma(Color(255, 0, 0)) > luma(Color(0, 0, 255))

    def test_vectorized_matches_scalar_exactly(self):
        """Test vectorized hue/saturation against the scalar functions"""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(500, 3), dtype=np.uint8)
        pixels[:6] = [(0, 0, 0), (255, 255, 255), (10, 10, 10), (255, 0, 0), (0, 255, 0), (0, 0, 255)]

        hues, sats = hue_saturation_arrays(pixels)

        for i, px in enumerate(pixels):
            color = Color(*px)
            assert hues[i] == hue(color)
            assert sats[i] == saturation(color)

    def test_vectorized_empty(self):
        """Test vectorized helpers on empty input"""
        hues, sats = hue_saturation_arrays(np.zeros((0, 3), dtype=np.uint8))
        assert hues.shape == (0,)
        assert sats.shape == (0,)


class TestRgbToHsl:
    """Test HSL conversion used by palette export"""

    def test_primary_red(self):
        """Test HSL of pure red"""
        hsl = rgb_to_hsl(Color(255, 0, 0))
        assert hsl["h"] == pytest.approx(0.0)
        assert hsl["s"] == pytest.approx(100.0)
        assert hsl["l"] == pytest.approx(50.0)

    def test_gray_is_achromatic(self):
        """Test HSL of a neutral gray"""
        hsl = rgb_to_hsl(Color(128, 128, 128))
        assert hsl["h"] == 0.0
        assert hsl["s"] == 0.0
        assert hsl["l"] == pytest.approx(50.196, abs=1e-3)

    def test_light_color_uses_upper_formula(self):
        """Test HSL saturation above 50% lightness"""
        hsl = rgb_to_hsl(Color(255, 200, 200))
        assert hsl["h"] == pytest.approx(0.0)
        assert hsl["s"] == pytest.approx(100.0)
        assert hsl["l"] > 50.0
