"""
Unit tests for color-vision simulation and display derivations.
"""
import pytest

from app.services.colors.conversions import color_from_hex, hex_to_rgb
from app.services.colors.display import get_display_colors
from app.services.colors.errors import InvalidParameterError
from app.services.colors.models import ColorBlindnessType
from app.services.colors.vision import (
    COLOR_BLINDNESS_OPTIONS, apply_color_blindness_to_colors, linear_to_srgb, simulate_color_blindness,
    srgb_to_linear,
)

DEFICIENCIES = ["protanopia", "deuteranopia", "tritanopia"]


class TestTransferFunctions:

    @pytest.mark.parametrize("channel", [0, 1, 10, 64, 128, 200, 255])
    def test_linearization_round_trip(self, channel):
        assert linear_to_srgb(srgb_to_linear(channel)) == channel

    def test_out_of_range_is_clamped(self):
        assert linear_to_srgb(-0.2) == 0
        assert linear_to_srgb(1.4) == 255


class TestSimulate:

    def test_none_returns_input(self):
        assert simulate_color_blindness("#ff0000", "none") == "#ff0000"

    @pytest.mark.parametrize("vision_type", DEFICIENCIES)
    def test_white_and_black_are_fixed(self, vision_type):
        assert simulate_color_blindness("#FFFFFF", vision_type) == "#FFFFFF"
        assert simulate_color_blindness("#000000", vision_type) == "#000000"

    def test_protanopia_red(self):
        r, g, b = hex_to_rgb(simulate_color_blindness("#FF0000", ColorBlindnessType.PROTANOPIA))
        assert b == 0
        assert r > g
        assert r < 255

    @pytest.mark.parametrize("vision_type", DEFICIENCIES)
    def test_output_is_hex(self, vision_type):
        result = simulate_color_blindness("#3366CC", vision_type)
        assert len(result) == 7 and result.startswith("#")
        assert result == result.upper()

    def test_unknown_type(self):
        with pytest.raises(InvalidParameterError):
            simulate_color_blindness("#FF0000", "achromatopsia")


class TestPaletteSimulation:

    def test_none_keeps_colors(self):
        colors = [color_from_hex("#FF0000")]
        assert apply_color_blindness_to_colors(colors, "none") == colors

    def test_colors_are_rederived(self):
        (result,) = apply_color_blindness_to_colors([color_from_hex("#FF0000")], "deuteranopia")
        assert result.rgb.as_tuple() == hex_to_rgb(result.hex)
        assert result.name

    def test_options_cover_every_type(self):
        assert [o["type"] for o in COLOR_BLINDNESS_OPTIONS] == [t.value for t in ColorBlindnessType]


class TestDisplayColors:

    def test_defaults_are_identity(self):
        colors = [color_from_hex("#123456"), color_from_hex("#ABCDEF")]
        assert get_display_colors(colors) == colors

    def test_value_check_only(self):
        (gray,) = get_display_colors([color_from_hex("#FF0000")], value_check=True)
        assert gray.hex == "#4C4C4C"

    def test_simulation_then_grayscale(self):
        colors = [color_from_hex("#FF0000"), color_from_hex("#00FF00")]
        result = get_display_colors(colors, "protanopia", value_check=True)
        assert len(result) == 2
        assert all(c.hsl.s == 0 and c.name.startswith("Gray ") for c in result)
