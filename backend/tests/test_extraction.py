"""
End-to-end tests for palette extraction on decoded images.
"""
import numpy as np
import pytest

from app.services.colors.errors import ImageDecodeError, InvalidParameterError
from app.services.colors.extraction import extract_colors, extract_palette, validate_color_count
from app.services.colors.models import ExtractionMethod, StyleName


class TestValidateColorCount:

    @pytest.mark.parametrize("count", [3, 5, 8, np.int64(4)])
    def test_accepts_supported_counts(self, count):
        assert validate_color_count(count) == int(count)

    @pytest.mark.parametrize("count", [0, 2, 9, -1, 5.0, "5", True, None])
    def test_rejects_everything_else(self, count):
        with pytest.raises(InvalidParameterError):
            validate_color_count(count)

    def test_invalid_parameter_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_color_count(42)


class TestExtractColors:
    """Both engines on small synthetic images."""

    def test_solid_red_histogram(self, red_image):
        colors = extract_colors(red_image, 5, "histogram")
        assert [c.hex for c in colors] == ["#808080"] * 4 + ["#FF0000"]

    def test_solid_red_kmeans(self, red_image):
        colors = extract_colors(red_image, 3, ExtractionMethod.KMEANS, rng=np.random.default_rng(0))
        assert [c.hex for c in colors] == ["#FF0000"] * 3
        assert colors[0].hsl.as_tuple() == (0, 100, 50)
        assert colors[0].name == "Red"

    @pytest.mark.parametrize("method", ["histogram", "kmeans"])
    def test_transparent_stripes_do_not_darken_colors(self, method):
        arr = np.zeros((400, 400, 4), dtype=np.uint8)
        arr[:, 0::2] = (255, 0, 0, 255)
        colors = extract_colors(arr, 3, method, rng=np.random.default_rng(0))
        assert "#800000" not in [c.hex for c in colors]
        if method == "kmeans":
            assert [c.hex for c in colors] == ["#FF0000"] * 3

    @pytest.mark.parametrize("method", ["histogram", "kmeans"])
    def test_transparent_image_is_all_gray(self, transparent_image, method):
        colors = extract_colors(transparent_image, 4, method)
        assert [c.hex for c in colors] == ["#808080"] * 4

    @pytest.mark.parametrize("method", ["histogram", "kmeans"])
    @pytest.mark.parametrize("count", range(3, 9))
    def test_exact_count_brightest_first(self, noise_image, method, count):
        colors = extract_colors(noise_image, count, method, rng=np.random.default_rng(11))
        assert len(colors) == count
        lum = [0.299 * c.rgb.r + 0.587 * c.rgb.g + 0.114 * c.rgb.b for c in colors]
        assert lum == sorted(lum, reverse=True)

    def test_histogram_is_deterministic(self, noise_image):
        first = [c.hex for c in extract_colors(noise_image, 6, "histogram")]
        second = [c.hex for c in extract_colors(noise_image, 6, "histogram")]
        assert first == second

    def test_colors_are_self_consistent(self, noise_image):
        for color in extract_colors(noise_image, 8, "kmeans", rng=np.random.default_rng(3)):
            assert color.hex == "#{:02X}{:02X}{:02X}".format(*color.rgb.as_tuple())

    def test_accepts_plain_rgb_array(self):
        arr = np.zeros((12, 12, 3), dtype=np.uint8)
        arr[:] = (0, 0, 255)
        colors = extract_colors(arr, 3, "kmeans")
        assert [c.hex for c in colors] == ["#0000FF"] * 3


class TestRegion:
    """Extraction restricted to a sub-rectangle."""

    def test_left_half_sees_only_red(self, split_image):
        colors = extract_colors(split_image, 3, "histogram", region=(0, 0, 20, 20))
        assert [c.hex for c in colors] == ["#808080", "#808080", "#FF0000"]

    def test_right_half_sees_only_blue(self, split_image):
        colors = extract_colors(split_image, 3, "kmeans", region=(20, 0, 20, 20))
        assert [c.hex for c in colors] == ["#0000FF"] * 3

    def test_region_is_clamped_to_image(self, split_image):
        colors = extract_colors(split_image, 3, "kmeans", region=(30, 10, 500, 500))
        assert [c.hex for c in colors] == ["#0000FF"] * 3

    @pytest.mark.parametrize("region", [(0, 0, 0, 5), (100, 100, 5, 5), (0, 0, 5)])
    def test_bad_regions_raise(self, split_image, region):
        with pytest.raises(InvalidParameterError):
            extract_colors(split_image, 3, "histogram", region=region)


class TestInvalidInput:

    def test_unknown_method(self, red_image):
        with pytest.raises(InvalidParameterError):
            extract_colors(red_image, 5, "median")

    def test_count_out_of_range(self, red_image):
        with pytest.raises(InvalidParameterError):
            extract_colors(red_image, 9)

    def test_unusable_buffer(self):
        with pytest.raises(ImageDecodeError):
            extract_colors("not an image", 5)


class TestExtractPalette:

    def test_wraps_colors_in_unstyled_palette(self, red_image):
        palette = extract_palette(red_image, 3, "kmeans", source="red.png")
        assert len(palette) == 3
        assert palette.style is StyleName.ORIGINAL
        assert palette.source == "red.png"
        assert palette.hexes == ["#FF0000"] * 3
