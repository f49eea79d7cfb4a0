"""
Tests for the shared pixel sampler and the downscale rule behind it.
"""
import numpy as np
import pytest
from PIL import Image

from app.services.colors.sampling import sample_pixels
from app.services.imaging import fit_long_edge, resize_long_edge, to_rgba_array
from app.services.colors.errors import ImageDecodeError


class TestFitLongEdge:
    """Target size computation."""

    def test_landscape_downscale(self):
        assert fit_long_edge(300, 200, 200) == (200, 133)

    def test_portrait_downscale(self):
        assert fit_long_edge(100, 300, 200) == (66, 200)

    def test_small_image_untouched(self):
        assert fit_long_edge(120, 80, 200) == (120, 80)

    def test_square_uses_height_branch(self):
        assert fit_long_edge(400, 400, 200) == (200, 200)

    def test_thin_strip_keeps_one_pixel(self):
        assert fit_long_edge(1000, 1, 200) == (200, 1)

    def test_resize_returns_input_when_small(self):
        arr = np.zeros((10, 10, 4), dtype=np.uint8)
        assert resize_long_edge(arr, 200) is arr


class TestSamplePixels:
    """Sampling walks the working copy in raster order."""

    def test_stride_keeps_every_fourth_pixel(self, red_image):
        pixels = sample_pixels(red_image)
        assert pixels.shape == (25, 3)
        assert pixels.dtype == np.uint8
        assert np.all(pixels == [255, 0, 0])

    def test_large_image_is_downscaled_first(self):
        pixels = sample_pixels(Image.new("RGBA", (400, 100), (10, 20, 30, 255)))
        assert pixels.shape[0] == 200 * 50 // 4

    def test_transparent_image_yields_no_pixels(self, transparent_image):
        assert sample_pixels(transparent_image).shape == (0, 3)

    def test_alpha_threshold_is_inclusive(self):
        assert sample_pixels(Image.new("RGBA", (8, 8), (0, 0, 255, 128))).shape[0] == 16
        assert sample_pixels(Image.new("RGBA", (8, 8), (0, 0, 255, 127))).shape[0] == 0

    def test_stride_positions_skip_transparent_pixels(self):
        arr = np.zeros((1, 8, 4), dtype=np.uint8)
        arr[0, 0] = (255, 0, 0, 0)
        arr[0, 4] = (0, 255, 0, 255)
        pixels = sample_pixels(arr)
        assert pixels.tolist() == [[0, 255, 0]]

    def test_explicit_overrides(self, red_image):
        assert sample_pixels(red_image, stride=1).shape[0] == 100
        assert sample_pixels(red_image, max_edge=5, stride=1).shape[0] == 25

    def test_rgb_array_counts_as_opaque(self):
        arr = np.full((4, 4, 3), 200, dtype=np.uint8)
        assert sample_pixels(arr).shape[0] == 4


class TestRgbaNormalization:
    """Buffers are normalized to (H, W, 4) uint8."""

    def test_grayscale_array(self):
        rgba = to_rgba_array(np.full((2, 3), 7, dtype=np.uint8))
        assert rgba.shape == (2, 3, 4)
        assert rgba[0, 0].tolist() == [7, 7, 7, 255]

    def test_pil_palette_image_is_converted(self, red_image):
        rgba = to_rgba_array(red_image.convert("P"))
        assert rgba.shape == (10, 10, 4)

    @pytest.mark.parametrize("bad", [[[1, 2, 3]], np.zeros((2, 2, 5), dtype=np.uint8)])
    def test_rejects_unusable_buffers(self, bad):
        with pytest.raises(ImageDecodeError):
            to_rgba_array(bad)


def _striped(background):
    """400x400 with opaque red on even columns and ``background`` on odd ones."""
    arr = np.empty((400, 400, 4), dtype=np.uint8)
    arr[:, 0::2] = (255, 0, 0, 255)
    arr[:, 1::2] = background
    return arr


class TestTransparentEdges:
    """Downscaling must not tint opaque pixels with the RGB of transparent ones."""

    def test_resize_keeps_opaque_color(self):
        small = resize_long_edge(_striped((0, 0, 0, 0)), 200)
        assert small.shape == (200, 200, 4)
        assert np.all(small[..., :3] == [255, 0, 0])
        assert np.all(small[..., 3] == 128)

    @pytest.mark.parametrize("background", [(0, 0, 0, 0), (255, 255, 255, 0)])
    def test_sampled_pixels_have_no_fringe(self, background):
        pixels = sample_pixels(_striped(background))
        assert pixels.shape[0] > 0
        assert np.all(pixels == [255, 0, 0])

    def test_fully_transparent_area_stays_black(self):
        arr = np.zeros((400, 400, 4), dtype=np.uint8)
        arr[..., :3] = 255
        small = resize_long_edge(arr, 200)
        assert np.all(small == 0)
