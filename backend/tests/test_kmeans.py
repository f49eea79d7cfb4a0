"""
Unit tests for the k-means palette engine.
"""
import numpy as np
import pytest

from app.services.colors.conversions import MID_GRAY
from app.services.colors.kmeans import initialize_centroids, kmeans_palette, redmean_distance


def block(rgb, n):
    return np.tile(np.array(rgb, dtype=np.uint8), (n, 1))


class TestRedmeanDistance:
    """Weighted RGB distance."""

    def test_zero_for_identical_colors(self):
        assert redmean_distance((12, 34, 56), (12, 34, 56)) == 0

    def test_symmetric(self):
        a, b = (200, 10, 40), (30, 180, 90)
        assert redmean_distance(a, b) == pytest.approx(redmean_distance(b, a))

    def test_green_weighs_more_than_red_and_blue(self):
        black = (0, 0, 0)
        assert redmean_distance((0, 100, 0), black) > redmean_distance((100, 0, 0), black)
        assert redmean_distance((0, 100, 0), black) > redmean_distance((0, 0, 100), black)

    def test_blue_weighs_more_near_dark_reds(self):
        black = (0, 0, 0)
        assert redmean_distance((255, 0, 0), black) < redmean_distance((0, 0, 255), black)

    def test_known_value(self):
        # rmean = 127.5, only the green term contributes
        assert redmean_distance((0, 10, 0), (0, 0, 0)) == pytest.approx(20.0)


class TestInitializeCentroids:
    """k-means++ seeding."""

    def test_distinct_groups_each_get_a_seed(self):
        pixels = np.vstack([block((0, 0, 0), 10), block((255, 255, 255), 10), block((255, 0, 0), 10)])
        seeds = initialize_centroids(pixels.astype(np.float64), 3, np.random.default_rng(7))
        assert sorted(map(tuple, seeds.astype(int).tolist())) == [(0, 0, 0), (255, 0, 0), (255, 255, 255)]

    def test_identical_pixels_fall_back_to_uniform_picks(self):
        pixels = block((40, 50, 60), 5).astype(np.float64)
        seeds = initialize_centroids(pixels, 3, np.random.default_rng(0))
        assert seeds.shape == (3, 3)
        assert np.all(seeds == [40, 50, 60])


class TestKmeansPalette:
    """Clustering into exactly k brightest-first colors."""

    def test_empty_input_returns_mid_gray(self):
        assert kmeans_palette(np.zeros((0, 3), dtype=np.uint8), 4) == [MID_GRAY] * 4

    def test_fewer_pixels_than_k_pads_with_first_pixel(self):
        pixels = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
        assert kmeans_palette(pixels, 4) == [(255, 255, 255), (0, 0, 0), (0, 0, 0), (0, 0, 0)]

    def test_single_color_repeats(self):
        assert kmeans_palette(block((255, 0, 0), 25), 3) == [(255, 0, 0)] * 3

    def test_separated_clusters_are_recovered(self):
        pixels = np.vstack([block((0, 0, 0), 40), block((255, 0, 0), 40), block((255, 255, 255), 40)])
        result = kmeans_palette(pixels, 3, rng=np.random.default_rng(3))
        assert result == [(255, 255, 255), (255, 0, 0), (0, 0, 0)]

    def test_centroids_are_rounded_means(self):
        pixels = np.vstack([block((10, 10, 10), 1), block((11, 11, 11), 1), block((250, 250, 250), 2)])
        result = kmeans_palette(pixels, 2, rng=np.random.default_rng(1))
        # Mean of 10 and 11 is 10.5 and rounds half up
        assert result == [(250, 250, 250), (11, 11, 11)]

    def test_same_seed_is_reproducible(self, noise_image):
        pixels = np.asarray(noise_image).reshape(-1, 3)
        first = kmeans_palette(pixels, 6, rng=np.random.default_rng(99))
        second = kmeans_palette(pixels, 6, rng=np.random.default_rng(99))
        assert first == second

    @pytest.mark.parametrize("k", [3, 5, 8])
    def test_output_shape_and_order(self, noise_image, k):
        pixels = np.asarray(noise_image).reshape(-1, 3)
        result = kmeans_palette(pixels, k, rng=np.random.default_rng(5))
        assert len(result) == k
        lum = [0.299 * r + 0.587 * g + 0.114 * b for r, g, b in result]
        assert lum == sorted(lum, reverse=True)
        assert all(0 <= c <= 255 for rgb in result for c in rgb)

    def test_iteration_cap_of_one_still_returns_k_colors(self, noise_image):
        pixels = np.asarray(noise_image).reshape(-1, 3)
        assert len(kmeans_palette(pixels, 4, rng=np.random.default_rng(2), max_iterations=1)) == 4
