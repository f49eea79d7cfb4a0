"""
K-means palette engine.

Lloyd's algorithm with k-means++ seeding over the sampled pixels, using the
"redmean" weighted RGB distance instead of plain Euclidean distance. The
random source is injectable so results can be reproduced in tests.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from app.config import config
from .conversions import MID_GRAY, sort_by_luminance


def redmean_distance(c1: Sequence[float], c2: Sequence[float]) -> float:
    """Perceptually weighted distance between two RGB colors."""
    rmean = (c1[0] + c2[0]) / 2
    dr = c1[0] - c2[0]
    dg = c1[1] - c2[1]
    db = c1[2] - c2[2]
    return float(np.sqrt(
        (2 + rmean / 256) * dr * dr
        + 4 * dg * dg
        + (2 + (255 - rmean) / 256) * db * db
    ))


def _distances_to(pixels: np.ndarray, centroid: np.ndarray) -> np.ndarray:
    """Redmean distance from every pixel (N, 3) to one centroid."""
    rmean = (pixels[:, 0] + centroid[0]) / 2
    diff = pixels - centroid
    return np.sqrt(
        (2 + rmean / 256) * diff[:, 0] ** 2
        + 4 * diff[:, 1] ** 2
        + (2 + (255 - rmean) / 256) * diff[:, 2] ** 2
    )


def _distance_matrix(pixels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    return np.stack([_distances_to(pixels, c) for c in centroids], axis=1)


def initialize_centroids(pixels: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    k-means++ seeding.

    The first centroid is a uniform pick; each further centroid is drawn with
    probability proportional to the squared distance to its nearest chosen
    centroid. When every pixel coincides with a chosen centroid the pick
    falls back to uniform.
    """
    n = pixels.shape[0]
    centroids = [pixels[int(rng.integers(n))]]
    nearest = _distances_to(pixels, centroids[0])

    while len(centroids) < k:
        weights = nearest ** 2
        total = float(weights.sum())
        if total == 0:
            index = int(rng.integers(n))
        else:
            target = rng.random() * total
            index = int(np.searchsorted(np.cumsum(weights), target, side="left"))
            index = min(index, n - 1)

        centroids.append(pixels[index])
        nearest = np.minimum(nearest, _distances_to(pixels, pixels[index]))

    return np.array(centroids, dtype=np.float64)


def kmeans_palette(pixels_rgb_u8: np.ndarray,
                   k: int,
                   rng: Optional[np.random.Generator] = None,
                   max_iterations: int = None) -> List[Tuple[int, int, int]]:
    """
    Cluster pixels into ``k`` representative colors.

    Args:
        pixels_rgb_u8: Sampled RGB pixels (N, 3)
        k: Number of colors to return
        rng: Random generator for seeding (fresh entropy or ``KMEANS_SEED`` if None)
        max_iterations: Lloyd iteration cap (default from config)

    Returns:
        ``k`` RGB tuples sorted brightest first
    """
    if max_iterations is None:
        max_iterations = config.KMEANS_MAX_ITERATIONS
    if rng is None:
        rng = np.random.default_rng(config.KMEANS_SEED)

    pixels = np.asarray(pixels_rgb_u8, dtype=np.float64).reshape(-1, 3)
    n = pixels.shape[0]

    if n == 0:
        logger.debug("No pixels to cluster, returning mid-gray palette")
        return [MID_GRAY] * k

    if n < k:
        logger.debug(f"Only {n} pixels for k={k}, padding with the first pixel")
        padded = [tuple(int(v) for v in p) for p in pixels]
        padded += [padded[0]] * (k - n)
        return sort_by_luminance(padded)

    centroids = initialize_centroids(pixels, k, rng)

    iteration = 0
    for iteration in range(1, max_iterations + 1):
        labels = np.argmin(_distance_matrix(pixels, centroids), axis=1)

        converged = True
        for i in range(k):
            members = pixels[labels == i]
            if members.shape[0] == 0:
                continue
            new_centroid = np.floor(members.mean(axis=0) + 0.5)
            if redmean_distance(new_centroid, centroids[i]) > 1:
                converged = False
            centroids[i] = new_centroid

        if converged:
            break

    logger.debug(f"K-means finished after {iteration} iterations (k={k}, {n} pixels)")
    return sort_by_luminance(tuple(int(v) for v in c) for c in centroids)
