"""
Pixel sampler shared by both extraction engines.

The image is shrunk so its long edge is at most ``SAMPLE_MAX_EDGE`` pixels,
then walked in raster order. Pixels with alpha below ``SAMPLE_ALPHA_MIN``
are dropped, and only pixels whose raster index is a multiple of
``SAMPLE_STRIDE`` are kept. Both engines must see the same sample for
their results to be comparable.
"""

import numpy as np
from loguru import logger

from app.config import config
from app.services.imaging import resize_long_edge, to_rgba_array, ImageInput


def sample_pixels(image: ImageInput,
                  max_edge: int = None,
                  alpha_min: int = None,
                  stride: int = None) -> np.ndarray:
    """
    Downscale and stride-sample the opaque pixels of an image.

    Args:
        image: Decoded image (PIL image or RGB/RGBA array)
        max_edge: Long-edge limit for the working copy
        alpha_min: Minimum alpha for a pixel to count as opaque
        stride: Keep every ``stride``-th raster position

    Returns:
        RGB pixels array (N, 3) uint8; N may be zero
    """
    if max_edge is None:
        max_edge = config.SAMPLE_MAX_EDGE
    if alpha_min is None:
        alpha_min = config.SAMPLE_ALPHA_MIN
    if stride is None:
        stride = config.SAMPLE_STRIDE

    rgba = to_rgba_array(image)
    small = resize_long_edge(rgba, max_edge)
    flat = small.reshape(-1, 4)

    positions = np.arange(flat.shape[0])
    keep = (flat[:, 3] >= alpha_min) & (positions % stride == 0)
    pixels = flat[keep, :3].copy()

    logger.debug(f"Sampled {pixels.shape[0]} pixels from {small.shape[1]}x{small.shape[0]} "
                 f"working copy (source {rgba.shape[1]}x{rgba.shape[0]})")
    return pixels
