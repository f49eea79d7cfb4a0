"""
Palette extraction entry point.

Samples the decoded image once and hands the pixels to the engine chosen by
``ExtractionMethod``. Both engines take the same (N, 3) sample and return the
same shape, so callers can switch between them freely.
"""

import time
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from app.config import Config
from app.services.imaging import ImageInput, crop_region, to_rgba_array
from .conversions import color_from_rgb
from .errors import InvalidParameterError
from .histogram import histogram_palette
from .kmeans import kmeans_palette
from .models import Color, ExtractionMethod, Palette, StyleName, coerce_enum
from .sampling import sample_pixels


def validate_color_count(color_count: int) -> int:
    """
    Reject color counts outside the supported band instead of clamping.

    Raises:
        InvalidParameterError: If the count is not an int in [MIN_COLOR_COUNT, MAX_COLOR_COUNT]
    """
    if isinstance(color_count, bool) or not isinstance(color_count, (int, np.integer)):
        raise InvalidParameterError(f"color_count must be an integer, got {color_count!r}")
    if not Config.validate_color_count(int(color_count)):
        raise InvalidParameterError(
            f"color_count must be between {Config.MIN_COLOR_COUNT} and {Config.MAX_COLOR_COUNT}, "
            f"got {color_count}"
        )
    return int(color_count)


def run_engine(pixels: np.ndarray,
               color_count: int,
               method: ExtractionMethod,
               rng: Optional[np.random.Generator] = None) -> List[Tuple[int, int, int]]:
    """Dispatch an already-sampled pixel set to one extraction engine."""
    if method is ExtractionMethod.KMEANS:
        return kmeans_palette(pixels, color_count, rng=rng)
    elif method is ExtractionMethod.HISTOGRAM:
        return histogram_palette(pixels, color_count)
    raise InvalidParameterError(f"Unsupported extraction method: {method!r}")


def sample_and_run(image: ImageInput,
                   color_count: int,
                   method: ExtractionMethod,
                   region: Optional[Sequence[int]] = None,
                   rng: Optional[np.random.Generator] = None) -> Tuple[np.ndarray, List[Tuple[int, int, int]]]:
    """
    Crop, sample and run one engine.

    Arguments must already be validated. Returns the sampled pixels (N, 3)
    alongside the RGB colors so callers can report sample size.
    """
    rgba = crop_region(to_rgba_array(image), region)
    pixels = sample_pixels(rgba)
    return pixels, run_engine(pixels, color_count, method, rng=rng)


def extract_colors(image: ImageInput,
                   color_count: int = 5,
                   method: Union[ExtractionMethod, str] = ExtractionMethod.HISTOGRAM,
                   region: Optional[Sequence[int]] = None,
                   rng: Optional[np.random.Generator] = None) -> List[Color]:
    """
    Extract an ordered palette from a decoded image.

    Args:
        image: Decoded image (PIL image or RGB/RGBA array)
        color_count: Number of colors, 3 to 8 inclusive
        method: "histogram" (deterministic) or "kmeans" (seeded by ``rng``)
        region: Optional (x, y, width, height) crop in source pixels
        rng: Random generator for k-means seeding

    Returns:
        Exactly ``color_count`` colors, brightest first

    Raises:
        InvalidParameterError: For an out-of-range count, unknown method or bad region
        ImageDecodeError: If ``image`` is not a usable pixel buffer
    """
    color_count = validate_color_count(color_count)
    method = coerce_enum(ExtractionMethod, method, "extraction method")

    start_time = time.time()
    pixels, rgb_colors = sample_and_run(image, color_count, method, region=region, rng=rng)

    logger.debug(f"Extracted {len(rgb_colors)} colors with {method.value} from {pixels.shape[0]} pixels "
                 f"in {(time.time() - start_time) * 1000:.1f}ms")
    return [color_from_rgb(*rgb) for rgb in rgb_colors]


def extract_palette(image: ImageInput,
                    color_count: int = 5,
                    method: Union[ExtractionMethod, str] = ExtractionMethod.HISTOGRAM,
                    region: Optional[Sequence[int]] = None,
                    rng: Optional[np.random.Generator] = None,
                    source: Optional[str] = None) -> Palette:
    """Same as ``extract_colors`` but wrapped in an unstyled Palette."""
    colors = extract_colors(image, color_count, method, region=region, rng=rng)
    return Palette(colors=tuple(colors), style=StyleName.ORIGINAL, source=source)
