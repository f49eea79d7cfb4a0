"""
Palette Extraction API Orchestrator

Coordinates one extraction request: upload validation, decoding, optional
region crop, sampling, engine dispatch and response assembly, with timing
logs and metrics for each stage.
"""

import time
from typing import Optional, Sequence

import numpy as np
from fastapi import UploadFile

from app.schemas import ColorModel, PaletteResponse
from app.services.imaging import get_image_dimensions, read_image, validate_file_upload
from app.utils.ids import generate_request_id
from app.utils.logging import get_logger
from app.utils.metrics import get_metrics
from .conversions import color_from_rgb
from .extraction import sample_and_run, validate_color_count
from .models import ExtractionMethod, coerce_enum

logger = get_logger()


async def handle_extract(file: UploadFile,
                         color_count: int,
                         method: str,
                         region: Optional[Sequence[int]] = None,
                         seed: Optional[int] = None) -> PaletteResponse:
    """
    Extract a palette from an uploaded image.

    Args:
        file: Uploaded image (PNG, JPEG, WEBP or GIF)
        color_count: Number of colors, 3 to 8
        method: "histogram" or "kmeans"
        region: Optional (x, y, width, height) crop
        seed: Optional k-means seed for reproducible results

    Returns:
        PaletteResponse with colors ordered brightest first

    Raises:
        HTTPException: For rejected uploads
        ImageDecodeError: If the image cannot be decoded
        InvalidParameterError: For bad count, method or region
    """
    request_id = generate_request_id("pal")
    start_time = time.time()
    metrics = get_metrics()

    logger.info("Starting palette extraction", extra={"request_id": request_id})

    try:
        color_count = validate_color_count(color_count)
        engine = coerce_enum(ExtractionMethod, method, "extraction method")
        validate_file_upload(file)

        rgba = await read_image(file)
        width, height = get_image_dimensions(rgba)
        decode_time = time.time() - start_time

        extract_start = time.time()
        rng = np.random.default_rng(seed) if seed is not None else None
        pixels, rgb_colors = sample_and_run(rgba, color_count, engine, region=region, rng=rng)
        extract_time = time.time() - extract_start

        colors = [ColorModel.from_color(color_from_rgb(*rgb)) for rgb in rgb_colors]
        total_time = time.time() - start_time
        degenerate = pixels.shape[0] == 0

        if degenerate:
            logger.warning("No opaque pixels sampled, returned mid-gray palette",
                           extra={"request_id": request_id})

        logger.info("Palette extraction completed successfully",
                    extra={
                        "request_id": request_id,
                        "method": engine.value,
                        "dims": f"{width}x{height}",
                        "color_count": color_count,
                        "sampled_pixels": int(pixels.shape[0]),
                        "ms_decode": decode_time * 1000,
                        "ms_extract": extract_time * 1000,
                        "ms_total": total_time * 1000,
                        "result": "ok"
                    })

        metrics.record_extraction(engine.value, degenerate)
        metrics.record_sample_size(int(pixels.shape[0]))
        metrics.record_timing("extract", total_time * 1000)
        metrics.record_timing(f"engine_{engine.value}", extract_time * 1000)

        return PaletteResponse(
            request_id=request_id,
            method=engine.value,
            color_count=color_count,
            width=width,
            height=height,
            sampled_pixels=int(pixels.shape[0]),
            colors=colors,
        )

    except Exception as e:
        error_time = time.time() - start_time
        logger.error(f"Palette extraction failed: {str(e)}",
                     extra={
                         "request_id": request_id,
                         "ms_total": error_time * 1000,
                         "result": "error",
                         "error_type": type(e).__name__
                     })
        metrics.record_failure(type(e).__name__.lower())
        raise
