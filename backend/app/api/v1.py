"""
GamePalette v1 API Routes
Palette extraction plus the display-time transforms applied to a palette.
"""
from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, Path, Query, UploadFile

from app.config import Config
from app.schemas import (
    ColorListRequest, ColorListResponse, ErrorResponse, HarmonyResponse, PaletteResponse,
    SimulateRequest, SimulatedHexResponse, StyleRequest, VariationRequest,
    VariationResponse, VisionOption, HEX_PATTERN,
)
from app.services.colors.display import get_display_colors
from app.services.colors.extract_api import handle_extract
from app.services.colors.harmony import generate_color_harmonies
from app.services.colors.styles import apply_style_filter, to_grayscale
from app.services.colors.variations import generate_color_variations, get_variation_info
from app.services.colors.vision import COLOR_BLINDNESS_OPTIONS, simulate_color_blindness
from app.utils.metrics import get_metrics

router = APIRouter(prefix="/v1/palette", tags=["Palette"])


@router.post("/extract", response_model=PaletteResponse,
             responses={400: {"model": ErrorResponse}, 415: {"model": ErrorResponse}},
             summary="Extract Palette",
             description="Extract an ordered palette (brightest first) from an uploaded image")
async def extract(
    file: UploadFile = File(..., description="PNG, JPEG, WEBP or GIF image"),
    color_count: int = Query(Config.DEFAULT_COLOR_COUNT, ge=Config.MIN_COLOR_COUNT, le=Config.MAX_COLOR_COUNT,
                             description="Number of colors to extract"),
    method: str = Query(Config.DEFAULT_METHOD, pattern="^(histogram|kmeans)$", description="Extraction engine"),
    region_x: Optional[int] = Query(None, ge=0, description="Crop origin x"),
    region_y: Optional[int] = Query(None, ge=0, description="Crop origin y"),
    region_width: Optional[int] = Query(None, ge=1, description="Crop width"),
    region_height: Optional[int] = Query(None, ge=1, description="Crop height"),
    seed: Optional[int] = Query(None, ge=0, description="K-means seed for reproducible output"),
):
    """
    Extract dominant colors from an image.

    - **histogram**: deterministic hue-histogram peaks, favors distinct vivid hues
    - **kmeans**: redmean-distance k-means++, favors covering the pixel mass
    - **region_***: all four must be given to extract from a sub-rectangle
    """
    region_parts = [region_x, region_y, region_width, region_height]
    if any(v is not None for v in region_parts):
        if any(v is None for v in region_parts):
            raise HTTPException(status_code=400,
                                detail="region_x, region_y, region_width and region_height must be given together")
        region = region_parts
    else:
        region = None

    return await handle_extract(file=file, color_count=color_count, method=method, region=region, seed=seed)


@router.post("/style", response_model=ColorListResponse, summary="Apply Style Filter")
def style(request: StyleRequest):
    """Remap colors with a named style (or custom hue/saturation/lightness settings)."""
    settings = request.custom_settings.to_settings() if request.custom_settings else None
    return ColorListResponse.from_colors(apply_style_filter(request.to_colors(), request.style, settings))


@router.post("/grayscale", response_model=ColorListResponse, summary="Value Check")
def grayscale(request: ColorListRequest):
    """Luma-weighted grayscale for checking value contrast."""
    return ColorListResponse.from_colors(to_grayscale(request.to_colors()))


@router.post("/variations", response_model=VariationResponse, summary="Shadow/Highlight Ramp")
def variations(request: VariationRequest):
    """Five-step value ramp for one color."""
    variation = generate_color_variations(request.color.to_color(), request.style)
    return VariationResponse.from_variation(variation, get_variation_info(variation))


@router.post("/simulate", response_model=ColorListResponse, summary="Simulate Color Vision")
def simulate(request: SimulateRequest):
    """Simulate a color-vision deficiency over a palette, optionally in grayscale."""
    return ColorListResponse.from_colors(
        get_display_colors(request.to_colors(), request.type, value_check=request.value_check)
    )


@router.get("/simulate/{vision_type}", response_model=SimulatedHexResponse, summary="Simulate One Color")
def simulate_hex(
    vision_type: str = Path(..., pattern="^(none|protanopia|deuteranopia|tritanopia)$"),
    hex: str = Query(..., pattern=HEX_PATTERN, description="Color in format #RRGGBB"),
):
    return SimulatedHexResponse(hex=hex, type=vision_type, simulated_hex=simulate_color_blindness(hex, vision_type))


@router.get("/harmonies", response_model=HarmonyResponse, summary="Color Harmonies")
def harmonies(hex: str = Query(..., pattern=HEX_PATTERN, description="Base color in format #RRGGBB")):
    """Complementary, analogous, triadic, split-complementary and tetradic sets."""
    return HarmonyResponse.from_harmonies(hex, generate_color_harmonies(hex))


@router.get("/vision-types", response_model=List[VisionOption], summary="Color Vision Modes")
def vision_types():
    return [VisionOption(**option) for option in COLOR_BLINDNESS_OPTIONS]


@router.get("/metrics", summary="Extraction Metrics")
def metrics():
    try:
        return get_metrics().get_summary()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get metrics: {str(e)}")
