"""
GamePalette API Schemas
Pydantic models for palette extraction and transform request/response validation.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.services.colors.conversions import color_from_hex
from app.services.colors.models import Color, ColorHarmony, ColorVariation, CustomStyleSettings

HEX_PATTERN = r"^#?[0-9A-Fa-f]{6}$"


class RGBModel(BaseModel):
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class HSLModel(BaseModel):
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percent")
    l: int = Field(..., ge=0, le=100, description="Lightness percent")


class ColorModel(BaseModel):
    """Single palette color; HEX, RGB and HSL always describe the same value."""
    hex: str = Field(..., pattern=r"^#[0-9A-F]{6}$", description="Hex color code in format #RRGGBB")
    rgb: RGBModel
    hsl: HSLModel
    name: Optional[str] = Field(None, description="Nearest named color")

    @classmethod
    def from_color(cls, color: Color) -> "ColorModel":
        return cls(**color.to_dict())


class ColorInput(BaseModel):
    """
    Incoming color. Only ``hex`` is trusted; RGB/HSL/name are re-derived.
    """
    hex: str = Field(..., pattern=HEX_PATTERN)
    name: Optional[str] = None

    def to_color(self) -> Color:
        color = color_from_hex(self.hex)
        if self.name:
            return Color(hex=color.hex, rgb=color.rgb, hsl=color.hsl, name=self.name)
        return color


class CustomStyleModel(BaseModel):
    hue_shift: float = Field(0.0, ge=-360, le=360, description="Degrees added to hue")
    saturation_multiplier: float = Field(1.0, ge=0.0, le=5.0)
    lightness_multiplier: float = Field(1.0, ge=0.0, le=5.0)

    def to_settings(self) -> CustomStyleSettings:
        return CustomStyleSettings(
            hue_shift=self.hue_shift,
            saturation_multiplier=self.saturation_multiplier,
            lightness_multiplier=self.lightness_multiplier,
        )


class ColorListRequest(BaseModel):
    colors: List[ColorInput] = Field(..., min_length=1, max_length=64)

    def to_colors(self) -> List[Color]:
        return [c.to_color() for c in self.colors]


class StyleRequest(ColorListRequest):
    style: str = Field(..., pattern="^(original|hypercasual|stylized|realistic|custom)$")
    custom_settings: Optional[CustomStyleModel] = None


class SimulateRequest(ColorListRequest):
    type: str = Field(..., pattern="^(none|protanopia|deuteranopia|tritanopia)$")
    value_check: bool = Field(False, description="Convert to grayscale after simulation")


class VariationRequest(BaseModel):
    color: ColorInput
    style: str = Field("stylized", pattern="^(stylized|realistic)$")


class ColorListResponse(BaseModel):
    colors: List[ColorModel]

    @classmethod
    def from_colors(cls, colors: List[Color]) -> "ColorListResponse":
        return cls(colors=[ColorModel.from_color(c) for c in colors])


class PaletteResponse(BaseModel):
    """Extraction result."""
    request_id: str
    method: str = Field(..., description="Extraction engine used")
    color_count: int
    width: int = Field(..., description="Source image width in pixels")
    height: int = Field(..., description="Source image height in pixels")
    sampled_pixels: int = Field(..., description="Opaque pixels that reached the engine")
    style: str = "original"
    colors: List[ColorModel]


class VariationResponse(BaseModel):
    shadow2: ColorModel
    shadow1: ColorModel
    midtone: ColorModel
    highlight1: ColorModel
    highlight2: ColorModel
    hue_shift_amount: int
    style: str
    info: Dict[str, str]

    @classmethod
    def from_variation(cls, variation: ColorVariation, info: Dict[str, str]) -> "VariationResponse":
        return cls(
            **{key: ColorModel.from_color(color) for key, color in variation.steps()},
            hue_shift_amount=variation.hue_shift_amount,
            style=variation.style.value,
            info=info,
        )


class SimulatedHexResponse(BaseModel):
    hex: str
    type: str
    simulated_hex: str


class HarmonyColorModel(BaseModel):
    hex: str
    name: str
    angle: int
    hsl: HSLModel


class HarmonyModel(BaseModel):
    type: str
    name: str
    description: str
    colors: List[HarmonyColorModel]


class HarmonyResponse(BaseModel):
    base_hex: str
    harmonies: List[HarmonyModel]

    @classmethod
    def from_harmonies(cls, base_hex: str, harmonies: List[ColorHarmony]) -> "HarmonyResponse":
        return cls(
            base_hex=base_hex,
            harmonies=[
                HarmonyModel(
                    type=h.type.value,
                    name=h.name,
                    description=h.description,
                    colors=[
                        HarmonyColorModel(
                            hex=entry.color.hex,
                            name=entry.label,
                            angle=entry.angle,
                            hsl=HSLModel(**entry.color.to_dict()["hsl"]),
                        )
                        for entry in h.colors
                    ],
                )
                for h in harmonies
            ],
        )


class VisionOption(BaseModel):
    type: str
    label: str
    description: str


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("gamepalette-core", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")
