"""
Color-vision deficiency simulation.

Colors are linearized, multiplied by a fixed 3x3 matrix per deficiency type
and re-encoded to sRGB. ``none`` returns the input untouched.
"""

from typing import List, Sequence, Union

from .conversions import color_from_hex, hex_to_rgb, round_half_up, rgb_to_hex
from .models import Color, ColorBlindnessType, coerce_enum

CVD_MATRICES = {
    ColorBlindnessType.PROTANOPIA: (
        (0.152286, 1.052583, -0.204868),
        (0.114503, 0.786281, 0.099216),
        (-0.003882, -0.048116, 1.051998),
    ),
    ColorBlindnessType.DEUTERANOPIA: (
        (0.367322, 0.860646, -0.227968),
        (0.280085, 0.672501, 0.047413),
        (-0.01182, 0.04294, 0.968881),
    ),
    ColorBlindnessType.TRITANOPIA: (
        (1.255528, -0.076749, -0.178779),
        (-0.078411, 0.930809, 0.147602),
        (0.004733, 0.691367, 0.3039),
    ),
}

COLOR_BLINDNESS_OPTIONS = [
    {"type": ColorBlindnessType.NONE.value, "label": "Normal", "description": "No simulation"},
    {"type": ColorBlindnessType.PROTANOPIA.value, "label": "Protanopia", "description": "Red-weak simulation"},
    {"type": ColorBlindnessType.DEUTERANOPIA.value, "label": "Deuteranopia", "description": "Green-weak simulation"},
    {"type": ColorBlindnessType.TRITANOPIA.value, "label": "Tritanopia", "description": "Blue-weak simulation"},
]


def srgb_to_linear(channel: int) -> float:
    v = channel / 255
    return v / 12.92 if v <= 0.04045 else ((v + 0.055) / 1.055) ** 2.4


def linear_to_srgb(value: float) -> int:
    v = min(max(value, 0.0), 1.0)
    out = v * 12.92 if v <= 0.0031308 else 1.055 * v ** (1 / 2.4) - 0.055
    return round_half_up(out * 255)


def simulate_color_blindness(hex_color: str, vision_type: Union[ColorBlindnessType, str]) -> str:
    """
    Approximate how ``hex_color`` looks under a dichromatic deficiency.

    Raises:
        InvalidParameterError: For an unknown deficiency type
    """
    vision_type = coerce_enum(ColorBlindnessType, vision_type, "color blindness type")
    if vision_type is ColorBlindnessType.NONE:
        return hex_color

    linear = [srgb_to_linear(c) for c in hex_to_rgb(hex_color)]
    matrix = CVD_MATRICES[vision_type]
    simulated = [sum(coef * value for coef, value in zip(row, linear)) for row in matrix]
    return rgb_to_hex(*(linear_to_srgb(v) for v in simulated))


def apply_color_blindness_to_colors(colors: Sequence[Color],
                                    vision_type: Union[ColorBlindnessType, str]) -> List[Color]:
    """Simulate every color of a palette, re-deriving RGB, HSL and name."""
    vision_type = coerce_enum(ColorBlindnessType, vision_type, "color blindness type")
    if vision_type is ColorBlindnessType.NONE:
        return list(colors)
    return [color_from_hex(simulate_color_blindness(c.hex, vision_type)) for c in colors]
