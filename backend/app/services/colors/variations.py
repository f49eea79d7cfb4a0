"""
Shadow/highlight value ramps.

For one source color, builds two shadow steps, the untouched midtone and two
highlight steps. Lightness offsets are spread into the room left before the
5%/95% limits, so colors near an extreme still get distinct steps. The
stylized ramp also rotates hue: shadows toward blue (240 degrees) and
highlights toward yellow (60 degrees), along the shorter arc.
"""

from typing import Dict, Union

from .conversions import clamp, color_from_hsl, color_hsl, round_half_up
from .models import Color, ColorVariation, VariationStyle, coerce_enum

SHADOW_TARGET_HUE = 240
HIGHLIGHT_TARGET_HUE = 60
BASE_HUE_SHIFT = 15
MIN_LIGHTNESS = 5
MAX_LIGHTNESS = 95
MAX_OFFSET = 30


def hue_factor(h: float) -> float:
    """Cool hues shift less, warm hues more."""
    if 180 <= h <= 240:
        return 0.7
    if 0 <= h <= 60 or 300 <= h < 360:
        return 1.2
    return 1.0


def rotation_direction(h: float, target: float) -> int:
    """Sign of the shortest rotation from ``h`` to ``target`` (0 when equal)."""
    diff = (target - h) % 360
    if diff > 180:
        diff -= 360
    if diff > 0:
        return 1
    if diff < 0:
        return -1
    return 0


def shift_lightness(l: float, offset: float) -> float:
    """Move lightness by ``offset`` as a share of the remaining headroom."""
    if offset < 0:
        new_l = l - (l - MIN_LIGHTNESS) * (abs(offset) / MAX_OFFSET) * 0.5
    elif offset > 0:
        new_l = l + (MAX_LIGHTNESS - l) * (offset / MAX_OFFSET) * 0.5
    else:
        new_l = l
    return clamp(new_l, MIN_LIGHTNESS, MAX_LIGHTNESS)


def _step(h: float, s: float, l: float, lightness_offset: int, hue_shift: float) -> Color:
    if lightness_offset < 0:
        new_s = min(s * 1.1, 100)
    elif lightness_offset > 0:
        new_s = s * 0.9
    else:
        new_s = s
    return color_from_hsl((h + hue_shift) % 360, new_s, shift_lightness(l, lightness_offset))


def generate_color_variations(color: Color,
                              style: Union[VariationStyle, str] = VariationStyle.STYLIZED) -> ColorVariation:
    """
    Build the five-step ramp for ``color``.

    Args:
        color: Source color; returned unchanged as the midtone
        style: "stylized" (hue shifting) or "realistic" (lightness only)

    Returns:
        ColorVariation with the applied hue-shift magnitude in degrees
    """
    style = coerce_enum(VariationStyle, style, "variation style")
    h, s, l = color_hsl(color)

    if style is VariationStyle.STYLIZED:
        magnitude = round_half_up(BASE_HUE_SHIFT * min(s / 100, 1) * hue_factor(h))
    else:
        magnitude = 0

    shadow_dir = rotation_direction(h, SHADOW_TARGET_HUE)
    highlight_dir = rotation_direction(h, HIGHLIGHT_TARGET_HUE)

    return ColorVariation(
        shadow2=_step(h, s, l, -30, shadow_dir * magnitude * 1.5),
        shadow1=_step(h, s, l, -15, shadow_dir * magnitude * 0.75),
        midtone=color,
        highlight1=_step(h, s, l, 15, highlight_dir * magnitude * 0.75),
        highlight2=_step(h, s, l, 30, highlight_dir * magnitude * 1.5),
        hue_shift_amount=magnitude,
        style=style,
    )


def get_variation_info(variation: ColorVariation) -> Dict[str, str]:
    """Short human-readable summary of a ramp."""
    if variation.style is VariationStyle.STYLIZED:
        return {
            "title": "Stylized (hue shifting)",
            "description": (
                f"Shadows shift toward blue and highlights toward yellow "
                f"by up to {round_half_up(variation.hue_shift_amount * 1.5)}°."
            ),
        }
    return {
        "title": "Realistic (value only)",
        "description": "Only lightness changes; hue stays fixed across the ramp.",
    }
