"""
Style filters for extracted palettes.

Each named style is a fixed HSL remap applied color by color. Filters never
touch their input; they return a new list in the same order.
"""

from typing import Callable, Dict, List, Optional, Sequence, Union

from .conversions import clamp, color_from_hsl, color_from_rgb, color_hsl, round_half_up
from .models import Color, CustomStyleSettings, StyleName, coerce_enum


def _hypercasual(color: Color) -> Color:
    # Punchy and bright
    h, s, l = color_hsl(color)
    new_s = min(s * 1.3, 100)
    new_l = min(max(l, 50) * 1.1, 90)
    return color_from_hsl(h, new_s, new_l)


def _stylized(color: Color) -> Color:
    # Nudge toward warm hues, soften saturation, lift values
    h, s, l = color_hsl(color)
    warm_shift = 10 if h < 180 else -10
    new_h = (h + warm_shift) % 360
    new_s = s * 0.9
    new_l = clamp(l * 0.95 + 10, 20, 85)
    return color_from_hsl(new_h, new_s, new_l)


def _realistic(color: Color) -> Color:
    h, s, l = color_hsl(color)
    new_s = s * 0.6
    new_l = clamp(l * 0.9, 10, 85)
    return color_from_hsl(h, new_s, new_l)


def _custom(color: Color, settings: CustomStyleSettings) -> Color:
    h, s, l = color_hsl(color)
    new_h = (h + settings.hue_shift) % 360
    new_s = clamp(s * settings.saturation_multiplier, 0, 100)
    new_l = clamp(l * settings.lightness_multiplier, 0, 100)
    return color_from_hsl(new_h, new_s, new_l)


_NAMED_FILTERS: Dict[StyleName, Callable[[Color], Color]] = {
    StyleName.HYPERCASUAL: _hypercasual,
    StyleName.STYLIZED: _stylized,
    StyleName.REALISTIC: _realistic,
}


def apply_style_filter(colors: Sequence[Color],
                       style: Union[StyleName, str],
                       custom_settings: Optional[CustomStyleSettings] = None) -> List[Color]:
    """
    Remap a palette with a named style.

    Args:
        colors: Source palette
        style: original, hypercasual, stylized, realistic or custom
        custom_settings: Hue shift and multipliers for ``custom``; without
            them ``custom`` behaves like ``original``

    Returns:
        New list of the same length and order

    Raises:
        InvalidParameterError: For an unknown style name
    """
    style = coerce_enum(StyleName, style, "style")

    if style is StyleName.ORIGINAL:
        return list(colors)
    if style is StyleName.CUSTOM:
        if custom_settings is None:
            return list(colors)
        return [_custom(c, custom_settings) for c in colors]

    remap = _NAMED_FILTERS[style]
    return [remap(c) for c in colors]


def to_grayscale(colors: Sequence[Color]) -> List[Color]:
    """Luma-weighted desaturation for value checks; names become "Gray N%"."""
    result = []
    for color in colors:
        r, g, b = color.rgb.as_tuple()
        gray = round_half_up(0.299 * r + 0.587 * g + 0.114 * b)
        percent = round_half_up(gray / 255 * 100)
        base = color_from_rgb(gray, gray, gray)
        result.append(Color(hex=base.hex, rgb=base.rgb, hsl=base.hsl, name=f"Gray {percent}%"))
    return result
