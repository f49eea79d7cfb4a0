"""
Color-space utilities shared by every stage of the palette pipeline.

Conversions between RGB, HEX and HSL follow the browser conventions the
palettes are displayed with: channels round half up, hue is reported in
whole degrees in [0, 360) and saturation/lightness as whole percentages.
Intermediate math in the transforms uses ``exact_hsl`` (floats) and only
rounds when a new ``Color`` is built.
"""

import math
import re
from typing import Iterable, List, Sequence, Tuple

from .models import Color, HSL, RGB

MID_GRAY: Tuple[int, int, int] = (128, 128, 128)

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

# Named reference colors used to label swatches.
COLOR_NAMES = {
    "#FF0000": "Red",
    "#FF4500": "Orange Red",
    "#FFA500": "Orange",
    "#FFD700": "Gold",
    "#FFFF00": "Yellow",
    "#9ACD32": "Yellow Green",
    "#00FF00": "Lime",
    "#32CD32": "Lime Green",
    "#008000": "Green",
    "#006400": "Dark Green",
    "#00FFFF": "Cyan",
    "#008B8B": "Dark Cyan",
    "#0000FF": "Blue",
    "#00008B": "Dark Blue",
    "#4169E1": "Royal Blue",
    "#8A2BE2": "Blue Violet",
    "#9400D3": "Dark Violet",
    "#FF00FF": "Magenta",
    "#FF1493": "Deep Pink",
    "#FFC0CB": "Pink",
    "#FFFFFF": "White",
    "#C0C0C0": "Silver",
    "#808080": "Gray",
    "#000000": "Black",
    "#A52A2A": "Brown",
    "#DEB887": "Burlywood",
    "#D2691E": "Chocolate",
    "#8B4513": "Saddle Brown",
    "#F5F5DC": "Beige",
    "#FAF0E6": "Linen",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to an uppercase ``#RRGGBB`` string.

    Each channel is rounded independently; out-of-range values are clamped
    so the result is always six hex digits.
    """
    channels = [int(clamp(round_half_up(c), 0, 255)) for c in (r, g, b)]
    return "#" + "".join(f"{c:02X}" for c in channels)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Parse ``#RRGGBB`` (the ``#`` is optional, case-insensitive).

    Malformed input returns black instead of raising.
    """
    match = _HEX_RE.match(hex_color or "")
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())


def exact_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Unrounded RGB to HSL conversion.

    Returns:
        Tuple of (H, S, L) with H in [0, 360), S and L in [0, 100]
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    h = 0.0
    s = 0.0
    l = (mx + mn) / 2

    if mx != mn:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
        if mx == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif mx == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return h * 360.0, s * 100.0, l * 100.0


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[int, int, int]:
    """Convert RGB to whole-number HSL; a hue that rounds to 360 wraps to 0."""
    h, s, l = exact_hsl(r, g, b)
    return round_half_up(h) % 360, round_half_up(s), round_half_up(l)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert HSL (degrees, percent, percent) back to 8-bit RGB."""
    h = (h % 360) / 360.0
    s = s / 100.0
    l = l / 100.0

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return (
        int(clamp(round_half_up(r * 255), 0, 255)),
        int(clamp(round_half_up(g * 255), 0, 255)),
        int(clamp(round_half_up(b * 255), 0, 255)),
    )


def luminance(rgb: Sequence[float]) -> float:
    """Rec. 601 luma used for palette ordering and value checks."""
    return 0.299 * rgb[0] + 0.587 * rgb[1] + 0.114 * rgb[2]


def sort_by_luminance(colors: Iterable[Tuple[int, int, int]]) -> List[Tuple[int, int, int]]:
    """Brightest first; equal luminance keeps the incoming order."""
    return sorted(colors, key=lambda c: -luminance(c))


def hue_distance(h1: float, h2: float) -> float:
    """Shortest angular distance between two hues, in [0, 180]."""
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


def get_color_name(hex_color: str) -> str:
    """Exact table name, otherwise the nearest table entry by RGB distance."""
    normalized = hex_color.upper()
    if normalized in COLOR_NAMES:
        return COLOR_NAMES[normalized]

    r, g, b = hex_to_rgb(hex_color)
    closest_name = "Custom"
    min_distance = math.inf
    for table_hex, name in COLOR_NAMES.items():
        tr, tg, tb = hex_to_rgb(table_hex)
        distance = math.sqrt((r - tr) ** 2 + (g - tg) ** 2 + (b - tb) ** 2)
        if distance < min_distance:
            min_distance = distance
            closest_name = name
    return closest_name


def color_from_rgb(r: float, g: float, b: float) -> Color:
    """Build a Color from RGB channels, deriving HEX, HSL and name."""
    hex_color = rgb_to_hex(r, g, b)
    rgb = RGB(*hex_to_rgb(hex_color))
    return Color(
        hex=hex_color,
        rgb=rgb,
        hsl=HSL(*rgb_to_hsl(*rgb.as_tuple())),
        name=get_color_name(hex_color),
    )


def color_from_hex(hex_color: str) -> Color:
    return color_from_rgb(*hex_to_rgb(hex_color))


def color_from_hsl(h: float, s: float, l: float) -> Color:
    """
    Build a Color from (possibly fractional) HSL.

    RGB is computed from the unrounded values; the stored HSL is the rounded
    input so hue-preserving transforms keep their hue exactly.
    """
    r, g, b = hsl_to_rgb(h, s, l)
    hex_color = rgb_to_hex(r, g, b)
    return Color(
        hex=hex_color,
        rgb=RGB(r, g, b),
        hsl=HSL(round_half_up(h % 360) % 360, round_half_up(s), round_half_up(l)),
        name=get_color_name(hex_color),
    )


def color_hsl(color: Color) -> Tuple[float, float, float]:
    """Float HSL of a Color, re-derived from its RGB channels."""
    return exact_hsl(*color.rgb.as_tuple())
