"""
GamePalette Color Harmony

Derives the classic harmony sets from a single base color by rotating its
hue by fixed angles. Saturation and lightness are held constant.
"""

from typing import List, Tuple

from .conversions import color_from_hex, color_from_hsl, color_hsl
from .models import Color, ColorHarmony, HarmonyColor, HarmonyType

# (type, display name, description, [(angle, label), ...])
HARMONY_DEFINITIONS: List[Tuple[HarmonyType, str, str, List[Tuple[int, str]]]] = [
    (HarmonyType.COMPLEMENTARY, "Complementary", "Opposite colors on wheel",
     [(0, "Base"), (180, "Complement")]),
    (HarmonyType.ANALOGOUS, "Analogous", "Adjacent colors",
     [(-30, "Left"), (0, "Base"), (30, "Right")]),
    (HarmonyType.TRIADIC, "Triadic", "Three evenly spaced colors",
     [(0, "Base"), (120, "Second"), (240, "Third")]),
    (HarmonyType.SPLIT_COMPLEMENTARY, "Split Comp.", "Near-opposites for softer contrast",
     [(0, "Base"), (150, "Split 1"), (210, "Split 2")]),
    (HarmonyType.TETRADIC, "Tetradic", "Four colors at 90 degree intervals",
     [(0, "Base"), (90, "Second"), (180, "Third"), (270, "Fourth")]),
]


def rotate_hue(h: float, degrees: float) -> float:
    """
    Rotate hue by specified degrees.

    Args:
        h: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue in [0, 360)
    """
    return (h + degrees) % 360


def rotate_color(color: Color, degrees: float) -> Color:
    """Rotate a color's hue, keeping saturation and lightness."""
    if degrees % 360 == 0:
        return color
    h, s, l = color_hsl(color)
    return color_from_hsl(rotate_hue(h, degrees), s, l)


def generate_color_harmonies(base_hex: str) -> List[ColorHarmony]:
    """
    Generate all harmony sets for a base color.

    Args:
        base_hex: Base color in format #RRGGBB

    Returns:
        Five ColorHarmony groups in a fixed order
    """
    base = color_from_hex(base_hex)
    harmonies = []
    for harmony_type, name, description, angles in HARMONY_DEFINITIONS:
        entries = tuple(
            HarmonyColor(color=rotate_color(base, angle), label=label, angle=angle)
            for angle, label in angles
        )
        harmonies.append(ColorHarmony(type=harmony_type, name=name, description=description, colors=entries))
    return harmonies
