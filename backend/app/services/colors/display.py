"""
Display-time derivations of a stored palette.

The stored colors are never modified; this only computes what to show.
"""

from typing import List, Sequence, Union

from .models import Color, ColorBlindnessType
from .styles import to_grayscale
from .vision import apply_color_blindness_to_colors


def get_display_colors(colors: Sequence[Color],
                       vision_type: Union[ColorBlindnessType, str] = ColorBlindnessType.NONE,
                       value_check: bool = False) -> List[Color]:
    """Apply color-vision simulation, then grayscale when ``value_check`` is on."""
    simulated = apply_color_blindness_to_colors(colors, vision_type)
    return to_grayscale(simulated) if value_check else simulated
