"""
Value types for the palette pipeline.

Colors, palettes and variation ramps are frozen dataclasses: every transform
returns a new value instead of mutating its input. String tags coming from
the HTTP layer are converted to the closed enums below with ``coerce_enum``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from .errors import InvalidParameterError


class ExtractionMethod(str, Enum):
    HISTOGRAM = "histogram"
    KMEANS = "kmeans"


class StyleName(str, Enum):
    ORIGINAL = "original"
    HYPERCASUAL = "hypercasual"
    STYLIZED = "stylized"
    REALISTIC = "realistic"
    CUSTOM = "custom"


class VariationStyle(str, Enum):
    STYLIZED = "stylized"
    REALISTIC = "realistic"


class ColorBlindnessType(str, Enum):
    NONE = "none"
    PROTANOPIA = "protanopia"
    DEUTERANOPIA = "deuteranopia"
    TRITANOPIA = "tritanopia"


class HarmonyType(str, Enum):
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    SPLIT_COMPLEMENTARY = "split-complementary"
    TETRADIC = "tetradic"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any, label: str) -> E:
    """
    Convert a raw tag into a member of ``enum_cls``.

    Raises:
        InvalidParameterError: If the value names no member
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidParameterError(f"Unknown {label} {value!r}; expected one of: {allowed}") from None


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class HSL:
    h: int  # degrees [0, 360)
    s: int  # percent [0, 100]
    l: int  # percent [0, 100]

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.h, self.s, self.l)


@dataclass(frozen=True)
class Color:
    """A color with HEX, RGB and HSL views of the same value."""
    hex: str
    rgb: RGB
    hsl: HSL
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hex": self.hex,
            "rgb": {"r": self.rgb.r, "g": self.rgb.g, "b": self.rgb.b},
            "hsl": {"h": self.hsl.h, "s": self.hsl.s, "l": self.hsl.l},
            "name": self.name,
        }


@dataclass(frozen=True)
class CustomStyleSettings:
    hue_shift: float = 0.0
    saturation_multiplier: float = 1.0
    lightness_multiplier: float = 1.0


DEFAULT_CUSTOM_SETTINGS = CustomStyleSettings()


@dataclass(frozen=True)
class Palette:
    """Ordered colors (brightest first after extraction) plus the style tag."""
    colors: Tuple[Color, ...]
    style: StyleName = StyleName.ORIGINAL
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def hexes(self) -> List[str]:
        return [c.hex for c in self.colors]


@dataclass(frozen=True)
class ColorVariation:
    """Five-step value ramp around one source color."""
    shadow2: Color
    shadow1: Color
    midtone: Color
    highlight1: Color
    highlight2: Color
    hue_shift_amount: int
    style: VariationStyle = VariationStyle.STYLIZED

    def steps(self) -> List[Tuple[str, Color]]:
        return [
            ("shadow2", self.shadow2),
            ("shadow1", self.shadow1),
            ("midtone", self.midtone),
            ("highlight1", self.highlight1),
            ("highlight2", self.highlight2),
        ]


@dataclass(frozen=True)
class HarmonyColor:
    color: Color
    label: str
    angle: int


@dataclass(frozen=True)
class ColorHarmony:
    type: HarmonyType
    name: str
    description: str
    colors: Tuple[HarmonyColor, ...] = ()
