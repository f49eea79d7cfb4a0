"""
Palette pipeline exceptions.

Degenerate input (fully transparent images, too few pixels) is never an
error; the engines fall back to mid-gray instead.
"""


class PaletteError(Exception):
    """Base class for palette pipeline failures."""


class ImageDecodeError(PaletteError):
    """The source image could not be loaded or decoded."""


class InvalidParameterError(PaletteError, ValueError):
    """A caller supplied an out-of-range count or an unknown method/style name."""
