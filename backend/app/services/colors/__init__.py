"""
GamePalette Colors Module

Palette extraction (k-means and hue-histogram engines) and the deterministic
transforms applied to extracted palettes: style filters, value ramps,
color-vision simulation and harmony generation.
"""

__version__ = "1.0.0"
