"""
Hue-histogram palette engine.

Deterministic alternative to k-means. Chromatic pixels are bucketed into
36 hue bins of 10 degrees, the counts are smoothed over a circular window,
and local maxima become candidate colors. Candidates are ranked by size and
vividness and picked with a minimum hue separation so the palette covers
distinct hues before it repeats any. Neutral pixels contribute at most one
color, and mid-gray fills whatever is still missing.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from .conversions import MID_GRAY, exact_hsl, hue_distance, round_half_up, sort_by_luminance

BIN_COUNT = 36
BIN_WIDTH = 360 // BIN_COUNT
SMOOTHING_RADIUS = 3

# Achromatic classification (percent)
ACHROMATIC_MAX_SATURATION = 25.0
ACHROMATIC_MIN_LIGHTNESS = 10.0
ACHROMATIC_MAX_LIGHTNESS = 90.0

NEIGHBOR_ABSORB_RATIO = 0.5
SCORE_SATURATION_BASE = 0.3
MIN_PEAK_SHARE = 0.02
PRIMARY_HUE_SEPARATION = 30.0
SECONDARY_HUE_SEPARATION = 20.0
ACHROMATIC_RESERVE_SHARE = 0.10


@dataclass
class HueBin:
    """One 10-degree slice of the hue wheel."""
    index: int
    count: int = 0
    smoothed: int = 0
    member_indices: Optional[np.ndarray] = None


@dataclass(eq=False)
class HuePeak:
    """A local maximum of the smoothed histogram plus any absorbed neighbors."""
    bin_index: int
    member_indices: np.ndarray
    color: Tuple[int, int, int]
    hue: float
    average_saturation: float
    score: float

    @property
    def count(self) -> int:
        return int(self.member_indices.shape[0])


def pixel_hsl(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorized, unrounded RGB to HSL.

    Returns:
        Arrays (H in degrees [0, 360), S and L in percent)
    """
    rgb = pixels.astype(np.float64) / 255.0
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    mx = rgb.max(axis=1)
    mn = rgb.min(axis=1)
    d = mx - mn
    l = (mx + mn) / 2

    chromatic = d > 0
    safe_d = np.where(chromatic, d, 1.0)
    denom = np.where(l > 0.5, 2 - mx - mn, mx + mn)
    s = np.where(chromatic, d / np.where(denom == 0, 1.0, denom), 0.0)

    # Max-channel precedence is red, then green, then blue
    red_max = chromatic & (mx == r)
    green_max = chromatic & ~red_max & (mx == g)
    blue_max = chromatic & ~red_max & ~green_max

    h = np.zeros_like(mx)
    h = np.where(red_max, (g - b) / safe_d + np.where(g < b, 6.0, 0.0), h)
    h = np.where(green_max, (b - r) / safe_d + 2.0, h)
    h = np.where(blue_max, (r - g) / safe_d + 4.0, h)
    h = (h / 6.0 * 360.0) % 360.0

    return h, s * 100.0, l * 100.0


def representative_color(pixels: np.ndarray, saturation: np.ndarray) -> Tuple[int, int, int]:
    """
    Saturation-weighted mean color.

    Weight is ``1 + 100 * (s/100)^2`` so a few vivid pixels dominate a bin
    of duller ones.
    """
    weights = 1.0 + 100.0 * (saturation / 100.0) ** 2
    mean = (pixels.astype(np.float64) * weights[:, None]).sum(axis=0) / weights.sum()
    return tuple(round_half_up(v) for v in mean)


def build_histogram(hues: np.ndarray) -> List[HueBin]:
    """Bucket chromatic hues and apply the circular moving-window smoothing."""
    bin_of = (hues // BIN_WIDTH).astype(int) % BIN_COUNT
    bins = [HueBin(index=i) for i in range(BIN_COUNT)]
    for hue_bin in bins:
        hue_bin.member_indices = np.flatnonzero(bin_of == hue_bin.index)
        hue_bin.count = int(hue_bin.member_indices.shape[0])

    # Window sums rank identically to window means and stay exact integers
    for hue_bin in bins:
        hue_bin.smoothed = sum(
            bins[(hue_bin.index + offset) % BIN_COUNT].count
            for offset in range(-SMOOTHING_RADIUS, SMOOTHING_RADIUS + 1)
        )
    return bins


def find_peaks(bins: List[HueBin], pixels: np.ndarray,
               saturation: np.ndarray) -> List[HuePeak]:
    """
    Detect local maxima and merge broad humps.

    Peaks are resolved strongest first. Each claims its own bin and then any
    unclaimed adjacent bin whose smoothed count exceeds half of its own, so a
    plateau collapses into a single peak. Peaks without member pixels are
    discarded since they have no color to contribute.
    """
    candidates = []
    for hue_bin in bins:
        left = bins[(hue_bin.index - 1) % BIN_COUNT]
        right = bins[(hue_bin.index + 1) % BIN_COUNT]
        if hue_bin.smoothed > 0 and hue_bin.smoothed >= left.smoothed and hue_bin.smoothed >= right.smoothed:
            candidates.append(hue_bin)

    candidates.sort(key=lambda b: (-b.smoothed, b.index))

    claimed = set()
    peaks = []
    for peak_bin in candidates:
        if peak_bin.index in claimed:
            continue
        claimed.add(peak_bin.index)
        member_groups = [peak_bin.member_indices]

        for offset in (-1, 1):
            neighbor = bins[(peak_bin.index + offset) % BIN_COUNT]
            if neighbor.index in claimed:
                continue
            if neighbor.smoothed > NEIGHBOR_ABSORB_RATIO * peak_bin.smoothed:
                claimed.add(neighbor.index)
                member_groups.append(neighbor.member_indices)

        members = np.concatenate(member_groups)
        if members.shape[0] == 0:
            continue

        member_saturation = saturation[members]
        color = representative_color(pixels[members], member_saturation)
        average_saturation = float(member_saturation.mean())
        peaks.append(HuePeak(
            bin_index=peak_bin.index,
            member_indices=members,
            color=color,
            hue=exact_hsl(*color)[0],
            average_saturation=average_saturation,
            score=members.shape[0] * (SCORE_SATURATION_BASE + average_saturation / 100.0),
        ))

    peaks.sort(key=lambda p: (-p.score, p.bin_index))
    return peaks


def _select_peaks(peaks: List[HuePeak], color_count: int, chromatic_total: int) -> List[HuePeak]:
    selected: List[HuePeak] = []

    def far_enough(peak: HuePeak, separation: float) -> bool:
        return all(hue_distance(peak.hue, other.hue) >= separation for other in selected)

    min_count = MIN_PEAK_SHARE * chromatic_total
    for peak in peaks:
        if len(selected) >= color_count:
            break
        if peak.count >= min_count and far_enough(peak, PRIMARY_HUE_SEPARATION):
            selected.append(peak)

    for peak in peaks:
        if len(selected) >= color_count:
            break
        if peak not in selected and far_enough(peak, SECONDARY_HUE_SEPARATION):
            selected.append(peak)

    return selected


def histogram_palette(pixels_rgb_u8: np.ndarray, color_count: int) -> List[Tuple[int, int, int]]:
    """
    Pick ``color_count`` colors from hue-histogram peaks.

    Args:
        pixels_rgb_u8: Sampled RGB pixels (N, 3)
        color_count: Number of colors to return

    Returns:
        ``color_count`` RGB tuples sorted brightest first
    """
    pixels = np.asarray(pixels_rgb_u8, dtype=np.uint8).reshape(-1, 3)
    total = pixels.shape[0]
    if total == 0:
        logger.debug("No pixels for histogram extraction, returning mid-gray palette")
        return [MID_GRAY] * color_count

    hue, saturation, lightness = pixel_hsl(pixels)
    achromatic = ((saturation < ACHROMATIC_MAX_SATURATION)
                  | (lightness < ACHROMATIC_MIN_LIGHTNESS)
                  | (lightness > ACHROMATIC_MAX_LIGHTNESS))

    chromatic_pixels = pixels[~achromatic]
    chromatic_saturation = saturation[~achromatic]
    chromatic_total = chromatic_pixels.shape[0]
    achromatic_total = total - chromatic_total

    bins = build_histogram(hue[~achromatic])
    peaks = find_peaks(bins, chromatic_pixels, chromatic_saturation)
    selected = _select_peaks(peaks, color_count, chromatic_total)
    colors = [peak.color for peak in selected]

    if len(colors) < color_count and achromatic_total > ACHROMATIC_RESERVE_SHARE * total:
        colors.append(representative_color(pixels[achromatic], saturation[achromatic]))

    for peak in peaks:
        if len(colors) >= color_count:
            break
        if peak not in selected:
            colors.append(peak.color)

    padding = color_count - len(colors)
    if padding > 0:
        colors.extend([MID_GRAY] * padding)

    logger.debug(f"Histogram extraction: {chromatic_total} chromatic / {achromatic_total} achromatic pixels, "
                 f"{len(peaks)} peaks, {len(selected)} selected, {max(padding, 0)} gray fills")
    return sort_by_luminance(colors)
