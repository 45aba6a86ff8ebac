"""Palette analytics.

Summarises a five-color palette the way a designer would read it: how far
the hues spread around the wheel, how much saturation and lightness vary,
and how many color pairs are safe for body text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chromaseed.art.contrast import contrast_matrix, hue_spread
from chromaseed.constants import AA_TEXT_TARGET
from chromaseed.palette.models import PaletteColor


@dataclass(frozen=True)
class Descriptor:
    label: str
    detail: str
    tone: str  # "strong", "balanced" or "weak"

    def to_dict(self) -> dict:
        return {"label": self.label, "detail": self.detail, "tone": self.tone}


@dataclass(frozen=True)
class PaletteAnalytics:
    hue_spread: float
    saturation_range: float
    lightness_range: float
    average_contrast: float
    min_contrast: float
    max_contrast: float
    min_pair: tuple[int, int]
    max_pair: tuple[int, int]
    aa_pass_rate: float
    aa_passing_pairs: int
    total_pairs: int

    def descriptors(self) -> dict[str, Descriptor]:
        return {
            "variety": describe_hue_variety(self.hue_spread),
            "energy": describe_saturation_energy(self.saturation_range),
            "depth": describe_lightness_depth(self.lightness_range),
            "readability": describe_readability(self.average_contrast),
            "accessibility": describe_accessibility(self.aa_pass_rate),
        }

    def to_dict(self) -> dict:
        return {
            "hueSpread": self.hue_spread,
            "saturationRange": self.saturation_range,
            "lightnessRange": self.lightness_range,
            "averageContrast": self.average_contrast,
            "minContrast": self.min_contrast,
            "maxContrast": self.max_contrast,
            "minPair": list(self.min_pair),
            "maxPair": list(self.max_pair),
            "aaPassRate": self.aa_pass_rate,
            "aaPassingPairs": self.aa_passing_pairs,
            "totalPairs": self.total_pairs,
        }


def analyze_palette(colors: Sequence[PaletteColor]) -> PaletteAnalytics:
    """Compute spread, range and pairwise contrast statistics.

    Args:
        colors: Palette colors, normally five.

    Returns:
        A :class:`PaletteAnalytics`.  Contrast figures default to 1 and the
        pass rate to 0 when fewer than two colors are given.
    """
    matrix = contrast_matrix([c.hex for c in colors])
    min_contrast = float("inf")
    max_contrast = float("-inf")
    min_pair = (0, 0)
    max_pair = (0, 0)
    total = 0.0
    count = 0
    passing = 0

    for row in range(len(matrix)):
        for column in range(row + 1, len(matrix)):
            ratio = matrix[row][column]
            total += ratio
            count += 1
            if ratio < min_contrast:
                min_contrast = ratio
                min_pair = (row, column)
            if ratio > max_contrast:
                max_contrast = ratio
                max_pair = (row, column)
            if ratio >= AA_TEXT_TARGET:
                passing += 1

    saturations = [c.hsl.s for c in colors] or [0.0]
    lightnesses = [c.hsl.l for c in colors] or [0.0]
    return PaletteAnalytics(
        hue_spread=hue_spread([c.hsl.h for c in colors]),
        saturation_range=max(saturations) - min(saturations),
        lightness_range=max(lightnesses) - min(lightnesses),
        average_contrast=total / count if count else 1.0,
        min_contrast=min_contrast if count else 1.0,
        max_contrast=max_contrast if count else 1.0,
        min_pair=min_pair,
        max_pair=max_pair,
        aa_pass_rate=passing / count * 100 if count else 0.0,
        aa_passing_pairs=passing,
        total_pairs=count,
    )


def describe_hue_variety(spread: float) -> Descriptor:
    if spread < 110:
        return Descriptor("Focused", "Most colors are from nearby families, so the look stays cohesive.",
                          "balanced")
    if spread < 210:
        return Descriptor("Balanced", "Good spread across the wheel without feeling chaotic.", "strong")
    return Descriptor("Wide", "Very broad color families, strong visual variety.", "balanced")


def describe_saturation_energy(saturation_range: float) -> Descriptor:
    if saturation_range < 24:
        return Descriptor("Soft", "Mostly muted colors, calm and minimal mood.", "balanced")
    if saturation_range < 48:
        return Descriptor("Mixed", "Balanced mix of muted and vivid tones.", "strong")
    return Descriptor("Punchy", "Strong difference between muted and vivid colors.", "strong")


def describe_lightness_depth(lightness_range: float) -> Descriptor:
    if lightness_range < 24:
        return Descriptor("Flat", "Colors sit in similar brightness, so depth is limited.", "weak")
    if lightness_range < 42:
        return Descriptor("Moderate", "Clear light/dark differences with controlled contrast.", "balanced")
    return Descriptor("Deep", "Strong light vs dark separation, good for hierarchy.", "strong")


def describe_readability(average_contrast: float) -> Descriptor:
    if average_contrast < 3:
        return Descriptor("Challenging", "Many pairings are hard to read as text.", "weak")
    if average_contrast < AA_TEXT_TARGET:
        return Descriptor("Mixed", "Some combinations read well, some need caution.", "balanced")
    return Descriptor("Strong", "Most combinations are solid for text readability.", "strong")


def describe_accessibility(aa_pass_rate: float) -> Descriptor:
    if aa_pass_rate < 35:
        return Descriptor("Low Coverage", "Only a small set of color pairs are AA-safe for normal text.",
                          "weak")
    if aa_pass_rate < 70:
        return Descriptor("Partial Coverage", "AA-safe options exist, but pairing choice matters.",
                          "balanced")
    return Descriptor("High Coverage", "Most pairings can support readable text.", "strong")
