"""
Score tiers.

Maps a 0-100 lead score to a visual tier: a band label plus the three
gradient stops (from, via, to) used for the score ring and header.

Bands (closed lower bound):
    [0, 31)    Bad            deep red
    [31, 51)   Medium         orange -> yellow -> lime
    [51, 66)   Upper Medium   soft teal
    [66, 81)   Good           deep blue
    [81, 100]  Excellent      rich purple

Inside a band, ``blend = (score - floor) / width`` picks a variant by
strictly-greater comparison against fixed cut points. The bottom band uses
``score / 30``. The table below is the whole classifier; it is data, not
a formula, and must be kept exact.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TierBand(str, Enum):
    BAD = "bad"
    MEDIUM = "medium"
    UPPER_MEDIUM = "upper_medium"
    GOOD = "good"
    EXCELLENT = "excellent"


@dataclass(frozen=True)
class TierDescriptor:
    """Visual classification of one score. Recomputed on every render."""
    label: str
    band: TierBand
    gradient_stops: Tuple[str, str, str]

    @property
    def css_class(self) -> str:
        start, via, end = self.gradient_stops
        return f"from-{start} via-{via} to-{end}"

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "band": self.band.value,
            "gradient_stops": list(self.gradient_stops),
            "css_class": self.css_class,
        }


# (floor, width, band, label, ((cut, stops), ...), fallback stops)
# Bands are listed top-down; the first floor <= score wins.
_TIER_TABLE = (
    (81, None, TierBand.EXCELLENT, "Excellent", (),
     ("purple-800", "purple-700", "purple-600")),
    (66, 15, TierBand.GOOD, "Good", (
        (0.6, ("blue-600", "indigo-600", "purple-600")),
        (0.3, ("blue-600", "blue-700", "indigo-600")),
    ), ("blue-600", "blue-600", "blue-700")),
    (51, 15, TierBand.UPPER_MEDIUM, "Upper Medium", (
        (0.6, ("teal-500", "cyan-500", "blue-600")),
        (0.3, ("teal-400", "teal-500", "cyan-400")),
    ), ("teal-400", "cyan-400", "teal-400")),
    (31, 20, TierBand.MEDIUM, "Medium", (
        (0.75, ("lime-500", "emerald-400", "teal-400")),
        (0.5, ("yellow-500", "yellow-400", "lime-400")),
        (0.25, ("orange-500", "amber-400", "yellow-500")),
    ), ("orange-600", "orange-500", "orange-400")),
    (0, 30, TierBand.BAD, "Bad", (
        (0.6, ("red-700", "red-600", "orange-600")),
        (0.3, ("red-700", "red-700", "red-600")),
    ), ("red-800", "red-700", "red-700")),
)


def clamp_score(score) -> float:
    """Coerce to a number in [0, 100]; unparseable input becomes 0."""
    try:
        value = float(score)
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return max(0.0, min(100.0, value))


def classify_score(score: float) -> TierDescriptor:
    """Classify a score in [0, 100]. Out-of-range input is not validated."""
    for floor, width, band, label, cuts, fallback in _TIER_TABLE:
        if score < floor:
            continue
        if width is None:
            return TierDescriptor(label, band, fallback)
        blend = (score - floor) / width
        for cut, stops in cuts:
            if blend > cut:
                return TierDescriptor(label, band, stops)
        return TierDescriptor(label, band, fallback)

    # Below zero: same as the bottom of the lowest band
    _, _, band, label, _, fallback = _TIER_TABLE[-1]
    return TierDescriptor(label, band, fallback)
