"""
Tests for leadview.tiers

Covers:
- Band boundaries over [0, 100]
- Variant selection inside each band (strictly-greater cut points)
- Score clamping
"""

import pytest

from leadview.tiers import TierBand, TierDescriptor, classify_score, clamp_score


class TestBandBoundaries:
    """Every boundary score lands in the documented band."""

    @pytest.mark.parametrize("score,band", [
        (0, TierBand.BAD),
        (30, TierBand.BAD),
        (31, TierBand.MEDIUM),
        (50, TierBand.MEDIUM),
        (51, TierBand.UPPER_MEDIUM),
        (65, TierBand.UPPER_MEDIUM),
        (66, TierBand.GOOD),
        (80, TierBand.GOOD),
        (81, TierBand.EXCELLENT),
        (100, TierBand.EXCELLENT),
    ])
    def test_boundary(self, score, band):
        assert classify_score(score).band == band

    def test_total_over_range(self):
        """Every integer score yields a descriptor with three stops."""
        for score in range(0, 101):
            tier = classify_score(score)
            assert isinstance(tier, TierDescriptor)
            assert len(tier.gradient_stops) == 3

    def test_fractional_score_below_band_floor(self):
        assert classify_score(30.5).band == TierBand.BAD
        assert classify_score(80.99).band == TierBand.GOOD


class TestGradientVariants:
    """Exact gradient stops per band and blend factor."""

    def test_bad_band(self):
        assert classify_score(0).gradient_stops == ("red-800", "red-700", "red-700")
        assert classify_score(9).gradient_stops == ("red-800", "red-700", "red-700")
        # 10/30 > 0.3
        assert classify_score(10).gradient_stops == ("red-700", "red-700", "red-600")
        # 18/30 == 0.6 is not > 0.6
        assert classify_score(18).gradient_stops == ("red-700", "red-700", "red-600")
        assert classify_score(30).gradient_stops == ("red-700", "red-600", "orange-600")

    def test_medium_band(self):
        assert classify_score(31).gradient_stops == ("orange-600", "orange-500", "orange-400")
        # (36-31)/20 == 0.25 is not > 0.25
        assert classify_score(36).gradient_stops == ("orange-600", "orange-500", "orange-400")
        assert classify_score(37).gradient_stops == ("orange-500", "amber-400", "yellow-500")
        assert classify_score(42).gradient_stops == ("yellow-500", "yellow-400", "lime-400")
        assert classify_score(47).gradient_stops == ("lime-500", "emerald-400", "teal-400")
        assert classify_score(50).gradient_stops == ("lime-500", "emerald-400", "teal-400")

    def test_upper_medium_band(self):
        assert classify_score(51).gradient_stops == ("teal-400", "cyan-400", "teal-400")
        assert classify_score(56).gradient_stops == ("teal-400", "teal-500", "cyan-400")
        assert classify_score(65).gradient_stops == ("teal-500", "cyan-500", "blue-600")

    def test_good_band(self):
        assert classify_score(66).gradient_stops == ("blue-600", "blue-600", "blue-700")
        assert classify_score(71).gradient_stops == ("blue-600", "blue-700", "indigo-600")
        assert classify_score(80).gradient_stops == ("blue-600", "indigo-600", "purple-600")

    def test_excellent_band_single_variant(self):
        for score in (81, 90, 100):
            assert classify_score(score).gradient_stops == ("purple-800", "purple-700", "purple-600")

    def test_labels(self):
        assert classify_score(10).label == "Bad"
        assert classify_score(40).label == "Medium"
        assert classify_score(60).label == "Upper Medium"
        assert classify_score(70).label == "Good"
        assert classify_score(95).label == "Excellent"

    def test_css_class(self):
        tier = classify_score(100)
        assert tier.css_class == "from-purple-800 via-purple-700 to-purple-600"
        assert tier.to_dict()["band"] == "excellent"


class TestClampScore:

    def test_within_range_unchanged(self):
        assert clamp_score(42) == 42.0

    def test_clamps_out_of_range(self):
        assert clamp_score(-5) == 0.0
        assert clamp_score(140) == 100.0

    def test_unparseable_is_zero(self):
        assert clamp_score(None) == 0.0
        assert clamp_score("abc") == 0.0
        assert clamp_score(float("nan")) == 0.0
