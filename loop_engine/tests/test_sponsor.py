from __future__ import annotations

import pytest

from loop_engine.recommendations.models import ScoreBreakdown, SponsorTier
from loop_engine.recommendations.sponsor import apply_boost, sponsor_multiplier


def _breakdown(base_total: float) -> ScoreBreakdown:
    """A breakdown whose sub-scores add up to *base_total*."""
    base = min(40.0, base_total)
    rest = base_total - base
    return ScoreBreakdown(
        base=base,
        location=min(20.0, rest),
        time=max(0.0, rest - 20.0),
        feedback=0.0,
        collaborative=0.0,
        final=base_total,
    )


def test_multipliers_per_tier():
    assert sponsor_multiplier(SponsorTier.organic) == 1.0
    assert sponsor_multiplier(SponsorTier.boosted) == 1.15
    assert sponsor_multiplier(SponsorTier.premium) == 1.30


def test_organic_is_unchanged():
    boosted = apply_boost(_breakdown(85), SponsorTier.organic)
    assert boosted.final == 85
    assert boosted.sponsor_multiplier == 1.0
    assert boosted.sponsor_boost == 0


def test_strong_match_scales_fully():
    assert apply_boost(_breakdown(85), SponsorTier.premium).final == pytest.approx(110.5)
    assert apply_boost(_breakdown(85), SponsorTier.boosted).final == pytest.approx(97.75)


def test_threshold_itself_is_not_capped():
    assert apply_boost(_breakdown(40), SponsorTier.premium).final == pytest.approx(52.0)


class TestLowMatchCap:
    def test_small_boost_below_cap(self):
        result = apply_boost(_breakdown(30), SponsorTier.boosted)
        assert result.final == pytest.approx(34.5)
        assert result.sponsor_multiplier == 1.15

    def test_premium_below_cap(self):
        assert apply_boost(_breakdown(30), SponsorTier.premium).final == pytest.approx(39.0)

    def test_premium_hits_cap(self):
        result = apply_boost(_breakdown(39), SponsorTier.premium)
        assert result.final == pytest.approx(49.0)
        assert result.sponsor_boost == pytest.approx(10.0)


@pytest.mark.parametrize("tier", list(SponsorTier))
@pytest.mark.parametrize("total", [0, 12.5, 39.99, 40, 63, 100])
def test_boost_never_lowers_or_overshoots(tier, total):
    result = apply_boost(_breakdown(total), tier)
    assert result.final >= result.base_total
    assert result.final <= result.base_total * 1.30 + 1e-9
    if total < 40:
        assert result.final - result.base_total <= 10 + 1e-9


def test_input_breakdown_is_not_mutated():
    original = _breakdown(60)
    apply_boost(original, SponsorTier.premium)
    assert original.final == 60
    assert original.sponsor_multiplier == 1.0
