from __future__ import annotations

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import ScoreBreakdown, SponsorTier


def sponsor_multiplier(tier: SponsorTier, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    if tier == SponsorTier.premium:
        return config.premium_multiplier
    if tier == SponsorTier.boosted:
        return config.boosted_multiplier
    return 1.0


def apply_boost(
    breakdown: ScoreBreakdown,
    sponsor_tier: SponsorTier,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoreBreakdown:
    """
    Apply the paid-placement multiplier to a score.

    Poor organic matches (``base_total`` under the low-match threshold) gain at
    most ``low_match_boost_cap`` points no matter the tier, so paid listings
    cannot outrank relevant ones on spend alone.
    """
    multiplier = sponsor_multiplier(sponsor_tier, config)
    base_total = breakdown.base_total

    if base_total < config.low_match_threshold:
        final = base_total + min(base_total * (multiplier - 1.0), config.low_match_boost_cap)
    else:
        final = base_total * multiplier

    return breakdown.model_copy(
        update={"sponsor_multiplier": multiplier, "final": round(final, 4)},
    )
