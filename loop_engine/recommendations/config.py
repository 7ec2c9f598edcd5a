from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Every tunable constant used by scoring, sponsor boosting and the
    business-rule filter. Distances are in miles.
    """

    # Base (interest match), 0-40
    base_top_interest: float = 40.0
    base_any_interest: float = 30.0
    base_related: float = 20.0
    base_explore: float = 10.0
    top_interest_count: int = 3

    # Location, 0-20
    location_on_route: float = 20.0
    location_near: float = 15.0
    location_within_floor: float = 10.0
    location_within_span: float = 5.0
    location_far: float = 5.0
    location_unknown: float = 10.0
    on_route_distance: float = 0.5
    near_distance: float = 1.0

    # Time, 0-15
    time_ideal: float = 15.0
    time_good: float = 10.0
    time_preferred: float = 8.0
    time_other: float = 5.0

    # Feedback, 0-15
    feedback_favorite: float = 15.0
    feedback_neutral: float = 5.0
    feedback_disliked_penalty: float = 5.0
    feedback_price_match: float = 3.0
    # Tiers either side of the preferred one that still match at low price sensitivity
    relaxed_price_match_slack: int = 1
    feedback_max: float = 15.0

    # Collaborative, 0-10
    collaborative_default: float = 5.0
    collaborative_max: float = 10.0

    # Sponsor boost
    boosted_multiplier: float = 1.15
    premium_multiplier: float = 1.30
    low_match_threshold: float = 40.0
    low_match_boost_cap: float = 10.0

    # Business rules
    sponsored_ratio: float = 0.4
    min_distinct_categories: int = 3
    default_k: int = 10
    min_k: int = 5
    diversity_min_score_ratio: float = 0.0


DEFAULT_SCORING_CONFIG = ScoringConfig()
