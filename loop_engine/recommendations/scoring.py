"""
Multi-factor candidate scoring.

Each candidate gets five bounded sub-scores that add up to at most 100:

* base           0-40  interest match
* location       0-20  distance to home / work / commute
* time           0-15  category fit for the target hour
* feedback       0-15  learned likes, dislikes and price preference
* collaborative  0-10  neutral placeholder, overridable per request

Missing optional candidate data never raises; it falls back to the neutral
value of the affected sub-score.
"""
from __future__ import annotations

import logging
import math

from ..learning.models import AIProfile, Level
from .categories import (
    GOOD_WINDOWS,
    IDEAL_WINDOWS,
    expand_interests,
    in_window,
    is_related,
    time_of_day,
)
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .geo import distance_to_segment_miles, nearest_point_distance
from .hours import is_open_at
from .models import (
    Candidate,
    ScoreBreakdown,
    ScoredCandidate,
    ScoringContext,
    UserProfile,
)
from .sponsor import apply_boost

logger = logging.getLogger(__name__)


def _base_score(category: str, interests: list[str], config: ScoringConfig) -> float:
    top = expand_interests(interests[: config.top_interest_count])
    if category in top:
        return config.base_top_interest

    every = expand_interests(interests)
    if category in every:
        return config.base_any_interest

    if is_related(category, every):
        return config.base_related

    return config.base_explore


def _location_score(
    candidate: Candidate,
    user: UserProfile,
    ai_profile: AIProfile,
    context: ScoringContext,
    config: ScoringConfig,
) -> tuple[float, float | None]:
    """Return the location sub-score and the distance it was based on."""
    points = [
        p for p in (user.home_location, user.work_location, context.current_location)
        if p is not None
    ]
    point_distance = nearest_point_distance(candidate.location, points)

    route_distance = None
    if user.home_location is not None and user.work_location is not None:
        route_distance = distance_to_segment_miles(
            candidate.location, user.home_location, user.work_location,
        )

    known = [d for d in (point_distance, route_distance) if d is not None]
    if not known:
        return config.location_unknown, None
    distance = min(known)

    if distance <= config.on_route_distance:
        return config.location_on_route, distance

    if point_distance is not None and point_distance <= config.near_distance:
        return config.location_near, distance

    max_distance = min(user.max_distance, ai_profile.preferred_distance)
    if distance <= max_distance:
        ratio = 1.0 - distance / max_distance
        return float(math.floor(config.location_within_floor + config.location_within_span * ratio)), distance

    return config.location_far, distance


def _time_score(
    candidate: Candidate,
    user: UserProfile,
    context: ScoringContext,
    config: ScoringConfig,
) -> float:
    when = context.target_time
    if candidate.hours is not None and not is_open_at(candidate.hours, when):
        return config.time_other

    hour = when.hour
    if any(in_window(hour, w) for w in IDEAL_WINDOWS.get(candidate.category, [])):
        return config.time_ideal
    if any(in_window(hour, w) for w in GOOD_WINDOWS.get(candidate.category, [])):
        return config.time_good

    if time_of_day(hour) in user.preferred_times:
        return config.time_preferred
    return config.time_other


def preferred_price_tier(ai_profile: AIProfile) -> int:
    """Round the learned budget level half-up to a price tier."""
    return int(math.floor(ai_profile.budget_level + 0.5))


def _price_matches(price_tier: int | None, ai_profile: AIProfile, config: ScoringConfig) -> bool:
    """Exact tier match, loosened by one tier for price-insensitive users."""
    if price_tier is None:
        return False
    slack = config.relaxed_price_match_slack if ai_profile.price_sensitivity == Level.low else 0
    return abs(price_tier - preferred_price_tier(ai_profile)) <= slack


def _feedback_score(candidate: Candidate, ai_profile: AIProfile, config: ScoringConfig) -> float:
    if candidate.category in ai_profile.favorite_categories:
        value = config.feedback_favorite
    elif candidate.category in ai_profile.disliked_categories:
        value = config.feedback_neutral - config.feedback_disliked_penalty
    else:
        value = config.feedback_neutral

    if _price_matches(candidate.price_tier, ai_profile, config):
        value += config.feedback_price_match

    return max(0.0, min(config.feedback_max, value))


def _collaborative_score(context: ScoringContext, config: ScoringConfig) -> float:
    override = context.collaborative_score_override
    if override is None:
        return config.collaborative_default
    return max(0.0, min(config.collaborative_max, override))


def score(
    candidate: Candidate,
    user_profile: UserProfile,
    ai_profile: AIProfile | None = None,
    context: ScoringContext | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoreBreakdown:
    """Score one candidate before any sponsor boost (multiplier 1.0)."""
    ai_profile = ai_profile or AIProfile()
    context = context or ScoringContext()

    base = _base_score(candidate.category, user_profile.interests, config)
    location, distance = _location_score(candidate, user_profile, ai_profile, context, config)
    time_points = _time_score(candidate, user_profile, context, config)
    feedback = _feedback_score(candidate, ai_profile, config)
    collaborative = _collaborative_score(context, config)

    total = base + location + time_points + feedback + collaborative
    return ScoreBreakdown(
        base=base,
        location=location,
        time=time_points,
        feedback=feedback,
        collaborative=collaborative,
        sponsor_multiplier=1.0,
        final=round(total, 4),
        distance=distance,
        time_of_day=time_of_day(context.target_time.hour),
    )


def score_candidates(
    candidates: list[Candidate],
    user_profile: UserProfile,
    ai_profile: AIProfile | None = None,
    context: ScoringContext | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[ScoredCandidate]:
    """Score and sponsor-boost every candidate, preserving input order."""
    ai_profile = ai_profile or AIProfile()
    context = context or ScoringContext()

    scored: list[ScoredCandidate] = []
    for candidate in candidates:
        breakdown = score(candidate, user_profile, ai_profile, context, config)
        boosted = apply_boost(breakdown, candidate.sponsor_tier, config)
        scored.append(ScoredCandidate(candidate=candidate, score=boosted))

    logger.debug("Scored %d candidates", len(scored))
    return scored
