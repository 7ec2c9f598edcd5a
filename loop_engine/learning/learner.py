"""
Rule-based profile learning.

``apply_feedback`` folds one feedback event into an AI profile and returns a
new profile; the input is never mutated. Transitions are order-dependent and
not idempotent, so each event must be applied exactly once, in order.
"""
from __future__ import annotations

import logging
from typing import Callable

from .config import DEFAULT_LEARNER_CONFIG, LearnerConfig
from .models import AIProfile, FeedbackEvent, FeedbackRating, step_level

logger = logging.getLogger(__name__)

CrowdedHook = Callable[[AIProfile, FeedbackEvent], AIProfile]


def on_crowded_feedback(profile: AIProfile, event: FeedbackEvent) -> AIProfile:
    """Extension point for "too crowded" feedback; currently has no effect."""
    logger.debug("Crowding reported for %s; no profile change", event.category)
    return profile


def _append_recent(items: list[str], category: str, limit: int) -> list[str]:
    updated = [c for c in items if c != category]
    updated.append(category)
    return updated[-limit:] if limit > 0 else updated


def _resolve_overlap(profile: AIProfile) -> AIProfile:
    overlap = set(profile.favorite_categories) & set(profile.disliked_categories)
    if not overlap:
        return profile
    logger.warning("Categories both liked and disliked, keeping as disliked: %s", sorted(overlap))
    return profile.model_copy(update={
        "favorite_categories": [c for c in profile.favorite_categories if c not in overlap],
    })


def _shorten_distance(profile: AIProfile, config: LearnerConfig) -> float:
    return max(config.min_preferred_distance, profile.preferred_distance - config.distance_step)


def _apply_positive(profile: AIProfile, event: FeedbackEvent, config: LearnerConfig) -> AIProfile:
    update: dict = {
        "favorite_categories": _append_recent(
            profile.favorite_categories, event.category, config.max_category_history,
        ),
        "disliked_categories": [c for c in profile.disliked_categories if c != event.category],
    }

    if event.tags & config.good_value_tags:
        update["price_sensitivity"] = step_level(profile.price_sensitivity, -1)
    if event.tags & config.convenient_tags:
        update["preferred_distance"] = _shorten_distance(profile, config)
    if event.price_tier is not None:
        blended = profile.budget_level * (1.0 - config.budget_blend) + event.price_tier * config.budget_blend
        update["budget_level"] = round(min(3.0, max(0.0, blended)), 4)

    return profile.model_copy(update=update)


def _apply_negative(
    profile: AIProfile,
    event: FeedbackEvent,
    config: LearnerConfig,
    crowded_hook: CrowdedHook,
) -> AIProfile:
    update: dict = {
        "disliked_categories": _append_recent(
            profile.disliked_categories, event.category, config.max_category_history,
        ),
        "favorite_categories": [c for c in profile.favorite_categories if c != event.category],
    }

    if event.tags & config.too_expensive_tags:
        update["price_sensitivity"] = step_level(profile.price_sensitivity, 1)
        update["budget_level"] = max(0.0, profile.budget_level - config.budget_step)
    if event.tags & config.too_far_tags:
        update["preferred_distance"] = _shorten_distance(profile, config)
        update["distance_tolerance"] = step_level(profile.distance_tolerance, -1)

    updated = profile.model_copy(update=update)
    if event.tags & config.too_crowded_tags:
        updated = crowded_hook(updated, event)
    return updated


def apply_feedback(
    profile: AIProfile,
    event: FeedbackEvent,
    config: LearnerConfig = DEFAULT_LEARNER_CONFIG,
    crowded_hook: CrowdedHook = on_crowded_feedback,
) -> AIProfile:
    """Return the profile that results from applying *event* to *profile*.

    Tags outside the configured vocabularies are ignored.
    """
    profile = _resolve_overlap(profile)

    if event.rating == FeedbackRating.positive:
        updated = _apply_positive(profile, event, config)
    else:
        updated = _apply_negative(profile, event, config, crowded_hook)

    logger.debug(
        "Applied %s feedback for %s: distance %.2f -> %.2f, price sensitivity %s -> %s",
        event.rating.value, event.category,
        profile.preferred_distance, updated.preferred_distance,
        profile.price_sensitivity.value, updated.price_sensitivity.value,
    )
    return updated
