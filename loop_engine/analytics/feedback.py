from __future__ import annotations

import time
from typing import Any

from ..learning.models import AIProfile, FeedbackEvent, FeedbackRating

_feedback: list[dict[str, Any]] = []


def record_feedback(event: FeedbackEvent, user_id: str | None = None) -> None:
    _feedback.append({
        "user_id": user_id,
        "category": event.category,
        "price_tier": event.price_tier,
        "is_positive": event.rating == FeedbackRating.positive,
        "tags": sorted(event.tags),
        "timestamp": time.time(),
    })


def get_feedback(user_id: str | None = None) -> list[dict[str, Any]]:
    if user_id is None:
        return _feedback
    return [f for f in _feedback if f["user_id"] == user_id]


def clear_feedback() -> None:
    _feedback.clear()


def feedback_stats(user_id: str | None = None, profile: AIProfile | None = None) -> dict[str, Any]:
    """Summarise recorded feedback; ``top_categories`` come from the learned profile."""
    fb = get_feedback(user_id)
    positive = sum(1 for f in fb if f["is_positive"])
    negative = len(fb) - positive
    top_categories = profile.favorite_categories[:5] if profile else []
    return {
        "total": len(fb),
        "positive": positive,
        "negative": negative,
        "satisfaction_rate": round(positive / len(fb) * 100, 1) if fb else 0.0,
        "top_categories": top_categories,
    }
