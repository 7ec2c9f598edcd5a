from __future__ import annotations

import logging

from ..analytics.feedback import record_feedback
from .config import DEFAULT_LEARNER_CONFIG, LearnerConfig
from .learner import apply_feedback
from .models import AIProfile, FeedbackEvent

logger = logging.getLogger(__name__)


def process_feedback(
    profile: AIProfile,
    event: FeedbackEvent,
    user_id: str | None = None,
    config: LearnerConfig = DEFAULT_LEARNER_CONFIG,
) -> AIProfile:
    """
    Record one feedback event and return the updated AI profile.

    Persisting the returned profile is the caller's job, as is making sure
    each event reaches this function exactly once.
    """
    record_feedback(event, user_id)
    updated = apply_feedback(profile, event, config)
    logger.info("Profile updated from %s feedback on %s", event.rating.value, event.category)
    return updated
