from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LearnerConfig:
    """
    Step sizes, floors and tag vocabularies for profile learning.

    Tags are compared after normalisation (lower-case, underscores), so the
    vocabularies list the normalised spelling only.
    """

    distance_step: float = 0.5
    min_preferred_distance: float = 0.5
    max_category_history: int = 10
    budget_blend: float = 0.3
    budget_step: float = 0.5

    good_value_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({"good_value", "great_value", "affordable", "worth_it"})
    )
    convenient_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({"convenient", "close_by", "easy_to_reach"})
    )
    too_expensive_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({"too_expensive", "overpriced"})
    )
    too_far_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({"too_far"})
    )
    too_crowded_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({"too_crowded", "crowded"})
    )


DEFAULT_LEARNER_CONFIG = LearnerConfig()
