from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..recommendations.categories import normalize_tag


class Level(str, Enum):
    """Ordered three-step scale shared by price sensitivity and distance tolerance."""

    low = "low"
    medium = "medium"
    high = "high"


LEVEL_ORDER = [Level.low, Level.medium, Level.high]


def step_level(level: Level, steps: int) -> Level:
    """Move *level* by *steps* along low < medium < high, clamped at both ends."""
    index = LEVEL_ORDER.index(level) + steps
    return LEVEL_ORDER[max(0, min(len(LEVEL_ORDER) - 1, index))]


class FeedbackRating(str, Enum):
    positive = "positive"
    negative = "negative"


_LEGACY_RATINGS = {"thumbs_up": "positive", "thumbs_down": "negative"}


class AIProfile(BaseModel):
    """
    Learned preferences. Unknown keys from stored documents are dropped.

    Scoring reads ``favorite_categories``, ``disliked_categories``,
    ``budget_level``, ``preferred_distance`` and ``price_sensitivity``.
    ``distance_tolerance`` is learned and stored for callers but does not
    change scores; ``preferred_distance`` already carries the distance signal.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    favorite_categories: list[str] = Field(default_factory=list)
    disliked_categories: list[str] = Field(default_factory=list)
    price_sensitivity: Level = Level.medium
    preferred_distance: float = Field(
        default=5.0,
        gt=0.0,
        validation_alias=AliasChoices("preferred_distance", "preferred_distance_miles"),
    )
    distance_tolerance: Level = Level.medium
    budget_level: float = Field(default=2.0, ge=0.0, le=3.0)

    @field_validator("favorite_categories", "disliked_categories")
    @classmethod
    def _normalize_categories(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for item in value:
            tag = normalize_tag(item)
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @classmethod
    def from_document(cls, document: dict[str, Any] | None) -> AIProfile:
        """Build a profile from a stored JSON document, falling back to defaults."""
        if not document:
            return cls()
        return cls.model_validate(document)


class FeedbackEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1)
    price_tier: int | None = Field(default=None, ge=0, le=3)
    rating: FeedbackRating
    tags: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, value: str) -> str:
        return normalize_tag(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _accept_legacy_rating(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_RATINGS.get(value.strip().lower(), value.strip().lower())
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(normalize_tag(str(t)) for t in value if str(t).strip())
