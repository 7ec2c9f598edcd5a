from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .categories import TimeOfDay, normalize_tag


class SponsorTier(str, Enum):
    organic = "organic"
    boosted = "boosted"
    premium = "premium"


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class DayHours(BaseModel):
    open: str = Field(default="00:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    close: str = Field(default="23:59", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    is_closed: bool = False


class BusinessHours(BaseModel):
    monday: DayHours | None = None
    tuesday: DayHours | None = None
    wednesday: DayHours | None = None
    thursday: DayHours | None = None
    friday: DayHours | None = None
    saturday: DayHours | None = None
    sunday: DayHours | None = None


class Candidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    business_id: str | None = None
    category: str = Field(..., min_length=1)
    location: GeoPoint
    city: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    review_count: int | None = Field(default=None, ge=0)
    price_tier: int | None = Field(default=None, ge=0, le=3)
    hours: BusinessHours | None = None
    sponsor_tier: SponsorTier = SponsorTier.organic

    @field_validator("category")
    @classmethod
    def _normalize_category(cls, value: str) -> str:
        return normalize_tag(value)

    @property
    def is_sponsored(self) -> bool:
        return self.sponsor_tier != SponsorTier.organic


class UserProfile(BaseModel):
    interests: list[str] = Field(default_factory=list, max_length=10)
    home_location: GeoPoint | None = None
    work_location: GeoPoint | None = None
    max_distance: float = Field(default=5.0, gt=0.0)
    budget_level: int = Field(default=2, ge=0, le=3)
    preferred_times: set[TimeOfDay] = Field(default_factory=set)

    @field_validator("interests")
    @classmethod
    def _normalize_interests(cls, value: list[str]) -> list[str]:
        return [normalize_tag(v) for v in value if v.strip()]


class ScoringContext(BaseModel):
    target_time: datetime = Field(default_factory=datetime.now)
    current_location: GeoPoint | None = None
    collaborative_score_override: float | None = None


class ScoreBreakdown(BaseModel):
    base: float = Field(..., ge=0.0)
    location: float = Field(..., ge=0.0)
    time: float = Field(..., ge=0.0)
    feedback: float = Field(..., ge=0.0)
    collaborative: float = Field(..., ge=0.0)
    sponsor_multiplier: float = 1.0
    final: float = Field(..., ge=0.0)
    distance: float | None = None
    time_of_day: TimeOfDay | None = None

    @property
    def base_total(self) -> float:
        return self.base + self.location + self.time + self.feedback + self.collaborative

    @property
    def sponsor_boost(self) -> float:
        return round(self.final - self.base_total, 4)


class ScoredCandidate(BaseModel):
    candidate: Candidate
    score: ScoreBreakdown


class Recommendation(BaseModel):
    candidate: Candidate
    score: ScoreBreakdown
    explanation: str = ""
    is_sponsored: bool = False


class RecommendationResponse(BaseModel):
    recommendations: list[Recommendation]
    total_candidates: int
