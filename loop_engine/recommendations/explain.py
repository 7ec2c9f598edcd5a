"""
Templated, deterministic explanations for recommendations.

The leading factor is the one with the most points; a runner-up is only
mentioned when it is strong for its own budget. Explanations never
contain scores; the only numbers they may carry are distances.
"""
from __future__ import annotations

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Recommendation

SECONDARY_SHARE = 0.75
HIGH_RATING = 4.5


def _format_distance(miles: float) -> str:
    if miles < 0.1:
        return "less than 0.1 miles"
    if round(miles, 1) == 1.0:
        return "1 mile"
    return f"{miles:.1f} miles"


def _humanize(category: str) -> str:
    return category.replace("_", " ")


def _base_clause(rec: Recommendation, config: ScoringConfig) -> str:
    points = rec.score.base
    if points >= config.base_any_interest:
        return f"matches your interest in {_humanize(rec.candidate.category)}"
    if points >= config.base_related:
        return "similar to things you enjoy"
    return "something new to try"


def _location_clause(rec: Recommendation) -> str:
    if rec.score.distance is None:
        return "close to your usual spots"
    return f"{_format_distance(rec.score.distance)} away"


def _time_clause(rec: Recommendation) -> str:
    if rec.score.time_of_day is None:
        return "good timing"
    return f"great for the {rec.score.time_of_day.value}"


def _ranked_factors(rec: Recommendation, config: ScoringConfig) -> list[tuple[str, float, float]]:
    """Return (factor, points, share of its own budget), largest points first."""
    factors = [
        ("base", rec.score.base, rec.score.base / config.base_top_interest),
        ("location", rec.score.location, rec.score.location / config.location_on_route),
        ("time", rec.score.time, rec.score.time / config.time_ideal),
    ]
    # sorted() is stable, so equal points keep base > location > time.
    return sorted(factors, key=lambda factor: -factor[1])


def explain(recommendation: Recommendation, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> str:
    """
    Render a one-sentence reason for a recommendation.

    The factor with the most points among base, location and time leads
    (ties favor base, then location). The runner-up is added only when it
    reached at least ``SECONDARY_SHARE`` of its own point budget.
    """
    builders = {
        "base": lambda: _base_clause(recommendation, config),
        "location": lambda: _location_clause(recommendation),
        "time": lambda: _time_clause(recommendation),
    }

    ranked = _ranked_factors(recommendation, config)
    clauses: list[str] = []
    (first, first_points, _), (second, _, second_share) = ranked[0], ranked[1]
    if first_points > 0:
        clauses.append(builders[first]())
    if second_share >= SECONDARY_SHARE:
        clauses.append(builders[second]())

    rating = recommendation.candidate.rating
    if len(clauses) == 1 and rating is not None and rating >= HIGH_RATING:
        clauses.append("highly rated")

    if not clauses:
        city = recommendation.candidate.city or "your area"
        return f"Something new to discover in {city}."

    sentence = ", ".join(clauses)
    return sentence[0].upper() + sentence[1:] + "."


def explain_all(
    recommendations: list[Recommendation],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Recommendation]:
    return [
        rec.model_copy(update={"explanation": explain(rec, config)})
        for rec in recommendations
    ]
