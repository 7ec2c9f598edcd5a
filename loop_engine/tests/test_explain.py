from __future__ import annotations

import re

from loop_engine.recommendations.categories import TimeOfDay
from loop_engine.recommendations.explain import explain, explain_all
from loop_engine.recommendations.models import (
    Candidate,
    GeoPoint,
    Recommendation,
    ScoreBreakdown,
)


def _rec(
    base: float,
    location: float,
    time: float,
    distance: float | None = 0.28,
    category: str = "coffee",
    rating: float | None = None,
    city: str | None = None,
) -> Recommendation:
    breakdown = ScoreBreakdown(
        base=base,
        location=location,
        time=time,
        feedback=5.0,
        collaborative=5.0,
        final=base + location + time + 10.0,
        distance=distance,
        time_of_day=TimeOfDay.morning,
    )
    candidate = Candidate(
        id="c1",
        category=category,
        location=GeoPoint(latitude=40.0, longitude=-74.0),
        rating=rating,
        city=city,
    )
    return Recommendation(candidate=candidate, score=breakdown)


def test_interest_and_distance():
    assert explain(_rec(40, 20, 15)) == "Matches your interest in coffee, 0.3 miles away."


def test_location_leads_when_it_is_the_strongest_share():
    text = explain(_rec(10, 20, 5, distance=0.2))
    assert text == "0.2 miles away."


def test_time_clause():
    assert explain(_rec(10, 5, 15)) == "Great for the morning."


def test_related_category_clause():
    assert explain(_rec(20, 5, 5)) == "Similar to things you enjoy."


def test_second_clause_at_threshold():
    text = explain(_rec(20, 15, 15, distance=0.9))
    assert text == "Similar to things you enjoy, 0.9 miles away."


def test_factor_with_most_points_leads():
    # A 30 point interest match outranks a full 20 point location score.
    text = explain(_rec(30, 20, 5))
    assert text == "Matches your interest in coffee, 0.3 miles away."
    # ...and a 15 point location with equal share.
    assert explain(_rec(30, 15, 5)).startswith("Matches your interest in coffee")


def test_time_leads_over_smaller_base():
    assert explain(_rec(10, 5, 15)) == "Great for the morning."
    assert explain(_rec(10, 12, 14)).startswith("Great for the morning")


def test_weak_second_factor_is_left_out():
    # location share 0.5 is below the second-clause threshold
    assert explain(_rec(40, 10, 5)) == "Matches your interest in coffee."


def test_high_rating_added_to_single_clause():
    text = explain(_rec(40, 10, 5, rating=4.7))
    assert text == "Matches your interest in coffee, highly rated."


def test_multi_word_category_is_humanised():
    text = explain(_rec(40, 5, 5, category="live_music"))
    assert text == "Matches your interest in live music."


class TestDistanceWording:
    def test_very_close(self):
        assert explain(_rec(10, 20, 5, distance=0.04)) == "Less than 0.1 miles away."

    def test_one_mile(self):
        assert explain(_rec(10, 20, 5, distance=0.97)) == "1 mile away."

    def test_unknown_distance(self):
        assert explain(_rec(10, 20, 5, distance=None)) == "Close to your usual spots."


def test_fallback_when_every_factor_is_zero():
    assert explain(_rec(0, 0, 0, city="Hoboken")) == "Something new to discover in Hoboken."
    assert explain(_rec(0, 0, 0)) == "Something new to discover in your area."


def test_explanations_never_contain_score_numbers():
    for base, location, time in [(40, 20, 15), (30, 12, 10), (10, 5, 8), (20, 15, 15)]:
        text = explain(_rec(base, location, time, distance=3.4))
        numbers = re.findall(r"\d+(?:\.\d+)?", text)
        assert numbers in ([], ["3.4"])
        assert "score" not in text.lower()


def test_explain_all_fills_every_recommendation():
    recs = [_rec(40, 20, 15), _rec(10, 5, 15)]
    explained = explain_all(recs)
    assert [r.explanation for r in explained] == [
        "Matches your interest in coffee, 0.3 miles away.",
        "Great for the morning.",
    ]
    assert all(r.explanation == "" for r in recs)


def test_explanation_is_deterministic():
    rec = _rec(30, 15, 10, distance=1.6)
    assert explain(rec) == explain(rec)
