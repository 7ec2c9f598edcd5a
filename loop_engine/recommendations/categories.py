"""
Category taxonomy helpers.

The taxonomy is open: unknown categories are accepted everywhere and simply
miss the related-category and time-window lookups.
"""
from __future__ import annotations

import re
from enum import Enum


class TimeOfDay(str, Enum):
    morning = "morning"
    midday = "midday"
    afternoon = "afternoon"
    evening = "evening"
    night = "night"


_SEPARATORS_RE = re.compile(r"[\s\-]+")


def normalize_tag(value: str) -> str:
    """Lower-case a category/tag and join words with underscores."""
    return _SEPARATORS_RE.sub("_", value.strip().lower()).strip("_")


# ---------------------------------------------------------------------------
# Onboarding interest groups
# ---------------------------------------------------------------------------
# Onboarding stores a few multi-category labels ("Coffee & Cafes"); single
# word labels such as "Dining" are plain categories already.

INTEREST_GROUPS: dict[str, list[str]] = {
    "coffee_&_cafes": ["cafe", "coffee", "bakery"],
    "bars_&_nightlife": ["bar", "bars", "nightlife"],
    "arts_&_culture": ["arts", "culture", "museum", "art_gallery", "workshop", "lectures"],
    "outdoor_activities": ["outdoor", "parks", "hiking", "beach", "camping", "bike_trails"],
}


def interest_categories(interest: str) -> set[str]:
    """Return the category ids an interest stands for."""
    key = normalize_tag(interest)
    return set(INTEREST_GROUPS.get(key, [key]))


def expand_interests(interests: list[str]) -> set[str]:
    expanded: set[str] = set()
    for interest in interests:
        expanded |= interest_categories(interest)
    return expanded


# ---------------------------------------------------------------------------
# Related categories
# ---------------------------------------------------------------------------

RELATED_CATEGORIES: dict[str, list[str]] = {
    "coffee": ["cafe", "dining", "breakfast", "bakery"],
    "cafe": ["coffee", "bakery", "brunch"],
    "bakery": ["cafe", "coffee", "brunch"],
    "brunch": ["restaurant", "dining", "cafe"],
    "restaurant": ["dining", "brunch", "food_truck"],
    "dining": ["restaurant", "coffee", "bars"],
    "bar": ["bars", "nightlife", "live_music", "entertainment"],
    "bars": ["bar", "nightlife", "entertainment", "live_music"],
    "nightlife": ["bar", "bars", "live_music", "karaoke"],
    "live_music": ["bars", "nightlife", "entertainment", "concerts"],
    "concerts": ["live_music", "festivals", "nightlife"],
    "fitness": ["outdoor", "wellness", "sports", "gym"],
    "gym": ["fitness", "yoga", "running"],
    "yoga": ["fitness", "wellness", "spa"],
    "hiking": ["outdoor", "parks", "running", "camping"],
    "parks": ["outdoor", "hiking", "running"],
    "arts": ["culture", "entertainment", "museum"],
    "museum": ["arts", "culture", "art_gallery"],
    "art_gallery": ["arts", "museum", "culture"],
    "theater": ["entertainment", "arts", "comedy"],
    "movies": ["entertainment", "theater"],
    "shopping": ["arts", "culture", "markets"],
    "markets": ["shopping", "food_truck", "vintage"],
}


def is_related(category: str, interests: set[str]) -> bool:
    return any(related in interests for related in RELATED_CATEGORIES.get(category, []))


# ---------------------------------------------------------------------------
# Time windows
# ---------------------------------------------------------------------------
# (start_hour, end_hour) half-open; end <= start wraps past midnight.

Window = tuple[int, int]

IDEAL_WINDOWS: dict[str, list[Window]] = {
    "coffee": [(7, 10)],
    "cafe": [(7, 10)],
    "bakery": [(7, 10)],
    "breakfast": [(7, 10)],
    "brunch": [(9, 13)],
    "restaurant": [(18, 20)],
    "dining": [(18, 20)],
    "fast_food": [(11, 14)],
    "food_truck": [(11, 14)],
    "bar": [(21, 2)],
    "bars": [(21, 2)],
    "nightlife": [(21, 2)],
    "karaoke": [(21, 1)],
    "live_music": [(19, 23)],
    "concerts": [(19, 23)],
    "entertainment": [(19, 23)],
    "comedy": [(19, 23)],
    "theater": [(19, 22)],
    "movies": [(18, 23)],
    "fitness": [(6, 9)],
    "gym": [(6, 9)],
    "yoga": [(6, 9)],
    "running": [(6, 9)],
    "outdoor": [(7, 11)],
    "hiking": [(7, 11)],
    "parks": [(9, 12)],
    "beach": [(10, 16)],
    "museum": [(13, 17)],
    "art_gallery": [(13, 17)],
    "arts": [(13, 17)],
    "culture": [(13, 17)],
    "shopping": [(14, 17)],
    "markets": [(9, 13)],
    "spa": [(14, 18)],
}

GOOD_WINDOWS: dict[str, list[Window]] = {
    "coffee": [(10, 15)],
    "cafe": [(10, 15)],
    "bakery": [(10, 13)],
    "breakfast": [(10, 11)],
    "brunch": [(13, 14)],
    "restaurant": [(11, 14), (20, 22)],
    "dining": [(11, 14), (20, 22)],
    "fast_food": [(17, 21)],
    "food_truck": [(17, 20)],
    "bar": [(17, 21)],
    "bars": [(17, 21)],
    "nightlife": [(19, 21)],
    "live_music": [(17, 19), (23, 1)],
    "concerts": [(17, 19)],
    "entertainment": [(14, 19)],
    "comedy": [(17, 19)],
    "theater": [(14, 17)],
    "movies": [(12, 18)],
    "fitness": [(17, 20)],
    "gym": [(17, 20)],
    "yoga": [(17, 20)],
    "running": [(17, 20)],
    "outdoor": [(14, 18)],
    "hiking": [(11, 15)],
    "parks": [(14, 19)],
    "beach": [(16, 19)],
    "museum": [(10, 13)],
    "art_gallery": [(10, 13)],
    "arts": [(10, 13)],
    "culture": [(10, 13)],
    "shopping": [(10, 14), (17, 20)],
    "markets": [(13, 16)],
    "spa": [(10, 14)],
}


def in_window(hour: int, window: Window) -> bool:
    start, end = window
    if end <= start:
        return hour >= start or hour < end
    return start <= hour < end


def time_of_day(hour: int) -> TimeOfDay:
    if 6 <= hour < 11:
        return TimeOfDay.morning
    if 11 <= hour < 14:
        return TimeOfDay.midday
    if 14 <= hour < 17:
        return TimeOfDay.afternoon
    if 17 <= hour < 21:
        return TimeOfDay.evening
    return TimeOfDay.night
