"""
Distance helpers. All distances are in miles.
"""
from __future__ import annotations

import numpy as np

from .models import GeoPoint

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(a: GeoPoint, b: GeoPoint) -> float:
    lat1, lon1, lat2, lon2 = np.radians([a.latitude, a.longitude, b.latitude, b.longitude])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    return float(2.0 * EARTH_RADIUS_MILES * np.arcsin(np.sqrt(min(1.0, h))))


def _project(point: GeoPoint, origin: GeoPoint) -> np.ndarray:
    """Equirectangular projection around *origin*, in miles."""
    lat0 = np.radians(origin.latitude)
    x = np.radians(point.longitude - origin.longitude) * np.cos(lat0)
    y = np.radians(point.latitude - origin.latitude)
    return np.array([x, y]) * EARTH_RADIUS_MILES


def distance_to_segment_miles(point: GeoPoint, start: GeoPoint, end: GeoPoint) -> float:
    """Shortest distance from *point* to the straight segment start-end.

    Uses a local flat projection, which is accurate enough for commute-scale
    segments.
    """
    a = _project(start, point)
    b = _project(end, point)
    ab = b - a
    length_sq = float(np.dot(ab, ab))
    if length_sq == 0.0:
        return float(np.linalg.norm(a))
    t = float(np.clip(np.dot(-a, ab) / length_sq, 0.0, 1.0))
    closest = a + t * ab
    return float(np.linalg.norm(closest))


def nearest_point_distance(point: GeoPoint, references: list[GeoPoint]) -> float | None:
    if not references:
        return None
    return min(haversine_miles(point, ref) for ref in references)
