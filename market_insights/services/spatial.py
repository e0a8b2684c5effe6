# market_insights/services/spatial.py
# -----------------------------------------------------------------------------
# Exact radius filter over bounding-box candidates
# - nearest first; stores exactly on the radius are inside
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Iterable, Sequence

from market_insights.core.config import settings
from market_insights.services.geo import GeoCoordinate, distance
from market_insights.services.records import NearbyStore, StoreRecord


def filter_within_radius(
    center: GeoCoordinate,
    candidates: Iterable[StoreRecord],
    radius_miles: float = settings.SEARCH_RADIUS_MILES,
) -> list[NearbyStore]:
    """
    Exact radius filter over a bounding-box candidate set.
    The box only narrows the fetch; membership is decided here, inclusive of
    the radius itself. Result is sorted by distance, ties keep input order.
    """
    nearby = []
    for record in candidates:
        d = distance(center, record.coordinate)
        if d <= radius_miles:
            nearby.append(NearbyStore(record=record, distance_miles=d))
    nearby.sort(key=lambda s: s.distance_miles)
    return nearby


def within(nearby: Sequence[NearbyStore], radius_miles: float) -> list[NearbyStore]:
    """Sub-radius slice of an already filtered, sorted list."""
    return [s for s in nearby if s.distance_miles <= radius_miles]
