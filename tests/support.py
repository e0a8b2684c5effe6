# tests/support.py
# -----------------------------------------------------------------------------
# Shared test helpers: point placement, record factory, in-memory repository
# -----------------------------------------------------------------------------
import itertools
import math
from typing import Optional

from market_insights.core.errors import DataAccessError
from market_insights.services.geo import EARTH_RADIUS_MILES, BoundingBox, GeoCoordinate
from market_insights.services.records import NearbyStore, StoreRecord

_ids = itertools.count(1)


def destination(center: GeoCoordinate, miles: float, bearing_deg: float) -> GeoCoordinate:
    """Point `miles` away from center along a bearing (spherical, same radius as the engine)."""
    d = miles / EARTH_RADIUS_MILES
    lat1 = math.radians(center.latitude)
    lon1 = math.radians(center.longitude)
    brg = math.radians(bearing_deg)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(brg)
    )
    lon2 = lon1 + math.atan2(
        math.sin(brg) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2),
    )
    lon = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    lat = max(-90.0, min(90.0, math.degrees(lat2)))
    return GeoCoordinate(lat, lon)


def make_record(
    coordinate: GeoCoordinate,
    store_type: Optional[str] = "convenience",
    rating: Optional[float] = None,
    rating_count: Optional[int] = None,
    store_name: Optional[str] = None,
) -> StoreRecord:
    n = next(_ids)
    return StoreRecord(
        id=f"store-{n}",
        coordinate=coordinate,
        store_name=store_name if store_name is not None else f"Store {n}",
        store_type=store_type,
        rating=rating,
        rating_count=rating_count,
    )


def nearby(store_type: Optional[str] = "convenience", rating=None, miles=1.0) -> NearbyStore:
    """A NearbyStore without caring where it is."""
    rec = make_record(GeoCoordinate(40.0, -74.0), store_type=store_type, rating=rating)
    return NearbyStore(record=rec, distance_miles=miles)


class FakeRepository:
    """In-memory store repository; the bbox read honours the box like the SQL one."""

    def __init__(
        self,
        records=(),
        ratings=None,
        types=None,
        fail_on: Optional[str] = None,
        error: Optional[Exception] = None,
    ):
        self.records = list(records)
        self.ratings = (
            list(ratings)
            if ratings is not None
            else [r.rating for r in self.records if r.rating is not None]
        )
        self.types = (
            list(types) if types is not None else [r.store_type for r in self.records]
        )
        self.fail_on = fail_on
        self.error = error
        self.calls: list[str] = []
        self.boxes: list[BoundingBox] = []

    def _check(self, query: str):
        self.calls.append(query)
        if self.fail_on == query:
            raise self.error or DataAccessError(query, "connection refused")

    async def query_by_bounding_box(self, box: BoundingBox) -> list[StoreRecord]:
        self._check("query_by_bounding_box")
        self.boxes.append(box)
        return [r for r in self.records if box.contains(r.coordinate)]

    async def query_all_ratings(self) -> list[float]:
        self._check("query_all_ratings")
        return list(self.ratings)

    async def query_all_types(self) -> list[Optional[str]]:
        self._check("query_all_types")
        return list(self.types)
