# market_insights/services/records.py
# -----------------------------------------------------------------------------
# Store records as the engine sees them
# - StoreRecord: what the repository hands over
# - NearbyStore: a record plus its distance from the query point
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from market_insights.services.geo import GeoCoordinate

DEFAULT_STORE_TYPE = "other"
DEFAULT_STORE_NAME = "Unknown"


def normalize_type(store_type: Optional[str]) -> str:
    return store_type or DEFAULT_STORE_TYPE


@dataclass(frozen=True, slots=True)
class StoreRecord:
    id: str
    coordinate: GeoCoordinate
    store_name: Optional[str] = None
    store_type: Optional[str] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None

    @property
    def type_tag(self) -> str:
        return normalize_type(self.store_type)


@dataclass(frozen=True, slots=True)
class NearbyStore:
    record: StoreRecord
    distance_miles: float  # unrounded; every radius comparison uses this
