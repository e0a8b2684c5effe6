# market_insights/services/trending.py
# -----------------------------------------------------------------------------
# "Trending" categories
# - deterministic: top local store types -> fixed product catalog
# - not a time-series signal; the caller's store type is logged, never scored
# -----------------------------------------------------------------------------
from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Optional, Sequence

from loguru import logger

from market_insights.core.config import settings
from market_insights.schemas.insights import Trending
from market_insights.services.records import NearbyStore


class StoreCategory(str, Enum):
    CONVENIENCE = "convenience"
    GROCERY = "grocery"
    FOODSERVICE = "foodservice"
    LIQUOR = "liquor"
    GAS = "gas"
    OTHER = "other"

    @classmethod
    def from_type(cls, store_type: str) -> "StoreCategory":
        try:
            return cls(store_type)
        except ValueError:
            return cls.OTHER


CATEGORY_CATALOG: dict[StoreCategory, tuple[str, ...]] = {
    StoreCategory.CONVENIENCE: (
        "Snacks & Beverages",
        "Ready-to-eat meals",
        "Energy drinks",
    ),
    StoreCategory.GROCERY: (
        "Fresh produce",
        "Organic products",
        "International foods",
    ),
    StoreCategory.FOODSERVICE: (
        "Sandwiches & wraps",
        "Coffee & pastries",
        "Local specialties",
    ),
    StoreCategory.LIQUOR: ("Craft beer", "Premium spirits", "Wine selections"),
    StoreCategory.GAS: ("Convenience items", "Car care", "Quick snacks"),
    StoreCategory.OTHER: (
        "Everyday essentials",
        "Local favorites",
        "Seasonal items",
    ),
}


def confidence_for(
    sample_size: int,
    high_min: int = settings.CONFIDENCE_HIGH_MIN,
    medium_min: int = settings.CONFIDENCE_MEDIUM_MIN,
) -> str:
    if sample_size > high_min:
        return "high"
    if sample_size > medium_min:
        return "medium"
    return "low"


def top_types(local: Sequence[NearbyStore], n: int) -> list[str]:
    counts = Counter(s.record.type_tag for s in local)
    # stable sort: equal counts stay in first-seen order
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [t for t, _ in ranked[:n]]


def trending_categories(
    local: Sequence[NearbyStore],
    type_hint: Optional[str] = None,
    limit: int = settings.TRENDING_LIMIT,
) -> Trending:
    if type_hint:
        logger.debug(f"[Trending] store type hint={type_hint!r} (not scored)")

    categories = [
        CATEGORY_CATALOG[StoreCategory.from_type(t)][0] for t in top_types(local, limit)
    ]
    return Trending(categories=categories[:limit], confidence=confidence_for(len(local)))
