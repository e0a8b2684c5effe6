# market_insights/services/insights.py
# -----------------------------------------------------------------------------
# Local market snapshot for one point
#   1) 5-mile bbox candidates + statewide ratings/types (concurrent reads)
#   2) exact radius filter, 1/3/5-mile counts from the same list
#   3) quality / composition / trending over the 3-mile subset
# Nothing is kept between calls; a repository failure fails the whole call.
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
from typing import Optional

from loguru import logger

from market_insights.core.config import settings
from market_insights.core.errors import DataAccessError, InvalidInputError
from market_insights.core.rounding import round_half_up
from market_insights.schemas.insights import ClosestStore, LocalInsights, NearbySummary
from market_insights.services.composition import analyze_composition
from market_insights.services.geo import GeoCoordinate, bounding_box
from market_insights.services.quality import benchmark_quality
from market_insights.services.records import DEFAULT_STORE_NAME, NearbyStore
from market_insights.services.repository import StoreRepository
from market_insights.services.spatial import filter_within_radius, within
from market_insights.services.trending import trending_categories


def parse_center(lat, lng) -> GeoCoordinate:
    """Request lat/lng -> GeoCoordinate, InvalidInputError on anything unusable."""
    if lat is None or lng is None:
        raise InvalidInputError("Missing lat/lng")
    try:
        return GeoCoordinate(float(lat), float(lng))
    except (TypeError, ValueError, InvalidInputError) as e:
        logger.warning(f"[Insights] rejected coordinate ({lat}, {lng}): {e}")
        raise InvalidInputError("Invalid lat/lng") from e


def _closest(store: NearbyStore) -> ClosestStore:
    r = store.record
    return ClosestStore(
        id=r.id,
        store_name=r.store_name or DEFAULT_STORE_NAME,
        store_type=r.type_tag,
        google_place_rating=r.rating,
        google_place_rating_count=r.rating_count,
        distance_miles=round_half_up(store.distance_miles, 1),
    )


async def compute_insights(
    repository: StoreRepository,
    center: GeoCoordinate,
    type_hint: Optional[str] = None,
) -> LocalInsights:
    box = bounding_box(center, settings.SEARCH_RADIUS_MILES)

    try:
        candidates, reference_ratings, reference_types = await asyncio.gather(
            repository.query_by_bounding_box(box),
            repository.query_all_ratings(),
            repository.query_all_types(),
        )
    except DataAccessError as e:
        logger.error(
            f"[Insights] repository read '{e.query}' failed "
            f"at ({center.latitude}, {center.longitude}): {e}"
        )
        raise

    nearby = filter_within_radius(center, candidates, settings.SEARCH_RADIUS_MILES)
    near = within(nearby, settings.NEAR_RADIUS_MILES)
    local = within(nearby, settings.LOCAL_RADIUS_MILES)

    logger.info(
        f"[Insights] ({center.latitude}, {center.longitude}) "
        f"candidates={len(candidates)} within5={len(nearby)} within3={len(local)}"
    )

    return LocalInsights(
        nearby=NearbySummary(
            within_1_mile=len(near),
            within_3_miles=len(local),
            within_5_miles=len(nearby),
            closest=[_closest(s) for s in nearby[: settings.CLOSEST_LIMIT]],
        ),
        quality=benchmark_quality(local, reference_ratings),
        composition=analyze_composition(local, reference_types),
        trending=trending_categories(local, type_hint),
    )
