# market_insights/services/repository.py
# -----------------------------------------------------------------------------
# Store repository
# - StoreRepository: the three reads the insights engine needs
# - SqlStoreRepository: stores table, one session per read (reads may overlap)
# - CachedReferenceRepository: keeps the full-population reads for a TTL
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from market_insights.core.config import settings
from market_insights.core.errors import DataAccessError
from market_insights.db import crud
from market_insights.db.models import Store
from market_insights.db.session import AsyncSessionLocal
from market_insights.services.geo import BoundingBox, GeoCoordinate
from market_insights.services.records import StoreRecord


class StoreRepository(Protocol):
    async def query_by_bounding_box(self, box: BoundingBox) -> list[StoreRecord]: ...

    async def query_all_ratings(self) -> list[float]: ...

    async def query_all_types(self) -> list[Optional[str]]: ...


def store_to_record(row: Store) -> StoreRecord:
    return StoreRecord(
        id=str(row.id),
        coordinate=GeoCoordinate(row.store_latitude, row.store_longitude),
        store_name=row.store_name,
        store_type=row.store_type,
        rating=row.google_place_rating,
        rating_count=row.google_place_rating_count,
    )


class SqlStoreRepository:
    def __init__(self, session_factory: async_sessionmaker = AsyncSessionLocal):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _reading(self, query: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as db:
                yield db
        except SQLAlchemyError as e:
            raise DataAccessError(query, str(e)) from e

    async def query_by_bounding_box(self, box: BoundingBox) -> list[StoreRecord]:
        async with self._reading("query_by_bounding_box") as db:
            rows = await crud.get_stores_bbox(db, box)
            return [store_to_record(r) for r in rows]

    async def query_all_ratings(self) -> list[float]:
        async with self._reading("query_all_ratings") as db:
            return await crud.get_all_ratings(db)

    async def query_all_types(self) -> list[Optional[str]]:
        async with self._reading("query_all_types") as db:
            return await crud.get_all_types(db)


class CachedReferenceRepository:
    """
    Serves the statewide rating/type pools from memory for ttl_seconds.
    Bounding-box reads always go to the inner repository.
    """

    def __init__(self, inner: StoreRepository, ttl_seconds: float):
        self._inner = inner
        self._ttl = ttl_seconds
        self._ratings_lock = asyncio.Lock()
        self._types_lock = asyncio.Lock()
        self._ratings: Optional[tuple[float, list[float]]] = None
        self._types: Optional[tuple[float, list[Optional[str]]]] = None

    def invalidate(self) -> None:
        self._ratings = None
        self._types = None

    def _fresh(self, entry) -> bool:
        return entry is not None and time.monotonic() - entry[0] < self._ttl

    async def query_by_bounding_box(self, box: BoundingBox) -> list[StoreRecord]:
        return await self._inner.query_by_bounding_box(box)

    async def query_all_ratings(self) -> list[float]:
        async with self._ratings_lock:
            if not self._fresh(self._ratings):
                self._ratings = (time.monotonic(), await self._inner.query_all_ratings())
            return list(self._ratings[1])

    async def query_all_types(self) -> list[Optional[str]]:
        async with self._types_lock:
            if not self._fresh(self._types):
                self._types = (time.monotonic(), await self._inner.query_all_types())
            return list(self._types[1])


_repository: Optional[StoreRepository] = None


def get_store_repository() -> StoreRepository:
    """FastAPI dependency; built once per process."""
    global _repository
    if _repository is None:
        _repository = SqlStoreRepository(AsyncSessionLocal)
        if settings.REFERENCE_CACHE_TTL_SECONDS > 0:
            _repository = CachedReferenceRepository(
                _repository, settings.REFERENCE_CACHE_TTL_SECONDS
            )
    return _repository


def invalidate_reference_cache() -> None:
    if isinstance(_repository, CachedReferenceRepository):
        _repository.invalidate()
