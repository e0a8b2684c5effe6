# market_insights/db/crud.py
# -----------------------------------------------------------------------------
# Read/write helpers for the stores table
# - bbox lookup (records with coordinates only)
# - full-population rating/type scans for the reference pool
# - bulk insert with google_place_id dedupe
# -----------------------------------------------------------------------------
from typing import Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from market_insights.db.models import Store
from market_insights.services.geo import BoundingBox

STORE_COLUMNS = {c.name for c in Store.__table__.columns}


async def get_stores_bbox(db: AsyncSession, box: BoundingBox) -> Sequence[Store]:
    # a box across the antimeridian becomes two longitude ranges
    lon_clauses = [
        Store.store_longitude.between(lo, hi) for lo, hi in box.lon_ranges()
    ]
    stmt = (
        select(Store)
        .where(
            Store.store_latitude.is_not(None),
            Store.store_longitude.is_not(None),
            Store.store_latitude.between(box.min_lat, box.max_lat),
            or_(*lon_clauses),
        )
        .order_by(Store.id)
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def get_all_ratings(db: AsyncSession) -> list[float]:
    stmt = (
        select(Store.google_place_rating)
        .where(Store.google_place_rating.is_not(None))
        .order_by(Store.id)
    )
    res = await db.execute(stmt)
    return [float(r) for r in res.scalars().all()]


async def get_all_types(db: AsyncSession) -> list[Optional[str]]:
    stmt = select(Store.store_type).order_by(Store.id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def count_stores(db: AsyncSession) -> int:
    res = await db.execute(select(func.count(Store.id)))
    return int(res.scalar_one())


async def save_stores(db: AsyncSession, rows: list[dict]) -> int:
    """
    Insert store rows (keys = Store column names, unknown keys dropped).
    Rows whose google_place_id already exists are skipped.
    """
    inserted = 0
    for row in rows:
        values = {k: v for k, v in row.items() if k in STORE_COLUMNS}
        place_id = values.get("google_place_id")
        if place_id:
            stmt = select(Store.id).where(Store.google_place_id == place_id)
            if (await db.execute(stmt)).first() is not None:
                continue
        db.add(Store(**values))
        inserted += 1
    await db.commit()
    return inserted
