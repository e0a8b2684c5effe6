# market_insights/services/ingest.py
# -----------------------------------------------------------------------------
# (1) MOCK demo stores
# (2) CSV import of the statewide store export
# -----------------------------------------------------------------------------
from __future__ import annotations

from pathlib import Path

import pandas as pd
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from market_insights.db import crud

# ── (1) MOCK DEMO DATA ────────────────────────────────────────────────────────
# a handful of stores around Jersey City / Hoboken, NJ
MOCK = [
    {
        "google_place_id": "mock-001",
        "store_name": "Grove St Deli",
        "store_type": "convenience",
        "store_latitude": 40.7196,
        "store_longitude": -74.0431,
        "google_place_rating": 4.4,
        "google_place_rating_count": 212,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-002",
        "store_name": "Newport Green Market",
        "store_type": "grocery",
        "store_latitude": 40.7269,
        "store_longitude": -74.0347,
        "google_place_rating": 4.1,
        "google_place_rating_count": 530,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-003",
        "store_name": "Washington St Wine & Spirits",
        "store_type": "liquor",
        "store_latitude": 40.7389,
        "store_longitude": -74.0296,
        "google_place_rating": 4.6,
        "google_place_rating_count": 98,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-004",
        "store_name": "Journal Square Fuel",
        "store_type": "gas",
        "store_latitude": 40.7327,
        "store_longitude": -74.0632,
        "google_place_rating": 3.7,
        "google_place_rating_count": 61,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-005",
        "store_name": "Paulus Hook Cafe",
        "store_type": "foodservice",
        "store_latitude": 40.7142,
        "store_longitude": -74.0339,
        "google_place_rating": 4.8,
        "google_place_rating_count": 340,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-006",
        "store_name": "Bergen Ave Mini Mart",
        "store_type": None,
        "store_latitude": 40.7253,
        "store_longitude": -74.0711,
        "google_place_rating": None,
        "google_place_rating_count": None,
        "state_id": "NJ",
    },
    {
        "google_place_id": "mock-007",
        "store_name": "Princeton Corner Store",
        "store_type": "convenience",
        "store_latitude": 40.3501,
        "store_longitude": -74.6594,
        "google_place_rating": 4.0,
        "google_place_rating_count": 75,
        "state_id": "NJ",
    },
]


async def load_mock(session: AsyncSession) -> int:
    return await crud.save_stores(session, MOCK)


# ── (2) CSV IMPORT ────────────────────────────────────────────────────────────
def _clean(value):
    # pandas hands back NaN for empty cells and numpy scalars for numbers
    if pd.isna(value):
        return None
    return value.item() if hasattr(value, "item") else value


def read_stores_csv(path: str | Path) -> list[dict]:
    """
    Parse a store export (column names case-insensitive, e.g. STORE_LATITUDE).
    Rows without both coordinates are dropped.
    """
    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower() for c in df.columns]
    if "store_latitude" not in df.columns or "store_longitude" not in df.columns:
        raise ValueError("CSV needs store_latitude and store_longitude columns")

    before = len(df)
    df["store_latitude"] = pd.to_numeric(df["store_latitude"], errors="coerce")
    df["store_longitude"] = pd.to_numeric(df["store_longitude"], errors="coerce")
    df = df.dropna(subset=["store_latitude", "store_longitude"])
    if "google_place_rating" in df.columns:
        df["google_place_rating"] = pd.to_numeric(
            df["google_place_rating"], errors="coerce"
        )
    if len(df) < before:
        logger.warning(f"[Stores] {before - len(df)} rows without coordinates skipped")

    rows = []
    for rec in df.to_dict(orient="records"):
        row = {k: _clean(v) for k, v in rec.items()}
        count = row.get("google_place_rating_count")
        if count is not None:
            row["google_place_rating_count"] = int(count)
        for key in ("id", "google_place_id", "store_type", "store_name"):
            if row.get(key) is not None:
                row[key] = str(row[key]).strip()
        rows.append(row)
    return rows


async def load_stores_csv(session: AsyncSession, path: str | Path) -> int:
    rows = read_stores_csv(path)
    inserted = await crud.save_stores(session, rows)
    logger.info(f"[Stores] {path}: {inserted}/{len(rows)} rows inserted")
    return inserted
