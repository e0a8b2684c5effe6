# load_stores.py

import argparse
import asyncio

from loguru import logger

import market_insights.core.logging  # noqa: F401
from market_insights.db.session import AsyncSessionLocal, create_tables, engine
from market_insights.services.ingest import load_mock, load_stores_csv


async def run_store_load(csv_path: str | None, mock: bool) -> int:
    """
    Create the stores table if needed, then import a CSV export and/or the demo stores.
    """
    await create_tables()

    inserted = 0
    async with AsyncSessionLocal() as db:
        if csv_path:
            inserted += await load_stores_csv(db, csv_path)
        if mock:
            inserted += await load_mock(db)
    await engine.dispose()
    return inserted


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load stores into the insights database")
    parser.add_argument("csv", nargs="?", help="store export (CSV)")
    parser.add_argument("--mock", action="store_true", help="also insert the demo stores")
    args = parser.parse_args()
    if not args.csv and not args.mock:
        parser.error("nothing to load: pass a CSV path and/or --mock")

    total = asyncio.run(run_store_load(args.csv, args.mock))
    logger.info(f"done, {total} stores inserted")
