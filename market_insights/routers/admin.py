# market_insights/routers/admin.py
# -----------------------------------------------------------------------------
# Store loading (mock seed / CSV import) and a row count
# -----------------------------------------------------------------------------
import traceback

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from market_insights.db import crud
from market_insights.db.session import get_session
from market_insights.services.ingest import load_mock, load_stores_csv
from market_insights.services.repository import invalidate_reference_cache

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/stores/mock")
async def seed_mock(db: AsyncSession = Depends(get_session)):
    try:
        inserted = await load_mock(db)
    except Exception as e:
        raise HTTPException(500, detail=f"{e}\n{traceback.format_exc()}")
    invalidate_reference_cache()
    return {"status": "ok", "inserted": inserted}


@router.post("/stores/csv")
async def import_csv(
    path: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_session),
):
    try:
        inserted = await load_stores_csv(db, path)
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(400, detail=str(e))
    except Exception as e:
        raise HTTPException(500, detail=f"{e}\n{traceback.format_exc()}")
    invalidate_reference_cache()
    return {"status": "ok", "inserted": inserted}


@router.get("/stores/count")
async def store_count(db: AsyncSession = Depends(get_session)):
    return {"count": await crud.count_stores(db)}
