# market_insights/routers/insights.py
# -----------------------------------------------------------------------------
# POST /api/insights
# - { success: true, insights } or { success: false, error }, never partial
# - repository failures are logged by compute_insights; anything else here
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from market_insights.core.errors import DataAccessError, InvalidInputError
from market_insights.schemas.insights import InsightsRequest
from market_insights.services.insights import compute_insights, parse_center
from market_insights.services.repository import StoreRepository, get_store_repository

router = APIRouter(prefix="/api", tags=["insights"])

FETCH_FAILED = {"success": False, "error": "Failed to fetch insights"}


@router.post("/insights")
async def insights(
    req: InsightsRequest,
    repository: StoreRepository = Depends(get_store_repository),
):
    try:
        center = parse_center(req.lat, req.lng)
        result = await compute_insights(repository, center, req.store_type)
    except InvalidInputError as e:
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})
    except DataAccessError:
        return JSONResponse(status_code=500, content=FETCH_FAILED)
    except Exception:
        logger.exception("[Insights] failed to fetch insights")
        return JSONResponse(status_code=500, content=FETCH_FAILED)

    return {"success": True, "insights": result.model_dump()}
