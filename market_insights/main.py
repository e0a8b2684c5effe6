# market_insights/main.py
# -----------------------------------------------------------------------------
# FastAPI entrypoint
# - creates tables on startup (and optionally seeds demo stores)
# -----------------------------------------------------------------------------
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

import market_insights.core.logging  # noqa: F401  (configures loguru sinks)
from market_insights.core.config import settings
from market_insights.db.session import AsyncSessionLocal, create_tables
from market_insights.routers import admin, insights
from market_insights.services.ingest import load_mock

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    await create_tables()

    if settings.AUTO_SEED_MOCK:
        async with AsyncSessionLocal() as db:
            inserted = await load_mock(db)
        logger.info(f"[Stores] mock seed inserted {inserted} rows")


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    # the onboarding client expects the success/error envelope, even for bad bodies
    if request.url.path == "/api/insights":
        return JSONResponse(
            status_code=400, content={"success": False, "error": "Invalid lat/lng"}
        )
    return await request_validation_exception_handler(request, exc)


app.include_router(insights.router)
app.include_router(admin.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
