# market_insights/db/session.py
# -----------------------------------------------------------------------------
# Store database
# - one async engine per process, DATABASE_URL from settings
# - AsyncSessionLocal: admin routes get it through Depends(get_session), the
#   repository opens one per read
# - create_tables(): used by app startup and load_stores.py
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from market_insights.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
Base = declarative_base()


async def create_tables(bind: AsyncEngine = engine) -> None:
    # models must be imported so Store is registered on Base
    from market_insights.db import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as db:
        yield db
