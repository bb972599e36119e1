# backend/livingbook/db/session.py
import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from livingbook.core.config import settings
from livingbook.db.base import Base
from livingbook.db import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger("uvicorn.error")

# Opened once at import; the pool is shared by every request.
engine = create_async_engine(settings.DATABASE_URL, echo=False)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_models() -> None:
    """
    Create missing tables and indexes (incl. the booking unique index).
    Any failure here is fatal for server start, so it is not caught.
    """
    logger.info("connecting to store and creating tables")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


# FastAPI dependency: one session per request
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
