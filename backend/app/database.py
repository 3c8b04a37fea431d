import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.config import settings
from app.models import Base
from app.store import DocumentStore, SqlStore, get_memory_store

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    pool_size=5,
    pool_pre_ping=True,
    echo=False,
)

async_session = async_sessionmaker(engine, expire_on_commit=False)


async def init_db() -> None:
    """Create any missing tables. No-op for the memory backend."""
    if settings.uses_memory_store:
        return
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def get_store() -> AsyncGenerator[DocumentStore, None]:
    if settings.uses_memory_store:
        yield get_memory_store()
        return

    async with async_session() as session:
        try:
            yield SqlStore(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
