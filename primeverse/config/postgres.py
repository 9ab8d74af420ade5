"""PostgreSQL async connection management.

Provides the process-wide async SQLAlchemy engine (asyncpg) used by the
CLI, the schema runtime checks and any application code that records
payments.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from primeverse.logging_config import get_logger
from primeverse.settings import Settings

logger = get_logger(name=__name__)

_engine: AsyncEngine | None = None


def init_engine(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
) -> AsyncEngine:
    """Create the global async engine."""
    global _engine
    kwargs = {}
    if not database_url.startswith("sqlite"):
        kwargs = {"pool_size": pool_size, "max_overflow": max_overflow}
    _engine = create_async_engine(database_url, echo=False, **kwargs)
    logger.info("Async engine initialized ({})", _engine.dialect.name)
    return _engine


def init_engine_from_settings(
    settings: Settings, database_url: Optional[str] = None
) -> AsyncEngine:
    """Create the global engine from settings, optionally overriding the URL."""
    return init_engine(
        database_url or settings.postgres_url,
        pool_size=settings.postgres_pool_size,
        max_overflow=settings.postgres_max_overflow,
    )


def get_engine() -> AsyncEngine:
    """Get the global async engine. Raises if not initialized."""
    if _engine is None:
        raise RuntimeError(
            "PostgreSQL engine not initialized. Call init_engine() first."
        )
    return _engine


@asynccontextmanager
async def get_db_transaction() -> AsyncGenerator[AsyncConnection, None]:
    """Connection with a transaction that commits on success, rolls back on error.

    Usage::

        async with get_db_transaction() as conn:
            await conn.run_sync(record_payment, **payment)
    """
    engine = get_engine()
    async with engine.begin() as conn:
        yield conn


async def dispose_engine() -> None:
    """Dispose the async engine and release all connections."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        logger.info("PostgreSQL engine disposed")
    _engine = None
