"""Database engine, declarative base and store gateway dependency."""

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bugtracker.config import settings
from bugtracker.store import StoreGateway

logger = structlog.get_logger()


class Base(DeclarativeBase):
    """Declarative base for all table models."""


# Process-wide connection pool, created once and reused by every request
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    echo=settings.database_echo,
    pool_pre_ping=True,
)


def get_gateway() -> StoreGateway:
    """Get the store gateway dependency."""
    return StoreGateway(engine)


async def init_db() -> None:
    """Verify the store is reachable at startup."""
    logger.info("database_connecting")
    await get_gateway().ping()
    logger.info("database_connected")


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
    logger.info("database_closed")


async def create_tables() -> None:
    """Create any missing tables from the model metadata."""
    # Register every table on Base.metadata
    import bugtracker.models  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info("database_tables_created")
