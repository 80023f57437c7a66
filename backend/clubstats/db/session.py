"""
Database Session Management

Engines and the async session factory used by the analytics data source.
The club tables belong to the dashboard; this service opens short-lived
read sessions and only creates tables for local development.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from clubstats.config import settings

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across threads by the async driver
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _get_async_url(url: str) -> str:
    """Convert sync database URL to async version."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    elif url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    return url


# =============================================================================
# Synchronous Engine (schema creation, migrations)
# =============================================================================

engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
)


# =============================================================================
# Async Engine (analytics reads)
# =============================================================================

_async_url = _get_async_url(settings.database_url)

if _async_url.startswith("postgresql"):
    # Dashboard loads fan out one query per dataset
    async_engine = create_async_engine(
        _async_url,
        echo=settings.debug,
        pool_size=settings.database_pool_size,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # 30 minutes
    )
else:
    async_engine = create_async_engine(
        _async_url,
        echo=settings.debug,
        connect_args=_connect_args(_async_url),
    )

# One session per dataset read; nothing is written back
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# =============================================================================
# Lifecycle
# =============================================================================

def init_db() -> None:
    """Create the club tables if missing (local development only)."""
    from clubstats.models.base import Base
    # Import all models to register them
    from clubstats.features.club import models  # noqa

    Base.metadata.create_all(bind=engine)
    logger.info("Club tables ensured")


async def dispose_engines() -> None:
    """Close pooled connections on shutdown."""
    await async_engine.dispose()
    engine.dispose()
