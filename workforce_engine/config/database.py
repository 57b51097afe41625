"""
Database configuration and connection management.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from workforce_engine.config.settings import settings


def get_database_url() -> str:
    """Get database URL from settings."""
    return str(settings.DATABASE_URL)


def create_engine(database_url: Optional[str] = None, **engine_kwargs) -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    url = database_url or get_database_url()

    options = {"echo": settings.DATABASE_ECHO, "future": True}
    # SQLite drivers manage their own single-connection pools
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
            pool_recycle=settings.DATABASE_POOL_RECYCLE,
            pool_pre_ping=True,
        )
    options.update(engine_kwargs)

    return create_async_engine(url, **options)


def get_async_session_factory(
    engine: Optional[AsyncEngine] = None,
) -> async_sessionmaker[AsyncSession]:
    """Get async session factory."""
    return async_sessionmaker(
        engine or create_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
