"""
Database configuration and connection management.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from ..models.database import Base


logger = logging.getLogger(__name__)


class DatabaseConfig:
    """Database configuration management."""

    def __init__(self):
        self.database_url = self._get_database_url()
        self.async_database_url = self._get_async_database_url()
        self.echo = os.getenv("DATABASE_ECHO", "false").lower() == "true"
        self.pool_size = int(os.getenv("DATABASE_POOL_SIZE", "10"))
        self.max_overflow = int(os.getenv("DATABASE_MAX_OVERFLOW", "20"))
        self.pool_timeout = int(os.getenv("DATABASE_POOL_TIMEOUT", "30"))
        self.pool_recycle = int(os.getenv("DATABASE_POOL_RECYCLE", "3600"))

    def _get_database_url(self) -> str:
        """Get synchronous database URL from environment (used by migrations)."""
        if os.getenv("TESTING", "false").lower() == "true":
            return "sqlite:///./test.db"
        url = os.getenv("DATABASE_URL")
        if not url:
            host = os.getenv("DB_HOST", "localhost")
            port = os.getenv("DB_PORT", "5432")
            database = os.getenv("DB_NAME", "membership")
            username = os.getenv("DB_USER", "postgres")
            password = os.getenv("DB_PASSWORD", "postgres")
            url = f"postgresql://{username}:{password}@{host}:{port}/{database}"
        return url

    def _get_async_database_url(self) -> str:
        """Get asynchronous database URL from environment."""
        if os.getenv("TESTING", "false").lower() == "true":
            return "sqlite+aiosqlite:///./test.db"
        url = os.getenv("ASYNC_DATABASE_URL")
        if not url:
            sync_url = self._get_database_url()
            if sync_url.startswith("postgresql://"):
                url = sync_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif sync_url.startswith("sqlite:///"):
                url = sync_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
            else:
                url = sync_url
        return url


db_config = DatabaseConfig()

if db_config.async_database_url.startswith("sqlite+aiosqlite"):
    async_engine = create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo,
        connect_args={"check_same_thread": False}
    )
else:
    async_engine = create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
    )

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False
)


async def create_database_tables():
    """Create all database tables."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")


async def drop_database_tables():
    """Drop all database tables."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Database tables dropped successfully")


@asynccontextmanager
async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get async database session context manager.

    Usage:
        async with get_async_db() as db:
            await create_empty_invoice(db, email, "full")
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_async_database_connection() -> bool:
    """Check if async database connection is working."""
    try:
        async with get_async_db() as db:
            await db.execute(text("SELECT 1"))
        return True
    except Exception as e:  # noqa: BLE001
        logger.error(f"Async database connection check failed: {e}")
        return False


__all__ = [
    "DatabaseConfig",
    "db_config",
    "async_engine",
    "AsyncSessionLocal",
    "create_database_tables",
    "drop_database_tables",
    "get_async_db",
    "check_async_database_connection",
]
