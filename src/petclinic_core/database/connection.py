"""
Database connection utilities for the petclinic-core package.

This module provides async SQLAlchemy engine configuration and connection
management for PostgreSQL (asyncpg) and SQLite (aiosqlite) databases.
"""

import logging
from typing import Any, Dict

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool, StaticPool

from ..utils.config import DatabaseURLValidator, PetClinicSettings

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = (
    ("postgresql://", "postgresql+asyncpg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)


class DatabaseConfig:
    """
    Validated connection settings.

    Plain ``postgresql://`` and ``sqlite://`` URLs are rewritten to their
    async drivers before validation.

    Raises:
        DatabaseConfigException: If the URL is missing, malformed or unsupported
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        echo: bool = False,
    ):
        self.database_url = self.get_async_url(database_url)
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.echo = echo

        self.url_info = DatabaseURLValidator.validate_url(self.database_url)

    @staticmethod
    def get_async_url(database_url: str) -> str:
        for plain, driver in ASYNC_DRIVERS:
            if database_url.startswith(plain):
                return driver + database_url[len(plain):]
        return database_url

    @property
    def is_sqlite(self) -> bool:
        return self.url_info["dialect"] == "sqlite"

    @property
    def is_memory(self) -> bool:
        """True for an in-memory SQLite database."""
        return self.is_sqlite and self.url_info["database"] in ("", ":memory:")

    def engine_options(self, use_null_pool: bool = False) -> Dict[str, Any]:
        """
        Keyword arguments for ``create_async_engine``.

        PostgreSQL gets a pre-pinged queue pool. A SQLite file uses NullPool,
        and in-memory SQLite a StaticPool so that every session sees the same
        database.
        """
        if self.is_memory:
            return {"echo": self.echo, "poolclass": StaticPool}
        if use_null_pool or self.is_sqlite:
            return {"echo": self.echo, "poolclass": NullPool}
        return {
            "echo": self.echo,
            "poolclass": AsyncAdaptedQueuePool,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
        }


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores foreign keys unless the pragma is set on each connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
    use_null_pool: bool = False,
) -> AsyncEngine:
    """
    Create an async SQLAlchemy engine.

    SQLite connections always enforce foreign keys.

    Args:
        database_url: Database connection URL
        pool_size: Connections kept in the pool (PostgreSQL only)
        max_overflow: Extra connections allowed beyond the pool
        echo: Whether to echo SQL statements
        use_null_pool: Open a fresh connection for every checkout

    Returns:
        Configured async SQLAlchemy engine

    Raises:
        DatabaseConfigException: If database URL is invalid
    """
    config = DatabaseConfig(
        database_url, pool_size=pool_size, max_overflow=max_overflow, echo=echo
    )

    engine = create_async_engine(
        config.database_url, **config.engine_options(use_null_pool)
    )
    if config.is_sqlite:
        _enable_sqlite_foreign_keys(engine)

    target = config.url_info["hostname"] or config.url_info["database"] or "memory"
    logger.info(f"Created {config.url_info['dialect']} engine for {target}")
    return engine


def create_engine_from_settings(settings: PetClinicSettings) -> AsyncEngine:
    """
    Create the engine described by the package settings.

    Args:
        settings: Settings, usually from ``PetClinicSettings.from_environment()``

    Returns:
        Configured async SQLAlchemy engine
    """
    return create_engine(
        settings.database_url,
        pool_size=settings.pool_size,
        echo=settings.echo,
    )


async def get_database_info(engine: AsyncEngine) -> dict:
    """
    Get basic information about the connected database.

    Args:
        engine: SQLAlchemy async engine

    Returns:
        Dictionary with the dialect, server version and table count
    """
    info: Dict[str, Any] = {"dialect": engine.dialect.name}

    try:
        async with engine.begin() as conn:
            if engine.dialect.name == "sqlite":
                version_result = await conn.execute(text("SELECT sqlite_version()"))
                table_sql = "SELECT count(*) FROM sqlite_master WHERE type = 'table'"
            else:
                version_result = await conn.execute(text("SELECT version()"))
                table_sql = (
                    "SELECT count(*) FROM information_schema.tables "
                    "WHERE table_schema = current_schema()"
                )
            info["version"] = version_result.scalar()

            table_result = await conn.execute(text(table_sql))
            info["table_count"] = table_result.scalar()

    except SQLAlchemyError as e:
        logger.error(f"Error getting database info: {e}")
        info["error"] = str(e)

    return info
