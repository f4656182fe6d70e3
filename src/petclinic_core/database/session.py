"""
Database session management for the petclinic-core package.

``SessionManager`` owns the async session factory. Every repository call
opens one session through ``get_transaction``, runs inside one transaction
and closes the session before returning. Sessions do not expire on commit,
so entities stay readable after their unit of work has ended.

The manager is constructed explicitly and passed to the repositories; see
``petclinic_core.repositories.context``.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..exceptions import (
    ConnectionException,
    DatabaseException,
    PetClinicException,
    TransactionException,
)

logger = logging.getLogger(__name__)

# Failures worth repeating: the connection dropped or the database was busy
RETRYABLE_ERRORS = (DisconnectionError, OperationalError)


class SessionManager:
    """Creates sessions and units of work over one engine."""

    def __init__(
        self, engine: AsyncEngine, session_config: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            engine: SQLAlchemy async engine
            session_config: Overrides for ``async_sessionmaker`` options
        """
        self.engine = engine
        self._is_initialized = False

        options: Dict[str, Any] = {"expire_on_commit": False, "autoflush": True}
        options.update(session_config or {})
        self.session_factory = async_sessionmaker(
            bind=engine, class_=AsyncSession, **options
        )

    @property
    def is_initialized(self) -> bool:
        """True once ``initialize_database`` has succeeded."""
        return self._is_initialized

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session that is rolled back on error and always closed.

        Example:
            async with session_manager.get_session() as session:
                result = await session.execute(select(Owner))
        """
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.debug(f"Session rolled back: {e!r}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One unit of work: commit when the block succeeds, roll back otherwise.

        Example:
            async with session_manager.get_transaction() as session:
                session.add(Owner(...))
        """
        async with self.get_session() as session:
            async with session.begin():
                try:
                    yield session
                except PetClinicException:
                    # Validation and not-found outcomes are not database errors
                    raise
                except Exception as e:
                    logger.error(f"Transaction error, rolling back: {e}")
                    raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Run a trivial query inside a unit of work.

        Returns:
            ``{"status": "healthy", "response_time": ms}`` or
            ``{"status": "unhealthy", "error": ..., "error_type": ...}``
        """
        start_time = time.time()
        try:
            async with self.get_transaction() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "error_type": e.__class__.__name__,
            }

        return {
            "status": "healthy",
            "response_time": round((time.time() - start_time) * 1000, 2),
        }

    async def initialize_database(self, metadata: Optional[MetaData] = None) -> None:
        """
        Check the connection and create missing tables from model metadata.

        Intended for tests and local development; deployed databases are
        migrated with Alembic instead.

        Args:
            metadata: Table definitions to create, usually ``Base.metadata``

        Raises:
            ConnectionException: If the database cannot be reached
            DatabaseException: If the tables cannot be created
        """
        health = await self.health_check()
        if health["status"] != "healthy":
            raise ConnectionException(
                "Database is not reachable",
                database_url=str(self.engine.url),
                original_error=Exception(health["error"]),
            )

        if metadata is not None:
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
            except SQLAlchemyError as e:
                raise DatabaseException(
                    "Could not create the database schema", original_error=e
                ) from e
            logger.info(f"Database schema ready ({len(metadata.tables)} tables)")

        self._is_initialized = True

    async def close_all_sessions(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
        self._is_initialized = False
        logger.info("Database connections closed")

    async def execute_with_retry(
        self,
        operation: Callable[[AsyncSession], Awaitable[Any]],
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> Any:
        """
        Run ``operation(session)`` in a unit of work, retrying transient failures.

        Only connection-level errors are retried, with exponential backoff.
        The repositories never call this themselves; it is for callers that
        know their operation is safe to repeat.

        Args:
            operation: Async function taking the session
            max_retries: Retries after the first attempt
            retry_delay: Delay before the first retry, doubled each attempt

        Returns:
            Result of the operation

        Raises:
            TransactionException: On a non-retryable database error
            DatabaseException: When every attempt failed
        """
        name = getattr(operation, "__name__", repr(operation))

        for attempt in range(max_retries + 1):
            try:
                async with self.get_transaction() as session:
                    return await operation(session)
            except RETRYABLE_ERRORS as e:
                if attempt == max_retries:
                    logger.error(
                        f"Database operation '{name}' failed after {attempt + 1} attempts: {e}"
                    )
                    raise DatabaseException(
                        f"Database operation failed after {attempt + 1} attempts",
                        details={"operation": name, "attempts": attempt + 1},
                        original_error=e,
                    ) from e

                delay = retry_delay * (2**attempt)
                logger.warning(
                    f"Database operation '{name}' failed "
                    f"(attempt {attempt + 1}/{max_retries + 1}), retrying in {delay}s: {e}"
                )
                await asyncio.sleep(delay)
            except PetClinicException:
                raise
            except SQLAlchemyError as e:
                raise TransactionException(
                    "Database operation failed", operation=name, original_error=e
                ) from e
