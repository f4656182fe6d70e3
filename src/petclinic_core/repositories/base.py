"""
Base repository for the petclinic-core package.

Each repository call is one unit of work: it opens a session through the
``SessionManager``, runs in a single transaction and returns detached
entities with their documented relationships already loaded. Entities are
never deleted; ``save`` is an insert-or-update.

Subclasses set ``model`` and add their own query methods:

    class OwnerRepository(BaseRepository[Owner]):
        model = Owner
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Generic, Optional, Type, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import SessionManager
from ..exceptions import (
    EntityNotFoundException,
    PetClinicException,
    TransactionException,
    log_exception_context,
)
from ..models.base import BaseModel

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """Generic find / save / count operations over one model."""

    model: Type[T]

    def __init__(self, session_manager: SessionManager):
        """
        Initialize the repository.

        Args:
            session_manager: Source of units of work
        """
        self.session_manager = session_manager

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    @asynccontextmanager
    async def _unit_of_work(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """
        Run a block in one transaction, translating database failures.

        Expected outcomes (not-found, validation) propagate unchanged. Any
        SQLAlchemy error is logged with context and re-raised as a
        ``TransactionException``.

        Args:
            operation: Name used in logs and exception details
        """
        try:
            async with self.session_manager.get_transaction() as session:
                yield session
        except PetClinicException:
            raise
        except SQLAlchemyError as e:
            log_exception_context(
                e,
                {"repository": self.__class__.__name__, "operation": operation},
                logger,
            )
            raise TransactionException(
                f"{self.entity_name} {operation} failed",
                operation=f"{self.__class__.__name__}.{operation}",
                original_error=e,
            ) from e

    async def find_by_id(self, entity_id: int) -> Optional[T]:
        """
        Load one entity by identifier.

        Args:
            entity_id: Identifier to look up

        Returns:
            The entity, or None when no row has that identifier
        """
        if entity_id is None:
            return None

        async with self._unit_of_work("find_by_id") as session:
            entity = await session.get(self.model, entity_id)

        if entity is None:
            logger.debug(f"{self.entity_name} {entity_id} not found")
        else:
            logger.debug(f"Loaded {entity!r}")
        return entity

    async def get_by_id(self, entity_id: int) -> T:
        """
        Load one entity by identifier, raising when it does not exist.

        Raises:
            EntityNotFoundException: If no row has that identifier
        """
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundException(self.entity_name, entity_id)
        return entity

    async def count(self) -> int:
        """Return the number of stored rows."""
        async with self._unit_of_work("count") as session:
            return await session.scalar(select(func.count()).select_from(self.model))

    async def save(self, entity: T) -> T:
        """
        Insert or update an entity.

        - a new entity (``id is None``) is inserted and receives its id;
        - an entity previously returned by this package is updated in place;
        - a freshly constructed entity carrying an id (e.g. bound from a form)
          overwrites the stored row's columns with the ones it has set.

        Validation runs before anything is written, so a rejected entity
        leaves the database untouched.

        Args:
            entity: Entity to persist

        Returns:
            The persisted entity with relationships loaded. For a form-bound
            entity this is the stored instance, not the argument.

        Raises:
            ValidationException: If the entity fails validation
            EntityNotFoundException: If a form-bound entity's id does not exist
            TransactionException: If the database rejects the write
        """
        is_insert = entity.is_new()

        async with self._unit_of_work("save") as session:
            await self._validate(session, entity)
            target = await self._attach(session, entity)
            await session.flush()
            await session.refresh(target)

        if is_insert:
            logger.info(f"Inserted {target!r}")
        else:
            logger.info(f"Updated {target!r}")
        return target

    async def _validate(self, session: AsyncSession, entity: T) -> None:
        """Hook for entity checks that must pass before any write."""

    async def _attach(self, session: AsyncSession, entity: T) -> T:
        """Put the entity into the session as an insert or an update."""
        state = inspect(entity)

        if entity.is_new() or not state.transient:
            session.add(entity)
            return entity

        # Constructed with an id but never loaded: copy onto the stored row
        stored = await session.get(self.model, entity.id)
        if stored is None:
            raise EntityNotFoundException(self.entity_name, entity.id)

        for attr in self.model.__mapper__.column_attrs:
            if attr.key != "id" and attr.key in state.dict:
                setattr(stored, attr.key, getattr(entity, attr.key))
        return stored
