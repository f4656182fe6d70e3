"""
Explicit wiring of the repositories.

The application builds one ``RepositoryContext`` at start-up and hands it to
its request handlers; nothing is looked up from global state.

Example:
    >>> settings = PetClinicSettings.from_environment()
    >>> context = await bootstrap(settings, seed=True)
    >>> owners = await context.owners.find_by_last_name("Davis")
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database.connection import create_engine_from_settings
from ..database.seed import seed_reference_data
from ..database.session import SessionManager
from ..exceptions import DatabaseException, PetClinicException
from ..models import Base
from ..models.pet import Pet
from ..models.visit import Visit
from ..utils.config import PetClinicSettings, configure_logging
from .owner import OwnerRepository
from .pet import PetRepository
from .vet import VetRepository
from .visit import VisitRepository

logger = logging.getLogger(__name__)


@dataclass
class RepositoryContext:
    """The repositories an application needs, sharing one session manager."""

    session_manager: SessionManager
    owners: OwnerRepository
    pets: PetRepository
    visits: VisitRepository
    vets: VetRepository

    async def record_visit(self, pet: Pet, visit: Visit) -> Pet:
        """
        Attach a visit to a pet and persist both.

        The visit is saved first, then the pet. When the visit is rejected
        nothing is written and the pet is left as it was.

        Args:
            pet: A persisted pet
            visit: A new visit

        Returns:
            The saved pet, with the new visit in its history

        Raises:
            ValidationException: If the visit fails validation
        """
        pet.add_visit(visit)
        try:
            await self.visits.save(visit)
        except PetClinicException:
            if visit in pet.visits:
                pet.visits.remove(visit)
            raise
        return await self.pets.save(pet)

    async def close(self) -> None:
        await self.session_manager.close_all_sessions()


def create_repository_context(
    session_manager: SessionManager, settings: Optional[PetClinicSettings] = None
) -> RepositoryContext:
    """
    Build the repositories over one session manager.

    Args:
        session_manager: Source of units of work
        settings: Package settings; defaults are used when omitted

    Returns:
        Ready-to-use repository context
    """
    settings = settings or PetClinicSettings()
    return RepositoryContext(
        session_manager=session_manager,
        owners=OwnerRepository(
            session_manager, case_sensitive=settings.last_name_case_sensitive
        ),
        pets=PetRepository(session_manager),
        visits=VisitRepository(session_manager),
        vets=VetRepository(session_manager),
    )


async def bootstrap(
    settings: Optional[PetClinicSettings] = None,
    create_schema: bool = True,
    seed: bool = False,
) -> RepositoryContext:
    """
    Configure logging, connect, optionally create and seed the schema.

    Args:
        settings: Package settings; read from the environment when omitted
        create_schema: Create missing tables from the models
        seed: Load the sample clinic into an empty database

    Returns:
        Repository context bound to the configured database

    Raises:
        ConnectionException: If the database cannot be reached
        DatabaseException: If the schema or the sample data cannot be written
    """
    settings = settings or PetClinicSettings.from_environment()
    configure_logging(settings)

    session_manager = SessionManager(create_engine_from_settings(settings))

    try:
        # Always checks the connection, even without schema creation
        await session_manager.initialize_database(
            Base.metadata if create_schema else None
        )
        if seed:
            await seed_reference_data(session_manager)
    except SQLAlchemyError as e:
        await session_manager.close_all_sessions()
        raise DatabaseException(
            "Could not load the sample clinic", original_error=e
        ) from e
    except PetClinicException:
        await session_manager.close_all_sessions()
        raise

    logger.info("Repository context ready")
    return create_repository_context(session_manager, settings)
