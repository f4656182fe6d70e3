"""
Pytest configuration and fixtures for petclinic-core tests.

This module provides common fixtures for all tests in the package,
including a throwaway SQLite database per test, the seeded sample clinic,
repository wiring and factory classes.
"""

from datetime import date, datetime
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from petclinic_core.database.connection import create_engine
from petclinic_core.database.seed import seed_reference_data
from petclinic_core.database.session import SessionManager
from petclinic_core.models import (
    Address,
    Base,
    Name,
    Owner,
    Pet,
    PetType,
    Specialty,
    Vet,
    Visit,
)
from petclinic_core.repositories import RepositoryContext, create_repository_context
from petclinic_core.utils.config import PetClinicSettings


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """A file-backed SQLite database private to one test."""
    return sqlite_url(tmp_path / "petclinic_test.db")


@pytest_asyncio.fixture
async def test_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine."""
    engine = create_engine(database_url, echo=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_manager(
    test_engine: AsyncEngine,
) -> AsyncGenerator[SessionManager, None]:
    """Create a session manager over an empty schema."""
    session_manager = SessionManager(test_engine)
    await session_manager.initialize_database(Base.metadata)

    yield session_manager

    await session_manager.close_all_sessions()


@pytest_asyncio.fixture
async def seeded_session_manager(
    test_session_manager: SessionManager,
) -> SessionManager:
    """Session manager over a database holding the sample clinic."""
    await seed_reference_data(test_session_manager)
    return test_session_manager


@pytest_asyncio.fixture
async def async_session(
    test_session_manager: SessionManager,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide an async database session for model-level tests.

    Work done in the session is rolled back when the test ends.
    """
    async with test_session_manager.get_session() as session:
        transaction = await session.begin()
        try:
            yield session
        finally:
            await transaction.rollback()


@pytest.fixture
def settings(database_url: str) -> PetClinicSettings:
    return PetClinicSettings(database_url=database_url)


@pytest.fixture
def repositories(
    seeded_session_manager: SessionManager, settings: PetClinicSettings
) -> RepositoryContext:
    """Repositories over the seeded sample clinic."""
    return create_repository_context(seeded_session_manager, settings)


@pytest.fixture
def empty_repositories(
    test_session_manager: SessionManager, settings: PetClinicSettings
) -> RepositoryContext:
    """Repositories over an empty schema."""
    return create_repository_context(test_session_manager, settings)


# Factory classes for creating test entities
class OwnerFactory:
    """Factory for creating test Owner instances."""

    @staticmethod
    def build(**kwargs) -> Owner:
        """Build an Owner instance without saving to database."""
        defaults = {
            "name": Name("Sam", "Schultz"),
            "address": Address("Wollongong", "4, Evans Street"),
            "telephone": "4444444444",
        }
        defaults.update(kwargs)
        return Owner(**defaults)

    @staticmethod
    async def create(session: AsyncSession, **kwargs) -> Owner:
        """Create and save an Owner instance to the database."""
        owner = OwnerFactory.build(**kwargs)
        session.add(owner)
        await session.flush()
        await session.refresh(owner)
        return owner


class PetTypeFactory:
    """Factory for creating test PetType instances."""

    @staticmethod
    def build(**kwargs) -> PetType:
        defaults = {"name": "dog"}
        defaults.update(kwargs)
        return PetType(**defaults)

    @staticmethod
    async def create(session: AsyncSession, **kwargs) -> PetType:
        pet_type = PetTypeFactory.build(**kwargs)
        session.add(pet_type)
        await session.flush()
        return pet_type


class PetFactory:
    """Factory for creating test Pet instances."""

    @staticmethod
    def build(**kwargs) -> Pet:
        """Build a Pet instance without saving to database."""
        defaults = {
            "name": "bowser",
            "birth_date": date(2020, 5, 17),
        }
        defaults.update(kwargs)
        return Pet(**defaults)

    @staticmethod
    async def create(session: AsyncSession, owner: Owner, **kwargs) -> Pet:
        """Create and save a Pet for the given owner."""
        if "type" not in kwargs and "type_id" not in kwargs:
            kwargs["type"] = await PetTypeFactory.create(session)
        pet = PetFactory.build(owner_id=owner.id, **kwargs)
        session.add(pet)
        await session.flush()
        await session.refresh(pet)
        return pet


class VisitFactory:
    """Factory for creating test Visit instances."""

    @staticmethod
    def build(**kwargs) -> Visit:
        defaults = {"description": "annual checkup"}
        defaults.update(kwargs)
        return Visit(**defaults)


class VetFactory:
    """Factory for creating test Vet instances."""

    @staticmethod
    def build(specialties=None, **kwargs) -> Vet:
        defaults = {"first_name": "Test", "last_name": "Vet"}
        defaults.update(kwargs)
        vet = Vet(**defaults)
        for name in specialties or []:
            vet.specialties.append(Specialty(name=name))
        return vet

    @staticmethod
    async def create(session: AsyncSession, specialties=None, **kwargs) -> Vet:
        vet = VetFactory.build(specialties=specialties, **kwargs)
        session.add(vet)
        await session.flush()
        await session.refresh(vet)
        return vet


@pytest.fixture
def owner_factory() -> OwnerFactory:
    return OwnerFactory()


@pytest.fixture
def pet_factory() -> PetFactory:
    return PetFactory()


@pytest.fixture
def visit_factory() -> VisitFactory:
    return VisitFactory()


@pytest.fixture
def vet_factory() -> VetFactory:
    return VetFactory()


@pytest.fixture
def fixed_visit_date() -> datetime:
    return datetime(2024, 3, 1, 9, 30)
