"""
Petclinic Core Package

The data-access core of a veterinary clinic record-keeping application.
It manages owners, their pets and pet types, visit history, and vets with
their specialties over a relational database. Records are created, read,
updated, listed and searched; nothing is ever deleted.

This package includes:

- SQLAlchemy models for Owner, Pet, PetType, Visit, Vet and Specialty
- Async repositories, one unit of work per call
- ``OwnerView``, a read-only owner projection for presentation
- Pydantic schemas for validating form input
- Database utilities, Alembic migrations and a sample data set

Quick Start:
    >>> from petclinic_core import bootstrap, OwnerView
    >>> context = await bootstrap(seed=True)
    >>> owner = await context.owners.find_by_id(1)
    >>> OwnerView.from_owner(owner).name
    'George Franklin'

Requirements:
    - Python 3.11+
    - SQLAlchemy 2.0+
    - Pydantic 2.5+
    - PostgreSQL 13+ (asyncpg) or SQLite (aiosqlite)
"""

__version__ = "0.1.0"

from . import database, exceptions, models, repositories, schemas, utils

# Convenience imports for common usage patterns
from .database import SessionManager, create_engine
from .exceptions import (
    DatabaseException,
    EntityNotFoundException,
    PetClinicException,
    ValidationException,
)
from .models import Address, Name, Owner, Pet, PetType, Specialty, Vet, Visit
from .repositories import RepositoryContext, bootstrap, create_repository_context
from .schemas import OwnerView
from .utils import PetClinicSettings

__all__ = [
    "__version__",
    # Core modules
    "database",
    "exceptions",
    "models",
    "repositories",
    "schemas",
    "utils",
    # Convenience imports
    "SessionManager",
    "create_engine",
    "PetClinicException",
    "EntityNotFoundException",
    "ValidationException",
    "DatabaseException",
    "Name",
    "Address",
    "Owner",
    "Pet",
    "PetType",
    "Visit",
    "Vet",
    "Specialty",
    "OwnerView",
    "RepositoryContext",
    "create_repository_context",
    "bootstrap",
    "PetClinicSettings",
]
