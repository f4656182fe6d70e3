"""
Repositories: the persistence operations of the clinic.

Every call is one unit of work. Single-entity lookups return ``None`` when
nothing matches; searches return an (possibly empty) list.
"""

from .base import BaseRepository
from .context import RepositoryContext, bootstrap, create_repository_context
from .owner import OwnerRepository
from .pet import PetRepository
from .vet import VetRepository
from .visit import VisitRepository

__all__ = [
    "BaseRepository",
    "OwnerRepository",
    "PetRepository",
    "VisitRepository",
    "VetRepository",
    "RepositoryContext",
    "create_repository_context",
    "bootstrap",
]
