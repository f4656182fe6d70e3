"""
Vet repository.
"""

import logging
from typing import List

from sqlalchemy import select

from ..models.vet import Vet
from .base import BaseRepository

logger = logging.getLogger(__name__)


class VetRepository(BaseRepository[Vet]):
    """Reads vets together with their specialties."""

    model = Vet

    async def find_all(self) -> List[Vet]:
        """Return every vet ordered by last name, then first name."""
        stmt = select(Vet).order_by(Vet.last_name, Vet.first_name, Vet.id)

        async with self._unit_of_work("find_all") as session:
            vets = list((await session.scalars(stmt)).all())

        logger.debug(f"Found {len(vets)} vets")
        return vets
