"""
Visit repository.
"""

import logging
from typing import List

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import BusinessRuleException, ValidationException
from ..models.pet import Pet
from ..models.visit import Visit
from .base import BaseRepository

logger = logging.getLogger(__name__)


class VisitRepository(BaseRepository[Visit]):
    """Reads and writes visits."""

    model = Visit

    async def find_by_pet_id(self, pet_id: int) -> List[Visit]:
        """
        List the visits of one pet.

        Args:
            pet_id: Identifier of the pet

        Returns:
            The pet's visits in the order they were recorded
        """
        stmt = select(Visit).where(Visit.pet_id == pet_id).order_by(Visit.id)

        async with self._unit_of_work("find_by_pet_id") as session:
            visits = list((await session.scalars(stmt)).all())

        logger.debug(f"Found {len(visits)} visits for pet {pet_id}")
        return visits

    async def _validate(self, session: AsyncSession, visit: Visit) -> None:
        """
        Check a visit before it is written.

        Raises:
            ValidationException: If the description or pet is missing
            BusinessRuleException: If the pet does not exist
        """
        if visit.description is None or not visit.description.strip():
            raise ValidationException(
                "Visit description must not be empty",
                field="description",
                value=visit.description,
            )

        # A form-bound visit without a date keeps the stored one
        if visit.date is None and (visit.is_new() or "date" in inspect(visit).dict):
            raise ValidationException("Visit date is required", field="date")

        if visit.pet_id is None:
            raise ValidationException(
                "Visit must belong to a pet; use Pet.add_visit first", field="pet_id"
            )

        pet_exists = await session.scalar(select(Pet.id).where(Pet.id == visit.pet_id))
        if pet_exists is None:
            raise BusinessRuleException(
                f"Pet {visit.pet_id} does not exist",
                rule_name="visit_pet_exists",
                context={"pet_id": visit.pet_id},
            )
