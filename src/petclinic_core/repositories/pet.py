"""
Pet repository, including the pet type lookup.
"""

import logging
from typing import List

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import BusinessRuleException, ValidationException
from ..models.owner import Owner
from ..models.pet import Pet, PetType
from .base import BaseRepository

logger = logging.getLogger(__name__)


class PetRepository(BaseRepository[Pet]):
    """
    Reads and writes pets.

    A pet returned from here always carries its type and its complete visit
    history.
    """

    model = Pet

    async def find_by_owner_id(self, owner_id: int) -> List[Pet]:
        """
        List the pets registered to an owner.

        Args:
            owner_id: Identifier of the owner

        Returns:
            The owner's pets ordered by name (empty if none)
        """
        stmt = select(Pet).where(Pet.owner_id == owner_id).order_by(Pet.name, Pet.id)

        async with self._unit_of_work("find_by_owner_id") as session:
            pets = list((await session.scalars(stmt)).all())

        logger.debug(f"Found {len(pets)} pets for owner {owner_id}")
        return pets

    async def find_pet_types(self) -> List[PetType]:
        """Return every pet type ordered by name."""
        stmt = select(PetType).order_by(PetType.name)

        async with self._unit_of_work("find_pet_types") as session:
            return list((await session.scalars(stmt)).all())

    async def _validate(self, session: AsyncSession, pet: Pet) -> None:
        """
        Check a pet before it is written.

        Raises:
            ValidationException: If the name, owner or type is missing
            BusinessRuleException: If the owner or type does not exist
        """
        if not pet.name or not pet.name.strip():
            raise ValidationException("Pet name is required", field="name")

        # A newly assigned type object wins over a stale type_id
        if inspect(pet).attrs.type.history.has_changes():
            if pet.type is None:
                raise ValidationException("Pet type is required", field="type")
            if pet.type.id is not None:
                pet.type_id = pet.type.id
        elif pet.type_id is None:
            raise ValidationException("Pet type is required", field="type")

        if pet.type_id is not None:
            type_exists = await session.scalar(
                select(PetType.id).where(PetType.id == pet.type_id)
            )
            if type_exists is None:
                raise BusinessRuleException(
                    f"Pet type {pet.type_id} does not exist",
                    rule_name="pet_type_exists",
                    context={"type_id": pet.type_id},
                )

        if pet.owner_id is None:
            raise ValidationException("Pet owner is required", field="owner_id")

        owner_exists = await session.scalar(
            select(Owner.id).where(Owner.id == pet.owner_id)
        )
        if owner_exists is None:
            raise BusinessRuleException(
                f"Owner {pet.owner_id} does not exist",
                rule_name="pet_owner_exists",
                context={"owner_id": pet.owner_id},
            )
