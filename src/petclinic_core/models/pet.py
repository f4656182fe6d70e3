"""
Pet and PetType models for the petclinic-core package.

A Pet always carries its full visit history: the ``visits`` relationship is
loaded eagerly with every pet, so callers never trigger lazy loads on a
detached instance.
"""

from datetime import date
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .visit import Visit


class PetType(BaseModel):
    """Lookup value naming a kind of animal (cat, dog, snake, ...)."""

    __tablename__ = "types"

    name: Mapped[str] = mapped_column(
        String(80), nullable=False, index=True, comment="Kind of animal"
    )

    def __repr__(self) -> str:
        return f"<PetType(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name


class Pet(BaseModel):
    """
    A pet registered to an owner.

    The owner is referenced by ``owner_id`` only. Visits are attached through
    :meth:`add_visit`, which also sets each visit's ``pet_id``.
    """

    __tablename__ = "pets"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Pet with an empty visit history if none is given."""
        if "visits" not in kwargs:
            kwargs["visits"] = []

        super().__init__(**kwargs)

    name: Mapped[str] = mapped_column(String(30), nullable=False, comment="Pet's name")

    birth_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Pet's birth date"
    )

    type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("types.id"),
        nullable=True,
        comment="Kind of animal",
    )

    owner_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("owners.id"),
        nullable=False,
        index=True,
        comment="Owner of the pet",
    )

    type: Mapped[Optional[PetType]] = relationship(PetType, lazy="joined")

    visits: Mapped[List["Visit"]] = relationship(
        "Visit",
        cascade="save-update, merge",
        lazy="selectin",
        order_by="Visit.id",
    )

    __table_args__ = (Index("idx_pets_owner_name", "owner_id", "name"),)

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"

    def __str__(self) -> str:
        return self.name

    def add_visit(self, visit: "Visit") -> None:
        """
        Attach a visit to this pet.

        Sets ``visit.pet_id`` to this pet's id as a side effect. Adding the
        same visit twice has no further effect.

        Args:
            visit: Visit to attach
        """
        if visit not in self.visits:
            self.visits.append(visit)
        visit.pet_id = self.id

    def get_visits(self) -> Tuple["Visit", ...]:
        """
        Return this pet's visits, most recent first.

        Visits sharing a date keep their identifier order.

        Returns:
            Immutable tuple of visits sorted by date descending
        """
        return tuple(sorted(self.visits, key=lambda visit: visit.date, reverse=True))
