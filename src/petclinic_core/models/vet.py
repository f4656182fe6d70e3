"""
Vet and Specialty models for the petclinic-core package.
"""

from typing import List

from sqlalchemy import Column, ForeignKey, Index, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BaseModel

# Association table between vets and their specialties
vet_specialties = Table(
    "vet_specialties",
    Base.metadata,
    Column("vet_id", ForeignKey("vets.id"), primary_key=True),
    Column("specialty_id", ForeignKey("specialties.id"), primary_key=True),
)


class Specialty(BaseModel):
    """A veterinary specialty such as radiology or surgery."""

    __tablename__ = "specialties"

    name: Mapped[str] = mapped_column(
        String(80), nullable=False, index=True, comment="Specialty name"
    )

    def __repr__(self) -> str:
        return f"<Specialty(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name


class Vet(BaseModel):
    """
    A veterinarian working at the clinic.

    Specialties are always loaded with the vet and sorted by name.
    """

    __tablename__ = "vets"

    first_name: Mapped[str] = mapped_column(
        String(30), nullable=False, comment="Vet's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True, comment="Vet's last name"
    )

    specialties: Mapped[List[Specialty]] = relationship(
        Specialty,
        secondary=vet_specialties,
        lazy="selectin",
        order_by=Specialty.name,
    )

    __table_args__ = (Index("idx_vets_last_first", "last_name", "first_name"),)

    def __repr__(self) -> str:
        return f"<Vet(id={self.id}, name='{self.first_name} {self.last_name}')>"

    @property
    def full_name(self) -> str:
        """Get vet's full name."""
        return f"{self.first_name} {self.last_name}"

    def add_specialty(self, specialty: Specialty) -> None:
        """Add a specialty, keeping the list sorted by name."""
        if specialty not in self.specialties:
            self.specialties.append(specialty)
            self.specialties.sort(key=lambda s: s.name)
