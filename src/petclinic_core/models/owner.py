"""
Owner model for the petclinic-core package.

An Owner's name and address are immutable value objects mapped as SQLAlchemy
composites over plain columns. Owners hold no pet collection; pets point back
at their owner through ``pets.owner_id``.
"""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, composite, mapped_column

from .base import BaseModel


@dataclass(frozen=True)
class Name:
    """A person's first and last name."""

    first_name: Optional[str]
    last_name: Optional[str]

    def combined(self) -> str:
        """Return the display form, ``"first last"``."""
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Address:
    """The city and first street line of a postal address."""

    city: Optional[str]
    first_line: Optional[str]


class Owner(BaseModel):
    """
    A pet owner registered with the clinic.

    Example:
        >>> owner = Owner(
        ...     name=Name("George", "Franklin"),
        ...     address=Address("Madison", "110 W. Liberty St."),
        ...     telephone="6085551023",
        ... )
        >>> owner.name.combined()
        'George Franklin'
        >>> owner.last_name
        'Franklin'
    """

    __tablename__ = "owners"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Owner, accepting ``phone_number`` as an alias of ``telephone``."""
        if "phone_number" in kwargs:
            kwargs["telephone"] = kwargs.pop("phone_number")

        super().__init__(**kwargs)

    first_name: Mapped[str] = mapped_column(
        String(30), nullable=False, comment="Owner's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True, comment="Owner's last name"
    )

    address_city: Mapped[str] = mapped_column(
        String(80), nullable=False, comment="City of the owner's address"
    )

    address_first_line: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="First street line of the address"
    )

    telephone: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="Contact telephone number, digits only"
    )

    # Value objects over the columns above
    name: Mapped[Name] = composite(Name, "first_name", "last_name")
    address: Mapped[Address] = composite(Address, "address_city", "address_first_line")

    __table_args__ = (
        Index("idx_owners_last_first", "last_name", "first_name"),
    )

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name='{self.first_name} {self.last_name}')>"

    @property
    def phone_number(self) -> str:
        return self.telephone

    def rename(self, name: Name) -> None:
        """
        Replace the owner's name.

        Args:
            name: The new name value object

        Note:
            The change is persisted by passing the owner to
            ``OwnerRepository.save``.
        """
        self.name = name

    def relocate(self, address: Address) -> None:
        """Replace the owner's address."""
        self.address = address

    def change_telephone(self, telephone: str) -> None:
        self.telephone = telephone
