"""
Owner Pydantic schemas for validation and serialization.

This module contains the create, update and response schemas for owners,
and ``OwnerView``, the read-only projection handed to templates.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.owner import Address, Name, Owner
from ..utils.validation import normalize_telephone, require_text


class OwnerBase(BaseModel):
    """Fields shared by owner create and update schemas."""

    first_name: str = Field(..., max_length=30, description="Owner's first name")
    last_name: str = Field(..., max_length=30, description="Owner's last name")
    address_city: str = Field(..., max_length=80, description="City")
    address_first_line: str = Field(
        ..., max_length=255, description="First street line of the address"
    )
    telephone: str = Field(..., description="Telephone number, up to 10 digits")

    @field_validator("first_name", "last_name", "address_city", "address_first_line")
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        """Strip whitespace and reject empty values."""
        return require_text(v, info.field_name)

    @field_validator("telephone")
    @classmethod
    def validate_telephone(cls, v: str) -> str:
        return normalize_telephone(v)


class OwnerCreate(OwnerBase):
    """Schema for registering a new owner."""

    def to_model(self) -> Owner:
        """Build a transient Owner ready for ``OwnerRepository.save``."""
        return Owner(
            name=Name(self.first_name, self.last_name),
            address=Address(self.address_city, self.address_first_line),
            telephone=self.telephone,
        )


class OwnerUpdate(BaseModel):
    """
    Schema for editing an existing owner.

    Only the fields that are provided are applied.
    """

    first_name: Optional[str] = Field(None, max_length=30)
    last_name: Optional[str] = Field(None, max_length=30)
    address_city: Optional[str] = Field(None, max_length=80)
    address_first_line: Optional[str] = Field(None, max_length=255)
    telephone: Optional[str] = Field(None)

    @field_validator("first_name", "last_name", "address_city", "address_first_line")
    @classmethod
    def validate_optional_text(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, info.field_name)

    @field_validator("telephone")
    @classmethod
    def validate_telephone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return normalize_telephone(v)

    @model_validator(mode="after")
    def validate_not_empty(self) -> "OwnerUpdate":
        """Ensure at least one field is being changed."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def apply_to(self, owner: Owner) -> Owner:
        """
        Apply the provided fields to an owner through its domain methods.

        Args:
            owner: Owner previously loaded from the repository

        Returns:
            The same owner, modified in place
        """
        if self.first_name is not None or self.last_name is not None:
            owner.rename(
                Name(
                    self.first_name or owner.first_name,
                    self.last_name or owner.last_name,
                )
            )
        if self.address_city is not None or self.address_first_line is not None:
            owner.relocate(
                Address(
                    self.address_city or owner.address_city,
                    self.address_first_line or owner.address_first_line,
                )
            )
        if self.telephone is not None:
            owner.change_telephone(self.telephone)
        return owner


class OwnerResponse(BaseModel):
    """Schema for owner response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Owner's identifier")
    first_name: str
    last_name: str
    address_city: str
    address_first_line: str
    telephone: str


class OwnerView(BaseModel):
    """
    Read-only projection of an Owner for presentation.

    The name is flattened to its combined ``"first last"`` form.

    Example:
        >>> view = OwnerView.from_owner(owner)
        >>> view.name
        'George Franklin'
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = Field(None, description="Owner's identifier")
    name: str = Field(..., description="Combined first and last name")
    address_city: str
    address_first_line: str
    telephone: str

    @field_validator("name", mode="before")
    @classmethod
    def combine_name(cls, v):
        if isinstance(v, Name):
            return v.combined()
        return v

    @classmethod
    def from_owner(cls, owner: Owner) -> "OwnerView":
        """
        Project an owner.

        Args:
            owner: The owner to project

        Returns:
            Immutable view of the owner

        Raises:
            ValueError: If owner is None
        """
        if owner is None:
            raise ValueError("Cannot build an OwnerView without an owner")
        return cls.model_validate(owner)
