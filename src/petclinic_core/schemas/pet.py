"""
Pet Pydantic schemas for validation and serialization.

This module contains Pydantic schemas for Pet and PetType, including
create, update, and response schemas.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.pet import Pet
from ..utils.validation import require_text
from .visit import VisitResponse


class PetTypeResponse(BaseModel):
    """Schema for pet type lookup values."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class PetCreate(BaseModel):
    """Schema for registering a new pet to an owner."""

    name: str = Field(..., max_length=30, description="Pet's name")
    birth_date: date = Field(..., description="Pet's birth date")
    type_id: int = Field(..., description="Identifier of the pet type")
    owner_id: int = Field(..., description="Identifier of the owner")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "name")

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: date) -> date:
        """Validate birth date is not in the future."""
        if v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v

    def to_model(self) -> Pet:
        """Build a transient Pet ready for ``PetRepository.save``."""
        return Pet(
            name=self.name,
            birth_date=self.birth_date,
            type_id=self.type_id,
            owner_id=self.owner_id,
        )


class PetUpdate(BaseModel):
    """Schema for editing an existing pet. Only provided fields are applied."""

    name: Optional[str] = Field(None, max_length=30)
    birth_date: Optional[date] = None
    type_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_text(v, "name")

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: Optional[date]) -> Optional[date]:
        if v is not None and v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v

    @model_validator(mode="after")
    def validate_not_empty(self) -> "PetUpdate":
        """Ensure at least one field is being changed."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def apply_to(self, pet: Pet) -> Pet:
        """Apply the provided fields to a loaded pet and return it."""
        if self.name is not None:
            pet.name = self.name
        if self.birth_date is not None:
            pet.birth_date = self.birth_date
        if self.type_id is not None:
            pet.type_id = self.type_id
        return pet


class PetResponse(BaseModel):
    """Schema for pet response data, including the visit history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    birth_date: Optional[date] = None
    owner_id: int
    type: Optional[PetTypeResponse] = None
    visits: List[VisitResponse] = Field(default_factory=list)
