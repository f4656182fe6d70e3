"""
Vet Pydantic schemas for serialization.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SpecialtyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class VetResponse(BaseModel):
    """Schema for vet response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    specialties: List[SpecialtyResponse] = Field(default_factory=list)


class VetListResponse(BaseModel):
    """Schema for the vet directory."""

    vets: List[VetResponse] = Field(default_factory=list)
    total: int = Field(0, description="Number of vets listed")

    @classmethod
    def from_vets(cls, vets) -> "VetListResponse":
        return cls(
            vets=[VetResponse.model_validate(vet) for vet in vets], total=len(vets)
        )
