"""
Visit Pydantic schemas for validation and serialization.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.visit import Visit
from ..utils.validation import require_text


class VisitCreate(BaseModel):
    """Schema for recording a new visit."""

    date: Optional[datetime] = Field(
        None, description="When the visit took place, defaults to now"
    )
    description: str = Field(..., max_length=255, description="What was done")
    pet_id: Optional[int] = Field(None, description="Pet that was seen")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return require_text(v, "description")

    def to_model(self) -> Visit:
        """Build a transient Visit."""
        return Visit(date=self.date, description=self.description, pet_id=self.pet_id)


class VisitResponse(BaseModel):
    """Schema for visit response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime
    description: str
    pet_id: int
