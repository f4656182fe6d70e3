"""
Pydantic schemas for data validation and serialization.

This module contains the schemas used to validate incoming form data and to
serialize entities, plus ``OwnerView``, the read-only owner projection.
"""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import SchemaValidationException, format_validation_errors
from .owner import OwnerCreate, OwnerResponse, OwnerUpdate, OwnerView
from .pet import PetCreate, PetResponse, PetTypeResponse, PetUpdate
from .vet import SpecialtyResponse, VetListResponse, VetResponse
from .visit import VisitCreate, VisitResponse

S = TypeVar("S", bound=BaseModel)


def validate_payload(schema: Type[S], data: Dict[str, Any]) -> S:
    """
    Validate raw input against a schema.

    Args:
        schema: Schema class to validate with
        data: Raw input, e.g. bound form fields

    Returns:
        The validated schema instance

    Raises:
        SchemaValidationException: With per-field messages when validation fails
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationException(
            f"Invalid {schema.__name__} data",
            schema_name=schema.__name__,
            validation_errors=format_validation_errors(e.errors()),
        ) from e


__all__ = [
    "validate_payload",
    # Owner schemas
    "OwnerCreate",
    "OwnerUpdate",
    "OwnerResponse",
    "OwnerView",
    # Pet schemas
    "PetCreate",
    "PetUpdate",
    "PetResponse",
    "PetTypeResponse",
    # Visit schemas
    "VisitCreate",
    "VisitResponse",
    # Vet schemas
    "VetResponse",
    "VetListResponse",
    "SpecialtyResponse",
]
