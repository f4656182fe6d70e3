"""
Database models for the petclinic-core package.

This module contains the SQLAlchemy models for every entity the clinic
records: owners, pets and their types, visits, vets and specialties.
"""

# Base model will be imported by all other models
from .base import Base, BaseModel
from .owner import Address, Name, Owner
from .pet import Pet, PetType
from .vet import Specialty, Vet, vet_specialties
from .visit import Visit

__all__ = [
    "Base",
    "BaseModel",
    "Name",
    "Address",
    "Owner",
    "Pet",
    "PetType",
    "Visit",
    "Vet",
    "Specialty",
    "vet_specialties",
]
