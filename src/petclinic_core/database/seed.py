"""
Reference data for a fresh clinic database.

Loads the classic sample clinic: six pet types, three specialties, six
vets, ten owners with thirteen pets and four visits. Rows are inserted in
list order, so on an empty database the identifiers match list positions
(owner 1 is George Franklin, vet 3 is Linda Douglas, pet 7 is Samantha).
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Tuple

from sqlalchemy import func, select

from ..models import Address, Name, Owner, Pet, PetType, Specialty, Vet, Visit
from .session import SessionManager

logger = logging.getLogger(__name__)

PET_TYPES = ["cat", "dog", "lizard", "snake", "bird", "hamster"]

SPECIALTIES = ["radiology", "surgery", "dentistry"]

# (first name, last name, specialty names)
VETS: List[Tuple[str, str, List[str]]] = [
    ("James", "Carter", []),
    ("Helen", "Leary", ["radiology"]),
    ("Linda", "Douglas", ["surgery", "dentistry"]),
    ("Rafael", "Ortega", ["surgery"]),
    ("Henry", "Stevens", ["radiology"]),
    ("Sharon", "Jenkins", []),
]

# (first name, last name, first address line, city, telephone)
OWNERS: List[Tuple[str, str, str, str, str]] = [
    ("George", "Franklin", "110 W. Liberty St.", "Madison", "6085551023"),
    ("Betty", "Davis", "638 Cardinal Ave.", "Sun Prairie", "6085551749"),
    ("Eduardo", "Rodriquez", "2693 Commerce St.", "McFarland", "6085558763"),
    ("Harold", "Davis", "563 Friendly St.", "Windsor", "6085553198"),
    ("Peter", "McTavish", "2387 S. Fair Way", "Madison", "6085552765"),
    ("Jean", "Coleman", "105 N. Lake St.", "Monona", "6085552654"),
    ("Jeff", "Black", "1450 Oak Blvd.", "Monona", "6085555387"),
    ("Maria", "Escobito", "345 Maple St.", "Madison", "6085557683"),
    ("David", "Schroeder", "2749 Blackhawk Trail", "Madison", "6085559435"),
    ("Carlos", "Estaban", "2335 Independence La.", "Waunakee", "6085555487"),
]

# (name, birth date, pet type name, owner position starting at 1)
PETS: List[Tuple[str, date, str, int]] = [
    ("Leo", date(2010, 9, 7), "cat", 1),
    ("Basil", date(2012, 8, 6), "hamster", 2),
    ("Rosy", date(2011, 4, 17), "dog", 3),
    ("Jewel", date(2010, 3, 7), "dog", 3),
    ("Iggy", date(2010, 11, 30), "lizard", 4),
    ("George", date(2010, 1, 20), "snake", 5),
    ("Samantha", date(2012, 9, 4), "cat", 6),
    ("Max", date(2012, 9, 4), "cat", 6),
    ("Lucky", date(2011, 8, 6), "bird", 7),
    ("Mulligan", date(2007, 2, 24), "dog", 8),
    ("Freddy", date(2010, 3, 9), "bird", 9),
    ("Lucky", date(2010, 6, 24), "dog", 10),
    ("Sly", date(2012, 6, 8), "cat", 10),
]

# (pet position starting at 1, visit date, description)
VISITS: List[Tuple[int, datetime, str]] = [
    (7, datetime(2013, 1, 1), "rabies shot"),
    (8, datetime(2013, 1, 2), "rabies shot"),
    (8, datetime(2013, 1, 3), "neutered"),
    (7, datetime(2013, 1, 4), "spayed"),
]


async def seed_reference_data(session_manager: SessionManager) -> bool:
    """
    Load the sample clinic into an empty database.

    Does nothing when pet types are already present, so it is safe to call
    on every start-up.

    Args:
        session_manager: Session manager bound to an initialized schema

    Returns:
        True if data was inserted, False if the database was already seeded
    """
    async with session_manager.get_transaction() as session:
        existing = await session.scalar(select(func.count()).select_from(PetType))
        if existing:
            logger.debug(f"Skipping reference data, {existing} pet types present")
            return False

        pet_types: Dict[str, PetType] = {}
        for type_name in PET_TYPES:
            pet_types[type_name] = PetType(name=type_name)
            session.add(pet_types[type_name])

        specialties: Dict[str, Specialty] = {}
        for specialty_name in SPECIALTIES:
            specialties[specialty_name] = Specialty(name=specialty_name)
            session.add(specialties[specialty_name])

        for first_name, last_name, specialty_names in VETS:
            vet = Vet(first_name=first_name, last_name=last_name)
            for specialty_name in specialty_names:
                vet.specialties.append(specialties[specialty_name])
            session.add(vet)

        owners: List[Owner] = []
        for first_name, last_name, first_line, city, telephone in OWNERS:
            owner = Owner(
                name=Name(first_name, last_name),
                address=Address(city, first_line),
                telephone=telephone,
            )
            owners.append(owner)
            session.add(owner)

        # Owner ids are needed before pets can reference them
        await session.flush()

        pets: List[Pet] = []
        for pet_name, birth_date, type_name, owner_position in PETS:
            pet = Pet(
                name=pet_name,
                birth_date=birth_date,
                type=pet_types[type_name],
                owner_id=owners[owner_position - 1].id,
            )
            pets.append(pet)
            session.add(pet)

        await session.flush()

        for pet_position, visit_date, description in VISITS:
            pets[pet_position - 1].add_visit(
                Visit(date=visit_date, description=description)
            )

    logger.info(
        f"Loaded reference data: {len(PET_TYPES)} pet types, {len(VETS)} vets, "
        f"{len(OWNERS)} owners, {len(PETS)} pets, {len(VISITS)} visits"
    )
    return True
