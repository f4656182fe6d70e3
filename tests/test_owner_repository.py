"""
Tests for the Owner repository against the sample clinic.
"""

import pytest

from petclinic_core.exceptions import EntityNotFoundException, ValidationException
from petclinic_core.models import Address, Name, Owner
from petclinic_core.repositories import OwnerRepository
from petclinic_core.schemas import OwnerUpdate, OwnerView


class TestOwnerLookup:
    """Test cases for loading owners by identifier."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, repositories):
        """Owner 1 is George Franklin of Madison."""
        owner = await repositories.owners.find_by_id(1)

        assert owner is not None
        assert owner.id == 1
        assert owner.last_name.startswith("Franklin")
        assert owner.name == Name("George", "Franklin")
        assert owner.address == Address("Madison", "110 W. Liberty St.")
        assert owner.telephone == "6085551023"

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, repositories):
        assert await repositories.owners.find_by_id(999) is None
        assert await repositories.owners.find_by_id(None) is None

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises(self, repositories):
        with pytest.raises(EntityNotFoundException) as exc_info:
            await repositories.owners.get_by_id(999)

        assert exc_info.value.entity_type == "Owner"
        assert exc_info.value.entity_id == 999
        assert exc_info.value.error_code == "ENTITY_NOT_FOUND"


class TestFindByLastName:
    """Test cases for last-name prefix search."""

    @pytest.mark.asyncio
    async def test_exact_last_name(self, repositories):
        owners = await repositories.owners.find_by_last_name("Davis")

        assert len(owners) == 2
        assert all(owner.last_name == "Davis" for owner in owners)
        # Ordered by first name within the same last name
        assert [owner.first_name for owner in owners] == ["Betty", "Harold"]

    @pytest.mark.asyncio
    async def test_no_match_returns_empty_list(self, repositories):
        owners = await repositories.owners.find_by_last_name("Daviss")

        assert owners == []

    @pytest.mark.asyncio
    async def test_empty_fragment_matches_everyone(self, repositories):
        assert len(await repositories.owners.find_by_last_name("")) == 10
        assert len(await repositories.owners.find_by_last_name(None)) == 10

    @pytest.mark.asyncio
    async def test_prefix_match(self, repositories):
        owners = await repositories.owners.find_by_last_name("Es")

        assert [owner.last_name for owner in owners] == ["Escobito", "Estaban"]

    @pytest.mark.asyncio
    async def test_results_ordered_by_last_name(self, repositories):
        owners = await repositories.owners.find_by_last_name("")
        keys = [(owner.last_name, owner.first_name, owner.id) for owner in owners]

        assert keys == sorted(keys)
        assert owners[0].last_name == "Black"

    @pytest.mark.asyncio
    async def test_case_insensitive_by_default(self, repositories):
        owners = await repositories.owners.find_by_last_name("davis")

        assert len(owners) == 2

    @pytest.mark.asyncio
    async def test_case_sensitive_repository(self, seeded_session_manager):
        repository = OwnerRepository(seeded_session_manager, case_sensitive=True)

        assert await repository.find_by_last_name("davis") == []
        assert len(await repository.find_by_last_name("Davis")) == 2

    @pytest.mark.asyncio
    async def test_wildcards_are_literal(self, repositories):
        assert await repositories.owners.find_by_last_name("%") == []
        assert await repositories.owners.find_by_last_name("_avis") == []


class TestOwnerSave:
    """Test cases for inserting and updating owners."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, repositories, owner_factory):
        before = len(await repositories.owners.find_by_last_name("Schultz"))
        owner = owner_factory.build()

        saved = await repositories.owners.save(owner)

        assert saved.id is not None
        assert not saved.is_new()
        after = await repositories.owners.find_by_last_name("Schultz")
        assert len(after) == before + 1

        reloaded = await repositories.owners.find_by_id(saved.id)
        assert reloaded.name == Name("Sam", "Schultz")
        assert reloaded.address == Address("Wollongong", "4, Evans Street")
        assert reloaded.telephone == "4444444444"

    @pytest.mark.asyncio
    async def test_update_loaded_owner(self, repositories):
        owner = await repositories.owners.find_by_id(1)
        old_last_name = owner.last_name
        new_last_name = old_last_name + "X"

        owner.rename(Name(owner.first_name, new_last_name))
        saved = await repositories.owners.save(owner)

        assert saved.id == 1
        reloaded = await repositories.owners.find_by_id(1)
        assert reloaded.last_name == new_last_name
        assert reloaded.first_name == "George"
        assert await repositories.owners.count() == 10

    @pytest.mark.asyncio
    async def test_save_twice_does_not_duplicate(self, repositories):
        owner = await repositories.owners.find_by_id(2)

        await repositories.owners.save(owner)
        await repositories.owners.save(owner)

        assert await repositories.owners.count() == 10

    @pytest.mark.asyncio
    async def test_update_through_schema(self, repositories):
        owner = await repositories.owners.find_by_id(3)
        update = OwnerUpdate(address_city="Verona", telephone="(608) 555-0000")

        await repositories.owners.save(update.apply_to(owner))

        reloaded = await repositories.owners.find_by_id(3)
        assert reloaded.address == Address("Verona", "2693 Commerce St.")
        assert reloaded.telephone == "6085550000"
        assert reloaded.last_name == "Rodriquez"

    @pytest.mark.asyncio
    async def test_form_bound_owner_updates_stored_row(self, repositories):
        form_owner = Owner(
            id=1,
            name=Name("George", "Franklin"),
            address=Address("Middleton", "1 Main St."),
            telephone="6085559999",
        )

        saved = await repositories.owners.save(form_owner)

        assert saved.id == 1
        reloaded = await repositories.owners.find_by_id(1)
        assert reloaded.address == Address("Middleton", "1 Main St.")
        assert reloaded.telephone == "6085559999"
        assert await repositories.owners.count() == 10

    @pytest.mark.asyncio
    async def test_form_bound_owner_with_unknown_id(self, repositories, owner_factory):
        form_owner = owner_factory.build(id=999)

        with pytest.raises(EntityNotFoundException):
            await repositories.owners.save(form_owner)

        assert await repositories.owners.count() == 10

    @pytest.mark.asyncio
    async def test_missing_telephone_is_rejected(self, repositories, owner_factory):
        owner = owner_factory.build(telephone="")

        with pytest.raises(ValidationException) as exc_info:
            await repositories.owners.save(owner)

        assert exc_info.value.field == "telephone"
        assert owner.id is None
        assert await repositories.owners.count() == 10

    @pytest.mark.asyncio
    async def test_phone_number_alias(self, empty_repositories, owner_factory):
        owner = owner_factory.build(phone_number="6085550001")

        saved = await empty_repositories.owners.save(owner)

        assert saved.phone_number == "6085550001"


class TestOwnerViewProjection:
    """Test cases for projecting stored owners."""

    @pytest.mark.asyncio
    async def test_view_of_stored_owner(self, repositories):
        owner = await repositories.owners.find_by_id(1)

        view = OwnerView.from_owner(owner)

        assert view.id == 1
        assert view.name == "George Franklin"
        assert view.address_city == "Madison"
        assert view.address_first_line == "110 W. Liberty St."
        assert view.telephone == "6085551023"
