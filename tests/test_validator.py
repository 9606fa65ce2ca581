"""
Tests for BuildValidator.

Tests cover:
- Valid builds
- Unknown and cross-profession skills, terrestrial and aquatic
- Unknown and cross-profession specializations
- Ranger pets with and without the optional pet lookup
- Error accumulation and result formatting
"""

from __future__ import annotations

import pytest

from gw2_build_codes import (
    BuildCode,
    BuildValidator,
    PetMetadataProvider,
    Profession,
    RangerData,
    Skills,
    Specialization,
    ValidationErrorType,
    decode,
)

from .helpers import MockMetadataProvider, NoPetMetadataProvider, make_buffer, to_chat_link

pytestmark = pytest.mark.anyio


def necro_build(**overrides) -> BuildCode:
    fields = {
        "profession": Profession.NECROMANCER,
        "specializations": (
            Specialization(id=53),
            Specialization(id=50),
            Specialization(id=34),
        ),
        "skills": Skills(heal=10100, utility1=10200, elite=10400),
    }
    fields.update(overrides)
    return BuildCode(**fields)


@pytest.fixture
def validator(metadata_provider) -> BuildValidator:
    return BuildValidator(metadata_provider)


class TestValidBuilds:
    """Builds whose IDs all check out."""

    async def test_valid_build(self, validator):
        result = await validator.validate(necro_build())

        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    async def test_shared_skill_accepted_for_either_profession(self, validator):
        build = BuildCode(
            profession=Profession.GUARDIAN,
            specializations=(Specialization(id=27),),
            skills=Skills(utility1=10300, elite=10400),
        )
        result = await validator.validate(build)
        assert result.valid is True

    async def test_empty_build(self, validator, metadata_provider):
        result = await validator.validate(BuildCode(profession=Profession.THIEF))

        assert result.valid is True
        assert metadata_provider.lookups == []

    async def test_decoded_build(self, validator, mapper):
        # Palette index 100 maps to skill 10100 with the offset mapper
        data = make_buffer(specializations=[(53, 0b100101)], palette=[100, 0, 200, 0, 0, 0, 0, 0, 0, 0])
        build = await decode(to_chat_link(data), mapper)

        result = await validator.validate(build)
        assert result.valid is True


class TestSkillValidation:
    """Skill slot checks."""

    async def test_unknown_skill(self, validator):
        result = await validator.validate(necro_build(skills=Skills(heal=99999)))

        assert result.valid is False
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.type == ValidationErrorType.INVALID_SKILL_ID
        assert error.context["skill_id"] == 99999
        assert error.context["slot"] == "heal"

    async def test_skill_from_other_profession(self, validator):
        result = await validator.validate(necro_build(skills=Skills(utility2=10300)))

        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.type == ValidationErrorType.SKILL_NOT_FOR_PROFESSION
        assert "Guardian Skill" in error.message
        assert "Necromancer" in error.message
        assert error.context["slot"] == "utility2"

    async def test_aquatic_slots_are_checked(self, validator):
        result = await validator.validate(necro_build(skills=Skills(aquatic_elite=10300)))

        assert len(result.errors) == 1
        assert result.errors[0].context["slot"] == "aquatic_elite"

    async def test_empty_slots_are_not_looked_up(self, validator, metadata_provider):
        await validator.validate(necro_build(specializations=(), skills=Skills(heal=10100)))
        assert metadata_provider.lookups == [("skill", 10100)]


class TestSpecializationValidation:
    """Specialization checks."""

    async def test_unknown_specialization(self, validator):
        result = await validator.validate(necro_build(specializations=(Specialization(id=200),)))

        assert len(result.errors) == 1
        assert result.errors[0].type == ValidationErrorType.INVALID_SPECIALIZATION_ID
        assert result.errors[0].context["specialization_id"] == 200

    async def test_specialization_from_other_profession(self, validator):
        result = await validator.validate(necro_build(specializations=(Specialization(id=27),)))

        error = result.errors[0]
        assert error.type == ValidationErrorType.SPECIALIZATION_NOT_FOR_PROFESSION
        assert "Dragonhunter" in error.message
        assert "Guardian" in error.message
        assert error.context["actual_profession"] == "Guardian"


class TestPetValidation:
    """Ranger pet checks."""

    def ranger_build(self, pets: tuple[int, int]) -> BuildCode:
        return BuildCode(
            profession=Profession.RANGER,
            specializations=(Specialization(id=30),),
            profession_specific=RangerData(pets=pets),
        )

    async def test_known_pets(self, validator):
        result = await validator.validate(self.ranger_build((59, 17)))
        assert result.valid is True

    async def test_unknown_pet(self, validator):
        result = await validator.validate(self.ranger_build((59, 250)))

        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.type == ValidationErrorType.INVALID_PET_ID
        assert error.context == {"pet_id": 250, "pet_slot": 1}

    async def test_empty_pet_slot_is_skipped(self, validator, metadata_provider):
        await validator.validate(self.ranger_build((0, 17)))
        assert ("pet", 0) not in metadata_provider.lookups

    async def test_skipped_without_pet_lookup(self):
        provider = NoPetMetadataProvider()
        assert not isinstance(provider, PetMetadataProvider)
        assert isinstance(MockMetadataProvider(), PetMetadataProvider)

        result = await BuildValidator(provider).validate(self.ranger_build((250, 251)))
        assert result.valid is True


class TestAccumulation:
    """All checks run and their errors accumulate."""

    async def test_errors_from_every_check(self, validator):
        build = necro_build(
            specializations=(Specialization(id=27), Specialization(id=53)),
            skills=Skills(heal=99999, utility1=10200),
        )
        result = await validator.validate(build)

        assert result.valid is False
        assert [e.type for e in result.errors] == [
            ValidationErrorType.INVALID_SKILL_ID,
            ValidationErrorType.SPECIALIZATION_NOT_FOR_PROFESSION,
        ]
        assert result.errors[0].context["skill_id"] == 99999
        assert result.errors[1].context["specialization_id"] == 27
        assert result.warnings == []

    async def test_every_slot_is_checked(self, validator):
        build = necro_build(skills=Skills(heal=99998, utility1=99999, aquatic_heal=10300))
        result = await validator.validate(build)

        assert [e.context["slot"] for e in result.errors] == ["heal", "utility1", "aquatic_heal"]

    async def test_result_summary(self, validator):
        result = await validator.validate(necro_build(skills=Skills(heal=99999)))
        summary = str(result)

        assert "Status: INVALID" in summary
        assert "1 errors" in summary
        assert "[INVALID_SKILL_ID] Skill ID 99999 does not exist" in summary
