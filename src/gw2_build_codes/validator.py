"""
Build validation against game metadata.

This is an opt-in layer on top of the codec: it checks that the IDs of a
decoded build exist and belong to the build's profession, using an injected
MetadataProvider. Validation never raises for an invalid build; every check
runs and its findings accumulate in the returned ValidationResult.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import PROFESSION_NAMES
from .mapping import PetMetadataProvider
from .models import RangerData
from .validation_types import ValidationErrorType, ValidationIssue, ValidationResult

if TYPE_CHECKING:
    from .mapping import MetadataProvider
    from .models import BuildCode

logger = logging.getLogger("gw2-build-codes.validator")


class BuildValidator:
    """
    Validates decoded builds against game metadata.

    Checks performed:
    - Every non-zero skill slot (terrestrial and aquatic) exists and is usable
      by the build's profession
    - Every specialization exists and belongs to the build's profession
    - Ranger pets exist, when the provider supports pet lookups
    """

    def __init__(self, metadata_provider: MetadataProvider):
        """
        Initialize the validator.

        Args:
            metadata_provider: Source of skill, specialization and pet metadata
        """
        self.metadata_provider = metadata_provider

    async def validate(self, build: BuildCode) -> ValidationResult:
        """
        Validate a build.

        Args:
            build: The build to validate

        Returns:
            ValidationResult with every error found
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        errors.extend(await self._validate_skills(build))
        errors.extend(await self._validate_specializations(build))

        if isinstance(build.profession_specific, RangerData):
            errors.extend(await self._validate_pets(build.profession_specific.pets))
        # TODO: check Revenant legends once the metadata provider exposes legend lookups

        logger.debug(
            "Validated %s build: %d errors", _profession_name(build.profession), len(errors),
        )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    async def _validate_skills(self, build: BuildCode) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        profession_name = _profession_name(build.profession)

        for slot, skill_id in build.skills.slots():
            if skill_id == 0:
                continue

            skill_info = await self.metadata_provider.get_skill_info(skill_id)
            if skill_info is None:
                issues.append(ValidationIssue(
                    type=ValidationErrorType.INVALID_SKILL_ID,
                    message=f"Skill ID {skill_id} does not exist",
                    context={"skill_id": skill_id, "slot": slot},
                ))
                continue

            if profession_name not in skill_info.professions:
                issues.append(ValidationIssue(
                    type=ValidationErrorType.SKILL_NOT_FOR_PROFESSION,
                    message=f'Skill "{skill_info.name}" ({skill_id}) cannot be used by {profession_name}',
                    context={
                        "skill_id": skill_id,
                        "skill_name": skill_info.name,
                        "slot": slot,
                        "profession": profession_name,
                        "valid_professions": list(skill_info.professions),
                    },
                ))

        return issues

    async def _validate_specializations(self, build: BuildCode) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        profession_name = _profession_name(build.profession)

        for spec in build.specializations:
            spec_info = await self.metadata_provider.get_specialization_info(spec.id)
            if spec_info is None:
                issues.append(ValidationIssue(
                    type=ValidationErrorType.INVALID_SPECIALIZATION_ID,
                    message=f"Specialization ID {spec.id} does not exist",
                    context={"specialization_id": spec.id},
                ))
                continue

            if spec_info.profession != profession_name:
                issues.append(ValidationIssue(
                    type=ValidationErrorType.SPECIALIZATION_NOT_FOR_PROFESSION,
                    message=(
                        f'Specialization "{spec_info.name}" ({spec.id}) belongs to '
                        f"{spec_info.profession}, not {profession_name}"
                    ),
                    context={
                        "specialization_id": spec.id,
                        "specialization_name": spec_info.name,
                        "expected_profession": profession_name,
                        "actual_profession": spec_info.profession,
                    },
                ))

        return issues

    async def _validate_pets(self, pets: tuple[int, int]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        if not isinstance(self.metadata_provider, PetMetadataProvider):
            logger.debug("Metadata provider has no pet lookup; skipping pet validation")
            return issues

        for pet_slot, pet_id in enumerate(pets):
            if pet_id == 0:
                continue
            pet_info = await self.metadata_provider.get_pet_info(pet_id)
            if pet_info is None:
                issues.append(ValidationIssue(
                    type=ValidationErrorType.INVALID_PET_ID,
                    message=f"Pet ID {pet_id} does not exist",
                    context={"pet_id": pet_id, "pet_slot": pet_slot},
                ))

        return issues


def _profession_name(profession: int) -> str:
    return PROFESSION_NAMES.get(int(profession), "Unknown")
