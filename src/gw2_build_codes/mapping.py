"""
Collaborator protocols consumed by the codec and the validator.

Official build templates store skills as profession-local palette indices,
not skill IDs. Resolving them needs palette data from the game API, which
this library does not fetch: callers supply a PaletteMapper (and, for
validation, a MetadataProvider) backed by whatever source they use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import Profession
    from .validation_types import PetInfo, SkillInfo, SpecializationInfo


class PaletteMapper(Protocol):
    """Protocol for palette index <-> skill ID translation."""

    async def palette_to_skill(
        self,
        profession: Profession,
        palette_index: int,
        legend: int | None = None,
    ) -> int:
        """Convert a palette index to a skill ID.

        Args:
            profession: The character profession.
            palette_index: Non-zero palette index read from the build code.
            legend: Revenant legend whose palette applies, if any.

        Returns:
            The corresponding skill ID.
        """
        ...

    async def skill_to_palette(
        self,
        profession: Profession,
        skill_id: int,
        legend: int | None = None,
    ) -> int:
        """Convert a skill ID to a palette index.

        Args:
            profession: The character profession.
            skill_id: Non-zero skill ID to encode.
            legend: Revenant legend whose palette applies, if any.

        Returns:
            The corresponding palette index.
        """
        ...


class MetadataProvider(Protocol):
    """Protocol for looking up game metadata during validation.

    Lookups return None when the ID is unknown.
    """

    async def get_skill_info(self, skill_id: int) -> SkillInfo | None:
        ...

    async def get_specialization_info(self, spec_id: int) -> SpecializationInfo | None:
        ...


@runtime_checkable
class PetMetadataProvider(Protocol):
    """Optional capability: providers that can also look up Ranger pets."""

    async def get_pet_info(self, pet_id: int) -> PetInfo | None:
        ...
