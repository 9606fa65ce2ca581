"""
Data models for decoded Guild Wars 2 build templates.

All models are frozen: a BuildCode is a value produced fresh by decode() or
assembled by the caller before encode(), and is never mutated in place.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, Field

from .constants import LEGEND_NAMES, PROFESSION_NAMES

# Single wire byte (pet IDs, legend IDs)
ByteValue = Annotated[int, Field(ge=0, le=0xFF)]

# Trailer element widths
WeaponId = Annotated[int, Field(ge=0, le=0xFFFF)]
SkillVariantId = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

SkillId = Annotated[int, Field(ge=0)]


class Profession(IntEnum):
    """Profession IDs as stored in byte 1 of a build template."""
    GUARDIAN = 1
    WARRIOR = 2
    ENGINEER = 3
    RANGER = 4
    THIEF = 5
    ELEMENTALIST = 6
    MESMER = 7
    NECROMANCER = 8
    REVENANT = 9

    @property
    def display_name(self) -> str:
        """Name as used by the official game API ("Necromancer", ...)."""
        return PROFESSION_NAMES[self.value]


class TraitChoice(IntEnum):
    """Position picked in one trait tier of a specialization."""
    NONE = 0
    TOP = 1
    MIDDLE = 2
    BOTTOM = 3


class Legend(IntEnum):
    """Revenant legend IDs."""
    SHIRO = 1       # Legendary Assassin Stance
    GLINT = 2       # Legendary Dragon Stance
    MALLYX = 3      # Legendary Demon Stance
    JALIS = 4       # Legendary Dwarf Stance
    VENTARI = 5     # Legendary Centaur Stance
    KALLA = 6       # Legendary Renegade Stance
    VINDICATOR = 7  # Legendary Alliance Stance

    @property
    def display_name(self) -> str:
        return LEGEND_NAMES[self.value]


class Specialization(BaseModel):
    """A trait line with its Adept, Master and Grandmaster choices."""
    model_config = {"frozen": True}

    id: int = Field(ge=0, le=0xFF, description="Specialization ID")
    traits: tuple[TraitChoice, TraitChoice, TraitChoice] = Field(
        default=(TraitChoice.NONE, TraitChoice.NONE, TraitChoice.NONE),
        description="Trait choices for the Adept, Master and Grandmaster tiers",
    )


TERRESTRIAL_SLOTS = ("heal", "utility1", "utility2", "utility3", "elite")
AQUATIC_SLOTS = (
    "aquatic_heal",
    "aquatic_utility1",
    "aquatic_utility2",
    "aquatic_utility3",
    "aquatic_elite",
)
UTILITY_SLOTS = ("utility1", "utility2", "utility3")


class Skills(BaseModel):
    """The ten skill slots of a build. 0 marks an empty slot."""
    model_config = {"frozen": True}

    # Terrestrial
    heal: int = Field(default=0, ge=0, description="Terrestrial heal skill ID")
    utility1: int = Field(default=0, ge=0, description="Terrestrial first utility skill ID")
    utility2: int = Field(default=0, ge=0, description="Terrestrial second utility skill ID")
    utility3: int = Field(default=0, ge=0, description="Terrestrial third utility skill ID")
    elite: int = Field(default=0, ge=0, description="Terrestrial elite skill ID")

    # Aquatic
    aquatic_heal: int = Field(default=0, ge=0, description="Aquatic heal skill ID")
    aquatic_utility1: int = Field(default=0, ge=0, description="Aquatic first utility skill ID")
    aquatic_utility2: int = Field(default=0, ge=0, description="Aquatic second utility skill ID")
    aquatic_utility3: int = Field(default=0, ge=0, description="Aquatic third utility skill ID")
    aquatic_elite: int = Field(default=0, ge=0, description="Aquatic elite skill ID")

    def slots(self) -> Iterator[tuple[str, int]]:
        """Yield (slot name, skill ID) for terrestrial then aquatic slots."""
        for name in TERRESTRIAL_SLOTS + AQUATIC_SLOTS:
            yield name, getattr(self, name)


class RangerData(BaseModel):
    """Ranger terrestrial pets. Pet IDs are stored raw, not palette-mapped."""
    model_config = {"frozen": True}

    type: Literal["ranger"] = "ranger"
    pets: tuple[ByteValue, ByteValue] = Field(description="Two pet IDs (0 = empty slot)")


class RevenantData(BaseModel):
    """Revenant legends and the utility skills of the inactive legend."""
    model_config = {"frozen": True}

    type: Literal["revenant"] = "revenant"
    legends: tuple[ByteValue, ...] = Field(
        min_length=1,
        max_length=2,
        description="Active legend, optionally followed by the second legend",
    )
    inactive_skills: tuple[SkillId, SkillId, SkillId] | None = Field(
        default=None,
        description="Utility skill IDs of the inactive legend",
    )


class EngineerData(BaseModel):
    """Engineer toolbelt skills.

    Deprecated: toolbelt and Mechanist morph skills are not part of the
    official build template, so decode() never returns this and encode()
    never writes it. Kept so existing callers that construct it still work.
    """
    model_config = {"frozen": True}

    type: Literal["engineer"] = "engineer"
    toolbelt_skills: tuple[int, int, int] = Field(description="F2-F4 toolbelt skill IDs (unused)")


ProfessionSpecificData = Annotated[
    Union[RangerData, RevenantData, EngineerData],
    Field(discriminator="type"),
]


class BuildCode(BaseModel):
    """A complete build template."""
    model_config = {"frozen": True}

    profession: Profession = Field(description="Character profession")
    specializations: tuple[Specialization, ...] = Field(
        default=(),
        max_length=3,
        description="Up to three specializations, empty slots omitted",
    )
    skills: Skills = Field(default_factory=Skills, description="Equipped skills")
    profession_specific: ProfessionSpecificData | None = Field(
        default=None,
        description="Pets for Rangers, legends for Revenants",
    )
    weapons: tuple[WeaponId, ...] | None = Field(
        default=None,
        max_length=0xFF,
        description="Equipped weapon type IDs (extended format)",
    )
    skill_variants: tuple[SkillVariantId, ...] | None = Field(
        default=None,
        max_length=0xFF,
        description="Skill variant override IDs (extended format)",
    )


# ---------------------------------------------------------------------------
# Per-call options
# ---------------------------------------------------------------------------

class DecodeOptions(BaseModel):
    """Options accepted by decode()."""
    model_config = {"frozen": True}

    aquatic: bool = Field(
        default=False,
        description="Legacy flag, ignored: both skill bars are always decoded",
    )


class EncodeOptions(BaseModel):
    """Options accepted by encode()."""
    model_config = {"frozen": True}

    aquatic: bool = Field(
        default=False,
        description="Legacy flag, ignored: both skill bars are always encoded",
    )
    wrap_in_chat_link: bool = Field(
        default=True,
        description="Wrap the base64 output in the [&...] chat link syntax",
    )
