"""
Test doubles and buffer builders for gw2-build-codes tests.

Provides deterministic palette mappers, an in-memory metadata provider, and
helpers for assembling raw build template buffers byte by byte.
"""

from __future__ import annotations

import base64
import json
import struct
from pathlib import Path
from typing import Any

from gw2_build_codes import PetInfo, Profession, SkillInfo, SpecializationInfo

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Skill IDs produced by MockPaletteMapper are palette index + SKILL_OFFSET
SKILL_OFFSET = 10000


def load_official_codes() -> dict[str, Any]:
    with (FIXTURES_DIR / "official_codes.json").open("r", encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Palette mappers
# ---------------------------------------------------------------------------


class MockPaletteMapper:
    """Deterministic mapper: skill ID = palette index + SKILL_OFFSET.

    Records every call so tests can assert on lookup order and arguments.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Profession, int, int | None]] = []

    async def palette_to_skill(
        self, profession: Profession, palette_index: int, legend: int | None = None,
    ) -> int:
        self.calls.append(("palette_to_skill", profession, palette_index, legend))
        return palette_index + SKILL_OFFSET

    async def skill_to_palette(
        self, profession: Profession, skill_id: int, legend: int | None = None,
    ) -> int:
        self.calls.append(("skill_to_palette", profession, skill_id, legend))
        return skill_id - SKILL_OFFSET


class FailingPaletteMapper:
    """Mapper that rejects one specific palette index or skill ID."""

    def __init__(self, bad_value: int) -> None:
        self.bad_value = bad_value

    async def palette_to_skill(
        self, profession: Profession, palette_index: int, legend: int | None = None,
    ) -> int:
        if palette_index == self.bad_value:
            raise KeyError(f"Unknown palette index {palette_index}")
        return palette_index + SKILL_OFFSET

    async def skill_to_palette(
        self, profession: Profession, skill_id: int, legend: int | None = None,
    ) -> int:
        if skill_id == self.bad_value:
            raise KeyError(f"Unknown skill {skill_id}")
        return skill_id - SKILL_OFFSET


# ---------------------------------------------------------------------------
# Metadata providers
# ---------------------------------------------------------------------------


class MockMetadataProvider:
    """In-memory metadata provider with pet lookup support."""

    def __init__(self) -> None:
        self.skills: dict[int, SkillInfo] = {
            10100: SkillInfo(id=10100, name="Test Heal", professions=["Necromancer"], type="Heal", slot="Heal"),
            10200: SkillInfo(id=10200, name="Test Utility", professions=["Necromancer"], type="Utility", slot="Utility"),
            10300: SkillInfo(id=10300, name="Guardian Skill", professions=["Guardian"], type="Utility", slot="Utility"),
            10400: SkillInfo(
                id=10400, name="Shared Elite", professions=["Necromancer", "Guardian"], type="Elite", slot="Elite",
            ),
        }
        self.specializations: dict[int, SpecializationInfo] = {
            53: SpecializationInfo(id=53, name="Spite", profession="Necromancer"),
            50: SpecializationInfo(id=50, name="Soul Reaping", profession="Necromancer"),
            34: SpecializationInfo(id=34, name="Reaper", profession="Necromancer", elite=True),
            27: SpecializationInfo(id=27, name="Dragonhunter", profession="Guardian", elite=True),
            30: SpecializationInfo(id=30, name="Skirmishing", profession="Ranger"),
        }
        self.pets: dict[int, PetInfo] = {
            59: PetInfo(id=59, name="Moa"),
            17: PetInfo(id=17, name="Warthog"),
        }
        self.lookups: list[tuple[str, int]] = []

    async def get_skill_info(self, skill_id: int) -> SkillInfo | None:
        self.lookups.append(("skill", skill_id))
        return self.skills.get(skill_id)

    async def get_specialization_info(self, spec_id: int) -> SpecializationInfo | None:
        self.lookups.append(("specialization", spec_id))
        return self.specializations.get(spec_id)

    async def get_pet_info(self, pet_id: int) -> PetInfo | None:
        self.lookups.append(("pet", pet_id))
        return self.pets.get(pet_id)


class NoPetMetadataProvider:
    """Provider without the optional pet lookup capability."""

    def __init__(self) -> None:
        self._inner = MockMetadataProvider()

    async def get_skill_info(self, skill_id: int) -> SkillInfo | None:
        return await self._inner.get_skill_info(skill_id)

    async def get_specialization_info(self, spec_id: int) -> SpecializationInfo | None:
        return await self._inner.get_specialization_info(spec_id)


# ---------------------------------------------------------------------------
# Buffer builders
# ---------------------------------------------------------------------------


def make_buffer(
    profession: int = 8,
    specializations: list[tuple[int, int]] | None = None,
    palette: list[int] | None = None,
    extra: bytes = b"",
    trailer: bytes = b"",
    type_indicator: int = 0x0D,
) -> bytes:
    """Assemble a raw build template.

    Args:
        profession: Byte 1
        specializations: Up to three (spec id, packed trait byte) pairs
        palette: Ten u16 palette indices in wire (interleaved) order
        extra: Bytes written at the profession-specific region (offset 28)
        trailer: Bytes appended after the 44-byte base region
        type_indicator: Byte 0
    """
    buf = bytearray(44)
    buf[0] = type_indicator
    buf[1] = profession
    for i, (spec_id, trait_mix) in enumerate(specializations or []):
        buf[2 + 2 * i] = spec_id
        buf[3 + 2 * i] = trait_mix
    struct.pack_into("<10H", buf, 8, *(palette or [0] * 10))
    buf[28:28 + len(extra)] = extra
    return bytes(buf) + trailer


def to_chat_link(data: bytes) -> str:
    return "[&" + base64.b64encode(data).decode("ascii") + "]"


def chat_link_bytes(chat_link: str) -> bytes:
    return base64.b64decode(chat_link[2:-1])
