"""
Decoder for official GW2 build template chat links.

Layout of the decoded buffer (little-endian):

    0       type indicator (0x0D)
    1       profession (1-9)
    2-7     3 x (specialization id, packed trait choices)
    8-27    10 x u16 palette index, terrestrial/aquatic interleaved
    28-43   profession-specific region
    44-     optional trailer: weapon count + u16 ids, variant count + u32 ids
"""

from __future__ import annotations

import base64
import logging
from enum import Enum
from typing import TYPE_CHECKING

from .binary_view import BinaryView
from .constants import (
    BYTES_PER_SKILL,
    CHAT_LINK_PREFIX,
    CHAT_LINK_SUFFIX,
    MAX_PROFESSION_ID,
    MIN_PROFESSION_ID,
    OFFICIAL_CODE_LENGTH,
    OFFICIAL_TYPE_INDICATOR,
    REVENANT_INACTIVE_SKILL_COUNT,
    REVENANT_INACTIVE_SKILL_OFFSET,
    SKILL_SLOT_COUNT,
    SKILL_WIRE_ORDER,
    SPECIALIZATION_COUNT,
    TRAIT_BITS,
    TRAIT_MASK,
)
from .errors import BuildCodeError, BuildCodeErrorCode
from .models import (
    BuildCode,
    DecodeOptions,
    Legend,
    Profession,
    ProfessionSpecificData,
    RangerData,
    RevenantData,
    Skills,
    Specialization,
    TraitChoice,
    UTILITY_SLOTS,
)

if TYPE_CHECKING:
    from .mapping import PaletteMapper

logger = logging.getLogger("gw2-build-codes.decoder")

class LegendState(str, Enum):
    """Which Revenant legend slots are filled in the legend bytes."""
    NO_LEGEND = "no_legend"          # Slot 1 empty (slot 2 may still be set)
    LEGEND1_ONLY = "legend1_only"
    BOTH_LEGENDS = "both_legends"


async def decode(
    chat_link: str,
    palette_mapper: PaletteMapper,
    options: DecodeOptions | None = None,
) -> BuildCode:
    """
    Decode a build template chat link into a BuildCode.

    Accepts both the wrapped chat link form ("[&DQg...=]") and the bare
    base64 body. Skill palette indices are resolved through the mapper one at
    a time, in wire order; the first failed lookup aborts the decode.

    Args:
        chat_link: Chat link string, with or without the [& ] wrapper
        palette_mapper: Resolves palette indices to skill IDs
        options: Decode options (the legacy aquatic flag is ignored)

    Returns:
        The decoded build

    Raises:
        BuildCodeError: If the input is malformed or a palette lookup fails
    """
    options = options or DecodeOptions()
    if options.aquatic:
        logger.debug("Ignoring legacy 'aquatic' decode option")

    data = _decode_base64(_strip_chat_link(chat_link))

    if len(data) < OFFICIAL_CODE_LENGTH:
        raise BuildCodeError(
            f"Invalid build code length: {len(data)} "
            f"(minimum {OFFICIAL_CODE_LENGTH} bytes required)",
            BuildCodeErrorCode.INVALID_LENGTH,
            details={"length": len(data)},
        )

    view = BinaryView(data)

    type_indicator = view.read_byte()
    if type_indicator != OFFICIAL_TYPE_INDICATOR:
        raise BuildCodeError(
            f"Invalid type indicator: 0x{type_indicator:02x} "
            f"(expected 0x{OFFICIAL_TYPE_INDICATOR:02x})",
            BuildCodeErrorCode.INVALID_TYPE,
            details={"type_indicator": type_indicator},
        )

    profession_id = view.read_byte()
    if not MIN_PROFESSION_ID <= profession_id <= MAX_PROFESSION_ID:
        raise BuildCodeError(
            f"Invalid profession: {profession_id} "
            f"(expected {MIN_PROFESSION_ID}-{MAX_PROFESSION_ID})",
            BuildCodeErrorCode.INVALID_PROFESSION,
            details={"profession": profession_id},
        )
    profession = Profession(profession_id)

    specializations = _read_specializations(view)

    # Second cursor over the profession-specific region (byte 28)
    extra_view = view.slice_at(SKILL_SLOT_COUNT * BYTES_PER_SKILL)

    profession_specific: ProfessionSpecificData | None = None
    if profession == Profession.REVENANT:
        skills, profession_specific = await _decode_revenant(view, extra_view, palette_mapper)
    else:
        skills = Skills(**await _read_skills(view, profession, palette_mapper))
        if profession == Profession.RANGER:
            profession_specific = _read_ranger_data(extra_view)
        # Engineer toolbelt skills are not part of the format; nothing to read

    weapons, skill_variants = _read_extended_data(data)

    logger.debug(
        "Decoded %s build (%d bytes, %d specializations)",
        profession.display_name, len(data), len(specializations),
    )

    return BuildCode(
        profession=profession,
        specializations=specializations,
        skills=skills,
        profession_specific=profession_specific,
        weapons=weapons,
        skill_variants=skill_variants,
    )


def _strip_chat_link(chat_link: str) -> str:
    text = chat_link.strip()
    if text.startswith(CHAT_LINK_PREFIX) and text.endswith(CHAT_LINK_SUFFIX):
        return text[len(CHAT_LINK_PREFIX):-len(CHAT_LINK_SUFFIX)]
    return text


def _decode_base64(body: str) -> bytes:
    try:
        return base64.b64decode(body, validate=True)
    except ValueError as e:
        # binascii.Error for bad padding/alphabet, plain ValueError for non-ASCII input
        raise BuildCodeError(
            f"Failed to decode base64: {e}",
            BuildCodeErrorCode.BASE64_DECODE_FAILED,
            cause=e,
        ) from e


def unpack_traits(trait_mix: int) -> tuple[TraitChoice, TraitChoice, TraitChoice]:
    """Split a packed trait byte into Adept, Master and Grandmaster choices.

    Bits 6-7 are unused and ignored.
    """
    return (
        TraitChoice(trait_mix & TRAIT_MASK),
        TraitChoice((trait_mix >> TRAIT_BITS) & TRAIT_MASK),
        TraitChoice((trait_mix >> (2 * TRAIT_BITS)) & TRAIT_MASK),
    )


def _read_specializations(view: BinaryView) -> tuple[Specialization, ...]:
    specializations: list[Specialization] = []
    for _ in range(SPECIALIZATION_COUNT):
        spec_id = view.read_byte()
        trait_mix = view.read_byte()
        if spec_id != 0:
            specializations.append(Specialization(id=spec_id, traits=unpack_traits(trait_mix)))
    return tuple(specializations)


async def _palette_to_skill(
    palette_mapper: PaletteMapper,
    profession: Profession,
    palette_index: int,
    legend: int | None = None,
) -> int:
    """Resolve one palette index. Index 0 is an empty slot and never looked up."""
    if palette_index == 0:
        return 0
    try:
        return await palette_mapper.palette_to_skill(profession, palette_index, legend=legend)
    except Exception as e:
        raise BuildCodeError(
            f"Failed to map palette index {palette_index} "
            f"for profession {profession.display_name}",
            BuildCodeErrorCode.PALETTE_LOOKUP_FAILED,
            cause=e,
            details={
                "palette_index": palette_index,
                "profession": int(profession),
                "legend": legend,
            },
        ) from e


async def _read_skills(
    view: BinaryView,
    profession: Profession,
    palette_mapper: PaletteMapper,
    legend: int | None = None,
) -> dict[str, int]:
    """Read the ten skill slots in wire order, keyed by Skills field name."""
    skills: dict[str, int] = {}
    for slot in SKILL_WIRE_ORDER:
        palette_index = view.read_uint16_le()
        skills[slot] = await _palette_to_skill(palette_mapper, profession, palette_index, legend)
    return skills


async def _decode_revenant(
    view: BinaryView,
    extra_view: BinaryView,
    palette_mapper: PaletteMapper,
) -> tuple[Skills, RevenantData | None]:
    """Decode Revenant skills and legends.

    The legend bytes decide how the skills are mapped, so they are peeked
    before the skill slots are read. When only the second legend slot is
    set, the client stores the active utilities in the inactive-legend
    slots; the two sets are swapped so the single legend's skills end up as
    the primary utilities.
    """
    legend1 = extra_view.peek_byte(0)
    legend2 = extra_view.peek_byte(1)

    if legend1 == 0:
        state = LegendState.NO_LEGEND
    elif legend2 == 0:
        state = LegendState.LEGEND1_ONLY
    else:
        state = LegendState.BOTH_LEGENDS
    logger.debug("Revenant legend bytes %d/%d (%s)", legend1, legend2, state.value)

    skills = await _read_skills(
        view, Profession.REVENANT, palette_mapper, legend=legend1 or None,
    )

    if legend1 == 0 and legend2 == 0:
        return Skills(**skills), None

    legends: tuple[int, ...] = (legend1,)
    inactive_skills: tuple[int, int, int] | None = None

    if legend2 != 0:
        inactive_view = extra_view.slice_at(REVENANT_INACTIVE_SKILL_OFFSET)
        alt_skills = []
        for _ in range(REVENANT_INACTIVE_SKILL_COUNT):
            palette_index = inactive_view.read_uint16_le()
            alt_skills.append(
                await _palette_to_skill(palette_mapper, Profession.REVENANT, palette_index, legend2)
            )

        if state == LegendState.NO_LEGEND:
            # Flip: the second slot holds the only legend
            legends = (legend2,)
            inactive_skills = (skills["utility1"], skills["utility2"], skills["utility3"])
            for slot, skill_id in zip(UTILITY_SLOTS, alt_skills):
                if skill_id != 0:
                    skills[slot] = skill_id
        else:
            legends = (legend1, legend2)
            if any(alt_skills):
                inactive_skills = (alt_skills[0], alt_skills[1], alt_skills[2])

    logger.debug("Revenant legends: %s", ", ".join(legend_name(legend) for legend in legends))

    return Skills(**skills), RevenantData(legends=legends, inactive_skills=inactive_skills)


def legend_name(legend: int) -> str:
    """Display name for a legend byte, tolerating IDs outside the known set."""
    try:
        return Legend(legend).display_name
    except ValueError:
        return f"Unknown legend {legend}"


def _read_ranger_data(extra_view: BinaryView) -> RangerData | None:
    """Read the two terrestrial pets. Pet IDs are raw bytes, not palette indices."""
    pet1 = extra_view.peek_byte(0)
    pet2 = extra_view.peek_byte(1)
    if pet1 == 0 and pet2 == 0:
        return None
    return RangerData(pets=(pet1, pet2))


def _read_extended_data(data: bytes) -> tuple[tuple[int, ...] | None, tuple[int, ...] | None]:
    """Read the weapon and skill variant trailer that follows the base layout.

    A zero count yields None rather than an empty tuple.
    """
    if len(data) <= OFFICIAL_CODE_LENGTH:
        return None, None

    view = BinaryView(data, OFFICIAL_CODE_LENGTH)
    try:
        weapon_count = view.read_byte()
        weapons = tuple(view.read_uint16_le() for _ in range(weapon_count))
        variant_count = view.read_byte()
        skill_variants = tuple(view.read_uint32_le() for _ in range(variant_count))
    except ValueError as e:
        raise BuildCodeError(
            f"Extended build data is truncated ({len(data)} bytes)",
            BuildCodeErrorCode.INVALID_LENGTH,
            cause=e,
            details={"length": len(data)},
        ) from e

    return weapons or None, skill_variants or None
