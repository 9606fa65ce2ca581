"""
Encoder for official GW2 build template chat links.

Writes the same layout the decoder reads: the fixed 44-byte base region,
followed by the weapon/skill-variant trailer when the build carries either.
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from .binary_view import BinaryView
from .constants import (
    CHAT_LINK_PREFIX,
    CHAT_LINK_SUFFIX,
    MAX_PALETTE_INDEX,
    OFFICIAL_CODE_LENGTH,
    OFFICIAL_TYPE_INDICATOR,
    PROFESSION_DATA_OFFSET,
    REVENANT_GAP_BYTES,
    SKILL_VARIANT_ID_BYTES,
    SKILL_WIRE_ORDER,
    SPECIALIZATION_COUNT,
    TRAIT_BITS,
    WEAPON_ID_BYTES,
)
from .errors import BuildCodeError, BuildCodeErrorCode
from .models import (
    BuildCode,
    EncodeOptions,
    EngineerData,
    Profession,
    RangerData,
    RevenantData,
    Specialization,
    TraitChoice,
    UTILITY_SLOTS,
)

if TYPE_CHECKING:
    from .mapping import PaletteMapper

logger = logging.getLogger("gw2-build-codes.encoder")


async def encode(
    build: BuildCode,
    palette_mapper: PaletteMapper,
    options: EncodeOptions | None = None,
) -> str:
    """
    Encode a BuildCode into a build template chat link.

    Args:
        build: The build to encode
        palette_mapper: Resolves skill IDs to palette indices
        options: Encode options (chat link wrapping; aquatic is ignored)

    Returns:
        The chat link ("[&...]"), or the bare base64 body when
        options.wrap_in_chat_link is False

    Raises:
        BuildCodeError: If a skill ID cannot be mapped to a palette index
    """
    options = options or EncodeOptions()
    if options.aquatic:
        logger.debug("Ignoring legacy 'aquatic' encode option")

    weapons = build.weapons or ()
    skill_variants = build.skill_variants or ()
    has_extended_data = bool(weapons or skill_variants)

    total_size = OFFICIAL_CODE_LENGTH
    if has_extended_data:
        # Both count bytes are written whenever the trailer exists
        total_size += 1 + len(weapons) * WEAPON_ID_BYTES
        total_size += 1 + len(skill_variants) * SKILL_VARIANT_ID_BYTES

    profession = Profession(build.profession)
    view = BinaryView(bytearray(total_size))

    view.write_byte(OFFICIAL_TYPE_INDICATOR)
    view.write_byte(int(profession))
    _write_specializations(view, build.specializations)

    revenant = None
    if profession == Profession.REVENANT and isinstance(build.profession_specific, RevenantData):
        revenant = build.profession_specific
    flipped = revenant is not None and _is_flipped(revenant)

    skills = build.skills
    skill_legend = None
    if flipped:
        # The primary utility slots carry the inactive set; the active
        # utilities go to the inactive-legend region
        skills = skills.model_copy(update=dict(zip(UTILITY_SLOTS, revenant.inactive_skills)))
    elif revenant is not None and revenant.legends[0] != 0:
        skill_legend = revenant.legends[0]

    for slot in SKILL_WIRE_ORDER:
        skill_id = getattr(skills, slot)
        view.write_uint16_le(
            await _skill_to_palette(palette_mapper, profession, skill_id, skill_legend)
        )

    view.seek(PROFESSION_DATA_OFFSET)
    await _write_profession_data(view, build, profession, palette_mapper, flipped)

    if has_extended_data:
        view.seek(OFFICIAL_CODE_LENGTH)
        view.write_byte(len(weapons))
        for weapon_id in weapons:
            view.write_uint16_le(weapon_id)
        view.write_byte(len(skill_variants))
        for variant_id in skill_variants:
            view.write_uint32_le(variant_id)

    body = base64.b64encode(bytes(view.buffer)).decode("ascii")
    logger.debug("Encoded %s build (%d bytes)", profession.display_name, total_size)

    if options.wrap_in_chat_link:
        return f"{CHAT_LINK_PREFIX}{body}{CHAT_LINK_SUFFIX}"
    return body


def pack_traits(traits: tuple[TraitChoice, TraitChoice, TraitChoice]) -> int:
    """Pack Adept, Master and Grandmaster choices into one byte (bits 6-7 zero)."""
    adept, master, grandmaster = traits
    return int(adept) | (int(master) << TRAIT_BITS) | (int(grandmaster) << (2 * TRAIT_BITS))


def _is_flipped(revenant: RevenantData) -> bool:
    """A single legend with inactive utilities is stored in the second legend slot."""
    return len(revenant.legends) == 1 and revenant.inactive_skills is not None


def _write_specializations(view: BinaryView, specializations: tuple[Specialization, ...]) -> None:
    for index in range(SPECIALIZATION_COUNT):
        if index < len(specializations):
            spec = specializations[index]
            view.write_byte(spec.id)
            view.write_byte(pack_traits(spec.traits))
        else:
            view.write_byte(0)
            view.write_byte(0)


async def _skill_to_palette(
    palette_mapper: PaletteMapper,
    profession: Profession,
    skill_id: int,
    legend: int | None = None,
) -> int:
    """Resolve one skill ID. Skill 0 is an empty slot and encodes as index 0."""
    if skill_id == 0:
        return 0
    try:
        palette_index = await palette_mapper.skill_to_palette(profession, skill_id, legend=legend)
    except Exception as e:
        raise BuildCodeError(
            f"Failed to map skill ID {skill_id} to palette index "
            f"for profession {profession.display_name}",
            BuildCodeErrorCode.PALETTE_LOOKUP_FAILED,
            cause=e,
            details={
                "skill_id": skill_id,
                "profession": int(profession),
                "legend": legend,
            },
        ) from e

    if not 0 <= palette_index <= MAX_PALETTE_INDEX:
        raise BuildCodeError(
            f"Palette index {palette_index} for skill ID {skill_id} "
            f"does not fit in 16 bits",
            BuildCodeErrorCode.PALETTE_LOOKUP_FAILED,
            details={
                "skill_id": skill_id,
                "palette_index": palette_index,
                "profession": int(profession),
                "legend": legend,
            },
        )
    return palette_index


async def _write_profession_data(
    view: BinaryView,
    build: BuildCode,
    profession: Profession,
    palette_mapper: PaletteMapper,
    flipped: bool = False,
) -> None:
    extra = build.profession_specific
    if extra is None:
        return

    if profession == Profession.RANGER and isinstance(extra, RangerData):
        view.write_byte(extra.pets[0])
        view.write_byte(extra.pets[1])
    elif profession == Profession.REVENANT and isinstance(extra, RevenantData):
        if flipped:
            # Sole legend goes in the second slot
            first_legend, second_legend = 0, extra.legends[0]
            inactive_skills = tuple(getattr(build.skills, slot) for slot in UTILITY_SLOTS)
        else:
            first_legend = extra.legends[0]
            second_legend = extra.legends[1] if len(extra.legends) > 1 else 0
            inactive_skills = extra.inactive_skills
        view.write_byte(first_legend)
        view.write_byte(second_legend)
        view.skip(REVENANT_GAP_BYTES)
        if inactive_skills is not None:
            for skill_id in inactive_skills:
                view.write_uint16_le(
                    await _skill_to_palette(
                        palette_mapper, Profession.REVENANT, skill_id, second_legend or None,
                    )
                )
    # Engineer toolbelt skills have no place in the official layout
    elif not isinstance(extra, EngineerData):
        logger.warning(
            "Ignoring %s data on a %s build", extra.type, profession.display_name,
        )
