"""
Wire-format constants and display lookup tables for GW2 build template codes.

Byte offsets are relative to the start of the decoded (base64-stripped) buffer.
"""

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

# First byte of every official build template
OFFICIAL_TYPE_INDICATOR = 0x0D

# Size of the fixed base region; anything beyond it is the extended trailer
OFFICIAL_CODE_LENGTH = 44

CHAT_LINK_PREFIX = "[&"
CHAT_LINK_SUFFIX = "]"

MIN_PROFESSION_ID = 1
MAX_PROFESSION_ID = 9

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

SPECIALIZATION_COUNT = 3

# 5 terrestrial + 5 aquatic u16 palette indices
SKILL_SLOT_COUNT = 10
BYTES_PER_SKILL = 2
MAX_PALETTE_INDEX = 0xFFFF

# Interleaved terrestrial/aquatic order used on the wire
SKILL_WIRE_ORDER: tuple[str, ...] = (
    "heal",
    "aquatic_heal",
    "utility1",
    "aquatic_utility1",
    "utility2",
    "aquatic_utility2",
    "utility3",
    "aquatic_utility3",
    "elite",
    "aquatic_elite",
)

# Start of the 16-byte profession-specific region (bytes 28-43)
PROFESSION_DATA_OFFSET = 2 + SPECIALIZATION_COUNT * 2 + SKILL_SLOT_COUNT * BYTES_PER_SKILL

# Revenant: two legend bytes, a two-byte gap, then three inactive utilities
REVENANT_LEGEND_BYTES = 2
REVENANT_GAP_BYTES = 2
REVENANT_INACTIVE_SKILL_OFFSET = REVENANT_LEGEND_BYTES + REVENANT_GAP_BYTES
REVENANT_INACTIVE_SKILL_COUNT = 3

# Bits per trait choice inside the packed trait byte (Adept, Master, Grandmaster)
TRAIT_BITS = 2
TRAIT_MASK = 0b11

# Extended trailer element sizes
WEAPON_ID_BYTES = 2
SKILL_VARIANT_ID_BYTES = 4

# ---------------------------------------------------------------------------
# Display names
# ---------------------------------------------------------------------------

PROFESSION_NAMES: dict[int, str] = {
    1: "Guardian",
    2: "Warrior",
    3: "Engineer",
    4: "Ranger",
    5: "Thief",
    6: "Elementalist",
    7: "Mesmer",
    8: "Necromancer",
    9: "Revenant",
}

LEGEND_NAMES: dict[int, str] = {
    1: "Legendary Assassin Stance (Shiro)",
    2: "Legendary Dragon Stance (Glint)",
    3: "Legendary Demon Stance (Mallyx)",
    4: "Legendary Dwarf Stance (Jalis)",
    5: "Legendary Centaur Stance (Ventari)",
    6: "Legendary Renegade Stance (Kalla)",
    7: "Legendary Alliance Stance (Vindicator)",
}
