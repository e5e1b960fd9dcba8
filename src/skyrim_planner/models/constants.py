"""GigaPlanner build-code layout, sentinels, and LoreRim defaults.

Offsets are 0-based positions in the decoded build-code bytes. The layout
is fixed by the external planner and must match it bit for bit.
"""

from enum import IntEnum


class Offset(IntEnum):
    """Byte offsets in a decoded build code."""
    VERSION = 0
    PERK_LIST = 1
    RACE_LIST = 2        # reserved, always 0 in this game edition
    GAME_MECHANICS = 3
    BLESSING_LIST = 4    # reserved, always 0 in this game edition
    LEVEL = 5
    HEALTH = 6
    MAGICKA = 7
    STAMINA = 8
    SKILLS = 9           # 18 consecutive bytes
    OGHMA = 27
    RACE = 28
    STANDING_STONE = 29
    BLESSING = 30
    PERKS = 31           # ceil(perk_count / 8) bytes, MSB first


SUPPORTED_VERSIONS: frozenset[int] = frozenset({1, 2})
ENCODE_VERSION = 2

SKILL_BYTE_COUNT = 18     # skill levels stored in the code
SKILL_NAME_COUNT = 20     # skill names per perk list (18 skills + 2 pseudo trees)
HMS_TRIPLE = 3

# Version 2 appends a pseudo-skill carrying the character level.
LEVEL_PSEUDO_SKILL = "Level"

# Version 2 stores the Oghma index in the high nibble.
OGHMA_SHIFT_V2 = 4

# Sentinel for race/stone/blessing ids with no table entry.
UNKNOWN = "Unknown"

# Pseudo perk trees in LoreRim perk lists.
DESTINY_SKILL = "Destiny"
TRAITS_SKILL = "Traits"

DEFAULT_BASE_URL = "https://gigaplanner.com"
DEFAULT_PERK_LIST = "LoreRim v3.0.4"
DEFAULT_GAME_MECHANICS = "LoreRim v4"
DEFAULT_RACE = "Nord"
DEFAULT_STONE = "None"
DEFAULT_BLESSING = "None"

# Skill display names in LoreRim perk-list order.
SKILL_NAMES: tuple[str, ...] = (
    "Smithing",
    "Heavy Armor",
    "Block",
    "Two-Handed",
    "One-Handed",
    "Marksman",
    "Evasion",
    "Sneak",
    "Wayfarer",
    "Finesse",
    "Speech",
    "Alchemy",
    "Illusion",
    "Conjuration",
    "Destruction",
    "Restoration",
    "Alteration",
    "Enchanting",
    DESTINY_SKILL,
    TRAITS_SKILL,
)
