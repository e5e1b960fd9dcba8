"""Structural validation of reference documents.

Each parse_* function takes one raw JSON record (a dict, camelCase keys as
shipped by the planner) and returns the typed record, or raises
ValidationFailure naming the record and the broken invariant.
"""

import re
from typing import Any, NoReturn

from skyrim_planner.errors import ValidationFailure
from skyrim_planner.models.constants import HMS_TRIPLE, SKILL_NAME_COUNT
from skyrim_planner.models.reference import (
    Blessing,
    DerivedAttributeFormula,
    GameMechanics,
    Perk,
    PerkList,
    Preset,
    Race,
    StandingStone,
)


_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")

_FORMULA_ARRAYS: tuple[str, ...] = (
    "isPercent",
    "prefactor",
    "threshold",
    "weight_health",
    "weight_magicka",
    "weight_stamina",
)


def record_label(raw: Any) -> str:
    """Name used in error messages: the record's name, or "unknown"."""
    if isinstance(raw, dict):
        name = raw.get("name")
        if isinstance(name, str) and name:
            return name
    return "unknown"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class _Checker:
    """Field accessors that raise ValidationFailure for one record."""

    __slots__ = ("table", "raw", "label")

    def __init__(self, table: str, raw: Any) -> None:
        self.table = table
        self.raw = raw
        self.label = record_label(raw)
        if not isinstance(raw, dict):
            self.fail("record must be an object")

    def fail(self, problem: str) -> NoReturn:
        raise ValidationFailure(self.table, self.label, problem)

    def text(self, key: str) -> str:
        value = self.raw.get(key)
        if not isinstance(value, str) or not value:
            self.fail(f"missing required field '{key}'")
        return value

    def optional_text(self, key: str) -> str:
        value = self.raw.get(key, "")
        if value is None:
            return ""
        if not isinstance(value, str):
            self.fail(f"'{key}' must be a string")
        return value

    def integer(self, key: str) -> int:
        value = self.raw.get(key)
        if not _is_int(value):
            self.fail(f"'{key}' must be an integer")
        return value

    def optional_integer(self, key: str, default: int) -> int:
        value = self.raw.get(key, default)
        if not _is_int(value):
            self.fail(f"'{key}' must be an integer")
        return value

    def number(self, key: str, default: float = 0.0) -> float:
        value = self.raw.get(key, default)
        if not _is_number(value):
            self.fail(f"'{key}' must be a number")
        return float(value)

    def numbers(self, key: str, length: int | None = None) -> tuple[float, ...]:
        value = self.raw.get(key)
        if not isinstance(value, list) or not all(_is_number(v) for v in value):
            self.fail(f"'{key}' must be an array of numbers")
        if length is not None and len(value) != length:
            self.fail(f"{key} must be array of {length} numbers")
        return tuple(float(v) for v in value)

    def optional_numbers(self, key: str, length: int) -> tuple[float, ...] | None:
        if self.raw.get(key) is None:
            return None
        return self.numbers(key, length)


def parse_race(raw: Any) -> Race:
    c = _Checker("race", raw)
    hms_bonus = c.optional_numbers("hmsBonus", HMS_TRIPLE)
    regen = c.optional_numbers("startingHMSRegen", HMS_TRIPLE)
    return Race(
        id=c.text("id"),
        name=c.text("name"),
        edid=c.text("edid"),
        starting_hms=c.numbers("startingHMS", HMS_TRIPLE),
        starting_skills=c.numbers("startingSkills", SKILL_NAME_COUNT),
        starting_cw=c.number("startingCW"),
        speed_bonus=c.number("speedBonus"),
        hms_bonus=hms_bonus or (0.0, 0.0, 0.0),
        starting_hms_regen=regen or (0.0, 0.0, 0.0),
        unarmed_damage=c.number("unarmedDam"),
        description=c.optional_text("description"),
        bonus=c.optional_text("bonus"),
    )


def parse_standing_stone(raw: Any) -> StandingStone:
    c = _Checker("standing stone", raw)
    return StandingStone(
        id=c.text("id"),
        name=c.text("name"),
        edid=c.optional_text("edid"),
        group=c.optional_text("group"),
        description=c.optional_text("description"),
        bonus=c.optional_text("bonus"),
    )


def parse_blessing(raw: Any) -> Blessing:
    c = _Checker("blessing", raw)
    return Blessing(
        id=c.text("id"),
        name=c.text("name"),
        edid=c.optional_text("edid"),
        shrine=c.optional_text("shrine"),
        follower=c.optional_text("follower"),
        description=c.optional_text("description"),
    )


def _parse_perk(raw: Any, skill_names: tuple[str, ...]) -> Perk:
    c = _Checker("perk", raw)
    perk_id = c.text("id")
    name = c.text("name")

    skill_raw = raw.get("skill")
    if isinstance(skill_raw, str) and skill_raw:
        if skill_raw not in skill_names:
            c.fail(f"skill '{skill_raw}' not found in skillNames")
        skill = skill_names.index(skill_raw)
    elif _is_int(skill_raw):
        if not 0 <= skill_raw < len(skill_names):
            c.fail(f"skill index {skill_raw} is outside skillNames")
        skill = skill_raw
    else:
        c.fail("missing required field 'skill'")

    prerequisites = raw.get("prerequisites")
    if not isinstance(prerequisites, list) or not all(_is_int(p) for p in prerequisites):
        c.fail("prerequisites must be an array")

    return Perk(
        id=perk_id,
        name=name,
        skill=skill,
        skill_req=c.integer("skillReq"),
        rank=c.optional_integer("rank", 1),
        max_rank=c.optional_integer("maxRank", 1),
        prerequisites=tuple(prerequisites),
        next_perk=c.optional_integer("nextPerk", -1),
        x_pos=c.number("xPos"),
        y_pos=c.number("yPos"),
        description=c.optional_text("description"),
    )


def parse_perk_list(raw: Any) -> PerkList:
    c = _Checker("perks", raw)
    list_id = c.text("id")
    name = c.text("name")
    perk_list_id = c.integer("perkListId")

    skill_names = raw.get("skillNames")
    if not isinstance(skill_names, list) or not all(
        isinstance(s, str) and s for s in skill_names
    ):
        c.fail("skillNames must be a non-empty array of strings")
    if len(skill_names) != SKILL_NAME_COUNT:
        c.fail(f"skillNames must have exactly {SKILL_NAME_COUNT} entries")
    skills = tuple(skill_names)

    perks_raw = raw.get("perks")
    if not isinstance(perks_raw, list) or not perks_raw:
        c.fail("perks must be a non-empty array")

    version = c.optional_text("version")
    return PerkList(
        id=list_id,
        name=name,
        perk_list_id=perk_list_id,
        skill_names=skills,
        perks=tuple(_parse_perk(p, skills) for p in perks_raw),
        version=version,
        description=c.optional_text("description"),
    )


def parse_game_mechanics(raw: Any) -> GameMechanics:
    c = _Checker("game mechanics", raw)
    mech_id = c.text("id")
    name = c.text("name")
    game_id = c.integer("gameId")

    derived = raw.get("derivedAttributes")
    if not isinstance(derived, dict) or not isinstance(derived.get("attribute"), list):
        c.fail("missing derivedAttributes")
    attributes = derived["attribute"]
    expected = len(attributes)
    for key in _FORMULA_ARRAYS:
        values = derived.get(key)
        if not isinstance(values, list) or len(values) != expected:
            c.fail("derivedAttributes arrays have inconsistent lengths")

    formulas = []
    for i, attribute in enumerate(attributes):
        numeric = [derived[key][i] for key in _FORMULA_ARRAYS[1:]]
        if not isinstance(attribute, str) or not all(_is_number(v) for v in numeric):
            c.fail(f"derivedAttributes entry {i} is malformed")
        formulas.append(
            DerivedAttributeFormula(
                attribute=attribute,
                is_percent=bool(derived["isPercent"][i]),
                prefactor=float(derived["prefactor"][i]),
                threshold=float(derived["threshold"][i]),
                weight_health=float(derived["weight_health"][i]),
                weight_magicka=float(derived["weight_magicka"][i]),
                weight_stamina=float(derived["weight_stamina"][i]),
            )
        )

    return GameMechanics(
        id=mech_id,
        name=name,
        game_id=game_id,
        derived_attributes=tuple(formulas),
        description=c.optional_text("description"),
    )


def parse_preset(raw: Any) -> Preset:
    c = _Checker("preset", raw)
    preset_id_slug = c.text("id")
    name = c.text("name")
    preset_id = c.integer("presetId")

    refs = {}
    for key in ("perks", "races", "gameMechanics", "blessings"):
        value = raw.get(key)
        if not _is_int(value):
            c.fail("reference fields must be numbers")
        refs[key] = value

    version = raw.get("version")
    if not isinstance(version, str) or not _VERSION_RE.match(version):
        c.fail("version must be in format x.y.z")

    return Preset(
        id=preset_id_slug,
        name=name,
        preset_id=preset_id,
        perks=refs["perks"],
        races=refs["races"],
        game_mechanics=refs["gameMechanics"],
        blessings=refs["blessings"],
        version=version,
        description=c.optional_text("description"),
    )
