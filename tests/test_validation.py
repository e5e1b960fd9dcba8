"""Tests for per-record structural validation of reference documents."""

import pytest

from skyrim_planner.data.validation import (
    parse_blessing,
    parse_game_mechanics,
    parse_perk_list,
    parse_preset,
    parse_race,
    parse_standing_stone,
    record_label,
)
from skyrim_planner.errors import ValidationFailure
from skyrim_planner.models.constants import SKILL_NAMES


def _race(**overrides):
    raw = {
        "id": "nord",
        "name": "Nord",
        "edid": "NordRace",
        "startingHMS": [120, 80, 100],
        "startingSkills": [15] * 20,
        "startingCW": 220,
    }
    raw.update(overrides)
    return raw


def _perk_list(**overrides):
    raw = {
        "id": "lorerim-v3-0-4",
        "name": "LoreRim v3.0.4",
        "perkListId": 1,
        "skillNames": list(SKILL_NAMES),
        "perks": [
            {"id": "craftsmanship", "name": "Craftsmanship", "skill": 0, "skillReq": 0, "prerequisites": []},
        ],
    }
    raw.update(overrides)
    return raw


def _mechanics(**derived_overrides):
    derived = {
        "attribute": ["Carry Weight"],
        "isPercent": [False],
        "prefactor": [10],
        "threshold": [100],
        "weight_health": [0],
        "weight_magicka": [0],
        "weight_stamina": [1],
    }
    derived.update(derived_overrides)
    return {"id": "lorerim-v4", "name": "LoreRim v4", "gameId": 2, "derivedAttributes": derived}


def _preset(**overrides):
    raw = {
        "id": "lorerim-v4",
        "name": "LoreRim v4",
        "presetId": 1,
        "perks": 1,
        "races": 0,
        "gameMechanics": 2,
        "blessings": 0,
        "version": "4.0.0",
    }
    raw.update(overrides)
    return raw


# --- Races ---

def test_parse_race():
    race = parse_race(_race())
    assert race.name == "Nord"
    assert race.starting_hms == (120.0, 80.0, 100.0)
    assert len(race.starting_skills) == 20
    assert race.starting_cw == 220.0
    assert race.hms_bonus == (0.0, 0.0, 0.0)


def test_race_wrong_hms_length():
    with pytest.raises(ValidationFailure) as exc:
        parse_race(_race(startingHMS=[100, 100]))
    assert str(exc.value) == "Invalid race data: startingHMS must be array of 3 numbers for Nord"


def test_race_wrong_skill_count():
    with pytest.raises(ValidationFailure, match="startingSkills must be array of 20 numbers"):
        parse_race(_race(startingSkills=[15] * 18))


def test_race_missing_edid():
    with pytest.raises(ValidationFailure, match="missing required field 'edid'"):
        parse_race(_race(edid=""))


def test_record_without_name_is_labelled_unknown():
    raw = _race()
    del raw["name"]
    with pytest.raises(ValidationFailure) as exc:
        parse_race(raw)
    assert exc.value.record == "unknown"
    assert exc.value.table == "race"


def test_non_object_record():
    with pytest.raises(ValidationFailure, match="record must be an object"):
        parse_standing_stone(["Warrior"])


def test_record_label():
    assert record_label({"name": "Mage"}) == "Mage"
    assert record_label({"name": ""}) == "unknown"
    assert record_label(42) == "unknown"


# --- Stones and blessings ---

def test_parse_standing_stone_defaults_optional_fields():
    stone = parse_standing_stone({"id": "none", "name": "None"})
    assert stone.edid == ""
    assert stone.description == ""


def test_parse_blessing():
    blessing = parse_blessing(
        {"id": "talos", "name": "Talos", "edid": "REQ_Blessing_Talos", "shrine": "Shrine of Talos"}
    )
    assert blessing.edid == "REQ_Blessing_Talos"
    assert blessing.shrine == "Shrine of Talos"


def test_blessing_requires_id():
    with pytest.raises(ValidationFailure, match="missing required field 'id'"):
        parse_blessing({"name": "Talos"})


# --- Perk lists ---

def test_parse_perk_list():
    perk_list = parse_perk_list(_perk_list())
    assert perk_list.perk_list_id == 1
    assert perk_list.skill_names == SKILL_NAMES
    assert perk_list.perks[0].skill == 0
    assert perk_list.perks[0].next_perk == -1


def test_perk_skill_by_name_is_normalized_to_index():
    raw = _perk_list(
        perks=[{"id": "stealth", "name": "Stealth", "skill": "Sneak", "skillReq": 0, "prerequisites": []}]
    )
    perk = parse_perk_list(raw).perks[0]
    assert perk.skill == SKILL_NAMES.index("Sneak")


def test_perk_skill_name_not_in_skill_names():
    raw = _perk_list(
        perks=[{"id": "x", "name": "Lockbreaker", "skill": "Lockpicking", "skillReq": 0, "prerequisites": []}]
    )
    with pytest.raises(ValidationFailure) as exc:
        parse_perk_list(raw)
    assert exc.value.table == "perk"
    assert exc.value.record == "Lockbreaker"
    assert "not found in skillNames" in exc.value.problem


def test_perk_skill_index_out_of_range():
    raw = _perk_list(
        perks=[{"id": "x", "name": "Overreach", "skill": 20, "skillReq": 0, "prerequisites": []}]
    )
    with pytest.raises(ValidationFailure, match="outside skillNames"):
        parse_perk_list(raw)


def test_perk_prerequisites_must_be_list():
    raw = _perk_list(
        perks=[{"id": "x", "name": "Craftsmanship", "skill": 0, "skillReq": 0, "prerequisites": "none"}]
    )
    with pytest.raises(ValidationFailure, match="prerequisites must be an array"):
        parse_perk_list(raw)


def test_perk_list_needs_twenty_skill_names():
    with pytest.raises(ValidationFailure, match="exactly 20 entries"):
        parse_perk_list(_perk_list(skillNames=list(SKILL_NAMES[:18])))


def test_perk_list_needs_perks():
    with pytest.raises(ValidationFailure, match="perks must be a non-empty array"):
        parse_perk_list(_perk_list(perks=[]))


def test_perk_list_id_must_be_integer():
    with pytest.raises(ValidationFailure, match="'perkListId' must be an integer"):
        parse_perk_list(_perk_list(perkListId="1"))


# --- Game mechanics ---

def test_parse_game_mechanics():
    mechanics = parse_game_mechanics(_mechanics())
    assert mechanics.game_id == 2
    formula = mechanics.derived_attributes[0]
    assert formula.attribute == "Carry Weight"
    assert formula.is_percent is False
    assert formula.weight_stamina == 1.0


def test_game_mechanics_inconsistent_lengths():
    with pytest.raises(ValidationFailure, match="inconsistent lengths"):
        parse_game_mechanics(_mechanics(prefactor=[10, 2]))


def test_game_mechanics_missing_derived_attributes():
    raw = _mechanics()
    del raw["derivedAttributes"]
    with pytest.raises(ValidationFailure, match="missing derivedAttributes"):
        parse_game_mechanics(raw)


# --- Presets ---

def test_parse_preset():
    preset = parse_preset(_preset())
    assert preset.perks == 1
    assert preset.game_mechanics == 2
    assert preset.version == "4.0.0"


@pytest.mark.parametrize("version", ["4.0", "v4.0.0", "4.0.0-beta", None])
def test_preset_version_format(version):
    with pytest.raises(ValidationFailure, match="version must be in format x.y.z"):
        parse_preset(_preset(version=version))


def test_preset_reference_must_be_integer():
    with pytest.raises(ValidationFailure, match="reference fields must be numbers"):
        parse_preset(_preset(perks="1"))
