"""Tests for the character models and BuildState JSON interchange."""

import pytest

from skyrim_planner.models.character import (
    AttributeAssignments,
    BuildState,
    OghmaChoice,
    PerkSelection,
)


def test_oghma_from_index():
    assert OghmaChoice.from_index(1) is OghmaChoice.HEALTH
    assert OghmaChoice.from_index(3) is OghmaChoice.STAMINA
    assert OghmaChoice.from_index(16) is OghmaChoice.NONE


def test_oghma_labels():
    assert OghmaChoice.MAGICKA.label == "Magicka"
    assert OghmaChoice.from_label("stamina") is OghmaChoice.STAMINA
    with pytest.raises(ValueError):
        OghmaChoice.from_label("Luck")


def test_perk_selection_flattened():
    selection = PerkSelection(selected={"Smithing": ["Craftsmanship", "Steel Smithing"], "Sneak": ["Stealth"]})
    assert selection.flattened() == ["Craftsmanship", "Steel Smithing", "Stealth"]


def test_build_state_dict_round_trip():
    state = BuildState(
        race="Nord",
        stone="Lord",
        favorite_blessing="Talos",
        attribute_assignments=AttributeAssignments(level=30, health=10, magicka=5, stamina=15),
        skill_levels={"Smithing": 100},
        perks=PerkSelection(selected={"Smithing": ["Craftsmanship"]}),
        oghma_choice=OghmaChoice.HEALTH,
    )
    payload = state.to_dict()
    assert payload["favoriteBlessing"] == "Talos"
    assert payload["attributeAssignments"]["stamina"] == 15
    assert payload["oghmaChoice"] == "Health"
    assert BuildState.from_dict(payload) == state


def test_build_state_from_sparse_dict():
    state = BuildState.from_dict({"race": "", "skillLevels": {"Block": "20"}})
    assert state.race is None
    assert state.attribute_assignments is None
    assert state.skill_levels == {"Block": 20}
    assert state.oghma_choice is None


def test_build_state_keeps_explicit_level_zero():
    state = BuildState.from_dict({"attributeAssignments": {"level": 0, "health": 2}})
    assert state.attribute_assignments == AttributeAssignments(level=0, health=2)


def test_build_state_missing_level_defaults_to_one():
    state = BuildState.from_dict({"attributeAssignments": {"stamina": 4}})
    assert state.attribute_assignments.level == 1
