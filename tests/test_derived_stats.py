"""Tests for DerivedAttributes: formula verification with known inputs."""

import pytest

from skyrim_planner.models.character import HmsIncreases
from skyrim_planner.models.derived_stats import BaseAttributes, DerivedAttributes
from skyrim_planner.models.reference import DerivedAttributeFormula


@pytest.fixture
def calc(reference_data):
    """DerivedAttributes over the LoreRim v4 fixture mechanics."""
    return DerivedAttributes(reference_data.game_mechanics_by_name("LoreRim v4"))


@pytest.fixture
def nord(reference_data):
    return reference_data.race_by_name("Nord")


# --- Base attributes ---

def test_base_attributes_nord_no_increases(calc, nord):
    """Nord starts at 120/80/100."""
    assert calc.base_attributes(nord, HmsIncreases()) == BaseAttributes(120, 80, 100)


def test_base_attributes_five_per_point(calc, nord):
    """2 health points: 120 + 2*5 = 130."""
    base = calc.base_attributes(nord, HmsIncreases(health=2, magicka=1, stamina=4))
    assert base == BaseAttributes(130, 85, 120)


def test_custom_step(reference_data, nord):
    calc = DerivedAttributes(reference_data.game_mechanics_by_name("LoreRim v4"), hms_per_level=10)
    assert calc.base_attributes(nord, HmsIncreases(stamina=1)).stamina == 110


# --- Formulas ---

def test_carry_weight_above_threshold(calc, nord):
    """Stamina 120: floor(10 * sqrt(120 - 100)) = 44."""
    assert calc.compute(nord, HmsIncreases(stamina=4))["Carry Weight"] == 44


def test_value_at_threshold_is_zero(calc, nord):
    """Stamina 100 equals the threshold."""
    assert calc.compute(nord, HmsIncreases())["Carry Weight"] == 0


def test_magic_resist_below_threshold(calc, nord):
    """Magicka 80 < 100."""
    assert calc.compute(nord, HmsIncreases())["Magic Resist"] == 0


def test_magic_resist_above_threshold(calc, nord):
    """Magicka 130: floor(2 * sqrt(30)) = 10."""
    assert calc.compute(nord, HmsIncreases(magicka=10))["Magic Resist"] == 10


def test_weighted_sum():
    formula = DerivedAttributeFormula(
        attribute="Regen",
        is_percent=False,
        prefactor=1.0,
        threshold=0.0,
        weight_health=0.5,
        weight_magicka=0.25,
        weight_stamina=0.25,
    )
    # 0.5*100 + 0.25*100 + 0.25*100 = 100, sqrt(100) = 10
    assert DerivedAttributes.evaluate(formula, BaseAttributes(100, 100, 100)) == 10


def test_compute_keeps_declared_order(calc, nord):
    assert list(calc.compute(nord, HmsIncreases())) == ["Carry Weight", "Magic Resist"]


def test_percent_attributes(calc):
    assert calc.percent_attributes() == ["Magic Resist"]
