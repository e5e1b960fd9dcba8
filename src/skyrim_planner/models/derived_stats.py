"""Derived attribute calculator driven by GameMechanics formulas.

Each formula weighs the three base attributes and applies a square-root
curve above a threshold:

    weighted = health * wh + magicka * wm + stamina * ws
    value    = floor(prefactor * sqrt(weighted - threshold))  if weighted > threshold
             = 0                                              otherwise

Base attributes are the race's starting health/magicka/stamina plus a
fixed step per level-up point spent on each.
"""

import math
from dataclasses import dataclass

from skyrim_planner.models.character import HmsIncreases
from skyrim_planner.models.reference import DerivedAttributeFormula, GameMechanics, Race


HMS_PER_LEVEL = 5


@dataclass(frozen=True, slots=True)
class BaseAttributes:
    health: float
    magicka: float
    stamina: float


class DerivedAttributes:
    """Computes derived attributes for one game-mechanics variant."""

    def __init__(self, mechanics: GameMechanics, hms_per_level: int = HMS_PER_LEVEL) -> None:
        self._mechanics = mechanics
        self._hms_per_level = hms_per_level

    def base_attributes(self, race: Race, increases: HmsIncreases) -> BaseAttributes:
        """Race starting values + hms_per_level per point spent."""
        health, magicka, stamina = race.starting_hms
        step = self._hms_per_level
        return BaseAttributes(
            health=health + increases.health * step,
            magicka=magicka + increases.magicka * step,
            stamina=stamina + increases.stamina * step,
        )

    @staticmethod
    def evaluate(formula: DerivedAttributeFormula, base: BaseAttributes) -> int:
        weighted = (
            base.health * formula.weight_health
            + base.magicka * formula.weight_magicka
            + base.stamina * formula.weight_stamina
        )
        if weighted <= formula.threshold:
            return 0
        return math.floor(formula.prefactor * math.sqrt(weighted - formula.threshold))

    def compute(self, race: Race, increases: HmsIncreases) -> dict[str, int]:
        """Attribute name -> value, in the mechanics' declared order."""
        base = self.base_attributes(race, increases)
        return {
            formula.attribute: self.evaluate(formula, base)
            for formula in self._mechanics.derived_attributes
        }

    def percent_attributes(self) -> list[str]:
        return [f.attribute for f in self._mechanics.derived_attributes if f.is_percent]
