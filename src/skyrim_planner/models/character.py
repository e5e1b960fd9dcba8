"""Character build data models.

Two shapes of the same build:
  - RawCharacter: what the build code holds. Numeric ids, resolved table
    names, a flat perk list. Built fresh by every decode and never mutated.
  - BuildState: what the application works with. Names only, perks grouped
    under the skill they belong to, Oghma bonus folded into the attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class OghmaChoice(IntEnum):
    """Oghma Infinium bonus. The value is the index stored in the code."""
    NONE = 0
    HEALTH = 1
    MAGICKA = 2
    STAMINA = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_index(cls, index: int) -> OghmaChoice:
        """Out-of-range indices read as NONE."""
        try:
            return cls(index)
        except ValueError:
            return cls.NONE

    @classmethod
    def from_label(cls, label: str) -> OghmaChoice:
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown Oghma choice: {label!r}") from None


@dataclass(frozen=True, slots=True)
class HmsIncreases:
    """Level-up choices spent on health, magicka, stamina (0-255 each)."""
    health: int = 0
    magicka: int = 0
    stamina: int = 0


@dataclass(frozen=True, slots=True)
class SkillLevel:
    skill: str
    level: int


@dataclass(frozen=True, slots=True)
class PerkTaken:
    name: str
    skill: int   # index into the perk list's skill names


@dataclass(frozen=True, slots=True)
class RawCharacter:
    """A build as stored in a GigaPlanner build code."""
    version: int
    perk_list_id: int
    game_mechanics_id: int
    perk_list: str
    game_mechanics: str
    level: int
    hms_increases: HmsIncreases
    skill_levels: tuple[SkillLevel, ...]
    oghma_choice: OghmaChoice
    race_id: int
    race: str
    standing_stone_id: int
    standing_stone: str
    blessing_id: int
    blessing: str
    perks: tuple[PerkTaken, ...] = ()

    def skill_level(self, skill: str) -> int | None:
        for entry in self.skill_levels:
            if entry.skill == skill:
                return entry.level
        return None

    def perk_names(self) -> list[str]:
        return [perk.name for perk in self.perks]


@dataclass(slots=True)
class AttributeAssignments:
    level: int = 1
    health: int = 0
    magicka: int = 0
    stamina: int = 0


@dataclass(slots=True)
class PerkSelection:
    """Selected perks grouped by skill name, in selection order."""
    selected: dict[str, list[str]] = field(default_factory=dict)

    def flattened(self) -> list[str]:
        names: list[str] = []
        for perks in self.selected.values():
            names.extend(perks)
        return names


@dataclass(slots=True)
class BuildState:
    """The application's semantic build record.

    oghma_choice is None when the build never went through a build code;
    the exporter then falls back to guessing it from the attributes.
    """

    race: str | None = None
    stone: str | None = None
    favorite_blessing: str | None = None
    attribute_assignments: AttributeAssignments | None = None
    skill_levels: dict[str, int] | None = None
    perks: PerkSelection | None = None
    oghma_choice: OghmaChoice | None = None

    # --- JSON interchange (camelCase, as the web app stores builds) --------

    def to_dict(self) -> dict[str, Any]:
        attrs = self.attribute_assignments
        return {
            "race": self.race,
            "stone": self.stone,
            "favoriteBlessing": self.favorite_blessing,
            "attributeAssignments": (
                {
                    "level": attrs.level,
                    "health": attrs.health,
                    "magicka": attrs.magicka,
                    "stamina": attrs.stamina,
                }
                if attrs is not None
                else None
            ),
            "skillLevels": dict(self.skill_levels) if self.skill_levels is not None else None,
            "perks": (
                {"selected": {k: list(v) for k, v in self.perks.selected.items()}}
                if self.perks is not None
                else None
            ),
            "oghmaChoice": self.oghma_choice.label if self.oghma_choice is not None else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> BuildState:
        attrs_raw = raw.get("attributeAssignments")
        attrs = None
        if attrs_raw is not None:
            attrs = AttributeAssignments(
                level=int(attrs_raw["level"]) if attrs_raw.get("level") is not None else 1,
                health=int(attrs_raw.get("health", 0) or 0),
                magicka=int(attrs_raw.get("magicka", 0) or 0),
                stamina=int(attrs_raw.get("stamina", 0) or 0),
            )

        skills_raw = raw.get("skillLevels")
        skills = None
        if skills_raw is not None:
            skills = {str(name): int(level) for name, level in skills_raw.items()}

        perks_raw = raw.get("perks")
        perks = None
        if perks_raw is not None:
            selected = perks_raw.get("selected") or {}
            perks = PerkSelection(
                selected={str(skill): [str(p) for p in names] for skill, names in selected.items()}
            )

        oghma_raw = raw.get("oghmaChoice")
        oghma = OghmaChoice.from_label(oghma_raw) if oghma_raw else None

        return cls(
            race=raw.get("race") or None,
            stone=raw.get("stone") or None,
            favorite_blessing=raw.get("favoriteBlessing") or None,
            attribute_assignments=attrs,
            skill_levels=skills,
            perks=perks,
            oghma_choice=oghma,
        )
