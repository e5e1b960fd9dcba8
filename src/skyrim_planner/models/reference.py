"""Reference table records shipped by the external planner.

One closed record type per reference kind. Documents are validated once at
the load boundary (see data.validation); everything downstream works with
these types, never with raw JSON dicts.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Race:
    """A playable race. Table position is the build-code race id."""
    id: str                                 # slug, e.g. "argonian"
    name: str
    edid: str
    starting_hms: tuple[float, float, float]
    starting_skills: tuple[float, ...]      # 20 entries, perk-list skill order
    starting_cw: float = 0.0
    speed_bonus: float = 0.0
    hms_bonus: tuple[float, float, float] = (0.0, 0.0, 0.0)
    starting_hms_regen: tuple[float, float, float] = (0.0, 0.0, 0.0)
    unarmed_damage: float = 0.0
    description: str = ""
    bonus: str = ""


@dataclass(frozen=True, slots=True)
class StandingStone:
    """A standing stone (birthsign). Table position is the build-code id."""
    id: str
    name: str
    edid: str = ""
    group: str = ""
    description: str = ""
    bonus: str = ""


@dataclass(frozen=True, slots=True)
class Blessing:
    """A shrine blessing. Table position is the build-code id."""
    id: str
    name: str
    edid: str = ""
    shrine: str = ""
    follower: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class Perk:
    """One perk of a perk list.

    Position in PerkList.perks is the bit position in the build code.
    """
    id: str
    name: str
    skill: int               # index into the owning PerkList.skill_names
    skill_req: int           # skill level requirement
    rank: int = 1
    max_rank: int = 1
    prerequisites: tuple[int, ...] = ()
    next_perk: int = -1      # index of the next rank, -1 if none
    x_pos: float = 0.0
    y_pos: float = 0.0
    description: str = ""


@dataclass(frozen=True, slots=True)
class PerkList:
    """A ruleset: skill ordering plus the ordered perk set."""
    id: str
    name: str
    perk_list_id: int
    skill_names: tuple[str, ...]
    perks: tuple[Perk, ...]
    version: str = ""
    description: str = ""

    def skill_name(self, index: int) -> str | None:
        if 0 <= index < len(self.skill_names):
            return self.skill_names[index]
        return None


@dataclass(frozen=True, slots=True)
class DerivedAttributeFormula:
    """Parameters for one derived attribute.

    value = floor(prefactor * sqrt(weighted - threshold)) when
    weighted = h*weight_health + m*weight_magicka + s*weight_stamina
    exceeds threshold, else 0.
    """
    attribute: str
    is_percent: bool
    prefactor: float
    threshold: float
    weight_health: float
    weight_magicka: float
    weight_stamina: float


@dataclass(frozen=True, slots=True)
class GameMechanics:
    """A game-mechanics variant. Matched in build codes by game_id."""
    id: str
    name: str
    game_id: int
    derived_attributes: tuple[DerivedAttributeFormula, ...]
    description: str = ""


@dataclass(frozen=True, slots=True)
class Preset:
    """A named bundle of table selections."""
    id: str
    name: str
    preset_id: int
    perks: int               # perk_list_id this preset uses
    races: int
    game_mechanics: int
    blessings: int
    version: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class ReferenceData:
    """The six loaded reference tables."""
    races: tuple[Race, ...] = ()
    standing_stones: tuple[StandingStone, ...] = ()
    blessings: tuple[Blessing, ...] = ()
    perk_lists: tuple[PerkList, ...] = ()
    game_mechanics: tuple[GameMechanics, ...] = ()
    presets: tuple[Preset, ...] = ()

    def perk_list_by_id(self, perk_list_id: int) -> PerkList | None:
        for perk_list in self.perk_lists:
            if perk_list.perk_list_id == perk_list_id:
                return perk_list
        return None

    def perk_list_by_name(self, name: str) -> PerkList | None:
        for perk_list in self.perk_lists:
            if perk_list.name == name:
                return perk_list
        return None

    def game_mechanics_by_id(self, game_id: int) -> GameMechanics | None:
        for mechanics in self.game_mechanics:
            if mechanics.game_id == game_id:
                return mechanics
        return None

    def game_mechanics_by_name(self, name: str) -> GameMechanics | None:
        for mechanics in self.game_mechanics:
            if mechanics.name == name:
                return mechanics
        return None

    def race_by_name(self, name: str) -> Race | None:
        for race in self.races:
            if race.name == name:
                return race
        return None
