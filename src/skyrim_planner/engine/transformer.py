"""Conversion between decoded build codes and the application's BuildState.

The two directions are not exact inverses. to_build_state folds the Oghma
bonus into the attribute counts and drops the "Level" pseudo-skill;
to_raw_character undoes the fold when the BuildState remembers which
bonus was taken, and guesses it from the attributes otherwise.
"""

from __future__ import annotations

from loguru import logger

from skyrim_planner.errors import (
    UNRESOLVED_REFERENCE,
    BuildCodeError,
    UnknownGameMechanics,
    UnknownPerkList,
)
from skyrim_planner.mapping.identifiers import IdentifierMapper
from skyrim_planner.models.character import (
    AttributeAssignments,
    BuildState,
    HmsIncreases,
    OghmaChoice,
    PerkSelection,
    PerkTaken,
    RawCharacter,
    SkillLevel,
)
from skyrim_planner.models.constants import (
    DEFAULT_BLESSING,
    DEFAULT_RACE,
    DEFAULT_STONE,
    DESTINY_SKILL,
    LEVEL_PSEUDO_SKILL,
    TRAITS_SKILL,
    UNKNOWN,
)
from skyrim_planner.models.reference import PerkList, ReferenceData
from skyrim_planner.models.results import TransformResult


class SemanticTransformer:
    """RawCharacter <-> BuildState over one set of reference tables."""

    def __init__(self, data: ReferenceData, mapper: IdentifierMapper | None = None) -> None:
        self._data = data
        self._mapper = mapper or IdentifierMapper(data)

    # --- RawCharacter -> BuildState ----------------------------------------

    def to_build_state(self, raw: RawCharacter) -> TransformResult[BuildState]:
        warnings: list[str] = []

        race = self._position_name("race", raw.race_id, raw.race, warnings)
        stone = self._position_name("standing_stone", raw.standing_stone_id, raw.standing_stone, warnings)
        blessing = self._position_name("blessing", raw.blessing_id, raw.blessing, warnings)

        attrs = AttributeAssignments(
            level=raw.level,
            health=raw.hms_increases.health,
            magicka=raw.hms_increases.magicka,
            stamina=raw.hms_increases.stamina,
        )
        if raw.oghma_choice is not OghmaChoice.NONE:
            _shift_attribute(attrs, raw.oghma_choice, +1)
            warnings.append(f"Oghma Infinium choice: {raw.oghma_choice.label} (+1 applied)")

        skills = {
            entry.skill: entry.level
            for entry in raw.skill_levels
            if entry.skill != LEVEL_PSEUDO_SKILL
        }

        perk_list = self._data.perk_list_by_id(raw.perk_list_id) or self._data.perk_list_by_name(
            raw.perk_list
        )
        selected: dict[str, list[str]] = {}
        for perk in raw.perks:
            skill = perk_list.skill_name(perk.skill) if perk_list else None
            if skill is None:
                warnings.append(f"Perk {perk.name!r} has no skill at index {perk.skill}; skipped")
                continue
            selected.setdefault(skill, []).append(perk.name)

        state = BuildState(
            race=race,
            stone=stone,
            favorite_blessing=blessing,
            attribute_assignments=attrs,
            skill_levels=skills,
            perks=PerkSelection(selected=selected),
            oghma_choice=raw.oghma_choice,
        )
        logger.debug(f"Transformed build code into build state ({len(warnings)} warnings)")
        return TransformResult(data=state, warnings=warnings)

    def _position_name(
        self, kind: str, index: int, decoded: str, warnings: list[str]
    ) -> str | None:
        name = None if decoded == UNKNOWN else self._mapper.name_at(kind, index)
        if name is None:
            label = kind.replace("_", " ")
            warnings.append(f"{UNRESOLVED_REFERENCE}: {label} id {index} left unset")
        return name

    # --- BuildState -> RawCharacter ----------------------------------------

    def to_raw_character(
        self,
        state: BuildState,
        perk_list_name: str,
        game_mechanics_name: str,
    ) -> TransformResult[RawCharacter]:
        try:
            return self._to_raw_character(state, perk_list_name, game_mechanics_name)
        except BuildCodeError as exc:
            logger.warning(f"Build state transform failed ({exc.kind}): {exc}")
            return TransformResult(error=str(exc), error_kind=exc.kind)

    def _to_raw_character(
        self,
        state: BuildState,
        perk_list_name: str,
        game_mechanics_name: str,
    ) -> TransformResult[RawCharacter]:
        warnings: list[str] = []

        perk_list_id = self._mapper.find_perk_list_id(perk_list_name)
        perk_list = None if perk_list_id is None else self._data.perk_list_by_id(perk_list_id)
        if perk_list is None:
            raise UnknownPerkList(f"Unknown perk list: {perk_list_name}")
        mechanics_id = self._mapper.find_game_mechanics_id(game_mechanics_name)
        if mechanics_id is None:
            raise UnknownGameMechanics(f"Unknown game mechanics: {game_mechanics_name}")

        race = self._normalize("race", state.race, DEFAULT_RACE)
        stone = self._normalize("standing_stone", state.stone, DEFAULT_STONE)
        blessing = self._normalize("blessing", state.favorite_blessing, DEFAULT_BLESSING)

        attrs = state.attribute_assignments or AttributeAssignments()
        oghma = state.oghma_choice
        if oghma is None:
            oghma = _guess_oghma(attrs)
            hms = HmsIncreases(attrs.health, attrs.magicka, attrs.stamina)
        else:
            unfolded = AttributeAssignments(attrs.level, attrs.health, attrs.magicka, attrs.stamina)
            _shift_attribute(unfolded, oghma, -1)
            hms = HmsIncreases(unfolded.health, unfolded.magicka, unfolded.stamina)

        skill_levels = dict(state.skill_levels or {})
        selected = state.perks.selected if state.perks else {}
        for skill in selected:
            if skill not in skill_levels:
                skill_levels[skill] = 0
                warnings.append(f"Skill {skill!r} has perks but no level; using 0")

        perks = self._flatten_perks(perk_list, selected, warnings)

        raw = RawCharacter(
            version=2,
            perk_list_id=perk_list.perk_list_id,
            game_mechanics_id=mechanics_id,
            perk_list=perk_list.name,
            game_mechanics=game_mechanics_name,
            level=attrs.level,
            hms_increases=hms,
            skill_levels=tuple(SkillLevel(name, level) for name, level in skill_levels.items()),
            oghma_choice=oghma,
            race_id=self._mapper.race_index(race) or 0,
            race=race,
            standing_stone_id=self._mapper.standing_stone_index(stone) or 0,
            standing_stone=stone,
            blessing_id=self._mapper.blessing_index(blessing) or 0,
            blessing=blessing,
            perks=perks,
        )
        return TransformResult(data=raw, warnings=warnings)

    def _normalize(self, kind: str, value: str | None, default: str) -> str:
        """Default empty values; map EDIDs back to display names."""
        if not value:
            return default
        return self._mapper.name_from_edid(kind, value) or value

    @staticmethod
    def _flatten_perks(
        perk_list: PerkList,
        selected: dict[str, list[str]],
        warnings: list[str],
    ) -> tuple[PerkTaken, ...]:
        by_name = {perk.name: perk for perk in perk_list.perks}
        taken: list[PerkTaken] = []
        for group, names in selected.items():
            group_index = perk_list.skill_names.index(group) if group in perk_list.skill_names else -1
            for name in names:
                perk = by_name.get(name)
                if perk is None:
                    warnings.append(f"Unknown perk {name!r} in {group}")
                    taken.append(PerkTaken(name, group_index))
                    continue
                if perk.skill != group_index:
                    declared = perk_list.skill_name(perk.skill)
                    warnings.append(f"Perk {name!r} belongs to {declared}, listed under {group}")
                taken.append(PerkTaken(name, perk.skill))
        return tuple(taken)

    # --- Pseudo perk trees -------------------------------------------------

    @staticmethod
    def extract_traits(state: BuildState) -> list[str]:
        return _perk_group(state, TRAITS_SKILL)

    @staticmethod
    def extract_destiny(state: BuildState) -> list[str]:
        return _perk_group(state, DESTINY_SKILL)


def _perk_group(state: BuildState, skill: str) -> list[str]:
    if state.perks is None:
        return []
    return list(state.perks.selected.get(skill, []))


def _shift_attribute(attrs: AttributeAssignments, choice: OghmaChoice, delta: int) -> None:
    if choice is OghmaChoice.HEALTH:
        attrs.health = max(0, attrs.health + delta)
    elif choice is OghmaChoice.MAGICKA:
        attrs.magicka = max(0, attrs.magicka + delta)
    elif choice is OghmaChoice.STAMINA:
        attrs.stamina = max(0, attrs.stamina + delta)


def _guess_oghma(attrs: AttributeAssignments) -> OghmaChoice:
    """First non-zero attribute, in health/magicka/stamina order."""
    if attrs.health > 0:
        return OghmaChoice.HEALTH
    if attrs.magicka > 0:
        return OghmaChoice.MAGICKA
    if attrs.stamina > 0:
        return OghmaChoice.STAMINA
    return OghmaChoice.NONE
