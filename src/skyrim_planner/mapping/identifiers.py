"""Name <-> identifier lookups between the application and the planner.

Three lookup families, each with its own miss policy:

  - name -> EDID (races, stones, blessings, perks): an unknown name is
    returned unchanged; an unknown EDID reverse-maps to None.
  - name -> small integer (perk lists, game mechanics, presets): an unknown
    name maps to 0, the planner's "unconfigured" id, so 0 does not imply
    the name was valid; an unknown id reverse-maps to None. The find_*
    variants return None instead of 0 for callers that must fail.
  - table position (races, stones, blessings): index <-> name, None on a
    miss. The codec turns those misses into the "Unknown" sentinel or 0.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Generic, TypeVar

from skyrim_planner.mapping.edid_tables import (
    BLESSING_NAME_TO_EDID,
    GAME_MECHANICS_SLUGS,
    PERK_LIST_SLUGS,
    PERK_NAME_TO_EDID,
    PRESET_SLUGS,
    RACE_NAME_TO_EDID,
    STANDING_STONE_NAME_TO_EDID,
)
from skyrim_planner.models.reference import ReferenceData


K = TypeVar("K")
V = TypeVar("V")

EDID_KINDS: tuple[str, ...] = ("race", "standing_stone", "blessing", "perk")
SLUG_KINDS: tuple[str, ...] = ("perk_list", "game_mechanics", "preset")

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """"LoreRim v3.0.4" -> "lorerim-v3-0-4"."""
    return _SLUG_STRIP.sub("-", name.lower()).strip("-")


class BiMap(Generic[K, V]):
    """Forward and reverse dicts built once from (key, value) pairs.

    Later pairs win on duplicate keys or values.
    """

    __slots__ = ("_forward", "_reverse")

    def __init__(self, pairs: Iterable[tuple[K, V]] = ()) -> None:
        self._forward: dict[K, V] = {}
        self._reverse: dict[V, K] = {}
        for key, value in pairs:
            self._forward[key] = value
            self._reverse[value] = key

    @classmethod
    def from_mapping(cls, mapping: Mapping[K, V]) -> BiMap[K, V]:
        return cls(mapping.items())

    def get(self, key: K) -> V | None:
        return self._forward.get(key)

    def inverse(self, value: V) -> K | None:
        return self._reverse.get(value)


class IdentifierMapper:
    """All name/id lookups, built once from static tables and loaded data."""

    def __init__(self, data: ReferenceData | None = None) -> None:
        data = data or ReferenceData()

        self._edids: dict[str, BiMap[str, str]] = {
            "race": BiMap.from_mapping(RACE_NAME_TO_EDID),
            "standing_stone": BiMap.from_mapping(STANDING_STONE_NAME_TO_EDID),
            "blessing": BiMap.from_mapping(BLESSING_NAME_TO_EDID),
            "perk": BiMap.from_mapping(PERK_NAME_TO_EDID),
        }

        self._perk_lists: BiMap[str, int] = BiMap(
            (p.name, p.perk_list_id) for p in data.perk_lists
        )
        self._game_mechanics: BiMap[str, int] = BiMap(
            (g.name, g.game_id) for g in data.game_mechanics
        )
        self._presets: BiMap[str, int] = BiMap(
            (p.name, p.preset_id) for p in data.presets
        )

        self._positions: dict[str, BiMap[str, int]] = {
            "race": BiMap((r.name, i) for i, r in enumerate(data.races)),
            "standing_stone": BiMap((s.name, i) for i, s in enumerate(data.standing_stones)),
            "blessing": BiMap((b.name, i) for i, b in enumerate(data.blessings)),
        }

        self._slugs: dict[str, dict[str, str]] = {
            "perk_list": {**PERK_LIST_SLUGS, **{p.id: p.name for p in data.perk_lists}},
            "game_mechanics": {
                **GAME_MECHANICS_SLUGS,
                **{g.id: g.name for g in data.game_mechanics},
            },
            "preset": {**PRESET_SLUGS, **{p.id: p.name for p in data.presets}},
        }

    # --- Name <-> EDID -----------------------------------------------------

    def _edid_table(self, kind: str) -> BiMap[str, str]:
        try:
            return self._edids[kind]
        except KeyError:
            raise ValueError(f"Unknown EDID kind {kind!r}; expected one of {EDID_KINDS}") from None

    def edid_of(self, kind: str, name: str) -> str:
        """EDID for a display name; unknown names pass through unchanged."""
        edid = self._edid_table(kind).get(name)
        return name if edid is None else edid

    def name_from_edid(self, kind: str, edid: str) -> str | None:
        """Display name for an EDID, or None when the EDID is not in the table."""
        return self._edid_table(kind).inverse(edid)

    def race_edid(self, name: str) -> str:
        return self.edid_of("race", name)

    def race_name_from_edid(self, edid: str) -> str | None:
        return self.name_from_edid("race", edid)

    def standing_stone_edid(self, name: str) -> str:
        return self.edid_of("standing_stone", name)

    def standing_stone_name_from_edid(self, edid: str) -> str | None:
        return self.name_from_edid("standing_stone", edid)

    def blessing_edid(self, name: str) -> str:
        return self.edid_of("blessing", name)

    def blessing_name_from_edid(self, edid: str) -> str | None:
        return self.name_from_edid("blessing", edid)

    def perk_edid(self, name: str) -> str:
        return self.edid_of("perk", name)

    def perk_name_from_edid(self, edid: str) -> str | None:
        return self.name_from_edid("perk", edid)

    # --- Name <-> small integer --------------------------------------------

    def perk_list_id(self, name: str) -> int:
        return self._perk_lists.get(name) or 0

    def find_perk_list_id(self, name: str) -> int | None:
        return self._perk_lists.get(name)

    def perk_list_name(self, perk_list_id: int) -> str | None:
        return self._perk_lists.inverse(perk_list_id)

    def game_mechanics_id(self, name: str) -> int:
        return self._game_mechanics.get(name) or 0

    def find_game_mechanics_id(self, name: str) -> int | None:
        return self._game_mechanics.get(name)

    def game_mechanics_name(self, game_id: int) -> str | None:
        return self._game_mechanics.inverse(game_id)

    def preset_id(self, name: str) -> int:
        return self._presets.get(name) or 0

    def preset_name(self, preset_id: int) -> str | None:
        return self._presets.inverse(preset_id)

    # --- Table position ----------------------------------------------------

    def _position_table(self, kind: str) -> BiMap[str, int]:
        try:
            return self._positions[kind]
        except KeyError:
            raise ValueError(f"No positional table for {kind!r}") from None

    def index_of(self, kind: str, name: str) -> int | None:
        return self._position_table(kind).get(name)

    def name_at(self, kind: str, index: int) -> str | None:
        return self._position_table(kind).inverse(index)

    def race_index(self, name: str) -> int | None:
        return self.index_of("race", name)

    def race_name(self, index: int) -> str | None:
        return self.name_at("race", index)

    def standing_stone_index(self, name: str) -> int | None:
        return self.index_of("standing_stone", name)

    def standing_stone_name(self, index: int) -> str | None:
        return self.name_at("standing_stone", index)

    def blessing_index(self, name: str) -> int | None:
        return self.index_of("blessing", name)

    def blessing_name(self, index: int) -> str | None:
        return self.name_at("blessing", index)

    # --- Slugs -------------------------------------------------------------

    def display_name_from_slug(self, kind: str, slug: str) -> str | None:
        """Display name for a deep-link slug; None when the slug is unknown."""
        try:
            table = self._slugs[kind]
        except KeyError:
            raise ValueError(f"Unknown slug kind {kind!r}; expected one of {SLUG_KINDS}") from None
        return table.get(slug)

    def slug_for(self, kind: str, name: str) -> str:
        """Slug for a display name, preferring the one the tables declare."""
        try:
            table = self._slugs[kind]
        except KeyError:
            raise ValueError(f"Unknown slug kind {kind!r}; expected one of {SLUG_KINDS}") from None
        for slug, display in table.items():
            if display == name:
                return slug
        return slugify(name)
