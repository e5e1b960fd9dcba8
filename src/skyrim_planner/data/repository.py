"""Reference data repository with a per-table cache.

Each loader fetches one document, checks its top-level shape, validates
every record, and caches the resulting tuple. Failures are logged and
re-raised; nothing is cached for a table that failed to load.

The repository is an ordinary object: construct one per data source and
hand it to whoever builds the codec. Tests build independent instances.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from loguru import logger

from skyrim_planner.data.fetchers import DocumentFetcher
from skyrim_planner.data.validation import (
    parse_blessing,
    parse_game_mechanics,
    parse_perk_list,
    parse_preset,
    parse_race,
    parse_standing_stone,
)
from skyrim_planner.errors import ReferenceDataError, SchemaFailure
from skyrim_planner.models.reference import (
    Blessing,
    GameMechanics,
    PerkList,
    Preset,
    Race,
    ReferenceData,
    StandingStone,
)


T = TypeVar("T")

# Cache key -> document name as published by the planner.
DOCUMENTS: dict[str, str] = {
    "races": "races",
    "standingStones": "standingStones",
    "blessings": "blessings",
    "perks": "perks",
    "gameMechanics": "gameMechanics",
    "presets": "presets",
}


class ReferenceDataRepository:
    """Loads, validates, and caches the six reference tables."""

    def __init__(self, fetcher: DocumentFetcher) -> None:
        self._fetcher = fetcher
        self._cache: dict[str, tuple[Any, ...]] = {}
        self._lock = threading.Lock()

    # --- Loaders -----------------------------------------------------------

    def load_races(self) -> tuple[Race, ...]:
        return self._load("races", "races", parse_race)

    def load_standing_stones(self) -> tuple[StandingStone, ...]:
        return self._load("standingStones", "standing stones", parse_standing_stone)

    def load_blessings(self) -> tuple[Blessing, ...]:
        return self._load("blessings", "blessings", parse_blessing)

    def load_game_mechanics(self) -> tuple[GameMechanics, ...]:
        return self._load("gameMechanics", "game mechanics", parse_game_mechanics)

    def load_presets(self) -> tuple[Preset, ...]:
        return self._load("presets", "presets", parse_preset)

    def load_perk_lists(self) -> tuple[PerkList, ...]:
        return self._load("perks", "perks", parse_perk_list, unwrap=_unwrap_perk_lists)

    def load_all(self) -> ReferenceData:
        """Load every table in parallel; the first failure propagates."""
        with ThreadPoolExecutor(max_workers=len(DOCUMENTS)) as pool:
            races = pool.submit(self.load_races)
            stones = pool.submit(self.load_standing_stones)
            blessings = pool.submit(self.load_blessings)
            mechanics = pool.submit(self.load_game_mechanics)
            presets = pool.submit(self.load_presets)
            perk_lists = pool.submit(self.load_perk_lists)
            data = ReferenceData(
                races=races.result(),
                standing_stones=stones.result(),
                blessings=blessings.result(),
                perk_lists=perk_lists.result(),
                game_mechanics=mechanics.result(),
                presets=presets.result(),
            )
        logger.info(
            f"Loaded reference data: {len(data.races)} races, "
            f"{len(data.standing_stones)} stones, {len(data.blessings)} blessings, "
            f"{len(data.perk_lists)} perk lists, {len(data.game_mechanics)} mechanics, "
            f"{len(data.presets)} presets"
        )
        return data

    # --- Cache -------------------------------------------------------------

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def cache_stats(self) -> dict[str, Any]:
        with self._lock:
            return {"size": len(self._cache), "keys": list(self._cache)}

    # --- Internals ---------------------------------------------------------

    def _load(
        self,
        key: str,
        label: str,
        parse: Callable[[Any], T],
        unwrap: Callable[[Any, str], list[Any]] | None = None,
    ) -> tuple[T, ...]:
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Using cached {label} data")
            return cached

        try:
            payload = self._fetcher.fetch(DOCUMENTS[key])
            records = unwrap(payload, label) if unwrap else _require_array(payload, label)
            table = tuple(parse(raw) for raw in records)
        except ReferenceDataError as exc:
            logger.error(f"Error loading {label} data: {exc}")
            raise

        with self._lock:
            # A concurrent loader may have won the race; keep the first table.
            table = self._cache.setdefault(key, table)
        logger.debug(f"Loaded {len(table)} {label} records")
        return table


def _require_array(payload: Any, label: str) -> list[Any]:
    if not isinstance(payload, list):
        raise SchemaFailure(f"{label.capitalize()} data is not an array")
    return payload


def _unwrap_perk_lists(payload: Any, label: str) -> list[Any]:
    """The planner ships one perk-list object; arrays of them are accepted too."""
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list) and all(isinstance(p, dict) for p in payload):
        return payload
    raise SchemaFailure(f"{label.capitalize()} data is not a perk-list object or array")
