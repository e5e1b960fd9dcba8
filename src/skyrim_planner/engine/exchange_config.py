"""Configuration knobs for build import/export.

Defaults target the LoreRim rulesets published on gigaplanner.com.
"""

from dataclasses import dataclass

from skyrim_planner.models.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_GAME_MECHANICS,
    DEFAULT_PERK_LIST,
    DEFAULT_RACE,
)


@dataclass(slots=True)
class ExchangeConfig:
    """Settings that aren't stored in the reference documents."""

    base_url: str = DEFAULT_BASE_URL
    default_perk_list: str = DEFAULT_PERK_LIST
    default_game_mechanics: str = DEFAULT_GAME_MECHANICS
    default_race: str = DEFAULT_RACE
    data_source: str | None = None                  # directory path or http(s) base URL
    http_timeout: float = 10.0                      # seconds per document
