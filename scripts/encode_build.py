"""Encode a build-state JSON file into a GigaPlanner URL.

The JSON file uses the camelCase BuildState layout (see
BuildState.to_dict), e.g. the --json output of scripts.decode_build.

Usage examples:
    python -m scripts.encode_build build.json
    python -m scripts.encode_build build.json --perk-list "LoreRim v3.0.4" --data ./gigaplanner-data
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from skyrim_planner.data.fetchers import fetcher_for
from skyrim_planner.data.repository import ReferenceDataRepository
from skyrim_planner.engine.exchange import BuildExchange
from skyrim_planner.engine.exchange_config import ExchangeConfig
from skyrim_planner.logging_config import configure_logging
from skyrim_planner.models.character import BuildState


def load_build_state(path: Path) -> BuildState:
    """Read a BuildState; accepts decode_build's --json envelope too."""
    payload: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    if "buildState" in payload:
        payload = payload["buildState"] or {}
    return BuildState.from_dict(payload)


def run(
    state: BuildState,
    exchange: BuildExchange,
    perk_list: str | None = None,
    game_mechanics: str | None = None,
) -> int:
    result = exchange.export_to_url(state, perk_list, game_mechanics)
    for warning in result.warnings:
        print(f"Warning: {warning}")
    if not result.success:
        print(f"Error ({result.error_kind}): {result.error}")
        return 1
    print(result.url)
    return 0


def main(argv: list[str] | None = None) -> int:
    config = ExchangeConfig()
    parser = argparse.ArgumentParser(description="Encode a build state as a GigaPlanner URL")
    parser.add_argument("build_file", type=Path, help="Path to a BuildState JSON file.")
    parser.add_argument("--perk-list", default=config.default_perk_list, help="Perk list name.")
    parser.add_argument(
        "--game-mechanics",
        default=config.default_game_mechanics,
        help="Game mechanics name.",
    )
    parser.add_argument(
        "--data",
        required=True,
        help="Reference data directory or http(s) base URL.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or WARNING).")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    state = load_build_state(args.build_file)
    config.data_source = args.data
    repository = ReferenceDataRepository(fetcher_for(config.data_source, config.http_timeout))
    exchange = BuildExchange.from_repository(repository, config)
    return run(state, exchange, args.perk_list, args.game_mechanics)


if __name__ == "__main__":
    raise SystemExit(main())
