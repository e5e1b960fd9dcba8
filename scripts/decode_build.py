"""Decode a GigaPlanner URL into a build state.

Usage examples:
    python -m scripts.decode_build "https://gigaplanner.com?b=AgEAAgAK..."
    python -m scripts.decode_build "https://gigaplanner.com?b=..." --data ./gigaplanner-data
    python -m scripts.decode_build "https://gigaplanner.com?b=..." --json
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from skyrim_planner.data.fetchers import fetcher_for
from skyrim_planner.data.repository import ReferenceDataRepository
from skyrim_planner.engine.exchange import BuildExchange
from skyrim_planner.engine.exchange_config import ExchangeConfig
from skyrim_planner.logging_config import configure_logging
from skyrim_planner.models.character import BuildState
from skyrim_planner.models.results import ImportResult


def _result_payload(result: ImportResult) -> dict[str, Any]:
    return {
        "success": result.success,
        "buildState": result.build_state.to_dict() if result.build_state else None,
        "preset": result.preset,
        "error": result.error,
        "errorKind": result.error_kind,
        "warnings": list(result.warnings),
    }


def _print_state(state: BuildState) -> None:
    attrs = state.attribute_assignments
    print(f"Race:      {state.race or '-'}")
    print(f"Stone:     {state.stone or '-'}")
    print(f"Blessing:  {state.favorite_blessing or '-'}")
    if attrs is not None:
        print(
            f"Level {attrs.level}: health {attrs.health}, "
            f"magicka {attrs.magicka}, stamina {attrs.stamina}"
        )
    if state.oghma_choice is not None:
        print(f"Oghma:     {state.oghma_choice.label}")

    if state.skill_levels:
        print("\nSkills:")
        for skill, level in state.skill_levels.items():
            print(f"  {skill:<14} {level:>3}")

    if state.perks and state.perks.selected:
        print("\nPerks:")
        for skill, names in state.perks.selected.items():
            print(f"  {skill}: {', '.join(names)}")


def run(url: str, exchange: BuildExchange, as_json: bool = False) -> int:
    result = exchange.import_from_url(url)
    if as_json:
        print(json.dumps(_result_payload(result), indent=2))
        return 0 if result.success else 1

    if not result.success:
        print(f"Error ({result.error_kind}): {result.error}")
        return 1
    _print_state(result.build_state)
    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  - {warning}")
    return 0


def main(argv: list[str] | None = None) -> int:
    config = ExchangeConfig()
    parser = argparse.ArgumentParser(description="Decode a GigaPlanner build URL")
    parser.add_argument("url", help="Planner URL carrying a ?b= build code.")
    parser.add_argument(
        "--data",
        required=True,
        help="Reference data directory or http(s) base URL.",
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or WARNING).")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    config.data_source = args.data
    repository = ReferenceDataRepository(fetcher_for(config.data_source, config.http_timeout))
    exchange = BuildExchange.from_repository(repository, config)
    return run(args.url, exchange, as_json=args.json)


if __name__ == "__main__":
    raise SystemExit(main())
