"""Import and export of builds as planner URLs.

BuildExchange wires the codec and the transformer together over one set of
reference tables, so callers deal only in URLs and BuildState.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from loguru import logger

from skyrim_planner.codec.build_code import BuildCodec
from skyrim_planner.data.repository import ReferenceDataRepository
from skyrim_planner.engine.exchange_config import ExchangeConfig
from skyrim_planner.engine.transformer import SemanticTransformer
from skyrim_planner.mapping.identifiers import IdentifierMapper
from skyrim_planner.models.character import BuildState
from skyrim_planner.models.reference import ReferenceData
from skyrim_planner.models.results import ExportResult, ImportResult


class BuildExchange:
    """URL <-> BuildState conversions with configured defaults."""

    def __init__(self, data: ReferenceData, config: ExchangeConfig | None = None) -> None:
        self.config = config or ExchangeConfig()
        self.data = data
        self.mapper = IdentifierMapper(data)
        self.codec = BuildCodec(data, self.mapper, base_url=self.config.base_url)
        self.transformer = SemanticTransformer(data, self.mapper)

    @classmethod
    def from_repository(
        cls,
        repository: ReferenceDataRepository,
        config: ExchangeConfig | None = None,
    ) -> BuildExchange:
        """Load every reference table, then build the exchange on top."""
        return cls(repository.load_all(), config)

    # --- Import -------------------------------------------------------------

    def import_from_url(self, url: str) -> ImportResult:
        decoded = self.codec.decode(url)
        if not decoded.success:
            return ImportResult(error=decoded.error, error_kind=decoded.error_kind)

        transformed = self.transformer.to_build_state(decoded.character)
        if not transformed.success:
            return ImportResult(
                error=transformed.error,
                error_kind=transformed.error_kind,
                warnings=decoded.warnings + transformed.warnings,
            )

        warnings: list[str] = []
        if decoded.preset:
            warnings.append(f"Imported from preset: {decoded.preset}")
        warnings.extend(decoded.warnings)
        warnings.extend(transformed.warnings)
        logger.info(f"Imported build from {decoded.character.perk_list} code")
        return ImportResult(
            build_state=transformed.data,
            preset=decoded.preset,
            warnings=warnings,
        )

    def import_from_build_code(self, build_code: str) -> ImportResult:
        return self.import_from_url(f"{self.config.base_url}?b={build_code}")

    # --- Export -------------------------------------------------------------

    def export_to_url(
        self,
        state: BuildState,
        perk_list_name: str | None = None,
        game_mechanics_name: str | None = None,
    ) -> ExportResult:
        perk_list_name = perk_list_name or self.config.default_perk_list
        game_mechanics_name = game_mechanics_name or self.config.default_game_mechanics
        if not state.race:
            state = dataclasses.replace(state, race=self.config.default_race)

        transformed = self.transformer.to_raw_character(state, perk_list_name, game_mechanics_name)
        if not transformed.success:
            return ExportResult(
                error=transformed.error,
                error_kind=transformed.error_kind,
                warnings=transformed.warnings,
            )

        encoded = self.codec.encode(transformed.data, perk_list_name, game_mechanics_name)
        if not encoded.success:
            return ExportResult(
                error=encoded.error,
                error_kind=encoded.error_kind,
                warnings=transformed.warnings,
            )
        return ExportResult(
            url=encoded.url,
            build_code=encoded.build_code,
            warnings=transformed.warnings,
        )

    def export_to_build_code(
        self,
        state: BuildState,
        perk_list_name: str | None = None,
        game_mechanics_name: str | None = None,
    ) -> ExportResult:
        result = self.export_to_url(state, perk_list_name, game_mechanics_name)
        result.url = None
        return result

    # --- Reference listings -------------------------------------------------

    def data_mappings(self) -> dict[str, list[dict[str, Any]]]:
        """Id/name pairs for every table, in build-code id terms."""
        return {
            "races": [{"id": i, "name": r.name} for i, r in enumerate(self.data.races)],
            "standingStones": [
                {"id": i, "name": s.name} for i, s in enumerate(self.data.standing_stones)
            ],
            "blessings": [{"id": i, "name": b.name} for i, b in enumerate(self.data.blessings)],
            "perkLists": [
                {"id": p.perk_list_id, "name": p.name} for p in self.data.perk_lists
            ],
            "gameMechanics": [
                {"id": g.game_id, "name": g.name} for g in self.data.game_mechanics
            ],
            "presets": [{"id": i, "name": p.name} for i, p in enumerate(self.data.presets)],
        }

    def perks_for_list(self, perk_list_name: str) -> list[dict[str, Any]]:
        """Perks of one perk list with resolved skill names; [] when unknown."""
        perk_list = self.data.perk_list_by_name(perk_list_name)
        if perk_list is None:
            return []
        return [
            {
                "name": perk.name,
                "skill": perk_list.skill_name(perk.skill),
                "skillReq": perk.skill_req,
            }
            for perk in perk_list.perks
        ]
