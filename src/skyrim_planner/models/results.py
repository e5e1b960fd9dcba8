"""Result objects returned across the codec and transformer boundaries.

None of the conversion entry points raise. They return one of these,
carrying either a value or an error message, plus non-blocking warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from skyrim_planner.models.character import BuildState, RawCharacter


T = TypeVar("T")


@dataclass(slots=True)
class DecodeResult:
    character: RawCharacter | None = None
    preset: str | None = None
    error: str | None = None
    error_kind: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.character is not None


@dataclass(slots=True)
class EncodeResult:
    url: str | None = None
    build_code: str | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.url is not None


@dataclass(slots=True)
class TransformResult(Generic[T]):
    data: T | None = None
    error: str | None = None
    error_kind: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.data is not None


@dataclass(slots=True)
class ImportResult:
    """Outcome of importing a planner URL into a BuildState."""
    build_state: BuildState | None = None
    preset: str | None = None
    error: str | None = None
    error_kind: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.build_state is not None


@dataclass(slots=True)
class ExportResult:
    """Outcome of exporting a BuildState to a planner URL."""
    url: str | None = None
    build_code: str | None = None
    error: str | None = None
    error_kind: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None and self.build_code is not None
