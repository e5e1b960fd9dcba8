"""Shared fixtures: reference tables loaded from tests/fixtures/gigaplanner."""

from pathlib import Path

import pytest

from skyrim_planner.codec.build_code import BuildCodec, bytes_to_code
from skyrim_planner.data.fetchers import DirectoryFetcher
from skyrim_planner.data.repository import ReferenceDataRepository


FIXTURE_DIR = Path(__file__).parent / "fixtures" / "gigaplanner"


def code_bytes(
    version=2,
    perk_list_id=1,
    game_mechanics_id=2,
    level=10,
    hms=(0, 0, 0),
    skills=(),
    oghma=0,
    race=3,
    stone=0,
    blessing=0,
    perk_bytes=(0, 0),
):
    """Hand-assemble a build code in the planner's byte layout."""
    skill_bytes = list(skills) + [0] * (18 - len(skills))
    return bytes(
        [version, perk_list_id, 0, game_mechanics_id, 0, level, *hms, *skill_bytes,
         oghma, race, stone, blessing, *perk_bytes]
    )


def code_url(**fields):
    return f"https://gigaplanner.com?b={bytes_to_code(code_bytes(**fields))}"


@pytest.fixture
def repository():
    return ReferenceDataRepository(DirectoryFetcher(FIXTURE_DIR))


@pytest.fixture
def reference_data(repository):
    return repository.load_all()


@pytest.fixture
def codec(reference_data):
    return BuildCodec(reference_data)
