"""GigaPlanner build-code codec.

A build code is a base64url string (no padding) in the `b` query
parameter. Decoded, it is a fixed byte layout keyed by a leading version
byte (see models.constants.Offset):

  0 version | 1 perk list | 2 reserved | 3 game mechanics | 4 reserved
  5 level | 6-8 health/magicka/stamina increases | 9-26 skill levels
  27 Oghma choice | 28 race | 29 standing stone | 30 blessing
  31+ perk bitset, one bit per perk in perk-list order, MSB first

Version 2 quirks: the Oghma index sits in the high nibble of byte 27, and
decoders append a "Level" pseudo-skill mirroring byte 5. Encoding always
writes version 2.
"""

from __future__ import annotations

import base64
import binascii
from urllib.parse import parse_qs, urlsplit

from loguru import logger

from skyrim_planner.data.repository import ReferenceDataRepository
from skyrim_planner.errors import (
    UNRESOLVED_REFERENCE,
    BuildCodeError,
    ByteRangeError,
    MalformedBuildCode,
    NoBuildCode,
    UnknownGameMechanics,
    UnknownPerkList,
)
from skyrim_planner.mapping.identifiers import IdentifierMapper
from skyrim_planner.models.character import (
    HmsIncreases,
    OghmaChoice,
    PerkTaken,
    RawCharacter,
    SkillLevel,
)
from skyrim_planner.models.constants import (
    DEFAULT_BASE_URL,
    ENCODE_VERSION,
    LEVEL_PSEUDO_SKILL,
    OGHMA_SHIFT_V2,
    SKILL_BYTE_COUNT,
    SUPPORTED_VERSIONS,
    UNKNOWN,
)
from skyrim_planner.models.reference import PerkList, ReferenceData
from skyrim_planner.models.results import DecodeResult, EncodeResult
from skyrim_planner.parser.binary_reader import BinaryReader
from skyrim_planner.parser.binary_writer import BinaryWriter


def split_url(url: str) -> tuple[str, str | None]:
    """Return (build code, preset param) from a planner URL.

    Raises NoBuildCode when `b` is absent or empty.
    """
    params = parse_qs(urlsplit(url.strip()).query)
    codes = params.get("b")
    if not codes or not codes[0]:
        raise NoBuildCode("No build code found in URL")
    # parse_qs turns '+' into ' '; codes pasted in the standard alphabet need it back.
    code = codes[0].replace(" ", "+")
    presets = params.get("p")
    return code, presets[0] if presets else None


def code_to_bytes(build_code: str) -> bytes:
    """base64url (padding optional) -> raw bytes."""
    text = build_code.replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedBuildCode(f"Build code is not valid base64: {exc}") from exc


def bytes_to_code(data: bytes) -> str:
    """Raw bytes -> base64url without '=' padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


class BuildCodec:
    """Decodes and encodes build codes against loaded reference tables.

    Stateless after construction: decode/encode only read the tables, so
    one codec can serve concurrent callers.
    """

    __slots__ = ("_data", "_mapper", "_base_url")

    def __init__(
        self,
        data: ReferenceData,
        mapper: IdentifierMapper | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._data = data
        self._mapper = mapper or IdentifierMapper(data)
        self._base_url = base_url

    @classmethod
    def from_repository(
        cls,
        repository: ReferenceDataRepository,
        base_url: str = DEFAULT_BASE_URL,
    ) -> BuildCodec:
        """Load every reference table first, so no lookup sees a missing one."""
        return cls(repository.load_all(), base_url=base_url)

    @property
    def data(self) -> ReferenceData:
        return self._data

    @property
    def mapper(self) -> IdentifierMapper:
        return self._mapper

    @property
    def base_url(self) -> str:
        return self._base_url

    # --- Decode ------------------------------------------------------------

    def decode(self, url: str) -> DecodeResult:
        """Decode a planner URL. Never raises."""
        try:
            build_code, preset_param = split_url(url)
            character, warnings = self.decode_bytes(code_to_bytes(build_code))
        except BuildCodeError as exc:
            logger.warning(f"Build code decode failed ({exc.kind}): {exc}")
            return DecodeResult(error=str(exc), error_kind=exc.kind)

        logger.debug(
            f"Decoded v{character.version} build code: perk list {character.perk_list!r}, "
            f"level {character.level}, {len(character.perks)} perks"
        )
        return DecodeResult(
            character=character,
            preset=self.preset_name(preset_param),
            warnings=warnings,
        )

    def decode_bytes(self, data: bytes) -> tuple[RawCharacter, list[str]]:
        """Parse raw build-code bytes. Raises BuildCodeError subclasses."""
        reader = BinaryReader(data)
        try:
            return self._parse(reader)
        except ValueError as exc:
            raise MalformedBuildCode(f"Build code is truncated or malformed: {exc}") from exc

    def _parse(self, reader: BinaryReader) -> tuple[RawCharacter, list[str]]:
        warnings: list[str] = []

        version = reader.uint8()
        if version not in SUPPORTED_VERSIONS:
            raise MalformedBuildCode(f"Unsupported build code version: {version}")

        perk_list_id = reader.uint8()
        reader.skip(1)  # race list
        game_mechanics_id = reader.uint8()
        reader.skip(1)  # blessing list
        perk_list = self._data.perk_list_by_id(perk_list_id)
        if perk_list is None:
            raise UnknownPerkList(f"Invalid perk list ID: {perk_list_id}")
        mechanics = self._data.game_mechanics_by_id(game_mechanics_id)
        if mechanics is None:
            raise UnknownGameMechanics(f"Invalid game mechanics ID: {game_mechanics_id}")

        level = reader.uint8()
        hms = HmsIncreases(
            health=reader.uint8(),
            magicka=reader.uint8(),
            stamina=reader.uint8(),
        )

        skill_bytes = reader.bytes(SKILL_BYTE_COUNT)
        skills = [
            SkillLevel(name, value)
            for name, value in zip(perk_list.skill_names, skill_bytes)
        ]
        if version == 2:
            skills.append(SkillLevel(LEVEL_PSEUDO_SKILL, level))

        oghma_raw = reader.uint8()
        if version == 2:
            oghma_raw >>= OGHMA_SHIFT_V2
        oghma = OghmaChoice.from_index(oghma_raw)

        race_id = reader.uint8()
        stone_id = reader.uint8()
        blessing_id = reader.uint8()
        race = self._resolve_position("race", race_id, warnings)
        stone = self._resolve_position("standing_stone", stone_id, warnings)
        blessing = self._resolve_position("blessing", blessing_id, warnings)

        perk_base = reader.position
        perks = tuple(
            PerkTaken(perk.name, perk.skill)
            for i, perk in enumerate(perk_list.perks)
            if reader.bit(perk_base, i)
        )

        character = RawCharacter(
            version=version,
            perk_list_id=perk_list_id,
            game_mechanics_id=game_mechanics_id,
            perk_list=perk_list.name,
            game_mechanics=mechanics.name,
            level=level,
            hms_increases=hms,
            skill_levels=tuple(skills),
            oghma_choice=oghma,
            race_id=race_id,
            race=race,
            standing_stone_id=stone_id,
            standing_stone=stone,
            blessing_id=blessing_id,
            blessing=blessing,
            perks=perks,
        )
        return character, warnings

    def _resolve_position(self, kind: str, index: int, warnings: list[str]) -> str:
        name = self._mapper.name_at(kind, index)
        if name is None:
            label = kind.replace("_", " ")
            warnings.append(f"{UNRESOLVED_REFERENCE}: no {label} at index {index}")
            return UNKNOWN
        return name

    def preset_name(self, preset_param: str | None) -> str | None:
        """Preset name for the `p` parameter; None for anything unusable."""
        if preset_param is None:
            return None
        try:
            index = int(preset_param)
        except ValueError:
            return None
        if 0 <= index < len(self._data.presets):
            return self._data.presets[index].name
        return None

    # --- Encode ------------------------------------------------------------

    def encode(
        self,
        character: RawCharacter,
        perk_list_name: str | None = None,
        game_mechanics_name: str | None = None,
        base_url: str | None = None,
    ) -> EncodeResult:
        """Encode a character into a planner URL. Never raises.

        The perk list and game mechanics default to the ones named on the
        character itself.
        """
        try:
            perk_list_name = perk_list_name or character.perk_list
            game_mechanics_name = game_mechanics_name or character.game_mechanics
            perk_list = self._resolve_perk_list(perk_list_name)
            game_mechanics_id = self._mapper.find_game_mechanics_id(game_mechanics_name)
            if game_mechanics_id is None:
                raise UnknownGameMechanics(f"Unknown game mechanics: {game_mechanics_name}")
            code = bytes_to_code(self.encode_bytes(character, perk_list, game_mechanics_id))
        except BuildCodeError as exc:
            logger.warning(f"Build code encode failed ({exc.kind}): {exc}")
            return EncodeResult(error=str(exc), error_kind=exc.kind)

        url = f"{base_url or self._base_url}?b={code}"
        preset_index = self.preset_index_for(perk_list.perk_list_id)
        if preset_index is not None:
            url += f"&p={preset_index}"
        return EncodeResult(url=url, build_code=code)

    def _resolve_perk_list(self, name: str) -> PerkList:
        perk_list_id = self._mapper.find_perk_list_id(name)
        perk_list = None if perk_list_id is None else self._data.perk_list_by_id(perk_list_id)
        if perk_list is None:
            raise UnknownPerkList(f"Unknown perk list: {name}")
        return perk_list

    def encode_bytes(
        self,
        character: RawCharacter,
        perk_list: PerkList,
        game_mechanics_id: int,
    ) -> bytes:
        """Assemble the version-2 byte layout. Raises ByteRangeError."""
        writer = BinaryWriter()
        try:
            writer.uint8(ENCODE_VERSION)
            writer.uint8(perk_list.perk_list_id, "perk list id")
            writer.uint8(0)  # race list
            writer.uint8(game_mechanics_id, "game mechanics id")
            writer.uint8(0)  # blessing list

            writer.uint8(character.level, "level")
            writer.uint8(character.hms_increases.health, "health increases")
            writer.uint8(character.hms_increases.magicka, "magicka increases")
            writer.uint8(character.hms_increases.stamina, "stamina increases")

            levels = {entry.skill: entry.level for entry in character.skill_levels}
            for i in range(SKILL_BYTE_COUNT):
                skill = perk_list.skill_name(i)
                writer.uint8(levels.get(skill, 0) if skill else 0, f"skill {skill}")

            writer.uint8(int(character.oghma_choice) << OGHMA_SHIFT_V2, "Oghma choice")

            writer.uint8(self._mapper.race_index(character.race) or 0, "race")
            writer.uint8(
                self._mapper.standing_stone_index(character.standing_stone) or 0,
                "standing stone",
            )
            writer.uint8(self._mapper.blessing_index(character.blessing) or 0, "blessing")

            taken = set(character.perk_names())
            writer.bitset(perk.name in taken for perk in perk_list.perks)
        except ValueError as exc:
            raise ByteRangeError(str(exc)) from exc
        return writer.getvalue()

    def preset_index_for(self, perk_list_id: int) -> int | None:
        """Position of the first preset built on this perk list."""
        for index, preset in enumerate(self._data.presets):
            if preset.perks == perk_list_id:
                return index
        return None
