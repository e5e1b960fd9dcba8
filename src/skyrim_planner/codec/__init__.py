"""GigaPlanner build-code encoding and decoding."""

from skyrim_planner.codec.build_code import (
    BuildCodec,
    bytes_to_code,
    code_to_bytes,
    split_url,
)

__all__ = [
    "BuildCodec",
    "bytes_to_code",
    "code_to_bytes",
    "split_url",
]
