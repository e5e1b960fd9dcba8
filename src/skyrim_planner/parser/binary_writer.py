"""Byte writer used to assemble build codes."""

from collections.abc import Iterable


class BinaryWriter:
    """Accumulates unsigned bytes and MSB-first bitsets."""

    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def uint8(self, value: int, field: str = "value") -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{field} must fit in one byte (0-255), got {value}")
        self._buf.append(value)

    def bitset(self, flags: Iterable[bool]) -> None:
        """Pack flags eight to a byte, first flag in the MSB.

        A trailing partial byte is shifted up so its unused low bits are 0.
        """
        current = 0
        count = 0
        for flag in flags:
            current = (current << 1) | (1 if flag else 0)
            count += 1
            if count % 8 == 0:
                self._buf.append(current)
                current = 0
        tail = count % 8
        if tail:
            self._buf.append(current << (8 - tail))

    def getvalue(self) -> bytes:
        return bytes(self._buf)
