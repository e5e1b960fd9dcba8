"""Low-level byte reader for build codes, with a moving cursor."""


class BinaryReader:
    """Wraps a bytes buffer with unsigned-byte reads and bit tests.

    Every value in a build code is a single unsigned byte, so there is no
    endianness to worry about. Reads past the end raise ValueError, which
    the codec reports as a malformed build code.
    """

    __slots__ = ("_data", "_pos", "_end")

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self._end = len(data)

    @property
    def position(self) -> int:
        return self._pos

    def _check(self, offset: int, size: int) -> None:
        if offset < 0 or offset + size > self._end:
            raise ValueError(
                f"Read of {size} bytes at offset {offset} "
                f"would exceed boundary at {self._end}"
            )

    def uint8(self) -> int:
        self._check(self._pos, 1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def bytes(self, size: int) -> bytes:
        self._check(self._pos, size)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def skip(self, size: int) -> None:
        self._check(self._pos, size)
        self._pos += size

    def bit(self, base: int, index: int) -> bool:
        """Test bit `index` of a bitset starting at byte `base`.

        Bits are numbered MSB first: index 0 is bit 7 of byte `base`,
        index 8 is bit 7 of byte `base + 1`. The cursor does not move.
        """
        offset = base + index // 8
        self._check(offset, 1)
        return (self._data[offset] >> (7 - index % 8)) & 1 == 1
