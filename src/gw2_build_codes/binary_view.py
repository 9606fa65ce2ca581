"""Little-endian byte cursor used by the build code encoder and decoder."""

from __future__ import annotations

import struct


class BinaryView:
    """Wraps a byte buffer with typed reads/writes and a moving cursor.

    Decoding wraps an immutable ``bytes`` object; encoding wraps a
    ``bytearray``. slice_at() returns a second cursor over the same buffer,
    which lets the decoder look ahead into the profession-specific region
    while the primary cursor is still reading skills.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray, offset: int = 0) -> None:
        self._data = data
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def buffer(self) -> bytes | bytearray:
        return self._data

    def _check(self, action: str, size: int, at: int | None = None) -> int:
        start = self._pos if at is None else at
        if start < 0 or start + size > len(self._data):
            raise ValueError(
                f"{action} of {size} bytes at offset {start} "
                f"would exceed boundary at {len(self._data)}"
            )
        return start

    def _writable(self) -> bytearray:
        if not isinstance(self._data, bytearray):
            raise TypeError("Cannot write to a read-only buffer")
        return self._data

    # -- reads --------------------------------------------------------------

    def peek_byte(self, offset: int = 0) -> int:
        """Read the byte at position + offset without advancing."""
        return self._data[self._check("Peek", 1, self._pos + offset)]

    def read_byte(self) -> int:
        start = self._check("Read", 1)
        self._pos += 1
        return self._data[start]

    def read_uint16_le(self) -> int:
        start = self._check("Read", 2)
        self._pos += 2
        return struct.unpack_from("<H", self._data, start)[0]

    def read_uint32_le(self) -> int:
        start = self._check("Read", 4)
        self._pos += 4
        return struct.unpack_from("<I", self._data, start)[0]

    # -- writes -------------------------------------------------------------

    def write_byte(self, value: int) -> None:
        data = self._writable()
        start = self._check("Write", 1)
        data[start] = value & 0xFF
        self._pos += 1

    def write_uint16_le(self, value: int) -> None:
        data = self._writable()
        start = self._check("Write", 2)
        struct.pack_into("<H", data, start, value)
        self._pos += 2

    def write_uint32_le(self, value: int) -> None:
        data = self._writable()
        start = self._check("Write", 4)
        struct.pack_into("<I", data, start, value)
        self._pos += 4

    # -- positioning --------------------------------------------------------

    def skip(self, size: int) -> None:
        self._check("Skip", size)
        self._pos += size

    def seek(self, offset: int) -> None:
        """Seek to an absolute position within the buffer."""
        if offset < 0 or offset > len(self._data):
            raise ValueError(f"Seek to {offset} is outside bounds [0, {len(self._data)}]")
        self._pos = offset

    def slice_at(self, offset: int) -> "BinaryView":
        """Return an independent cursor at position + offset over the same buffer.

        This cursor's position is left untouched.
        """
        start = self._pos + offset
        if start < 0 or start > len(self._data):
            raise ValueError(
                f"Slice at offset {start} is outside bounds [0, {len(self._data)}]"
            )
        return BinaryView(self._data, start)
