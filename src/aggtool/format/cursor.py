"""Little-endian byte cursors used by the AGG and ICN codecs.

``ByteReader`` walks an in-memory buffer and hands out fixed-size
sub-readers (``view``) for the directory block and the name table.
``ByteWriter`` accumulates fields into a ``bytearray``.
"""

from __future__ import annotations

import struct

from .errors import E_SIZE, format_error

__all__ = ["ByteReader", "ByteWriter"]

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class ByteReader:
    def __init__(self, data: bytes | bytearray | memoryview):
        self._data = memoryview(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int, label: str) -> memoryview:
        if size < 0 or self._pos + size > len(self._data):
            raise format_error(
                E_SIZE,
                f"Out of range read for {label}",
                {"position": self._pos, "size": size, "length": self.size},
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def seek(self, position: int) -> None:
        if position < 0 or position > len(self._data):
            raise format_error(
                E_SIZE,
                f"Seek outside buffer: {position}",
                {"length": self.size},
            )
        self._pos = position

    def skip(self, size: int) -> None:
        self.seek(self._pos + size)

    def u8(self) -> int:
        return _U8.unpack(self._take(1, "u8"))[0]

    def u16(self) -> int:
        return _U16.unpack(self._take(2, "u16"))[0]

    def u32(self) -> int:
        return _U32.unpack(self._take(4, "u32"))[0]

    def raw(self, size: int) -> bytes:
        return bytes(self._take(size, "raw"))

    def view(self, size: int) -> "ByteReader":
        """Return a reader over the next ``size`` bytes and skip past them."""
        return ByteReader(self._take(size, "view"))

    def string(self, width: int) -> str:
        field = bytes(self._take(width, "string"))
        return field.split(b"\x00", 1)[0].decode("latin-1")


class ByteWriter:
    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def _pack(self, codec: struct.Struct, value: int, label: str) -> None:
        try:
            self._buf += codec.pack(value)
        except struct.error as e:
            raise format_error(
                E_SIZE, f"Value {value} does not fit {label}"
            ) from e

    def u8(self, value: int) -> None:
        self._pack(_U8, value, "u8")

    def u16(self, value: int) -> None:
        self._pack(_U16, value, "u16")

    def u32(self, value: int) -> None:
        self._pack(_U32, value, "u32")

    def raw(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def getvalue(self) -> bytes:
        return bytes(self._buf)
