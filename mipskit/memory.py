"""Byte-addressed little-endian memory for the simulated MIPS machine."""

from __future__ import annotations

import struct

MEMSIZE = 1 << 24
MEMOFFSET = 0x10000000

_MASK32 = 0xFFFFFFFF
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_I16 = struct.Struct("<h")
_U16 = struct.Struct("<H")
_I8 = struct.Struct("<b")
_U8 = struct.Struct("<B")


class MemoryAccessError(IndexError):
    """Raised when an access falls outside the simulated memory."""


class Memory:
    """A block of memory mapped at virtual address ``offset``."""

    def __init__(self, size: int = MEMSIZE, offset: int = MEMOFFSET) -> None:
        if size <= 0:
            raise ValueError("memory size must be positive")
        self.size = size
        self.offset = offset
        self._data = bytearray(size)

    def _index(self, addr: int, length: int) -> int:
        index = (addr & _MASK32) - self.offset
        if index < 0 or index + length > self.size:
            raise MemoryAccessError(f"address 0x{addr & _MASK32:08x} is outside memory")
        return index

    def _load(self, layout: struct.Struct, addr: int) -> int:
        return layout.unpack_from(self._data, self._index(addr, layout.size))[0]

    def _save(self, layout: struct.Struct, addr: int, value: int) -> None:
        layout.pack_into(self._data, self._index(addr, layout.size), value)

    def fetch(self, addr: int) -> int:
        """Load a signed 32-bit word."""
        return self._load(_I32, addr)

    def sfetch(self, addr: int) -> int:
        """Load a signed 16-bit halfword."""
        return self._load(_I16, addr)

    def usfetch(self, addr: int) -> int:
        """Load an unsigned 16-bit halfword."""
        return self._load(_U16, addr)

    def cfetch(self, addr: int) -> int:
        """Load a signed byte."""
        return self._load(_I8, addr)

    def ucfetch(self, addr: int) -> int:
        """Load an unsigned byte."""
        return self._load(_U8, addr)

    def store(self, addr: int, value: int) -> None:
        """Store the low 32 bits of ``value``."""
        self._save(_U32, addr, value & _MASK32)

    def sstore(self, addr: int, value: int) -> None:
        """Store the low 16 bits of ``value``."""
        self._save(_U16, addr, value & 0xFFFF)

    def cstore(self, addr: int, value: int) -> None:
        """Store the low 8 bits of ``value``."""
        self._save(_U8, addr, value & 0xFF)

    def write_bytes(self, addr: int, data: bytes) -> None:
        """Copy ``data`` into memory starting at ``addr``."""
        index = self._index(addr, len(data))
        self._data[index:index + len(data)] = data

    def read_bytes(self, addr: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``addr``."""
        if length < 0:
            raise ValueError("length must not be negative")
        index = self._index(addr, length)
        return bytes(self._data[index:index + length])

    def read_cstring(self, addr: int) -> bytes:
        """Return the NUL-terminated byte string at ``addr``, without the NUL."""
        index = self._index(addr, 0)
        end = self._data.find(b"\0", index)
        if end < 0:
            raise MemoryAccessError(f"unterminated string at 0x{addr & _MASK32:08x}")
        return bytes(self._data[index:end])