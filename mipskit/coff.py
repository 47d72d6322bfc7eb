"""Reading and writing the little-endian MIPS COFF object file format."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

MIPSELMAGIC = 0x0162
OMAGIC = 0o407
SOMAGIC = 0x0701


class CoffError(ValueError):
    """Raised when a COFF file is malformed or truncated."""


def _require(data: bytes, size: int) -> None:
    if len(data) < size:
        raise CoffError("File is too short")


@dataclass(frozen=True)
class FileHeader:
    """The COFF file header."""

    magic: int = MIPSELMAGIC
    nscns: int = 0
    timdat: int = 0
    symptr: int = 0
    nsyms: int = 0
    opthdr: int = 0
    flags: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<HHiiiHH")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def unpack(cls, data: bytes) -> FileHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE)
        return cls(*cls._STRUCT.unpack_from(data))

    def pack(self) -> bytes:
        """Encode the header to its on-disk bytes."""
        return self._STRUCT.pack(
            self.magic, self.nscns, self.timdat, self.symptr,
            self.nsyms, self.opthdr, self.flags,
        )


@dataclass(frozen=True)
class AoutHeader:
    """The COFF system (a.out) header."""

    magic: int = OMAGIC
    vstamp: int = 0
    tsize: int = 0
    dsize: int = 0
    bsize: int = 0
    entry: int = 0
    text_start: int = 0
    data_start: int = 0
    bss_start: int = 0
    gprmask: int = 0
    cprmask: tuple[int, int, int, int] = (0, 0, 0, 0)
    gp_value: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<hh8I4II")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def unpack(cls, data: bytes) -> AoutHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE)
        values = cls._STRUCT.unpack_from(data)
        return cls(*values[:10], cprmask=tuple(values[10:14]), gp_value=values[14])

    def pack(self) -> bytes:
        """Encode the header to its on-disk bytes."""
        return self._STRUCT.pack(
            self.magic, self.vstamp, self.tsize, self.dsize, self.bsize,
            self.entry, self.text_start, self.data_start, self.bss_start,
            self.gprmask, *self.cprmask, self.gp_value,
        )


@dataclass(frozen=True)
class SectionHeader:
    """A COFF section header."""

    name: str
    paddr: int = 0
    vaddr: int = 0
    size: int = 0
    scnptr: int = 0
    relptr: int = 0
    lnnoptr: int = 0
    nreloc: int = 0
    nlnno: int = 0
    flags: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<8s6IHHI")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def unpack(cls, data: bytes) -> SectionHeader:
        """Decode a header from the start of ``data``."""
        _require(data, cls.SIZE)
        raw_name, *rest = cls._STRUCT.unpack_from(data)
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(name, *rest)

    def pack(self) -> bytes:
        """Encode the header to its on-disk bytes."""
        return self._STRUCT.pack(
            self.name.encode("latin-1"), self.paddr, self.vaddr, self.size,
            self.scnptr, self.relptr, self.lnnoptr, self.nreloc, self.nlnno,
            self.flags,
        )


@dataclass(frozen=True)
class CoffFile:
    """A parsed COFF file together with its raw bytes."""

    header: FileHeader
    aout: AoutHeader
    sections: tuple[SectionHeader, ...]
    data: bytes

    def section(self, name: str) -> SectionHeader | None:
        """Return the first section called ``name``, or None."""
        return next((s for s in self.sections if s.name == name), None)

    def section_data(self, section: SectionHeader) -> bytes:
        """Return the raw contents of ``section`` as stored in the file."""
        end = section.scnptr + section.size
        _require(self.data, end)
        return self.data[section.scnptr:end]


def read_coff(data: bytes) -> CoffFile:
    """Parse a little-endian MIPS COFF file."""
    data = bytes(data)
    header = FileHeader.unpack(data)
    if header.magic != MIPSELMAGIC:
        raise CoffError("File is not a MIPSEL COFF file")
    offset = FileHeader.SIZE
    aout = AoutHeader.unpack(data[offset:])
    offset += AoutHeader.SIZE
    sections = []
    for _ in range(header.nscns):
        sections.append(SectionHeader.unpack(data[offset:offset + SectionHeader.SIZE]))
        offset += SectionHeader.SIZE
    return CoffFile(header, aout, tuple(sections), data)