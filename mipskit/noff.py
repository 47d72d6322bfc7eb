"""Conversion of MIPS COFF executables into the simpler NOFF object format."""

from __future__ import annotations

import argparse
import struct
import sys
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import ClassVar

from mipskit.coff import OMAGIC, CoffError, CoffFile, SectionHeader, read_coff

NOFFMAGIC = 0xBADFAD

_CODE_SECTIONS = (".text",)
_INIT_DATA_SECTIONS = (".data", ".rdata")
_UNINIT_DATA_SECTIONS = (".bss", ".sbss")


class ConversionError(ValueError):
    """Raised when an object file cannot be converted."""


@dataclass(frozen=True)
class Segment:
    """Where a segment lives in the virtual address space and in the file."""

    virtual_addr: int = 0
    in_file_addr: int = 0
    size: int = 0


@dataclass(frozen=True)
class NoffHeader:
    """The NOFF file header: a magic number and three segment descriptors."""

    code: Segment = field(default_factory=Segment)
    init_data: Segment = field(default_factory=Segment)
    uninit_data: Segment = field(default_factory=Segment)
    magic: int = NOFFMAGIC

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<10I")
    SIZE: ClassVar[int] = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the header to its little-endian on-disk bytes."""
        fields = [self.magic]
        for segment in (self.code, self.init_data, self.uninit_data):
            fields += [segment.virtual_addr, segment.in_file_addr, segment.size]
        try:
            return self._STRUCT.pack(*fields)
        except struct.error as exc:
            raise ConversionError(f"header field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> NoffHeader:
        """Decode a header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ConversionError("File is too short")
        magic, *rest = cls._STRUCT.unpack_from(data)
        return cls(
            code=Segment(*rest[0:3]),
            init_data=Segment(*rest[3:6]),
            uninit_data=Segment(*rest[6:9]),
            magic=magic,
        )


def _describe(section: SectionHeader) -> str:
    return (
        f'\t"{section.name}", filepos 0x{section.scnptr:x}, '
        f"mempos 0x{section.paddr:x}, size 0x{section.size:x}"
    )


def _read_executable(data: bytes) -> CoffFile:
    try:
        coff = read_coff(data)
    except CoffError as exc:
        raise ConversionError(str(exc)) from exc
    if coff.aout.magic != OMAGIC:
        raise ConversionError("File is not a OMAGIC file")
    return coff


def _contents(coff: CoffFile, section: SectionHeader) -> bytes:
    try:
        return coff.section_data(section)
    except CoffError as exc:
        raise ConversionError(str(exc)) from exc


def coff_to_noff(data: bytes, log: Callable[[str], None] | None = None) -> bytes:
    """Convert a COFF executable to a NOFF image and return its bytes.

    Code and initialised data are copied after the header; uninitialised
    data is only described. ``log`` receives one progress line at a time.
    """
    emit = log if log is not None else (lambda line: None)
    coff = _read_executable(data)
    sections = coff.sections

    emit(f"numsections {len(sections)} ")
    emit(f"Loading {len(sections)} sections:")

    code = init_data = uninit_data = Segment()
    body = bytearray()
    in_file = NoffHeader.SIZE

    for section in sections:
        emit(_describe(section))
        if section.size == 0:
            continue
        if section.name in _CODE_SECTIONS:
            code = Segment(section.paddr, in_file, section.size)
            body += _contents(coff, section)
            in_file += section.size
        elif section.name in _INIT_DATA_SECTIONS:
            if init_data.size != 0:
                raise ConversionError("Can't handle both data and rdata")
            init_data = Segment(section.paddr, in_file, section.size)
            body += _contents(coff, section)
            in_file += section.size
        elif section.name in _UNINIT_DATA_SECTIONS:
            if uninit_data.size != 0:
                if section.paddr == uninit_data.virtual_addr + uninit_data.size:
                    raise ConversionError("Can't handle both bss and sbss")
                uninit_data = replace(uninit_data, size=uninit_data.size + section.size)
            else:
                uninit_data = Segment(section.paddr, 0, section.size)
        else:
            raise ConversionError(f"Unknown segment type: {section.name}")

    header = NoffHeader(code=code, init_data=init_data, uninit_data=uninit_data)
    return header.pack() + bytes(body)


def main(argv: list[str] | None = None) -> int:
    """Convert a COFF file named on the command line into a NOFF file."""
    parser = argparse.ArgumentParser(
        prog="mipskit-coff2noff", description="Convert a MIPS COFF file to NOFF."
    )
    parser.add_argument("coff_file", help="input COFF file")
    parser.add_argument("noff_file", help="output NOFF file")
    args = parser.parse_args(argv)

    try:
        data = Path(args.coff_file).read_bytes()
    except OSError as exc:
        print(f"{args.coff_file}: {exc.strerror}", file=sys.stderr)
        return 1

    output = Path(args.noff_file)
    try:
        image = coff_to_noff(data, print)
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        output.unlink(missing_ok=True)
        return 1

    try:
        output.write_bytes(image)
    except OSError:
        print("Unable to write file", file=sys.stderr)
        output.unlink(missing_ok=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())