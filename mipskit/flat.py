"""Conversion of MIPS COFF executables into flat memory images."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from mipskit.coff import OMAGIC, CoffError, CoffFile, SectionHeader, read_coff
from mipskit.noff import ConversionError

STACK_SIZE = 1024

_UNLOADED_SECTIONS = (".bss", ".sbss")
_END_MARKER = bytes(4)


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


def coff_to_flat(
    data: bytes,
    stack_size: int = STACK_SIZE,
    log: Callable[[str], None] | None = None,
) -> bytes:
    """Convert a COFF executable into a flat image and return its bytes.

    The contents of every loaded section are written one after another;
    a zero word is then placed so that the image reaches the highest
    section end plus ``stack_size`` bytes.
    """
    if stack_size < len(_END_MARKER):
        raise ValueError(f"stack size must be at least {len(_END_MARKER)} bytes")
    emit = log if log is not None else (lambda line: None)
    coff = _read_executable(data)

    emit(f"Loading {len(coff.sections)} sections:")
    image = bytearray()
    top = 0
    for section in coff.sections:
        emit(_describe(section))
        top = max(top, section.paddr + section.size)
        if section.name in _UNLOADED_SECTIONS:
            continue
        try:
            image += coff.section_data(section)
        except CoffError as exc:
            raise ConversionError(str(exc)) from exc

    emit(f"Adding stack of size: {stack_size}")
    marker = top + stack_size - len(_END_MARKER)
    end = marker + len(_END_MARKER)
    if len(image) < end:
        image.extend(bytes(end - len(image)))
    image[marker:end] = _END_MARKER
    return bytes(image)


def main(argv: list[str] | None = None) -> int:
    """Convert a COFF file named on the command line into a flat image file."""
    parser = argparse.ArgumentParser(
        prog="mipskit-coff2flat", description="Convert a MIPS COFF file to a flat image."
    )
    parser.add_argument("coff_file", help="input COFF file")
    parser.add_argument("flat_file", help="output flat file")
    args = parser.parse_args(argv)

    try:
        data = Path(args.coff_file).read_bytes()
    except OSError as exc:
        print(f"{args.coff_file}: {exc.strerror}", file=sys.stderr)
        return 1

    try:
        image = coff_to_flat(data, STACK_SIZE, print)
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        Path(args.flat_file).write_bytes(image)
    except OSError:
        print("Unable to write file", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())