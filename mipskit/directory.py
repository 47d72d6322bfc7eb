"""A flat directory mapping file names to the sectors of their file headers."""

from __future__ import annotations

import errno
import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

FILE_NAME_MAX_LEN = 9


def _stored_name(name: str) -> str:
    return name[:FILE_NAME_MAX_LEN]


@dataclass
class DirectoryEntry:
    """One slot of a directory: a file name and where its header lives."""

    in_use: bool = False
    sector: int = 0
    name: str = ""

    _STRUCT: ClassVar[struct.Struct] = struct.Struct(f"<?3xi{FILE_NAME_MAX_LEN + 1}s2x")
    SIZE: ClassVar[int] = _STRUCT.size

    def pack(self) -> bytes:
        """Encode the entry to its on-disk bytes."""
        return self._STRUCT.pack(
            self.in_use, self.sector, _stored_name(self.name).encode("latin-1")
        )

    @classmethod
    def unpack(cls, data: bytes) -> DirectoryEntry:
        """Decode an entry from the start of ``data``."""
        in_use, sector, raw_name = cls._STRUCT.unpack_from(data)
        name = raw_name[:FILE_NAME_MAX_LEN].split(b"\0", 1)[0].decode("latin-1")
        return cls(in_use, sector, name)


class Directory:
    """A fixed-size table of <file name, header sector> pairs.

    Names are significant only up to nine characters.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("directory size must not be negative")
        self._table = [DirectoryEntry() for _ in range(size)]

    @property
    def size(self) -> int:
        """Number of slots in the directory."""
        return len(self._table)

    def _find_entry(self, name: str) -> DirectoryEntry | None:
        key = _stored_name(name)
        return next(
            (entry for entry in self._table if entry.in_use and entry.name == key),
            None,
        )

    def find(self, name: str) -> int | None:
        """Return the header sector of file ``name``, or None if absent."""
        entry = self._find_entry(name)
        return entry.sector if entry is not None else None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find_entry(name) is not None

    def add(self, name: str, sector: int) -> None:
        """Add file ``name`` whose header is at ``sector``.

        Raises FileExistsError if the name is present and OSError (ENOSPC)
        if every slot is in use.
        """
        if self._find_entry(name) is not None:
            raise FileExistsError(errno.EEXIST, "file already in directory", name)
        for entry in self._table:
            if not entry.in_use:
                entry.in_use = True
                entry.name = _stored_name(name)
                entry.sector = sector
                return
        raise OSError(errno.ENOSPC, "directory is full", name)

    def remove(self, name: str) -> None:
        """Remove file ``name``; raise FileNotFoundError if it is absent."""
        entry = self._find_entry(name)
        if entry is None:
            raise FileNotFoundError(errno.ENOENT, "file not in directory", name)
        entry.in_use = False

    def names(self) -> list[str]:
        """Names of all files in the directory, in table order."""
        return [entry.name for entry in self._table if entry.in_use]

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return (entry for entry in self._table if entry.in_use)

    def __len__(self) -> int:
        return sum(1 for entry in self._table if entry.in_use)

    def to_bytes(self) -> bytes:
        """Encode the whole table as it is stored on disk."""
        return b"".join(entry.pack() for entry in self._table)

    def load(self, data: bytes) -> None:
        """Replace the table's contents with entries decoded from ``data``."""
        needed = DirectoryEntry.SIZE * len(self._table)
        if len(data) < needed:
            raise ValueError(f"directory data too short: {len(data)} < {needed}")
        self._table = [
            DirectoryEntry.unpack(data[offset:offset + DirectoryEntry.SIZE])
            for offset in range(0, needed, DirectoryEntry.SIZE)
        ]