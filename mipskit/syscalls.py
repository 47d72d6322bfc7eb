"""System calls made by programs running on the simulated machine."""

from __future__ import annotations

import mmap
import os
import sys
from collections.abc import Callable, MutableSequence
from typing import TextIO

from mipskit.memory import Memory

SYS_EXIT = 1
SYS_READ = 3
SYS_WRITE = 4
SYS_OPEN = 5
SYS_CLOSE = 6
SYS_SBREAK = 17
SYS_LSEEK = 19
SYS_IOCTL = 54
SYS_FSTAT = 62
SYS_GETPAGESIZE = 64

_MASK32 = 0xFFFFFFFF


class ProgramExit(Exception):
    """Raised when the running program asks to exit."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(f"program exited with status {status}")
        self.status = status


class UnknownSyscallError(RuntimeError):
    """Raised for a system call number the machine does not provide."""

    def __init__(self, number: int) -> None:
        super().__init__(f"Unknown System call {number}")
        self.number = number


def _s32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _format_registers(registers: MutableSequence[int]) -> str:
    rows = []
    for start in range(0, 32, 8):
        words = " ".join(f"{r & _MASK32:08x}" for r in registers[start:start + 8])
        rows.append(f"{start:2d}: {words}")
    return "\n".join(rows)


class SyscallHandler:
    """Carries out system calls against the host operating system."""

    def __init__(self, memory: Memory, traptrace: bool = False, out: TextIO | None = None) -> None:
        self.memory = memory
        self.traptrace = traptrace
        self._stream = out
        self._calls: dict[int, Callable[[int, int, int], int]] = {
            SYS_EXIT: self._exit,
            SYS_READ: self._read,
            SYS_WRITE: self._write,
            SYS_OPEN: self._open,
            SYS_CLOSE: lambda o0, o1, o2: 0,
            SYS_SBREAK: lambda o0, o1, o2: ((o0 // 8192) + 1) * 8192,
            SYS_LSEEK: self._lseek,
            SYS_IOCTL: lambda o0, o1, o2: 0,
            SYS_FSTAT: self._fstat,
            SYS_GETPAGESIZE: lambda o0, o1, o2: mmap.PAGESIZE,
        }

    @property
    def out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def breakpoint(self, registers: MutableSequence[int]) -> None:
        """Handle a break instruction, which is treated as a system call."""
        if self.traptrace:
            print("**breakpoint ", end="", file=self.out)
        self.handle(registers)

    def handle(self, registers: MutableSequence[int]) -> None:
        """Perform the call numbered in r2 with arguments r4..r6; result in r1."""
        number = registers[2]
        if self.traptrace:
            print(f"**System call {number}", file=self.out)
            print(_format_registers(registers), file=self.out)
        call = self._calls.get(number)
        if call is None:
            print(f"Unknown System call {number}", file=self.out)
            if not self.traptrace:
                print(_format_registers(registers), file=self.out)
            raise UnknownSyscallError(number)
        registers[1] = _s32(call(registers[4], registers[5], registers[6]))
        if self.traptrace:
            print("**Afterwards:", file=self.out)
            print(_format_registers(registers), file=self.out)

    def _exit(self, o0: int, o1: int, o2: int) -> int:
        self.out.flush()
        raise ProgramExit(0)

    def _read(self, fd: int, addr: int, count: int) -> int:
        try:
            data = os.read(fd, max(count, 0))
        except OSError:
            return -1
        self.memory.write_bytes(addr, data)
        return len(data)

    def _write(self, fd: int, addr: int, count: int) -> int:
        try:
            return os.write(fd, self.memory.read_bytes(addr, max(count, 0)))
        except OSError:
            return -1

    def _open(self, addr: int, flags: int, mode: int) -> int:
        path = self.memory.read_cstring(addr).decode("latin-1")
        try:
            return os.open(path, flags, mode)
        except OSError:
            return -1

    def _lseek(self, fd: int, offset: int, whence: int) -> int:
        try:
            return os.lseek(fd, offset, whence)
        except OSError:
            return -1

    def _fstat(self, fd: int, addr: int, unused: int) -> int:
        try:
            os.fstat(fd)
        except OSError:
            return -1
        return 0