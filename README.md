# mipskit

Tools for working with little-endian MIPS COFF executables (file magic
0x0162, a.out magic `OMAGIC`), plus a few small data structures used in
teaching operating systems.

What is included:

- **COFF reader and writer** for the file header, the a.out header and the
  section headers (`mipskit.coff`).
- **COFF → NOFF converter**, which writes a simple object format: a header
  naming the code, initialized-data and uninitialized-data segments,
  followed by the contents of the code and initialized-data segments
  (`mipskit.noff`).
- **COFF → flat converter**, which writes the loaded sections one after
  another and pads the image to leave room for a stack (`mipskit.flat`).
- **Simulated memory** with little-endian word, half-word and byte
  accessors (`mipskit.memory`).
- **System call handler** that carries out a small set of Unix-style calls
  against the host on behalf of a simulated program (`mipskit.syscalls`).
- **Directory table** of fixed-size entries (names of up to 9 characters
  mapped to header sectors), serialisable to bytes (`mipskit.directory`).
- **Stacks and lists**: a singly linked list, array-backed and list-backed
  stacks sharing one interface, and a bounded stack for any value type.

No third-party dependencies are needed.

## Installation

```
pip install .
```

With the test extra:

```
pip install ".[test]"
pytest
```

## Command-line tools

Convert a COFF executable into a NOFF file (the output file is removed if
the conversion fails):

```
mipskit-coff2noff program.coff program.noff
```

Convert a COFF executable into a flat memory image with a 1024-byte stack:

```
mipskit-coff2flat program.coff program.flat
```

Both print the sections they load. Demonstrate the stack implementations:

```
mipskit-stack-demo
mipskit-bounded-stack-demo
```

## Library use

### Reading COFF

```python
from mipskit.coff import read_coff

with open("program.coff", "rb") as f:
    coff = read_coff(f.read())

text = coff.section(".text")          # None if there is no such section
print(text.name, hex(text.vaddr), text.size)
code = coff.section_data(text)
```

`FileHeader`, `AoutHeader` and `SectionHeader` each have `unpack` and
`pack` for their on-disk bytes. Malformed or truncated input raises
`mipskit.coff.CoffError`.

### Converting

```python
from mipskit.noff import coff_to_noff, NoffHeader
from mipskit.flat import coff_to_flat

noff_image = coff_to_noff(data, log=print)
header = NoffHeader.unpack(noff_image)
print(header.code.virtual_addr, header.code.in_file_addr, header.code.size)

flat_image = coff_to_flat(data, stack_size=1024)
```

Both raise `mipskit.noff.ConversionError` for input that is not an
`OMAGIC` COFF executable or is truncated. `coff_to_noff` also refuses
both `.data` and `.rdata`, contiguous `.bss` and `.sbss`, and any
section it does not know.

### Memory and system calls

```python
from mipskit.memory import Memory
from mipskit.syscalls import SyscallHandler, ProgramExit

memory = Memory()                     # 16 MiB mapped at 0x10000000
memory.store(0x10000000, 0x12345678)
memory.fetch(0x10000000)              # 0x12345678

registers = [0] * 32
registers[2] = 64                     # getpagesize
SyscallHandler(memory).handle(registers)
print(registers[1])
```

`Memory` offers `fetch`, `sfetch`, `usfetch`, `cfetch`, `ucfetch`, `store`,
`sstore`, `cstore`, `write_bytes`, `read_bytes` and `read_cstring`, and
raises `MemoryAccessError` for addresses outside its range.

`SyscallHandler.handle` takes the call number from register 2 and its
arguments from registers 4 to 6, and puts the result in register 1. It
supports exit, read, write, open, close, sbreak, lseek, ioctl, fstat and
getpagesize; exit raises `ProgramExit`, and any other number raises
`UnknownSyscallError`. With `traptrace=True` each call and the registers
before and after are printed. `breakpoint` handles a break the same way.

### Directory table

```python
from mipskit.directory import Directory

d = Directory(10)
d.add("notes", 5)
d.find("notes")      # 5
d.names()            # ['notes']
d.remove("notes")
raw = d.to_bytes()
d.load(raw)
```

`add` raises `FileExistsError` for a name already present and `OSError`
(`ENOSPC`) when every slot is used; `remove` raises `FileNotFoundError`;
`find` returns `None` for an unknown name.

### Stacks

```python
from mipskit.stacks import ArrayStack, ListStack
from mipskit.genericstack import BoundedStack

s = ArrayStack(2)
s.push(1)
s.push(2)
s.is_full()          # True
s.pop()              # 2

BoundedStack(3).self_test("a")   # ['c', 'b', 'a']
```

Pushing onto a full stack raises `StackFullError`; popping an empty one
raises `StackEmptyError`. `mipskit.intlist.IntList` is the linked list
behind `ListStack`.

## What is not included

mipskit does not disassemble instructions and does not execute programs:
there is no instruction decoder or processor model, so `Memory` and
`SyscallHandler` are building blocks only, and nothing loads a COFF file
into `Memory` for you. It also has no simulated disk; the directory table
only encodes and decodes its bytes.