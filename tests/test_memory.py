import pytest

from mipskit.memory import MEMOFFSET, MEMSIZE, Memory, MemoryAccessError


@pytest.fixture
def memory():
    return Memory(size=4096)


def test_defaults_match_layout():
    mem = Memory(size=16)
    assert mem.offset == MEMOFFSET
    assert MEMSIZE == 1 << 24


def test_word_round_trip(memory):
    memory.store(MEMOFFSET + 8, -123456)
    assert memory.fetch(MEMOFFSET + 8) == -123456


def test_word_is_little_endian(memory):
    memory.store(MEMOFFSET, 0x01020304)
    assert memory.read_bytes(MEMOFFSET, 4) == b"\x04\x03\x02\x01"


def test_byte_sign_extension(memory):
    memory.cstore(MEMOFFSET + 3, 0xFF)
    assert memory.cfetch(MEMOFFSET + 3) == -1
    assert memory.ucfetch(MEMOFFSET + 3) == 0xFF


def test_halfword_sign_extension(memory):
    memory.sstore(MEMOFFSET + 2, 0x8001)
    assert memory.usfetch(MEMOFFSET + 2) == 0x8001
    assert memory.sfetch(MEMOFFSET + 2) == 0x8001 - 0x10000


def test_store_truncates(memory):
    memory.cstore(MEMOFFSET, 0x1234)
    assert memory.ucfetch(MEMOFFSET) == 0x34


def test_out_of_range_below(memory):
    with pytest.raises(MemoryAccessError):
        memory.fetch(MEMOFFSET - 4)


def test_out_of_range_above(memory):
    with pytest.raises(MemoryAccessError):
        memory.store(MEMOFFSET + 4094, 1)


def test_bytes_and_cstring(memory):
    memory.write_bytes(MEMOFFSET + 100, b"hello\0world")
    assert memory.read_cstring(MEMOFFSET + 100) == b"hello"
    assert memory.read_bytes(MEMOFFSET + 106, 5) == b"world"


def test_unterminated_string():
    mem = Memory(size=4)
    mem.write_bytes(MEMOFFSET, b"abcd")
    with pytest.raises(MemoryAccessError):
        mem.read_cstring(MEMOFFSET)