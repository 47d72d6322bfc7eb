import pytest

from mipskit.coff import (
    MIPSELMAGIC,
    OMAGIC,
    SOMAGIC,
    AoutHeader,
    FileHeader,
    SectionHeader,
)
from mipskit.noff import (
    NOFFMAGIC,
    ConversionError,
    NoffHeader,
    Segment,
    coff_to_noff,
    main,
)

TEXT = bytes(range(16))
DATA = b"hello, world!!!\0"


def build_coff(sections, *, magic=MIPSELMAGIC, aout_magic=OMAGIC):
    """Sections are (name, paddr, payload); an int payload is a size with no data."""
    offset = FileHeader.SIZE + AoutHeader.SIZE + len(sections) * SectionHeader.SIZE
    headers = []
    blobs = []
    for name, paddr, payload in sections:
        if isinstance(payload, int):
            headers.append(
                SectionHeader(name, paddr=paddr, vaddr=paddr, size=payload, scnptr=0)
            )
        else:
            headers.append(
                SectionHeader(
                    name, paddr=paddr, vaddr=paddr, size=len(payload), scnptr=offset
                )
            )
            blobs.append(payload)
            offset += len(payload)
    return (
        FileHeader(magic=magic, nscns=len(sections)).pack()
        + AoutHeader(magic=aout_magic).pack()
        + b"".join(h.pack() for h in headers)
        + b"".join(blobs)
    )


def test_header_layout():
    raw = NoffHeader(code=Segment(0, NoffHeader.SIZE, 16)).pack()
    assert len(raw) == NoffHeader.SIZE == 40
    assert raw[:4] == b"\xad\xdf\xba\x00"


def test_header_round_trip():
    header = NoffHeader(
        code=Segment(0, 40, 16),
        init_data=Segment(0x100, 56, 32),
        uninit_data=Segment(0x200, 0, 64),
    )
    assert NoffHeader.unpack(header.pack()) == header


def test_unpack_short_data():
    with pytest.raises(ConversionError):
        NoffHeader.unpack(b"\x00" * 10)


def test_text_and_data_copied():
    image = coff_to_noff(build_coff([(".text", 0, TEXT), (".data", 0x400, DATA)]))
    header = NoffHeader.unpack(image)
    assert header.magic == NOFFMAGIC
    assert header.code == Segment(0, NoffHeader.SIZE, len(TEXT))
    assert header.init_data == Segment(0x400, NoffHeader.SIZE + len(TEXT), len(DATA))
    assert header.uninit_data.size == 0
    assert image[NoffHeader.SIZE:] == TEXT + DATA


def test_segments_point_at_contents():
    image = coff_to_noff(build_coff([(".text", 0, TEXT), (".rdata", 0x400, DATA)]))
    header = NoffHeader.unpack(image)
    code = header.code
    init = header.init_data
    assert image[code.in_file_addr:code.in_file_addr + code.size] == TEXT
    assert image[init.in_file_addr:init.in_file_addr + init.size] == DATA


def test_bss_is_described_not_copied():
    image = coff_to_noff(build_coff([(".text", 0, TEXT), (".bss", 0x800, 128)]))
    header = NoffHeader.unpack(image)
    assert len(image) == NoffHeader.SIZE + len(TEXT)
    assert header.uninit_data == Segment(0x800, 0, 128)


def test_separate_bss_and_sbss_are_summed():
    image = coff_to_noff(build_coff([(".sbss", 0x800, 16), (".bss", 0x900, 64)]))
    header = NoffHeader.unpack(image)
    assert header.uninit_data.virtual_addr == 0x800
    assert header.uninit_data.size == 16 + 64


def test_contiguous_bss_and_sbss_rejected():
    with pytest.raises(ConversionError, match="bss and sbss"):
        coff_to_noff(build_coff([(".sbss", 0x800, 16), (".bss", 0x810, 64)]))


def test_data_and_rdata_rejected():
    with pytest.raises(ConversionError, match="both data and rdata"):
        coff_to_noff(build_coff([(".data", 0x400, DATA), (".rdata", 0x500, DATA)]))


def test_unknown_section_rejected():
    with pytest.raises(ConversionError, match="Unknown segment type: .comment"):
        coff_to_noff(build_coff([(".text", 0, TEXT), (".comment", 0, b"xyz")]))


def test_empty_unknown_section_ignored():
    image = coff_to_noff(build_coff([(".comment", 0, b""), (".text", 0, TEXT)]))
    assert NoffHeader.unpack(image).code.size == len(TEXT)
    assert image[NoffHeader.SIZE:] == TEXT


def test_bad_file_magic():
    with pytest.raises(ConversionError, match="MIPSEL"):
        coff_to_noff(build_coff([(".text", 0, TEXT)], magic=0x1234))


def test_bad_system_magic():
    with pytest.raises(ConversionError, match="OMAGIC"):
        coff_to_noff(build_coff([(".text", 0, TEXT)], aout_magic=SOMAGIC))


def test_truncated_section():
    with pytest.raises(ConversionError):
        coff_to_noff(build_coff([(".text", 0, TEXT)])[:-4])


def test_log_lines():
    lines = []
    coff_to_noff(build_coff([(".text", 0, TEXT)]), lines.append)
    assert lines[0] == "numsections 1 "
    assert lines[1] == "Loading 1 sections:"
    assert lines[2].startswith('\t".text", filepos 0x')
    assert lines[2].endswith(f"size 0x{len(TEXT):x}")
    assert len(lines) == 3


def test_main_writes_file(tmp_path, capsys):
    data = build_coff([(".text", 0, TEXT), (".data", 0x400, DATA)])
    src = tmp_path / "prog.coff"
    dst = tmp_path / "prog.noff"
    src.write_bytes(data)
    assert main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == coff_to_noff(data)
    assert "Loading 2 sections:" in capsys.readouterr().out


def test_main_removes_output_on_error(tmp_path):
    src = tmp_path / "bad.coff"
    dst = tmp_path / "bad.noff"
    src.write_bytes(build_coff([(".text", 0, TEXT)], magic=0x1234))
    dst.write_bytes(b"stale")
    assert main([str(src), str(dst)]) == 1
    assert not dst.exists()


def test_main_missing_input(tmp_path):
    dst = tmp_path / "out.noff"
    assert main([str(tmp_path / "missing.coff"), str(dst)]) == 1
    assert not dst.exists()