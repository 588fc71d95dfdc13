import pytest

from rv_sim.memory.loader import load_bin, load_bin_into, load_hex, load_hex_into
from rv_sim.memory.memory import InstructionMemory
from rv_sim.util.exceptions import ProgramLoadError


def test_one_word_per_line(tmp_path):
    path = tmp_path / "prog.hex"
    path.write_text("00500093\n00708113\n002081b3\n")
    assert load_hex(path) == [0x00500093, 0x00708113, 0x002081B3]


def test_comments_blank_lines_and_prefix():
    lines = [
        "// header",
        "",
        "0x00000013  # nop",
        "DEADBEEF",
    ]
    assert load_hex(lines) == [0x13, 0xDEADBEEF]


def test_address_directive_fills_gap():
    assert load_hex(["1", "@3", "2", "@0", "5"]) == [5, 0, 0, 2]


def test_word_too_wide():
    with pytest.raises(ProgramLoadError):
        load_hex(["100000000"])


def test_not_hex():
    with pytest.raises(ProgramLoadError):
        load_hex(["0040zz93"])


def test_load_into_memory():
    mem = InstructionMemory(8, base=0x1000)
    count = load_hex_into(mem, ["00000013", "00100093"])
    assert count == 2
    assert mem.read_word(0x1004) == 0x00100093


def test_binary_image_is_little_endian(tmp_path):
    path = tmp_path / "prog.bin"
    path.write_bytes(bytes([0x93, 0x00, 0x50, 0x00, 0x13, 0x01]))
    assert load_bin(path) == [0x00500093, 0x00000113]


def test_binary_image_from_bytes():
    mem = InstructionMemory(4)
    assert load_bin_into(mem, b"\x13\x00\x00\x00") == 1
    assert mem.read_word(0) == 0x13


@pytest.mark.parametrize("token", ["-1", "+5", "0x-1", "@-1", "@+2", "@", "0x"])
def test_signed_or_empty_tokens_rejected(token):
    with pytest.raises(ProgramLoadError):
        load_hex([token, "00000013"])


def test_negative_offset_does_not_overwrite():
    with pytest.raises(ProgramLoadError):
        load_hex(["11", "22", "@-1", "33"])
