import os
import string

from rv_sim.util.conversion import conv_bytes_to_words
from rv_sim.util.exceptions import ProgramLoadError


def _strip_comment(line):
    for marker in ("//", "#"):
        idx = line.find(marker)
        if idx != -1:
            line = line[:idx]
    return line.strip()


def _parse_hex(token, line_no):
    text = token
    if text.lower().startswith("0x"):
        text = text[2:]
    text = text.replace("_", "")
    # int() would also accept a sign, which has no meaning in an image
    if len(text) == 0 or any(c not in string.hexdigits for c in text):
        raise ProgramLoadError(f"Line {line_no}: '{token}' is not a hex value")
    return int(text, 16)


def load_hex(source):
    """
    Read a program image in hex text format, one 32-bit word per line written
    most significant digit first (the format produced for $readmemh).

    Blank lines and '//' or '#' comments are skipped, an '@<hex>' line moves the
    load position to that word offset with any gap filled by zeros.

    Args:
        source: A path to the hex file or an iterable of lines.

    Returns:
        list[int]: The words of the image, index 0 is the first word.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, "r") as f:
            lines = f.readlines()
    else:
        lines = list(source)

    words = []
    position = 0
    for line_no, raw_line in enumerate(lines, start=1):
        line = _strip_comment(raw_line)
        if len(line) == 0:
            continue
        for token in line.split():
            if token.startswith("@"):
                position = _parse_hex(token[1:], line_no)
                continue
            value = _parse_hex(token, line_no)
            if value > 0xFFFFFFFF:
                raise ProgramLoadError(
                    f"Line {line_no}: '{token}' does not fit in a 32-bit word"
                )
            if position >= len(words):
                words.extend([0] * (position - len(words) + 1))
            words[position] = value
            position += 1
    return words


def load_hex_into(memory, source, address=None):
    words = load_hex(source)
    memory.load(words, address)
    return len(words)


def load_bin(source):
    """Read a raw little-endian binary image, as produced by objcopy -O binary."""
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as f:
            data = f.read()
    else:
        data = bytes(source)
    return conv_bytes_to_words(data)


def load_bin_into(memory, source, address=None):
    words = load_bin(source)
    memory.load(words, address)
    return len(words)
