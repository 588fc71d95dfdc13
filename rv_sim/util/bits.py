WORD_MASK = 0xFFFFFFFF


def get_bits(value: int, start: int, end: int) -> int:
    """
    Extract bits from `start` to `end` (inclusive) from a 32-bit word.

    Bit positions are 0-indexed from the LSB (rightmost bit).

    Example:
        get_bits(0b111011, 1, 3) => 0b101 => 5

    Args:
        value (int): The 32-bit word, negative values are treated as their two's complement pattern.
        start (int): Starting bit index (inclusive).
        end (int): Ending bit index (inclusive).

    Returns:
        int: The extracted bits as an integer.
    """
    if not (0 <= start <= 31 and 0 <= end <= 31):
        raise ValueError("start and end must be between 0 and 31")
    if start > end:
        raise ValueError("start must be less than or equal to end")

    value &= WORD_MASK

    num_bits = end - start + 1
    mask = (1 << num_bits) - 1
    return (value >> start) & mask


def get_nth_bit(value: int, n: int) -> int:
    if n < 0 or n > 31:
        raise ValueError("n must be between 0 and 31 for a 32-bit integer")
    return (value >> n) & 1


def sign_extend(value: int, bit_width: int) -> int:
    """Sign-extend the lowest bit_width bits of value to a 32-bit pattern."""
    if bit_width > 32 or bit_width < 1:
        raise ValueError(f"Bit width must be between 1 and 32, got {bit_width}")
    mask = (1 << bit_width) - 1
    value &= mask
    if (value >> (bit_width - 1)) & 1:
        value |= ~mask
    return value & WORD_MASK


def to_int32(value: int) -> int:
    value &= WORD_MASK
    return value - (1 << 32) if value & 0x80000000 else value
