from dataclasses import dataclass
from enum import IntEnum

from rv_sim.util.bits import WORD_MASK, get_nth_bit, to_int32
from rv_sim.util.exceptions import InvalidAluOperation


class AluOp(IntEnum):
    ADD = 0x0
    SUB = 0x1
    AND = 0x2
    OR = 0x3
    XOR = 0x4
    SLT = 0x5
    SLTU = 0x6
    SLL = 0x7
    SRL = 0x8
    SRA = 0x9
    LUI = 0xA
    AUIPC = 0xB


@dataclass(frozen=True)
class AluFlags:
    zero: bool = False
    carry: bool = False
    overflow: bool = False
    negative: bool = False


def _add(src_a, src_b):
    full = src_a + src_b
    result = full & WORD_MASK
    carry = full > WORD_MASK
    # Overflow when both operands share a sign that the result does not
    overflow = get_nth_bit(~(src_a ^ src_b) & (src_a ^ result), 31) == 1
    return result, carry, overflow


def _sub(src_a, src_b):
    # src_a + ~src_b + 1, carry out set means no borrow
    full = src_a + (~src_b & WORD_MASK) + 1
    result = full & WORD_MASK
    carry = full > WORD_MASK
    overflow = get_nth_bit((src_a ^ src_b) & (src_a ^ result), 31) == 1
    return result, carry, overflow


def alu(src_a, src_b, op):
    """
    Perform a single ALU operation on two 32-bit operands.

    Returns the 32-bit result along with the zero, carry, overflow and negative
    flags. Carry and overflow are only meaningful for ADD, SUB and AUIPC, every
    other operation reports them as clear.
    """
    src_a &= WORD_MASK
    src_b &= WORD_MASK
    shamt = src_b & 0x1F
    carry = False
    overflow = False

    match op:
        case AluOp.ADD | AluOp.AUIPC:
            result, carry, overflow = _add(src_a, src_b)
        case AluOp.SUB:
            result, carry, overflow = _sub(src_a, src_b)
        case AluOp.AND:
            result = src_a & src_b
        case AluOp.OR:
            result = src_a | src_b
        case AluOp.XOR:
            result = src_a ^ src_b
        case AluOp.SLT:
            result = 1 if to_int32(src_a) < to_int32(src_b) else 0
        case AluOp.SLTU:
            result = 1 if src_a < src_b else 0
        case AluOp.SLL:
            result = (src_a << shamt) & WORD_MASK
        case AluOp.SRL:
            result = src_a >> shamt
        case AluOp.SRA:
            result = (to_int32(src_a) >> shamt) & WORD_MASK
        case AluOp.LUI:
            result = src_b
        case _:
            raise InvalidAluOperation(op)

    flags = AluFlags(
        zero=result == 0,
        carry=carry,
        overflow=overflow,
        negative=get_nth_bit(result, 31) == 1,
    )
    return result, flags
