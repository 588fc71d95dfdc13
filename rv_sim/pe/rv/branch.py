from enum import IntEnum

from rv_sim.pe.rv.alu import AluFlags


class BranchType(IntEnum):
    BEQ = 0x0
    BNE = 0x1
    BLT = 0x4
    BGE = 0x5
    BLTU = 0x6
    BGEU = 0x7


def branch_condition(funct3: int, flags: AluFlags, is_branch: bool) -> bool:
    """
    Decide whether a conditional branch is taken from the flags of rs1 - rs2.

    Signed comparisons use negative XOR overflow rather than the raw sign bit
    so that they stay correct when the subtraction overflows. For the unsigned
    comparisons carry is set when there was no borrow, i.e. rs1 >= rs2.
    """
    if not is_branch:
        return False

    signed_less_than = flags.negative != flags.overflow

    match funct3:
        case BranchType.BEQ:
            return flags.zero
        case BranchType.BNE:
            return not flags.zero
        case BranchType.BLT:
            return signed_less_than
        case BranchType.BGE:
            return not signed_less_than
        case BranchType.BLTU:
            return not flags.carry
        case BranchType.BGEU:
            return flags.carry
        case _:
            return False
