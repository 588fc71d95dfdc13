from enum import Enum

from rv_sim.util.bits import sign_extend


class ImmediateFormat(Enum):
    NONE = "R"
    I = "I"
    S = "S"
    B = "B"
    U = "U"
    J = "J"


def extract_immediate(instruction, imm_format):
    """
    Extract and sign-extend the immediate value from a RISC-V instruction.

    Parameters:
    - instruction: 32-bit instruction as an integer
    - imm_format: ImmediateFormat of the instruction

    Returns:
    - 32-bit immediate as an unsigned integer holding the two's complement pattern
    """
    match imm_format:
        case ImmediateFormat.I:
            # imm[11:0] = inst[31:20]
            imm = (instruction >> 20) & 0xFFF
            return sign_extend(imm, 12)

        case ImmediateFormat.S:
            # imm[11:5] = inst[31:25], imm[4:0] = inst[11:7]
            imm = ((instruction >> 25) & 0x7F) << 5
            imm |= (instruction >> 7) & 0x1F
            return sign_extend(imm, 12)

        case ImmediateFormat.B:
            # imm[12|10:5|4:1|11] = inst[31|30:25|11:8|7]
            imm = ((instruction >> 31) & 0x1) << 12
            imm |= ((instruction >> 7) & 0x1) << 11
            imm |= ((instruction >> 25) & 0x3F) << 5
            imm |= ((instruction >> 8) & 0xF) << 1
            return sign_extend(imm, 13)

        case ImmediateFormat.U:
            # imm[31:12] = inst[31:12]
            return instruction & 0xFFFFF000

        case ImmediateFormat.J:
            # imm[20|10:1|11|19:12] = inst[31|30:21|20|19:12]
            imm = ((instruction >> 31) & 0x1) << 20
            imm |= ((instruction >> 12) & 0xFF) << 12
            imm |= ((instruction >> 20) & 0x1) << 11
            imm |= ((instruction >> 21) & 0x3FF) << 1
            return sign_extend(imm, 21)

        case ImmediateFormat.NONE:
            # R-type has no immediate, never consumed downstream
            return 0

        case _:
            raise ValueError(f"Unsupported immediate format: {imm_format}")
