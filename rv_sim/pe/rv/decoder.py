from dataclasses import dataclass
from enum import Enum, IntEnum

from rv_sim.pe.rv.alu import AluOp
from rv_sim.pe.rv.immediate import ImmediateFormat


class Opcode(IntEnum):
    LOAD = 0x03
    OP_IMM = 0x13
    AUIPC = 0x17
    STORE = 0x23
    OP = 0x33
    LUI = 0x37
    BRANCH = 0x63
    JALR = 0x67
    JAL = 0x6F


class ResultSource(Enum):
    ALU = 0
    MEMORY = 1
    PC_PLUS_4 = 2


@dataclass(frozen=True)
class MainControl:
    result_src: ResultSource = ResultSource.ALU
    mem_write: bool = False
    branch: bool = False
    alu_src_b_imm: bool = False
    alu_src_a_pc: bool = False
    reg_write: bool = False
    jump: bool = False
    imm_format: ImmediateFormat = ImmediateFormat.NONE


@dataclass(frozen=True)
class ControlSignals:
    result_src: ResultSource = ResultSource.ALU
    mem_write: bool = False
    branch: bool = False
    alu_src_b_imm: bool = False
    alu_src_a_pc: bool = False
    reg_write: bool = False
    jump: bool = False
    imm_format: ImmediateFormat = ImmediateFormat.NONE
    alu_op: AluOp = AluOp.ADD


# Any opcode not present here decodes to the all-default MainControl, which has
# no side effects at all
MAIN_DECODER_TABLE = {
    Opcode.LOAD: MainControl(
        result_src=ResultSource.MEMORY,
        alu_src_b_imm=True,
        reg_write=True,
        imm_format=ImmediateFormat.I,
    ),
    Opcode.STORE: MainControl(
        mem_write=True,
        alu_src_b_imm=True,
        imm_format=ImmediateFormat.S,
    ),
    Opcode.OP: MainControl(
        reg_write=True,
        imm_format=ImmediateFormat.NONE,
    ),
    Opcode.OP_IMM: MainControl(
        alu_src_b_imm=True,
        reg_write=True,
        imm_format=ImmediateFormat.I,
    ),
    Opcode.BRANCH: MainControl(
        branch=True,
        imm_format=ImmediateFormat.B,
    ),
    Opcode.JAL: MainControl(
        result_src=ResultSource.PC_PLUS_4,
        reg_write=True,
        jump=True,
        imm_format=ImmediateFormat.J,
    ),
    Opcode.JALR: MainControl(
        result_src=ResultSource.PC_PLUS_4,
        alu_src_b_imm=True,
        reg_write=True,
        jump=True,
        imm_format=ImmediateFormat.I,
    ),
    Opcode.LUI: MainControl(
        alu_src_b_imm=True,
        reg_write=True,
        imm_format=ImmediateFormat.U,
    ),
    Opcode.AUIPC: MainControl(
        alu_src_b_imm=True,
        alu_src_a_pc=True,
        reg_write=True,
        imm_format=ImmediateFormat.U,
    ),
}

DEFAULT_MAIN_CONTROL = MainControl()


def is_recognised(opcode):
    return opcode in MAIN_DECODER_TABLE


def main_decoder(opcode):
    """High level control signals, a function of the opcode alone."""
    return MAIN_DECODER_TABLE.get(opcode, DEFAULT_MAIN_CONTROL)


def _arith_op(funct3, alt):
    match funct3:
        case 0x0:
            return AluOp.SUB if alt else AluOp.ADD
        case 0x1:
            return AluOp.SLL
        case 0x2:
            return AluOp.SLT
        case 0x3:
            return AluOp.SLTU
        case 0x4:
            return AluOp.XOR
        case 0x5:
            return AluOp.SRA if alt else AluOp.SRL
        case 0x6:
            return AluOp.OR
        case 0x7:
            return AluOp.AND
        case _:
            raise ValueError(f"funct3 '{funct3}' does not fit in three bits")


def alu_decoder(opcode, funct3, funct7):
    """
    Select the ALU operation. Address calculations (loads, stores and jumps)
    add, branches subtract so the branch evaluator can work from the flags.
    Bit 5 of funct7 picks SUB over ADD and SRA over SRL for register-register
    operations, for register-immediate operations only SRAI uses it as ADDI has
    no subtract form.
    """
    alt = (funct7 >> 5) & 1 == 1
    match opcode:
        case Opcode.OP:
            return _arith_op(funct3, alt)
        case Opcode.OP_IMM:
            return _arith_op(funct3, alt and funct3 == 0x5)
        case Opcode.BRANCH:
            return AluOp.SUB
        case Opcode.LUI:
            return AluOp.LUI
        case Opcode.AUIPC:
            return AluOp.AUIPC
        case _:
            return AluOp.ADD


def decode(instruction):
    main = main_decoder(instruction.opcode)
    alu_op = alu_decoder(instruction.opcode, instruction.funct3, instruction.funct7)
    return ControlSignals(
        result_src=main.result_src,
        mem_write=main.mem_write,
        branch=main.branch,
        alu_src_b_imm=main.alu_src_b_imm,
        alu_src_a_pc=main.alu_src_a_pc,
        reg_write=main.reg_write,
        jump=main.jump,
        imm_format=main.imm_format,
        alu_op=alu_op,
    )
