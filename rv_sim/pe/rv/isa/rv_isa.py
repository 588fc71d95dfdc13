from rv_sim.pe.rv.alu import AluOp
from rv_sim.pe.rv.decoder import Opcode, alu_decoder
from rv_sim.pe.rv.immediate import ImmediateFormat, extract_immediate
from rv_sim.util.bits import WORD_MASK, get_bits, to_int32

REGISTER_ID_TO_NAME = [
    "zero",
    "ra",
    "sp",
    "gp",
    "tp",
    "t0",
    "t1",
    "t2",
    "s0",
    "s1",
    "a0",
    "a1",
    "a2",
    "a3",
    "a4",
    "a5",
    "a6",
    "a7",
    "s2",
    "s3",
    "s4",
    "s5",
    "s6",
    "s7",
    "s8",
    "s9",
    "s10",
    "s11",
    "t3",
    "t4",
    "t5",
    "t6",
]

LOAD_MNEMONICS = {0x0: "lb", 0x1: "lh", 0x2: "lw", 0x4: "lbu", 0x5: "lhu"}
STORE_MNEMONICS = {0x0: "sb", 0x1: "sh", 0x2: "sw"}
BRANCH_MNEMONICS = {
    0x0: "beq",
    0x1: "bne",
    0x4: "blt",
    0x5: "bge",
    0x6: "bltu",
    0x7: "bgeu",
}
ALU_MNEMONICS = {
    AluOp.ADD: "add",
    AluOp.SUB: "sub",
    AluOp.AND: "and",
    AluOp.OR: "or",
    AluOp.XOR: "xor",
    AluOp.SLT: "slt",
    AluOp.SLTU: "sltu",
    AluOp.SLL: "sll",
    AluOp.SRL: "srl",
    AluOp.SRA: "sra",
}


class Instruction:
    """Read-only view over the fixed bit fields of a 32-bit instruction word."""

    def __init__(self, word):
        self.word = word & WORD_MASK

    @property
    def opcode(self):
        return get_bits(self.word, 0, 6)

    @property
    def rd(self):
        return get_bits(self.word, 7, 11)

    @property
    def funct3(self):
        return get_bits(self.word, 12, 14)

    @property
    def rs1(self):
        return get_bits(self.word, 15, 19)

    @property
    def rs2(self):
        return get_bits(self.word, 20, 24)

    @property
    def funct7(self):
        return get_bits(self.word, 25, 31)

    def __eq__(self, other):
        return isinstance(other, Instruction) and self.word == other.word

    def __hash__(self):
        return hash(self.word)

    def __repr__(self):
        return f"Instruction({self.word:#010x})"


def get_reg_name(reg_idx):
    assert reg_idx < len(REGISTER_ID_TO_NAME)
    return REGISTER_ID_TO_NAME[reg_idx]


def print_snoop(snoop, message, info_msg=None):
    if snoop:
        print(message, end="")
        if info_msg is not None:
            assert isinstance(info_msg, str)
            print("    # " + info_msg, end="")


def disassemble(word, alu_op=None):
    """
    Produce assembly text for an instruction word, used for the snoop trace.
    Register-register and register-immediate mnemonics come from the ALU
    operation, which is decoded here unless the caller already has it.
    """
    instr = Instruction(word)
    rd = get_reg_name(instr.rd)
    rs1 = get_reg_name(instr.rs1)
    rs2 = get_reg_name(instr.rs2)

    if alu_op is None:
        alu_op = alu_decoder(instr.opcode, instr.funct3, instr.funct7)

    match instr.opcode:
        case Opcode.LUI | Opcode.AUIPC:
            imm = extract_immediate(instr.word, ImmediateFormat.U) >> 12
            name = "lui" if instr.opcode == Opcode.LUI else "auipc"
            return f"{name} {rd}, {hex(imm)}"
        case Opcode.JAL:
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.J))
            return f"jal {rd}, {imm}"
        case Opcode.JALR:
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.I))
            return f"jalr {rd}, {imm}({rs1})"
        case Opcode.BRANCH:
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.B))
            name = BRANCH_MNEMONICS.get(instr.funct3, "b?")
            return f"{name} {rs1}, {rs2}, {imm}"
        case Opcode.LOAD:
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.I))
            name = LOAD_MNEMONICS.get(instr.funct3, "l?")
            return f"{name} {rd}, {imm}({rs1})"
        case Opcode.STORE:
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.S))
            name = STORE_MNEMONICS.get(instr.funct3, "s?")
            return f"{name} {rs2}, {imm}({rs1})"
        case Opcode.OP_IMM:
            name = "sltiu" if alu_op == AluOp.SLTU else ALU_MNEMONICS[alu_op] + "i"
            if alu_op in (AluOp.SLL, AluOp.SRL, AluOp.SRA):
                return f"{name} {rd}, {rs1}, {instr.rs2}"
            imm = to_int32(extract_immediate(instr.word, ImmediateFormat.I))
            return f"{name} {rd}, {rs1}, {imm}"
        case Opcode.OP:
            return f"{ALU_MNEMONICS[alu_op]} {rd}, {rs1}, {rs2}"
        case _:
            return f"unknown {instr.word:#010x}"
