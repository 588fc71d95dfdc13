from dataclasses import dataclass
from typing import Optional, Tuple

from rv_sim.pe.pe import ProcessingElement
from rv_sim.pe.register.register_file import RegisterFile
from rv_sim.pe.rv.alu import AluFlags, alu
from rv_sim.pe.rv.branch import branch_condition
from rv_sim.pe.rv.decoder import (
    ControlSignals,
    Opcode,
    ResultSource,
    decode,
    is_recognised,
)
from rv_sim.pe.rv.immediate import extract_immediate
from rv_sim.pe.rv.isa.rv_isa import (
    Instruction,
    disassemble,
    get_reg_name,
    print_snoop,
)
from rv_sim.util.bits import WORD_MASK
from rv_sim.util.exceptions import InvalidOpcode

DEFAULT_RESET_VECTOR = 0x00001000


@dataclass(frozen=True)
class StepRecord:
    pc: int
    instruction: int
    control: ControlSignals
    immediate: int
    alu_result: int
    flags: AluFlags
    branch_taken: bool
    next_pc: int
    register_write: Optional[Tuple[int, int]]
    memory_write: Optional[Tuple[int, int]]


class RV32I(ProcessingElement):
    """
    Single-cycle RV32I core. Each call to step executes one instruction from
    fetch through to commit, there is no overlap between instructions. The
    register file is owned by the core, instruction and data memories are
    supplied by the caller.
    """

    def __init__(
        self,
        instruction_memory,
        data_memory,
        reset_vector=DEFAULT_RESET_VECTOR,
        unknown_instr_is_error=False,
        snoop=False,
        core_id=0,
    ):
        self.instruction_memory = instruction_memory
        self.data_memory = data_memory
        self.reset_vector = reset_vector & WORD_MASK
        self.unknown_instr_is_error = unknown_instr_is_error
        self.snoop = snoop
        self.core_id = core_id
        self.register_file = RegisterFile()
        self.pc = self.reset_vector
        self.unknown_instructions = 0
        self.steps_executed = 0
        self.active = True

    def step(self):
        pc_val = self.pc
        word = self.instruction_memory.read_word(pc_val)
        instr = Instruction(word)

        control = decode(instr)
        if not is_recognised(instr.opcode) and self.unknown_instr_is_error:
            raise InvalidOpcode(instr.opcode, pc_val)
        immediate = extract_immediate(instr.word, control.imm_format)

        rs1_val = self.register_file.read(instr.rs1)
        rs2_val = self.register_file.read(instr.rs2)
        src_a = pc_val if control.alu_src_a_pc else rs1_val
        src_b = immediate if control.alu_src_b_imm else rs2_val

        alu_result, flags = alu(src_a, src_b, control.alu_op)

        taken = branch_condition(instr.funct3, flags, control.branch)
        branch_taken = control.jump or (control.branch and taken)

        memory_write = None
        mem_data = None
        if control.mem_write:
            # Raises before anything is committed if the address is bad
            self.data_memory.check_access(alu_result)
            memory_write = (alu_result, rs2_val)
        elif control.result_src == ResultSource.MEMORY:
            mem_data = self.data_memory.read_word(alu_result)

        pc_plus_4 = (pc_val + 4) & WORD_MASK
        match control.result_src:
            case ResultSource.MEMORY:
                result = mem_data
            case ResultSource.PC_PLUS_4:
                result = pc_plus_4
            case _:
                result = alu_result

        register_write = None
        if control.reg_write and instr.rd != 0:
            register_write = (instr.rd, result)

        if not branch_taken:
            next_pc = pc_plus_4
        elif instr.opcode == Opcode.JALR:
            # rs1 + imm comes straight from the ALU
            next_pc = alu_result
        else:
            next_pc = (pc_val + immediate) & WORD_MASK

        # Commit
        if memory_write is not None:
            self.data_memory.write_word(*memory_write)
        if register_write is not None:
            self.register_file.write(*register_write)
        self.pc = next_pc
        self.steps_executed += 1
        if not is_recognised(instr.opcode):
            self.unknown_instructions += 1

        record = StepRecord(
            pc=pc_val,
            instruction=instr.word,
            control=control,
            immediate=immediate,
            alu_result=alu_result,
            flags=flags,
            branch_taken=branch_taken,
            next_pc=next_pc,
            register_write=register_write,
            memory_write=memory_write,
        )
        if self.snoop:
            self.print_snoop(record)
        return record

    def print_snoop(self, record):
        print(f"[{self.core_id}-> {self.steps_executed}][{hex(record.pc)}] ", end="")
        info = []
        if record.register_write is not None:
            rd, value = record.register_write
            info.append(f"{get_reg_name(rd)} = {hex(value)}")
        if record.memory_write is not None:
            addr, value = record.memory_write
            info.append(f"mem[{hex(addr)}] = {hex(value)}")
        if record.control.branch or record.control.jump:
            if record.branch_taken:
                info.append(f"taken to {hex(record.next_pc)}")
            else:
                info.append("false")
        print_snoop(
            True,
            disassemble(record.instruction, record.control.alu_op),
            ", ".join(info) if info else None,
        )
        print("")

    def clock_tick(self, cycle_num):
        if not self.active:
            return
        self.step()

    def read_register(self, index):
        return self.register_file.read(index)

    def reset(self, pc_value=None):
        self.register_file.clear()
        self.pc = (self.reset_vector if pc_value is None else pc_value) & WORD_MASK
        self.unknown_instructions = 0
        self.steps_executed = 0

    def getRegisterFile(self):
        return self.register_file

    def start(self):
        self.reset()
        self.active = True

    def stop(self):
        self.active = False
