import pytest

from rv_encode import (
    add,
    addi,
    auipc,
    beq,
    blt,
    bne,
    encode_i_type,
    encode_s_type,
    jal,
    jalr,
    lui,
    lw,
    slt,
    sltu,
    sub,
    sw,
)
from rv_sim.memory.memory import DataMemory, InstructionMemory
from rv_sim.pe.rv.rv32 import RV32I
from rv_sim.util.exceptions import InvalidOpcode, OutOfRangeMemoryAccess


def test_reset_state(core):
    assert core.pc == 0x1000
    assert all(core.read_register(i) == 0 for i in range(32))


def test_arithmetic_sequence(run_program, core):
    records = run_program([addi(1, 0, 5), addi(2, 1, 7), add(3, 1, 2)])
    assert records[0].register_write == (1, 5)
    assert records[0].next_pc == 0x1004
    assert core.read_register(1) == 5
    assert core.read_register(2) == 12
    assert core.read_register(3) == 17
    assert core.pc == 0x100C


def test_step_by_step_pc(core, imem):
    imem.load([addi(1, 0, 5), addi(2, 1, 7), add(3, 1, 2)], 0x1000)
    core.step()
    assert (core.read_register(1), core.pc) == (5, 0x1004)
    core.step()
    assert (core.read_register(2), core.pc) == (12, 0x1008)
    core.step()
    assert (core.read_register(3), core.pc) == (17, 0x100C)


def test_write_to_x0_discarded(run_program, core):
    records = run_program([addi(0, 0, 123), add(0, 0, 0), lui(0, 0xFFFFF)])
    assert core.read_register(0) == 0
    assert all(r.register_write is None for r in records)
    assert core.pc == 0x100C


def test_lui(run_program, core):
    run_program([lui(5, 0xABCDE)])
    assert core.read_register(5) == 0xABCDE000


def test_auipc(run_program, core):
    run_program([auipc(6, 0x1)], pc=0x2000)
    assert core.read_register(6) == 0x3000
    assert core.pc == 0x2004


def test_beq_taken_bne_not_taken(core, imem):
    imem.load([beq(1, 1, 8)], 0x3000)
    imem.load([bne(1, 1, 8)], 0x3100)
    core.reset(0x3000)
    core.register_file.write(1, 77)
    record = core.step()
    assert record.branch_taken
    assert core.pc == 0x3008

    core.pc = 0x3100
    record = core.step()
    assert not record.branch_taken
    assert core.pc == 0x3104


def test_backward_branch(core, imem):
    imem.load([blt(1, 2, -16)], 0x1010)
    core.reset(0x1010)
    core.register_file.write(1, 0xFFFFFFFF)
    core.register_file.write(2, 1)
    core.step()
    assert core.pc == 0x1000


def test_slt_and_sltu(core, imem):
    imem.load([sltu(7, 8, 9), slt(10, 8, 9)], 0x1000)
    core.register_file.write(8, 0xFFFFFFFF)
    core.register_file.write(9, 1)
    core.step()
    core.step()
    assert core.read_register(7) == 0
    assert core.read_register(10) == 1


def test_sub_wraps(run_program, core):
    run_program([addi(1, 0, 1), sub(2, 0, 1)])
    assert core.read_register(2) == 0xFFFFFFFF


def test_store_then_load(run_program, core, dmem):
    records = run_program(
        [
            lui(1, 0xDEADC),
            addi(1, 1, -0x111),
            addi(2, 0, 0x40),
            sw(1, 2, 8),
            lw(3, 2, 8),
        ]
    )
    assert core.read_register(1) == 0xDEADBEEF
    assert records[3].memory_write == (0x48, 0xDEADBEEF)
    assert records[3].register_write is None
    assert dmem.read_word(0x48) == 0xDEADBEEF
    assert core.read_register(3) == 0xDEADBEEF


def test_sub_word_accesses_are_whole_words(core, imem, dmem):
    # lb x3, 1(x0) and sb x4, 2(x0) behave as lw / sw on the containing word
    dmem.write_word(0x0, 0x80FF7F01)
    imem.load(
        [encode_i_type(1, 0, 0x0, 3, opcode=0x03), encode_s_type(2, 4, 0, 0x0)],
        0x1000,
    )
    core.register_file.write(4, 0x12345678)
    core.step()
    assert core.read_register(3) == 0x80FF7F01
    core.step()
    assert dmem.read_word(0x0) == 0x12345678


def test_jal_links_and_jumps(run_program, core):
    records = run_program([jal(1, 0x20)])
    assert records[0].branch_taken
    assert core.read_register(1) == 0x1004
    assert core.pc == 0x1020


def test_jalr_target_is_alu_result(core, imem):
    imem.load([jalr(1, 2, 5)], 0x1000)
    core.register_file.write(2, 0x2000)
    record = core.step()
    assert record.alu_result == 0x2005
    assert core.pc == 0x2005
    assert core.read_register(1) == 0x1004


def test_jalr_reads_rs1_before_link_write(core, imem):
    imem.load([jalr(1, 1, 0x10)], 0x1000)
    core.register_file.write(1, 0x3000)
    core.step()
    assert core.pc == 0x3010
    assert core.read_register(1) == 0x1004


@pytest.mark.parametrize("word", [0x0000000F, 0x00000073, 0xFFFFFFFF, 0x00000000])
def test_unknown_opcode_is_noop(core, imem, dmem, word):
    imem.load([word], 0x1000)
    for i in range(1, 32):
        core.register_file.write(i, i)
    before = core.register_file.snapshot()
    record = core.step()
    assert record.register_write is None
    assert record.memory_write is None
    assert not record.branch_taken
    assert core.register_file.snapshot() == before
    assert dmem.dump(0, 1024) == [0] * 1024
    assert core.pc == 0x1004
    assert core.unknown_instructions == 1


def test_unknown_opcode_strict_mode(imem, dmem):
    strict = RV32I(imem, dmem, reset_vector=0x1000, unknown_instr_is_error=True)
    imem.load([0x0000000F], 0x1000)
    with pytest.raises(InvalidOpcode):
        strict.step()
    assert strict.pc == 0x1000


def test_faulting_store_commits_nothing(core, imem, dmem):
    imem.load([sw(1, 2, 0)], 0x1000)
    core.register_file.write(1, 0xAA)
    core.register_file.write(2, 0x10000)
    with pytest.raises(OutOfRangeMemoryAccess):
        core.step()
    assert core.pc == 0x1000
    assert core.steps_executed == 0


def test_faulting_load_commits_nothing(core, imem):
    imem.load([lw(3, 2, 0)], 0x1000)
    core.register_file.write(2, 0x10000)
    core.register_file.write(3, 9)
    with pytest.raises(OutOfRangeMemoryAccess):
        core.step()
    assert core.read_register(3) == 9
    assert core.pc == 0x1000


def test_fetch_outside_instruction_memory(core):
    core.reset(0x8000)
    with pytest.raises(OutOfRangeMemoryAccess):
        core.step()


def test_pc_wraps_at_32_bits():
    imem = InstructionMemory(1, base=0xFFFFFFFC)
    core = RV32I(imem, DataMemory(1), reset_vector=0xFFFFFFFC)
    imem.load([addi(1, 0, 1)])
    core.step()
    assert core.pc == 0


def test_reset_clears_registers_not_memory(run_program, core, dmem):
    run_program([addi(1, 0, 9), sw(1, 0, 4)])
    core.reset()
    assert core.read_register(1) == 0
    assert core.pc == 0x1000
    assert dmem.read_word(4) == 9


def test_clock_tick_respects_active(core, imem):
    imem.load([addi(1, 1, 1)] * 4, 0x1000)
    core.clock_tick(0)
    core.stop()
    core.clock_tick(1)
    assert core.read_register(1) == 1
    core.start()
    assert core.read_register(1) == 0
    core.clock_tick(2)
    assert core.read_register(1) == 1


def test_snoop_trace(imem, dmem, capsys):
    traced = RV32I(imem, dmem, reset_vector=0x1000, snoop=True)
    imem.load([addi(1, 0, 5), beq(1, 0, 8)], 0x1000)
    traced.step()
    traced.step()
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[0-> 1][0x1000] addi ra, zero, 5    # ra = 0x5"
    assert out[1] == "[0-> 2][0x1004] beq ra, zero, 8    # false"
