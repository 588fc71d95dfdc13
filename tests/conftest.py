import pytest

from rv_sim.memory.memory import DataMemory, InstructionMemory
from rv_sim.pe.rv.rv32 import RV32I


@pytest.fixture
def imem():
    # Covers 0x1000 - 0x4FFF so programs can be placed at any of the test PCs
    return InstructionMemory(4096, base=0x1000)


@pytest.fixture
def dmem():
    return DataMemory(1024)


@pytest.fixture
def core(imem, dmem):
    return RV32I(imem, dmem, reset_vector=0x1000)


@pytest.fixture
def run_program(core, imem):
    def _run(words, pc=0x1000):
        imem.load(words, pc)
        core.reset(pc)
        return [core.step() for _ in words]

    return _run
