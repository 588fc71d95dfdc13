import os

from rv_sim.config.config import SimulatorConfiguration
from rv_sim.device.clock import Clock
from rv_sim.device.reset import Reset
from rv_sim.memory.loader import load_bin_into, load_hex_into
from rv_sim.memory.memory import DataMemory, InstructionMemory
from rv_sim.pe.rv.rv32 import RV32I
from rv_sim.util.exceptions import SimulatorError


class Device:
    def __init__(self, clocks, resets):
        self.clocks = clocks
        self.resets = resets

    def run(self, num_iterations, clock_number=0):
        self.clocks[clock_number].run(num_iterations)

    def reset(self, reset_number=0):
        self.resets[reset_number].reset()


class SingleCycleSystem(Device):
    """
    A complete test harness: an RV32I core with its own instruction and data
    memories, laid out according to the configuration, driven by one clock.
    """

    def __init__(self, configuration=None):
        if configuration is None:
            configuration = SimulatorConfiguration.load()
        self.configuration = configuration

        imem_base, imem_words = configuration.getInstructionMemoryLayout()
        dmem_base, dmem_words = configuration.getDataMemoryLayout()
        self.instruction_memory = InstructionMemory(imem_words, imem_base)
        self.data_memory = DataMemory(dmem_words, dmem_base)

        self.core = RV32I(
            self.instruction_memory,
            self.data_memory,
            reset_vector=configuration.getResetVector(),
            unknown_instr_is_error=configuration["core.unknown_instr_is_error"],
            snoop=configuration["core.snoop"],
        )

        clock = Clock([self.core])
        super().__init__([clock], [Reset([self.core, clock])])

    def _load_image(self, memory, source, address):
        # Raw binaries are recognised by extension, anything else is hex text
        is_path = isinstance(source, (str, os.PathLike))
        if is_path and os.fspath(source).endswith(".bin"):
            return load_bin_into(memory, source, address)
        return load_hex_into(memory, source, address)

    def load_program(self, source, address=None):
        return self._load_image(self.instruction_memory, source, address)

    def load_data(self, source, address=None):
        return self._load_image(self.data_memory, source, address)

    def run_until_halt(self, max_cycles):
        """
        Step the core until it executes an instruction that jumps to itself,
        the usual way a bare-metal test program parks at the end. Returns the
        number of instructions executed including the final self jump.
        """
        for cycle in range(max_cycles):
            record = self.core.step()
            if record.next_pc == record.pc:
                self.clocks[0].clock_tick_num += cycle + 1
                return cycle + 1
        self.clocks[0].clock_tick_num += max_cycles
        raise SimulatorError(
            f"Core did not halt within {max_cycles} cycles, pc is '{hex(self.core.pc)}'"
        )

    def read_register(self, index):
        return self.core.read_register(index)
