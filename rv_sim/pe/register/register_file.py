import numpy as np

from rv_sim.util.bits import WORD_MASK

NUM_REGISTERS = 32

REGISTER_NAME_MAPPING = {
    **{f"x{i}": i for i in range(NUM_REGISTERS)},
    "zero": 0,
    "ra": 1,
    "sp": 2,
    "gp": 3,
    "tp": 4,
    "t0": 5,
    "t1": 6,
    "t2": 7,
    "s0": 8,
    "fp": 8,
    "s1": 9,
    "a0": 10,
    "a1": 11,
    "a2": 12,
    "a3": 13,
    "a4": 14,
    "a5": 15,
    "a6": 16,
    "a7": 17,
    "s2": 18,
    "s3": 19,
    "s4": 20,
    "s5": 21,
    "s6": 22,
    "s7": 23,
    "s8": 24,
    "s9": 25,
    "s10": 26,
    "s11": 27,
    "t3": 28,
    "t4": 29,
    "t5": 30,
    "t6": 31,
}


class RegisterFile:
    """
    The 32 general purpose registers. Register 0 is hardcoded to zero, writes
    to it are ignored as RISC-V requires rather than raising.
    """

    def __init__(self, register_name_mapping=None):
        self.registers = np.zeros(NUM_REGISTERS, dtype=np.uint32)
        if register_name_mapping is None:
            register_name_mapping = REGISTER_NAME_MAPPING
        self.register_name_mapping = register_name_mapping

    def _resolve(self, idx):
        if isinstance(idx, (int, np.integer)) and not isinstance(idx, bool):
            if idx < 0 or idx >= NUM_REGISTERS:
                raise IndexError(f"Register index '{idx}' is out of range")
            return int(idx)
        elif isinstance(idx, str):
            if idx not in self.register_name_mapping:
                raise IndexError(f"Register name '{idx}' is not known")
            return self.register_name_mapping[idx]
        else:
            raise IndexError(
                f"Index of type '{type(idx)}' can not be used as a register lookup"
            )

    def read(self, idx):
        reg = self._resolve(idx)
        if reg == 0:
            return 0
        return int(self.registers[reg])

    def write(self, idx, value):
        reg = self._resolve(idx)
        if reg == 0:
            return
        self.registers[reg] = value & WORD_MASK

    def clear(self):
        self.registers.fill(0)

    def snapshot(self):
        return [self.read(i) for i in range(NUM_REGISTERS)]

    def __getitem__(self, idx):
        return self.read(idx)

    def __setitem__(self, idx, value):
        self.write(idx, value)
