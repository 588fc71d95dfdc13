class SimulatorError(Exception):
    pass


class InvalidAluOperation(SimulatorError, ValueError):
    def __init__(self, op):
        self.op = op
        super().__init__(f"ALU operation code '{op}' is not recognised")


class InvalidOpcode(SimulatorError):
    def __init__(self, opcode, pc):
        self.opcode = opcode
        self.pc = pc
        super().__init__(f"Unknown opcode '{hex(opcode)}' at pc '{hex(pc)}'")


class OutOfRangeMemoryAccess(SimulatorError, IndexError):
    def __init__(self, addr, low, high):
        self.addr = addr
        super().__init__(
            f"Address '{hex(addr)}' is outside of memory range '{hex(low)}'-'{hex(high)}'"
        )


class ReadOnlyMemoryWrite(SimulatorError):
    def __init__(self, addr):
        self.addr = addr
        super().__init__(f"Can not write to read only memory at address '{hex(addr)}'")


class ProgramLoadError(SimulatorError, ValueError):
    pass


class ConfigurationError(SimulatorError, KeyError):
    def __str__(self):
        # KeyError quotes its argument, keep the message readable
        return str(self.args[0]) if self.args else ""
