import os

from rv_sim.config.config import SimulatorConfiguration
from rv_sim.device.device import SingleCycleSystem

here = os.path.dirname(os.path.abspath(__file__))

# Default layout, program at the 0x1000 reset vector and data from 0x0
config = SimulatorConfiguration.load(overrides={"core": {"snoop": True}})
system = SingleCycleSystem(config)

system.load_program(os.path.join(here, "sum.hex"))
system.load_data(os.path.join(here, "sum_data.hex"))

steps = system.run_until_halt(1000)
print(f"Halted after {steps} instructions")

# 1 + 2 + 3 + (-1)
assert system.read_register("gp") == 5
assert system.data_memory.read_word(0x10) == 5
