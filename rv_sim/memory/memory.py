from enum import Enum

import numpy as np

from rv_sim.memory.mem_mapable import MemMapable
from rv_sim.memory.memory_map import AddressRange
from rv_sim.util.bits import WORD_MASK
from rv_sim.util.exceptions import OutOfRangeMemoryAccess, ReadOnlyMemoryWrite


class MemoryAccessMode(Enum):
    R = 1
    RW = 2


class WordMemory(MemMapable):
    """
    A flat, word addressable memory. A byte address maps onto the word at
    (address - base) >> 2, the bottom two bits of the address are ignored so
    unaligned accesses are silently rounded down rather than faulting. Only
    whole 32-bit words are ever read or written.
    """

    def __init__(self, num_words, base=0, access_mode=MemoryAccessMode.RW):
        if num_words <= 0:
            raise ValueError(f"Memory must hold at-least one word, got '{num_words}'")
        if base % 4 != 0:
            raise ValueError(f"Memory base '{hex(base)}' must be word aligned")
        self.memory = np.zeros(num_words, dtype=np.uint32)
        self.num_words = num_words
        self.base = base
        self.access_mode = access_mode
        self.address_range = AddressRange(base, num_words * 4)

    def _word_index(self, addr):
        addr &= WORD_MASK
        if not self.address_range.check_match(addr):
            raise OutOfRangeMemoryAccess(
                addr, self.address_range.low, self.address_range.high
            )
        return (addr >> 2) - (self.base >> 2)

    def read_word(self, addr):
        return int(self.memory[self._word_index(addr)])

    def write_word(self, addr, value):
        if self.access_mode != MemoryAccessMode.RW:
            raise ReadOnlyMemoryWrite(addr & WORD_MASK)
        self.memory[self._word_index(addr)] = value & WORD_MASK

    def check_access(self, addr):
        """Raises if the address can not be accessed, without touching the contents."""
        self._word_index(addr)

    def load(self, words, address=None):
        """
        Bulk load a program or data image, starting at the provided byte address
        (or the base of the memory if not provided). This is how the memory is
        populated before a run, so it ignores the access mode.
        """
        if address is None:
            address = self.base
        if len(words) == 0:
            return
        start = self._word_index(address)
        end = start + len(words)
        if end > self.num_words:
            raise OutOfRangeMemoryAccess(
                address + (len(words) * 4) - 1,
                self.address_range.low,
                self.address_range.high,
            )
        self.memory[start:end] = np.array(
            [w & WORD_MASK for w in words], dtype=np.uint32
        )

    def dump(self, address, count):
        start = self._word_index(address)
        if start + count > self.num_words:
            raise OutOfRangeMemoryAccess(
                address + (count * 4) - 1,
                self.address_range.low,
                self.address_range.high,
            )
        return [int(w) for w in self.memory[start : start + count]]

    def clear(self):
        self.memory.fill(0)

    def getSize(self):
        return self.num_words * 4


class InstructionMemory(WordMemory):
    def __init__(self, num_words, base=0):
        super().__init__(num_words, base, MemoryAccessMode.R)


class DataMemory(WordMemory):
    def __init__(self, num_words, base=0):
        super().__init__(num_words, base, MemoryAccessMode.RW)
