from abc import ABC, abstractmethod


class MemMapable(ABC):
    @abstractmethod
    def getSize(self):
        raise NotImplementedError()

    @abstractmethod
    def read_word(self, addr):
        raise NotImplementedError()

    @abstractmethod
    def write_word(self, addr, value):
        raise NotImplementedError()
