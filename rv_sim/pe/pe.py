from abc import ABC, abstractmethod

from rv_sim.device.clock import Clockable
from rv_sim.device.reset import Resetable


class ProcessingElement(Clockable, Resetable, ABC):
    @abstractmethod
    def start(self):
        raise NotImplementedError()

    @abstractmethod
    def stop(self):
        raise NotImplementedError()

    @abstractmethod
    def getRegisterFile(self):
        raise NotImplementedError()
