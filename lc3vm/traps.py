"""
TRAP service routines. These run natively instead of jumping through a
trap vector table in memory; all console traffic goes through the
machine's console.
"""

from enum import IntEnum

from .errors import InvalidTrapError
from .registers import Reg
from .words import lc_bin

PROMPT = b"Enter a character: "

class TrapVector(IntEnum):
    GETC = 0x20  # get char from keyboard, not echoed
    OUT = 0x21   # output a character
    PUTS = 0x22  # output a word string
    IN = 0x23    # get char from keyboard, echoed
    PUTSP = 0x24 # output a byte string
    HALT = 0x25  # halt the program

class Traps:
    def __init__(self, lc3):
        self.lc3 = lc3
        self.routines = {
            TrapVector.GETC: self.GETC,
            TrapVector.OUT: self.OUT,
            TrapVector.PUTS: self.PUTS,
            TrapVector.IN: self.IN,
            TrapVector.PUTSP: self.PUTSP,
            TrapVector.HALT: self.HALT,
        }

    def dispatch(self, vector, address=None):
        try:
            routine = self.routines[TrapVector(vector)]
        except ValueError:
            raise InvalidTrapError(vector, address) from None
        routine()

    @property
    def console(self):
        return self.lc3.console

    def _strings(self):
        location = self.lc3.get_register(Reg.R0)
        memory = self.lc3.get_memory(location)
        while memory != 0:
            yield memory
            location = lc_bin(location + 1)
            memory = self.lc3.get_memory(location)

    def GETC(self):
        # R0 is written directly; traps leave COND alone
        self.lc3.set_register(Reg.R0, self.console.read_byte())

    def OUT(self):
        self.console.write_byte(self.lc3.get_register(Reg.R0) & 0xFF)
        self.console.flush()

    def PUTS(self):
        for memory in self._strings():
            self.console.write_byte(memory & 0xFF)
        self.console.flush()

    def IN(self):
        self.console.write(PROMPT)
        self.console.flush()
        char = self.console.read_byte()
        if char >= 0:
            self.console.write_byte(char)
        self.console.flush()
        self.lc3.set_register(Reg.R0, char)

    def PUTSP(self):
        for memory in self._strings():
            self.console.write_byte(memory & 0xFF)
            if memory >> 8:
                self.console.write_byte(memory >> 8)
        self.console.flush()

    def HALT(self):
        self.console.flush()
        self.lc3.halt()
