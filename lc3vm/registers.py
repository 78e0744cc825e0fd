from array import array
from enum import IntEnum

from .words import lc_bin

PC_START = 0x3000

class Reg(IntEnum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    PC = 8
    COND = 9

class Flag(IntEnum):
    """ Values held by COND; BR's n/z/p bits (11:9) test against these. """
    POS = 1 << 0
    ZRO = 1 << 1
    NEG = 1 << 2

class RegisterFile:
    """
    R0-R7, the program counter and the condition register, as 16-bit
    words.
    """
    def __init__(self):
        self.values = array('H', [0] * len(Reg))
        self.reset()

    def reset(self):
        for i in range(len(Reg)):
            self.values[i] = 0
        self.values[Reg.PC] = PC_START
        self.values[Reg.COND] = Flag.ZRO

    def get(self, index):
        return self.values[Reg(index)]

    def set(self, index, value):
        self.values[Reg(index)] = lc_bin(value)

    @property
    def pc(self):
        return self.values[Reg.PC]

    @pc.setter
    def pc(self, value):
        self.values[Reg.PC] = lc_bin(value)

    @property
    def cond(self):
        return Flag(self.values[Reg.COND])

    def update_flags(self, value):
        if value == 0:
            self.values[Reg.COND] = Flag.ZRO
        elif value >> 15: # a 1 in the left-most bit indicates negative
            self.values[Reg.COND] = Flag.NEG
        else:
            self.values[Reg.COND] = Flag.POS

    def nzp(self):
        cond = self.values[Reg.COND]
        return (int(cond == Flag.NEG), int(cond == Flag.ZRO),
                int(cond == Flag.POS))
