import pytest

from lc3vm import LC3
from lc3vm.console import BufferConsole

def add_imm(dst, src, imm):
    return (0b0001 << 12) | (dst << 9) | (src << 6) | (1 << 5) | (imm & 0x1F)

def add_reg(dst, sr1, sr2):
    return (0b0001 << 12) | (dst << 9) | (sr1 << 6) | sr2

def and_imm(dst, src, imm):
    return (0b0101 << 12) | (dst << 9) | (src << 6) | (1 << 5) | (imm & 0x1F)

def and_reg(dst, sr1, sr2):
    return (0b0101 << 12) | (dst << 9) | (sr1 << 6) | sr2

def not_(dst, src):
    return (0b1001 << 12) | (dst << 9) | (src << 6) | 0b111111

def br(n, z, p, offset):
    return (n << 11) | (z << 10) | (p << 9) | (offset & 0x1FF)

def pc_relative(opcode, reg, offset):
    return (opcode << 12) | (reg << 9) | (offset & 0x1FF)

def base_offset(opcode, reg, base, offset):
    return (opcode << 12) | (reg << 9) | (base << 6) | (offset & 0x3F)

def jmp(base):
    return (0b1100 << 12) | (base << 6)

def jsr(offset):
    return (0b0100 << 12) | (1 << 11) | (offset & 0x7FF)

def jsrr(base):
    return (0b0100 << 12) | (base << 6)

def trap(vector):
    return (0b1111 << 12) | vector

HALT = trap(0x25)

@pytest.fixture
def console():
    return BufferConsole()

@pytest.fixture
def lc3(console):
    return LC3(console=console)

@pytest.fixture
def program(lc3):
    """ Load words at x3000 and run them to HALT. """
    def run(*words, origin=0x3000, registers=None, max_steps=1000):
        lc3.memory.load(origin, list(words))
        for index, value in (registers or {}).items():
            lc3.registers.set(index, value)
        lc3.run(origin, max_steps=max_steps)
        return lc3
    return run
