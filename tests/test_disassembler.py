import pytest

from lc3vm.disassembler import format_instruction
from conftest import (HALT, add_imm, add_reg, and_imm, base_offset, br, jmp,
                      jsr, jsrr, not_, pc_relative, trap)

@pytest.mark.parametrize("word,text", [
    (add_imm(0, 1, -1), "ADD R0, R1, #-1"),
    (add_reg(2, 3, 4), "ADD R2, R3, R4"),
    (and_imm(5, 5, 0), "AND R5, R5, #0"),
    (not_(1, 2), "NOT R1, R2"),
    (br(1, 1, 0, 4), "BRnz x3005"),
    (br(1, 1, 1, -1), "BRnzp x3000"),
    (pc_relative(0b0010, 3, 2), "LD R3, x3003"),
    (pc_relative(0b1010, 3, 2), "LDI R3, x3003"),
    (pc_relative(0b1110, 0, 2), "LEA R0, x3003"),
    (pc_relative(0b0011, 1, -2), "ST R1, x2FFF"),
    (pc_relative(0b1011, 1, 0), "STI R1, x3001"),
    (base_offset(0b0110, 2, 3, 4), "LDR R2, R3, #4"),
    (base_offset(0b0111, 2, 3, -4), "STR R2, R3, #-4"),
    (jmp(2), "JMP R2"),
    (jmp(7), "RET"),
    (jsr(0x10), "JSR x3011"),
    (jsrr(4), "JSRR R4"),
    (HALT, "HALT"),
    (trap(0x22), "PUTS"),
])
def test_format_instruction(word, text):
    assert format_instruction(word, 0x3000) == text

def test_invalid_forms():
    assert format_instruction(trap(0x30), 0x3000) == ";; Invalid TRAP vector: x0030"
    assert format_instruction(0xD123, 0x3000) == ";; RESERVED x000D x0123"
    assert format_instruction(0x0005, 0x3000).startswith("NOP")
