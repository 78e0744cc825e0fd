"""
Render instruction words as LC-3 assembly, for traces and listings.
Locations are those of the instruction itself; PC-relative targets are
shown as absolute addresses.
"""

from .words import ascii_str, lc_hex, lc_int, plus, sign_extend

TRAP_NAMES = {
    0x20: "GETC",
    0x21: "OUT",
    0x22: "PUTS",
    0x23: "IN",
    0x24: "PUTSP",
    0x25: "HALT",
}

def _target(instruction, location, bits):
    offset = sign_extend(instruction & ((1 << bits) - 1), bits)
    return plus(location + 1, offset)

def BR_format(instruction, location):
    n = instruction & 0b0000100000000000
    z = instruction & 0b0000010000000000
    p = instruction & 0b0000001000000000
    target = lc_hex(_target(instruction, location, 9))
    if not (n or z or p):
        return "NOP ;; (no BR to %s) %s" % (target, ascii_str(instruction & 0x1FF))
    instr = "BR"
    if n:
        instr += "n"
    if z:
        instr += "z"
    if p:
        instr += "p"
    return "%s %s" % (instr, target)

def _operate_format(name, instruction):
    dst = (instruction & 0b0000111000000000) >> 9
    sr1 = (instruction & 0b0000000111000000) >> 6
    if (instruction & 0b0000000000100000):
        imm5 = instruction & 0b0000000000011111
        return "%s R%d, R%d, #%s" % (name, dst, sr1, lc_int(sign_extend(imm5, 5)))
    else:
        sr2 = instruction & 0b0000000000000111
        return "%s R%d, R%d, R%d" % (name, dst, sr1, sr2)

def ADD_format(instruction, location):
    return _operate_format("ADD", instruction)

def AND_format(instruction, location):
    return _operate_format("AND", instruction)

def NOT_format(instruction, location):
    dst = (instruction & 0b0000111000000000) >> 9
    src = (instruction & 0b0000000111000000) >> 6
    return "NOT R%d, R%d" % (dst, src)

def _pc_relative_format(name):
    def format(instruction, location):
        reg = (instruction & 0b0000111000000000) >> 9
        return "%s R%d, %s" % (name, reg, lc_hex(_target(instruction, location, 9)))
    return format

LD_format = _pc_relative_format("LD")
LDI_format = _pc_relative_format("LDI")
LEA_format = _pc_relative_format("LEA")
ST_format = _pc_relative_format("ST")
STI_format = _pc_relative_format("STI")

def _base_offset_format(name):
    def format(instruction, location):
        reg = (instruction & 0b0000111000000000) >> 9
        base = (instruction & 0b0000000111000000) >> 6
        offset6 = instruction & 0b0000000000111111
        return "%s R%d, R%d, #%s" % (name, reg, base, lc_int(sign_extend(offset6, 6)))
    return format

LDR_format = _base_offset_format("LDR")
STR_format = _base_offset_format("STR")

def JMP_format(instruction, location):
    base = (instruction & 0b0000000111000000) >> 6
    if base == 7:
        return "RET"
    else:
        return "JMP R%d" % base

def JSR_format(instruction, location):
    if (instruction & 0b0000100000000000): # JSR
        return "JSR %s" % lc_hex(_target(instruction, location, 11))
    else:                                  # JSRR
        base = (instruction & 0b0000000111000000) >> 6
        return "JSRR R%d" % base

def TRAP_format(instruction, location):
    vector = instruction & 0b0000000011111111
    if vector in TRAP_NAMES:
        return TRAP_NAMES[vector]
    return ";; Invalid TRAP vector: %s" % lc_hex(vector)

def RESERVED_format(instruction, location):
    return ";; RESERVED %s %s" % (lc_hex((instruction >> 12) & 0xF),
                                  lc_hex(instruction & 0b0000111111111111))

FORMAT = {
    0b0000: BR_format,
    0b0001: ADD_format,
    0b0010: LD_format,
    0b0011: ST_format,
    0b0100: JSR_format,
    0b0101: AND_format,
    0b0110: LDR_format,
    0b0111: STR_format,
    0b1000: RESERVED_format, # RTI
    0b1001: NOT_format,
    0b1010: LDI_format,
    0b1011: STI_format,
    0b1100: JMP_format, # and RET
    0b1101: RESERVED_format,
    0b1110: LEA_format,
    0b1111: TRAP_format,
}

def format_instruction(instruction, location):
    return FORMAT[(instruction >> 12) & 0xF](instruction, location)
