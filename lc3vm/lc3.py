"""
The LC-3 machine: register file, memory and console, the
fetch-decode-execute loop and the sixteen opcode handlers.

The loop increments the PC before an instruction executes, so every
PC-relative operand is taken relative to the following instruction.
"""

import sys
from enum import Enum, IntEnum

from .console import BufferConsole
from .disassembler import format_instruction
from .errors import InvalidOpcodeError, LC3Error, ImageLoadError, StepLimitExceeded
from .loader import load_image_file, save_image
from .memory import Memory
from .registers import PC_START, Reg, RegisterFile
from .traps import Traps
from .words import HEX, ascii_str, lc_bin, lc_hex, parse_word, plus, sign_extend

class Opcode(IntEnum):
    BR = 0b0000    # branch
    ADD = 0b0001   # add
    LD = 0b0010    # load
    ST = 0b0011    # store
    JSR = 0b0100   # jump register
    AND = 0b0101   # bitwise and
    LDR = 0b0110   # load register
    STR = 0b0111   # store register
    RTI = 0b1000   # unused
    NOT = 0b1001   # bitwise not
    LDI = 0b1010   # load indirect
    STI = 0b1011   # store indirect
    JMP = 0b1100   # jump, and RET
    RES = 0b1101   # reserved
    LEA = 0b1110   # load effective address
    TRAP = 0b1111  # execute trap

class State(Enum):
    RUNNING = "running"
    HALTED = "halted"

class LC3:
    """
    The LC3 Computer. Loads object images and executes them against its
    own registers and memory; console I/O goes through self.console.
    """
    def __init__(self, kernel=None, console=None):
        self.kernel = kernel
        self.registers = RegisterFile()
        self.memory = Memory()
        self.console = console if console is not None else BufferConsole()
        self.traps = Traps(self)
        # Functions for interpreting instructions, one per opcode:
        self.apply = {
            Opcode.BR: self.BR,
            Opcode.ADD: self.ADD,
            Opcode.LD: self.LD,
            Opcode.ST: self.ST,
            Opcode.JSR: self.JSR,
            Opcode.AND: self.AND,
            Opcode.LDR: self.LDR,
            Opcode.STR: self.STR,
            Opcode.RTI: self.RESERVED,
            Opcode.NOT: self.NOT,
            Opcode.LDI: self.LDI,
            Opcode.STI: self.STI,
            Opcode.JMP: self.JMP,
            Opcode.RES: self.RESERVED,
            Opcode.LEA: self.LEA,
            Opcode.TRAP: self.TRAP,
        }
        self.initialize()

    def initialize(self):
        self.debug = False
        self.state = State.HALTED
        self.instruction_count = 0
        self.registers.reset()
        self.memory.reset()

    @property
    def console(self):
        return self._console

    @console.setter
    def console(self, console):
        self._console = console
        self.memory.console = console

    @property
    def running(self):
        return self.state is State.RUNNING

    #### Register and memory access; every write is traced in debug
    #### mode.
    def reset_registers(self):
        self.registers.reset()

    def get_pc(self):
        return HEX(self.registers.pc)

    def set_pc(self, value):
        self.registers.pc = value
        if self.debug:
            self.Print("    PC <= %s" % lc_hex(value))

    def increment_pc(self, value=1):
        self.registers.pc = plus(self.registers.pc, value)

    def get_register(self, position):
        return self.registers.get(position)

    def set_register(self, position, value):
        self.registers.set(position, value)
        if self.debug:
            self.Print("    R%d <= %s" % (position, lc_hex(value)))

    def set_nzp(self, value):
        self.registers.update_flags(value)
        if self.debug:
            self.Print("    NZP <=", self.get_nzp())

    def get_nzp(self):
        return self.registers.nzp()

    def get_memory(self, location):
        return self.memory.read(location)

    def set_memory(self, location, value):
        self.memory.write(location, value)
        if self.debug:
            self.Print("    memory[%s] <= %s" % (lc_hex(location), lc_hex(value)))

    #### End of register and memory access

    def Print(self, *args, end="\n"):
        if self.kernel:
            self.kernel.Print(*args, end=end)
        else:
            print(*args, end=end)

    def Error(self, string):
        if self.kernel:
            self.kernel.Error(string)
        else:
            sys.stderr.write(string)

    def load(self, filename):
        origin, count = load_image_file(self.memory, filename)
        if self.debug:
            self.Print("Loaded %d words at %s from %s" %
                       (count, lc_hex(origin), filename))
        return origin, count

    def load_images(self, filenames):
        """
        Load each image in turn. A file that fails to load is reported
        and skipped; returns the names that loaded.
        """
        loaded = []
        for filename in filenames:
            try:
                self.load(filename)
            except ImageLoadError as exc:
                self.Error("failed to load image: %s (%s)\n" % (filename, exc))
            else:
                loaded.append(filename)
        return loaded

    def load_text(self, text):
        """
        Load a listing of words (x3000 x1021 xF025 ...); the first word
        is the origin. Anything after a ';' on a line is a comment.
        """
        words = []
        for line in text.splitlines():
            words.extend(parse_word(word) for word in line.split(';')[0].split())
        if not words:
            raise ImageLoadError("no origin word")
        origin = words[0]
        self.memory.load(origin, words[1:])
        return origin, len(words) - 1

    def save(self, filename, start, stop):
        with open(filename, 'wb') as fp:
            return save_image(self.memory, start, stop, fp)

    def halt(self):
        self.state = State.HALTED

    def stop(self):
        """ Ask a running machine to stop before its next fetch. """
        self.state = State.HALTED

    def run(self, start=PC_START, max_steps=None):
        if start is not None:
            self.set_pc(start)
        self.state = State.RUNNING
        if self.debug:
            self.Print("Tracing! (Instructions) LOCATION: WORD  INSTR")
            self.Print("-" * 60)
        steps = 0
        try:
            while self.state is State.RUNNING:
                if max_steps is not None and steps >= max_steps:
                    raise StepLimitExceeded(steps)
                self.step()
                steps += 1
        except (LC3Error, KeyboardInterrupt):
            self.state = State.HALTED
            raise
        return self.instruction_count

    def step(self):
        pc = self.get_pc()
        instruction = self.get_memory(pc)
        self.increment_pc()
        self.instruction_count += 1
        if self.debug:
            self.Print("(%s) %s: %s  %s" % (
                self.instruction_count,
                lc_hex(pc),
                lc_hex(instruction),
                format_instruction(instruction, pc)))
        self.apply[Opcode(instruction >> 12)](instruction)

    def dump_registers(self):
        self.Print()
        self.Print("=" * 60)
        self.Print("Registers:")
        self.Print("=" * 60)
        self.Print("PC:", lc_hex(self.get_pc()))
        for r,v in zip("NZP", self.get_nzp()):
            self.Print("%s: %s" % (r,v), end=" ")
        self.Print()
        for key in range(8):
            self.Print("R%d: %s" % (key, lc_hex(self.get_register(key))), end=" ")
            if key % 4 == 3:
                self.Print()

    def dump(self, start=PC_START, stop=None, raw=False, header=True):
        if stop is None or stop < start:
            stop = start + 10
        else:
            stop = stop + 1
        if stop - start > 100:
            stop = start + 100
        stop = min(stop, len(self.memory))
        if header:
            self.Print("=" * 60)
            self.Print("Memory dump:" if raw else "Memory disassembled:")
            self.Print("=" * 60)
        for location, instruction in zip(range(start, stop),
                                         self.memory.dump(start, stop)):
            if raw:
                self.Print("%s: %s %s" % (lc_hex(location), lc_hex(instruction),
                                          ascii_str(instruction)))
            else:
                self.Print("%s: %s  %s" % (lc_hex(location), lc_hex(instruction),
                                           format_instruction(instruction, location)))

    #### Instructions. Register fields are three bits wide, so they
    #### can only ever name R0-R7.
    def ADD(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        sr1 = (instruction & 0b0000000111000000) >> 6
        if (instruction & 0b0000000000100000) == 0:
            sr2 = instruction & 0b0000000000000111
            self.set_register(dst, plus(self.get_register(sr1),
                                        self.get_register(sr2)))
        else:
            imm5 = instruction & 0b0000000000011111
            self.set_register(dst, plus(self.get_register(sr1), sign_extend(imm5, 5)))
        self.set_nzp(self.get_register(dst))

    def AND(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        sr1 = (instruction & 0b0000000111000000) >> 6
        if (instruction & 0b0000000000100000) == 0:
            sr2 = instruction & 0b0000000000000111
            self.set_register(dst, self.get_register(sr1) & self.get_register(sr2))
        else:
            imm5 = instruction & 0b0000000000011111
            self.set_register(dst, self.get_register(sr1) & sign_extend(imm5, 5))
        self.set_nzp(self.get_register(dst))

    def NOT(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        src = (instruction & 0b0000000111000000) >> 6
        self.set_register(dst, lc_bin(~self.get_register(src)))
        self.set_nzp(self.get_register(dst))

    def BR(self, instruction):
        nzp = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        if nzp & self.registers.cond:
            self.set_pc(plus(self.get_pc(), sign_extend(pc_offset9, 9)))
            if self.debug:
                self.Print("    True - branching to", lc_hex(self.get_pc()))

    def JMP(self, instruction):
        base = (instruction & 0b0000000111000000) >> 6
        self.set_pc(self.get_register(base))

    def JSR(self, instruction):
        self.set_register(Reg.R7, self.get_pc())
        if (instruction & 0b0000100000000000): # JSR
            pc_offset11 = instruction & 0b0000011111111111
            self.set_pc(plus(self.get_pc(), sign_extend(pc_offset11, 11)))
        else:                                  # JSRR
            base = (instruction & 0b0000000111000000) >> 6
            self.set_pc(self.get_register(base))

    def LD(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        location = plus(self.get_pc(), sign_extend(pc_offset9, 9))
        self.set_register(dst, self.get_memory(location))
        self.set_nzp(self.get_register(dst))

    def LDI(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        location = plus(self.get_pc(), sign_extend(pc_offset9, 9))
        self.set_register(dst, self.get_memory(self.get_memory(location)))
        self.set_nzp(self.get_register(dst))

    def LDR(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        base = (instruction & 0b0000000111000000) >> 6
        offset6 = instruction & 0b0000000000111111
        location = plus(self.get_register(base), sign_extend(offset6, 6))
        self.set_register(dst, self.get_memory(location))
        self.set_nzp(self.get_register(dst))

    def LEA(self, instruction):
        dst = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        self.set_register(dst, plus(self.get_pc(), sign_extend(pc_offset9, 9)))
        self.set_nzp(self.get_register(dst))

    def ST(self, instruction):
        src = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        self.set_memory(plus(self.get_pc(), sign_extend(pc_offset9, 9)),
                        self.get_register(src))

    def STI(self, instruction):
        src = (instruction & 0b0000111000000000) >> 9
        pc_offset9 = instruction & 0b0000000111111111
        location = self.get_memory(plus(self.get_pc(), sign_extend(pc_offset9, 9)))
        self.set_memory(location, self.get_register(src))

    def STR(self, instruction):
        src = (instruction & 0b0000111000000000) >> 9
        base = (instruction & 0b0000000111000000) >> 6
        offset6 = instruction & 0b0000000000111111
        self.set_memory(plus(self.get_register(base), sign_extend(offset6, 6)),
                        self.get_register(src))

    def TRAP(self, instruction):
        vector = instruction & 0b0000000011111111
        self.set_register(Reg.R7, self.get_pc())
        self.traps.dispatch(vector, lc_bin(self.get_pc() - 1))

    def RESERVED(self, instruction):
        raise InvalidOpcodeError(instruction >> 12, lc_bin(self.get_pc() - 1))

    def report(self):
        self.Print("=" * 60)
        self.Print("Computation completed")
        self.Print("=" * 60)
        self.Print("Instructions:", self.instruction_count)
        self.dump_registers()

    def execute(self, text):
        """
        Run one cell of kernel input: either a %magic directive or a
        listing of words to load. Returns True on success.
        """
        words = text.split()
        if not words:
            return True
        if not words[0].startswith("%"):
            try:
                origin, count = self.load_text(text)
            except (ValueError, LC3Error) as exc:
                self.Error("\nLoad error\n%s\n" % exc)
                return False
            self.Print("Loaded %d words at %s. Use %%dis or %%dump to examine; use %%exe to run." %
                       (count, lc_hex(origin)))
            return True
        magic, args = words[0], words[1:]
        try:
            if magic == "%load":
                return len(self.load_images(args)) == len(args)
            elif magic == "%save":
                count = self.save(args[0], parse_word(args[1]), parse_word(args[2]))
                self.Print("Saved %d words to %s" % (count, args[0]))
            elif magic == "%dump":
                self.dump(*[parse_word(word) for word in args], raw=True)
            elif magic == "%dis":
                self.dump(*[parse_word(word) for word in args])
            elif magic == "%regs":
                self.dump_registers()
            elif magic == "%d":
                self.debug = not self.debug
                self.Print("Debug is now %s" % ["off", "on"][int(self.debug)])
            elif magic == "%pc":
                self.set_pc(parse_word(args[0]))
                self.dump_registers()
            elif magic == "%mem":
                location = parse_word(args[0])
                self.set_memory(location, parse_word(args[1]))
                self.dump(location, location, raw=True, header=False)
            elif magic == "%reg":
                register = Reg(int(args[0].upper().lstrip("R")))
                if register > Reg.R7:
                    raise ValueError("not a general register: %s" % args[0])
                self.set_register(register, parse_word(args[1]))
                self.dump_registers()
            elif magic == "%reset":
                self.initialize()
                self.dump_registers()
            elif magic == "%exe":
                start = parse_word(args[0]) if args else PC_START
                self.instruction_count = 0
                self.reset_registers()
                try:
                    self.run(start)
                except LC3Error as exc:
                    self.Error("\nRuntime error:\n    %s\n" % exc)
                    return False
                self.report()
            else:
                self.Error("Invalid Interactive Magic Directive\nHint: %help\n")
                return False
        except (IndexError, ValueError) as exc:
            self.Error("Error in %s: %s\n" % (magic, exc))
            return False
        return True
