"""
The LC-3 address space: 65536 words, with the keyboard device registers
mapped at KBSR/KBDR. Only reads of KBSR touch the device; every write is
a plain store.
"""

from array import array

from .errors import AddressOverflowError
from .words import lc_bin, lc_hex

MEMORY_SIZE = 1 << 16

KBSR = 0xFE00 ## Keyboard status, bit 15 = character ready
KBDR = 0xFE02 ## Keyboard data, low byte = character
DSR = 0xFE04  ## Display status (no device behind it)
DDR = 0xFE06  ## Display data (no device behind it)

class Memory:
    def __init__(self, console=None):
        self.console = console
        self.cells = array('H', [0] * MEMORY_SIZE)

    def reset(self):
        self.cells = array('H', [0] * MEMORY_SIZE)

    def read(self, address):
        address = lc_bin(address)
        if address == KBSR:
            self.poll_keyboard()
        return self.cells[address]

    def write(self, address, value):
        self.cells[lc_bin(address)] = lc_bin(value)

    def poll_keyboard(self):
        if self.console is not None and self.console.poll_ready():
            self.cells[KBSR] = 1 << 15
            self.cells[KBDR] = lc_bin(self.console.read_byte())
        else:
            self.cells[KBSR] = 0

    def load(self, origin, words):
        """
        Store words at origin, origin + 1, ...; refuses to run past the
        top of the address space.
        """
        if origin + len(words) > MEMORY_SIZE:
            raise AddressOverflowError(
                "%d words at %s run past the end of memory" %
                (len(words), lc_hex(origin)))
        self.cells[origin:origin + len(words)] = array('H', words)

    def dump(self, start, stop):
        return self.cells[lc_bin(start):stop]

    def __len__(self):
        return len(self.cells)
