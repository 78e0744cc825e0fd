"""
Console devices the machine talks to through its keyboard registers and
TRAP routines.
"""

import os
import select
import sys
from contextlib import contextmanager

class Console:
    """
    A byte-oriented terminal. read_byte() returns -1 at end of input.
    """
    def poll_ready(self):
        raise NotImplementedError

    def read_byte(self):
        raise NotImplementedError

    def write_byte(self, byte):
        raise NotImplementedError

    def flush(self):
        pass

    def write(self, data):
        for byte in data:
            self.write_byte(byte)

class BufferConsole(Console):
    """
    Scripted input, captured output.
    """
    def __init__(self, input=b""):
        self.input = bytearray(input)
        self.output = bytearray()
        self.flushed = 0

    def feed(self, data):
        self.input.extend(data)

    def poll_ready(self):
        return len(self.input) > 0

    def read_byte(self):
        if not self.input:
            return -1
        return self.input.pop(0)

    def write_byte(self, byte):
        self.output.append(byte & 0xFF)

    def flush(self):
        self.flushed += 1

    def getvalue(self):
        return bytes(self.output)

class StreamConsole(Console):
    """
    The host terminal. Polling uses select(), so it only works on
    streams backed by a file descriptor.
    """
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def poll_ready(self):
        ready, _, _ = select.select([self.stdin], [], [], 0)
        return len(ready) > 0

    def read_byte(self):
        self.stdout.flush()
        data = os.read(self.stdin.fileno(), 1)
        if not data:
            return -1
        return data[0]

    def write_byte(self, byte):
        data = bytes([byte & 0xFF])
        if hasattr(self.stdout, "buffer"):
            self.stdout.flush()
            self.stdout.buffer.write(data)
        else:
            os.write(self.stdout.fileno(), data)

    def flush(self):
        self.stdout.flush()

@contextmanager
def raw_terminal(stream=None):
    """
    Turn off line buffering and echo on a terminal for the duration of
    the block; does nothing when stream is not a tty.
    """
    stream = stream if stream is not None else sys.stdin
    if not stream.isatty():
        yield
        return
    import termios
    import tty
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
