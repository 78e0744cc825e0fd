import io
import os

from lc3vm.console import BufferConsole, StreamConsole, raw_terminal

def test_buffer_console():
    console = BufferConsole(b"ab")
    assert console.poll_ready()
    assert console.read_byte() == ord("a")
    assert console.read_byte() == ord("b")
    assert not console.poll_ready()
    assert console.read_byte() == -1
    console.write(b"hi")
    console.write_byte(0x121)
    assert console.getvalue() == b"hi!"

def test_stream_console_reads_pipe():
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd, "rb", buffering=0) as stdin:
        out = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        console = StreamConsole(stdin, out)
        assert not console.poll_ready()
        os.write(write_fd, b"z")
        assert console.poll_ready()
        assert console.read_byte() == ord("z")
        os.close(write_fd)
        assert console.read_byte() == -1
        console.write(b"ok")
        console.flush()
        assert out.buffer.getvalue() == b"ok"

def test_stream_console_writes_high_bytes_unencoded():
    out = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    console = StreamConsole(io.BytesIO(), out)
    out.write("a")
    console.write(b"\xe9\xff")
    console.flush()
    assert out.buffer.getvalue() == b"a\xe9\xff"

def test_stream_console_writes_to_file_descriptor():
    read_fd, write_fd = os.pipe()
    with os.fdopen(write_fd, "wb", buffering=0) as stdout:
        console = StreamConsole(io.BytesIO(), stdout)
        console.write_byte(0xE9)
        console.flush()
    with os.fdopen(read_fd, "rb") as pipe:
        assert pipe.read() == b"\xe9"

def test_raw_terminal_ignores_non_tty():
    with raw_terminal(io.StringIO()):
        pass
