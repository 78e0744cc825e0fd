"""
Run LC-3 object images on the host terminal.

Usage:
  lc3vm [--trace] [--max-steps N] [--start HEX] IMAGE [IMAGE ...]
"""

import argparse
import signal
import sys
from contextlib import nullcontext

from .console import StreamConsole, raw_terminal
from .errors import LC3Error
from .lc3 import LC3
from .registers import PC_START
from .words import parse_word

def main(argv=None, console=None):
    parser = argparse.ArgumentParser(
        prog="lc3vm",
        description="Load LC-3 object images and run them from x3000.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  lc3vm 2048.obj\n"
               "  lc3vm --trace os.obj hello.obj\n")
    parser.add_argument("images", nargs="*", metavar="IMAGE",
                        help="Object image to load (can repeat; later images "
                             "overwrite earlier ones)")
    parser.add_argument("--trace", action="store_true",
                        help="Print every instruction and register write")
    parser.add_argument("--max-steps", type=int, default=None, metavar="N",
                        help="Stop with an error after N instructions")
    parser.add_argument("--start", type=parse_word, default=PC_START,
                        metavar="HEX", help="Start address (default: x3000)")
    args = parser.parse_args(argv)

    if not args.images:
        parser.print_usage(sys.stderr)
        return 2

    terminal = console is None
    lc3 = LC3(console=StreamConsole() if terminal else console)
    lc3.debug = args.trace
    if not lc3.load_images(args.images):
        return 2

    interrupted = []
    def interrupt(signum, frame):
        # the loop notices between instructions; a second ^C is fatal
        interrupted.append(signum)
        lc3.stop()
        signal.signal(signal.SIGINT, previous)

    previous = signal.signal(signal.SIGINT, interrupt)
    try:
        with raw_terminal() if terminal else nullcontext():
            lc3.run(args.start, max_steps=args.max_steps)
    except LC3Error as exc:
        lc3.Error("\nRuntime error: %s\n" % exc)
        return 1
    finally:
        signal.signal(signal.SIGINT, previous)
        lc3.console.flush()
    if interrupted:
        lc3.Error("\nInterrupted after %d instructions\n" % lc3.instruction_count)
        return 130
    return 0

if __name__ == '__main__':
    sys.exit(main())
