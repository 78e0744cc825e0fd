from ._version import __version__
from .lc3 import LC3, Opcode, State
from .errors import (LC3Error, LC3Fault, InvalidOpcodeError,
                     InvalidTrapError, ImageLoadError, AddressOverflowError,
                     StepLimitExceeded)
