from .words import lc_hex

class LC3Error(Exception):
    pass

class LC3Fault(LC3Error):
    """
    Raised when the machine cannot go on executing; the machine is
    halted before this propagates.
    """
    def __init__(self, message, address=None):
        if address is not None:
            message = "%s at %s" % (message, lc_hex(address))
        super().__init__(message)
        self.address = address

class InvalidOpcodeError(LC3Fault):
    def __init__(self, opcode, address=None):
        super().__init__("invalid opcode: %s (%d)" % (lc_hex(opcode), opcode),
                         address)
        self.opcode = opcode

class InvalidTrapError(LC3Fault):
    def __init__(self, vector, address=None):
        super().__init__("invalid TRAP vector: %s" % lc_hex(vector), address)
        self.vector = vector

class StepLimitExceeded(LC3Error):
    def __init__(self, steps):
        super().__init__("no HALT after %d instructions" % steps)
        self.steps = steps

class ImageLoadError(LC3Error):
    def __init__(self, message, path=None):
        if path is not None:
            message = "%s: %s" % (path, message)
        super().__init__(message)
        self.path = path

class AddressOverflowError(ImageLoadError):
    pass
