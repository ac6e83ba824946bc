class Chip8Error(Exception):
    """Base class for conditions that stop emulation."""


class UnknownOpcode(Chip8Error):
    def __init__(self, address, opcode):
        self.address = address
        self.opcode = opcode
        super().__init__("Unknown opcode %04X at 0x%03X" % (opcode, address))


class StackOverflow(Chip8Error):
    def __init__(self, address, depth):
        self.address = address
        self.depth = depth
        super().__init__("Stack overflow at 0x%03X (depth %d)" % (address, depth))


class StackUnderflow(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("RET with empty stack at 0x%03X" % address)


class ProgramTooLarge(Chip8Error):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__("Program is %d bytes, only %d fit in memory" % (size, limit))


class RomNotFound(Chip8Error):
    def __init__(self, path):
        self.path = path
        super().__init__("ROM not found: %s" % path)
