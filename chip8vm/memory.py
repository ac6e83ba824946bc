from .config import ADDRESS_MASK, FONT_BASE, MEMORY_SIZE, PROGRAM_START
from .errors import ProgramTooLarge


class MemoryBus:
    """4K byte address space. Every address is masked to 12 bits."""

    def __init__(self):
        self.ram = bytearray(MEMORY_SIZE)

    def read8(self, address):
        return self.ram[address & ADDRESS_MASK]

    def write8(self, address, value):
        self.ram[address & ADDRESS_MASK] = value & 0xFF

    def read16(self, address):
        # big-endian, instruction fetch
        return (self.read8(address) << 8) | self.read8(address + 1)

    def read(self, address, length):
        return bytes(self.read8(address + i) for i in range(length))

    def load(self, data, at=PROGRAM_START):
        at &= ADDRESS_MASK
        limit = MEMORY_SIZE - at
        if len(data) > limit:
            raise ProgramTooLarge(len(data), limit)
        self.ram[at:at + len(data)] = data

    def load_font(self, data, at=FONT_BASE):
        self.load(data, at)

    def clear(self):
        self.ram[:] = bytes(MEMORY_SIZE)

    def dump(self, start=0, end=MEMORY_SIZE, width=16):
        """Hex + ASCII listing, one row per `width` bytes."""
        lines = []
        for row in range(start, end, width):
            chunk = self.ram[row:row + width]
            hexes = " ".join("%02x" % b for b in chunk)
            text = "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in chunk)
            lines.append("0x%03x\t%s\t%s" % (row, hexes, text))
        return "\n".join(lines)
