# Opcode decoding - CowGods CHIP8 Technical reference
# http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#3.0
#
# nnn - lowest 12 bits (address)
# n   - lowest 4 bits
# x   - lower 4 bits of the high byte (register)
# y   - upper 4 bits of the low byte (register)
# nn  - lowest 8 bits (byte)

from typing import NamedTuple

UNKNOWN = "UNKNOWN"

# (mask, pattern, mnemonic) - first match wins
OPCODES = [
    (0xFFFF, 0x00E0, "CLS"),
    (0xFFFF, 0x00EE, "RET"),

    (0xF000, 0x1000, "JP"),
    (0xF000, 0x2000, "CALL"),
    (0xF000, 0x3000, "SE_VX_NN"),
    (0xF000, 0x4000, "SNE_VX_NN"),
    (0xF00F, 0x5000, "SE_VX_VY"),
    (0xF000, 0x6000, "LD_VX_NN"),
    (0xF000, 0x7000, "ADD_VX_NN"),

    (0xF00F, 0x8000, "LD_VX_VY"),
    (0xF00F, 0x8001, "OR"),
    (0xF00F, 0x8002, "AND"),
    (0xF00F, 0x8003, "XOR"),
    (0xF00F, 0x8004, "ADD"),
    (0xF00F, 0x8005, "SUB"),
    (0xF00F, 0x8006, "SHR"),
    (0xF00F, 0x8007, "SUBN"),
    (0xF00F, 0x800E, "SHL"),

    (0xF00F, 0x9000, "SNE_VX_VY"),
    (0xF000, 0xA000, "LD_I"),
    (0xF000, 0xB000, "JP_V0"),
    (0xF000, 0xC000, "RND"),
    (0xF000, 0xD000, "DRW"),

    (0xF0FF, 0xE09E, "SKP"),
    (0xF0FF, 0xE0A1, "SKNP"),

    (0xF0FF, 0xF007, "LD_VX_DT"),
    (0xF0FF, 0xF00A, "LD_VX_K"),
    (0xF0FF, 0xF015, "LD_DT_VX"),
    (0xF0FF, 0xF018, "LD_ST_VX"),
    (0xF0FF, 0xF01E, "ADD_I_VX"),
    (0xF0FF, 0xF029, "LD_F_VX"),
    (0xF0FF, 0xF033, "LD_B_VX"),
    (0xF0FF, 0xF055, "LD_I_VX"),
    (0xF0FF, 0xF065, "LD_VX_I"),
]

MNEMONICS = frozenset(m for _, _, m in OPCODES)

# assembler-style rendering for traces
_SYNTAX = {
    "CLS": "CLS",
    "RET": "RET",
    "JP": "JP {nnn:03X}",
    "CALL": "CALL {nnn:03X}",
    "SE_VX_NN": "SE V{x:X}, {nn:02X}",
    "SNE_VX_NN": "SNE V{x:X}, {nn:02X}",
    "SE_VX_VY": "SE V{x:X}, V{y:X}",
    "LD_VX_NN": "LD V{x:X}, {nn:02X}",
    "ADD_VX_NN": "ADD V{x:X}, {nn:02X}",
    "LD_VX_VY": "LD V{x:X}, V{y:X}",
    "OR": "OR V{x:X}, V{y:X}",
    "AND": "AND V{x:X}, V{y:X}",
    "XOR": "XOR V{x:X}, V{y:X}",
    "ADD": "ADD V{x:X}, V{y:X}",
    "SUB": "SUB V{x:X}, V{y:X}",
    "SHR": "SHR V{x:X}, V{y:X}",
    "SUBN": "SUBN V{x:X}, V{y:X}",
    "SHL": "SHL V{x:X}, V{y:X}",
    "SNE_VX_VY": "SNE V{x:X}, V{y:X}",
    "LD_I": "LD I, {nnn:03X}",
    "JP_V0": "JP V0, {nnn:03X}",
    "RND": "RND V{x:X}, {nn:02X}",
    "DRW": "DRW V{x:X}, V{y:X}, {n:X}",
    "SKP": "SKP V{x:X}",
    "SKNP": "SKNP V{x:X}",
    "LD_VX_DT": "LD V{x:X}, DT",
    "LD_VX_K": "LD V{x:X}, K",
    "LD_DT_VX": "LD DT, V{x:X}",
    "LD_ST_VX": "LD ST, V{x:X}",
    "ADD_I_VX": "ADD I, V{x:X}",
    "LD_F_VX": "LD F, V{x:X}",
    "LD_B_VX": "LD B, V{x:X}",
    "LD_I_VX": "LD [I], V{x:X}",
    "LD_VX_I": "LD V{x:X}, [I]",
}


class Instruction(NamedTuple):
    opcode: int
    mnemonic: str
    family: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    @property
    def known(self):
        return self.mnemonic != UNKNOWN

    def disassemble(self):
        if not self.known:
            return "DW %04X" % self.opcode
        return _SYNTAX[self.mnemonic].format(**self._asdict())


def decode(opcode):
    """Split a 16-bit opcode into its fields and name it.

    Never raises: opcodes matching no pattern come back with the
    UNKNOWN mnemonic and the caller decides what to do with them.
    """
    opcode &= 0xFFFF
    mnemonic = UNKNOWN
    for mask, pattern, name in OPCODES:
        if (opcode & mask) == pattern:
            mnemonic = name
            break

    return Instruction(
        opcode=opcode,
        mnemonic=mnemonic,
        family=opcode >> 12,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )
