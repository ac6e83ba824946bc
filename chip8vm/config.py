# Machine constants and tunables.
# Memory - 4096 bytes: interpreter/font area below 0x200, ROM from 0x200 up.
# Display - 64x32 monochrome pixels.
# Timers - delay and sound, both counting down at 60Hz.

from dataclasses import dataclass
from enum import Enum


# ---- Configuration ----
MEMORY_SIZE = 4096
ADDRESS_MASK = 0xFFF
PROGRAM_START = 0x200
FONT_BASE = 0x000
FONT_SPRITE_SIZE = 5

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_DEPTH = 16

width, height = 64, 32
scale = 10
CPU_HZ = 600
timer_HZ = 60


# Standard CHIP-8 fontset (binary pixel patterns)
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])  # notice 80 bytes


class ShiftMode(Enum):
    """Operand used by 8xy6 / 8xyE."""
    IN_PLACE = "in-place"  # Vx = Vx shifted (CHIP-48 and most test ROMs)
    FROM_VY = "from-vy"    # Vx = Vy shifted (COSMAC VIP)


class FlagOrder(Enum):
    """Which write wins when an arithmetic instruction targets VF."""
    FLAG_LAST = "flag-last"    # value first, then flag: VF holds the flag
    VALUE_LAST = "value-last"  # flag first, then value: VF holds the result


DEFAULT_SHIFT_MODE = ShiftMode.IN_PLACE
DEFAULT_FLAG_ORDER = FlagOrder.FLAG_LAST


@dataclass
class MachineConfig:
    """Settings resolved once when an Interpreter is built."""
    cpu_hz: int = CPU_HZ
    timer_hz: int = timer_HZ
    stack_depth: int = STACK_DEPTH
    font_base: int = FONT_BASE
    shift_mode: ShiftMode = DEFAULT_SHIFT_MODE
    flag_order: FlagOrder = DEFAULT_FLAG_ORDER
    # Fx55/Fx65 leave I pointing past the block (COSMAC VIP)
    increment_index: bool = False

    def __post_init__(self):
        if self.stack_depth < 1:
            raise ValueError("stack_depth must be at least 1")
        if self.cpu_hz <= 0 or self.timer_hz <= 0:
            raise ValueError("clock rates must be positive")
        if not 0 <= self.font_base <= PROGRAM_START - len(FONTSET):
            raise ValueError("font must fit below 0x%03X" % PROGRAM_START)
