from .config import FONTSET, FlagOrder, MachineConfig, ShiftMode
from .decoder import Instruction, decode
from .display import FrameBuffer
from .driver import Clock
from .errors import (Chip8Error, ProgramTooLarge, RomNotFound, StackOverflow,
                     StackUnderflow, UnknownOpcode)
from .interpreter import Interpreter, MachineState
from .keypad import KeypadState
from .memory import MemoryBus
from .registers import RegisterFile
from .timers import TimerUnit

__version__ = "0.1.0"
