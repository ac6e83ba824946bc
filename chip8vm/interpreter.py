# CHIP8 Virtual Machine:
# Input - keypad state, set from outside and checked by the skip/wait instructions.
# Output - 64x32 framebuffer and the sound timer, read from outside.
# CPU - fetch the big-endian word at PC, advance PC by 2, decode, execute.
# Memory - 4096 bytes holding the font and the loaded ROM.
#----------------------------------------------------------------------------------------------
# One Interpreter owns the whole machine. The driver calls cycle() at the
# instruction rate and tick() at 60Hz; the two are never tied together.

import logging
import random
from enum import Enum

from .config import (FONT_SPRITE_SIZE, FONTSET, PROGRAM_START, FlagOrder, MachineConfig,
                     ShiftMode)
from .decoder import decode
from .display import FrameBuffer
from .errors import Chip8Error, StackOverflow, StackUnderflow, UnknownOpcode
from .keypad import KeypadState
from .memory import MemoryBus
from .registers import RegisterFile
from .timers import TimerUnit

log = logging.getLogger(__name__)


class MachineState(Enum):
    RUNNING = "running"
    AWAITING_KEY = "awaiting-key"
    HALTED = "halted"


class Interpreter:

    def __init__(self, config=None, rng=None):
        self.config = config or MachineConfig()
        self.rng = rng or random.Random()

        self.memory = MemoryBus()
        self.registers = RegisterFile(self.config.stack_depth)
        self.timers = TimerUnit()
        self.display = FrameBuffer()
        self.keypad = KeypadState()

        # quirks are fixed for the life of the machine
        if self.config.shift_mode is ShiftMode.FROM_VY:
            self._shift_source = lambda ins: ins.y
        else:
            self._shift_source = lambda ins: ins.x
        self._flag_last = self.config.flag_order is FlagOrder.FLAG_LAST

        # dispatch table
        self.opcodes = {
            "CLS": self.op_CLS,
            "RET": self.op_RET,
            "JP": self.op_JP,
            "CALL": self.op_CALL,
            "SE_VX_NN": self.op_SE_Vx_nn,
            "SNE_VX_NN": self.op_SNE_Vx_nn,
            "SE_VX_VY": self.op_SE_Vx_Vy,
            "LD_VX_NN": self.op_LD_Vx_nn,
            "ADD_VX_NN": self.op_ADD_Vx_nn,
            "LD_VX_VY": self.op_LD_Vx_Vy,
            "OR": self.op_OR,
            "AND": self.op_AND,
            "XOR": self.op_XOR,
            "ADD": self.op_ADD,
            "SUB": self.op_SUB,
            "SHR": self.op_SHR,
            "SUBN": self.op_SUBN,
            "SHL": self.op_SHL,
            "SNE_VX_VY": self.op_SNE_Vx_Vy,
            "LD_I": self.op_LD_I,
            "JP_V0": self.op_JP_V0,
            "RND": self.op_RND,
            "DRW": self.op_DRW,
            "SKP": self.op_SKP,
            "SKNP": self.op_SKNP,
            "LD_VX_DT": self.op_LD_Vx_DT,
            "LD_VX_K": self.op_WAITKEY,
            "LD_DT_VX": self.op_LD_DT_Vx,
            "LD_ST_VX": self.op_LD_ST_Vx,
            "ADD_I_VX": self.op_ADD_I_Vx,
            "LD_F_VX": self.op_FONT,
            "LD_B_VX": self.op_BCD,
            "LD_I_VX": self.op_STORE,
            "LD_VX_I": self.op_LOAD,
        }

        self.reset()

    def reset(self):
        """Power-on state: everything zeroed, font loaded, PC at 0x200."""
        self.memory.clear()
        self.memory.load_font(FONTSET, self.config.font_base)
        self.registers.reset()
        self.timers.reset()
        self.display.clear()
        self.keypad.release_all()
        self.state = MachineState.RUNNING
        self.error = None
        self.cycles = 0
        self._waiting = None

    def load(self, program):
        self.memory.load(program)
        log.info("Loaded %d byte program at 0x%03X", len(program), PROGRAM_START)

    # ---- collaborator shortcuts ----
    @property
    def V(self):
        return self.registers.V

    @property
    def pc(self):
        return self.registers.pc

    @property
    def halted(self):
        return self.state is MachineState.HALTED

    def set_key(self, code, pressed):
        self.keypad.set_key(code, pressed)

    def tick(self):
        self.timers.tick()

    # ---- cycle ----
    def cycle(self):
        """Run one instruction and return it.

        Returns None while the machine is waiting for a key. Raises the
        fatal Chip8Error that halted the machine, now and on every later
        call.
        """
        if self.state is MachineState.HALTED:
            raise self.error.with_traceback(None)
        if self.state is MachineState.AWAITING_KEY:
            return self._resume_key_wait()

        regs = self.registers
        address = regs.pc
        ins = decode(self.memory.read16(address))
        if not ins.known:
            self._halt(UnknownOpcode(address, ins.opcode))

        if log.isEnabledFor(logging.DEBUG):
            log.debug("%03X | %04X  %s", address, ins.opcode, ins.disassemble())

        regs.pc = (address + 2) & 0xFFFF
        try:
            self.opcodes[ins.mnemonic](ins)
        except Chip8Error as e:
            regs.pc = address
            self._halt(e)

        self.cycles += 1
        return ins

    def _halt(self, error):
        self.state = MachineState.HALTED
        self.error = error
        log.error("Emulation halted: %s", error)
        raise error

    def _resume_key_wait(self):
        key = self.keypad.next_press()
        if key is None:
            return None
        ins = self._waiting
        self.registers.V[ins.x] = key
        self.registers.pc = (self.registers.pc + 2) & 0xFFFF
        self._waiting = None
        self.state = MachineState.RUNNING
        self.cycles += 1
        return ins

    def _skip(self):
        self.registers.pc = (self.registers.pc + 2) & 0xFFFF

    def _set_with_flag(self, x, value, flag):
        V = self.registers.V
        if self._flag_last:
            V[x] = value & 0xFF
            V[0xF] = flag
        else:
            V[0xF] = flag
            V[x] = value & 0xFF

    # ---- opcode handlers ----
    def op_CLS(self, ins):
        self.display.clear()

    def op_RET(self, ins):
        address = self.registers.pop()
        if address is None:
            raise StackUnderflow((self.registers.pc - 2) & 0xFFFF)
        self.registers.pc = address

    def op_JP(self, ins):
        self.registers.pc = ins.nnn

    def op_CALL(self, ins):
        regs = self.registers
        if not regs.push(regs.pc):
            raise StackOverflow((regs.pc - 2) & 0xFFFF, regs.stack_depth)
        regs.pc = ins.nnn

    def op_SE_Vx_nn(self, ins):
        if self.registers.V[ins.x] == ins.nn:
            self._skip()

    def op_SNE_Vx_nn(self, ins):
        if self.registers.V[ins.x] != ins.nn:
            self._skip()

    def op_SE_Vx_Vy(self, ins):
        V = self.registers.V
        if V[ins.x] == V[ins.y]:
            self._skip()

    def op_LD_Vx_nn(self, ins):
        self.registers.V[ins.x] = ins.nn

    def op_ADD_Vx_nn(self, ins):
        V = self.registers.V
        V[ins.x] = (V[ins.x] + ins.nn) & 0xFF

    def op_LD_Vx_Vy(self, ins):
        V = self.registers.V
        V[ins.x] = V[ins.y]

    def op_OR(self, ins):
        V = self.registers.V
        V[ins.x] |= V[ins.y]

    def op_AND(self, ins):
        V = self.registers.V
        V[ins.x] &= V[ins.y]

    def op_XOR(self, ins):
        V = self.registers.V
        V[ins.x] ^= V[ins.y]

    def op_ADD(self, ins):
        V = self.registers.V
        total = V[ins.x] + V[ins.y]
        self._set_with_flag(ins.x, total, 1 if total > 0xFF else 0)

    def op_SUB(self, ins):
        V = self.registers.V
        vx, vy = V[ins.x], V[ins.y]
        self._set_with_flag(ins.x, vx - vy, 1 if vx >= vy else 0)

    def op_SUBN(self, ins):
        V = self.registers.V
        vx, vy = V[ins.x], V[ins.y]
        self._set_with_flag(ins.x, vy - vx, 1 if vy >= vx else 0)

    def op_SHR(self, ins):
        value = self.registers.V[self._shift_source(ins)]
        self._set_with_flag(ins.x, value >> 1, value & 1)

    def op_SHL(self, ins):
        value = self.registers.V[self._shift_source(ins)]
        self._set_with_flag(ins.x, value << 1, (value >> 7) & 1)

    def op_SNE_Vx_Vy(self, ins):
        V = self.registers.V
        if V[ins.x] != V[ins.y]:
            self._skip()

    def op_LD_I(self, ins):
        self.registers.I = ins.nnn

    def op_JP_V0(self, ins):
        self.registers.pc = (ins.nnn + self.registers.V[0]) & 0xFFF

    def op_RND(self, ins):
        self.registers.V[ins.x] = self.rng.randint(0, 255) & ins.nn

    def op_DRW(self, ins):
        regs = self.registers
        sprite = self.memory.read(regs.I, ins.n)
        collision = self.display.draw(regs.V[ins.x], regs.V[ins.y], sprite)
        regs.V[0xF] = 1 if collision else 0

    def op_SKP(self, ins):
        if self.keypad.is_pressed(self.registers.V[ins.x]):
            self._skip()

    def op_SKNP(self, ins):
        if not self.keypad.is_pressed(self.registers.V[ins.x]):
            self._skip()

    def op_LD_Vx_DT(self, ins):
        self.registers.V[ins.x] = self.timers.delay

    def op_WAITKEY(self, ins):
        # stay on this instruction until a new press arrives
        self.registers.pc = (self.registers.pc - 2) & 0xFFFF
        self.keypad.discard_presses()
        self._waiting = ins
        self.state = MachineState.AWAITING_KEY

    def op_LD_DT_Vx(self, ins):
        self.timers.set_delay(self.registers.V[ins.x])

    def op_LD_ST_Vx(self, ins):
        self.timers.set_sound(self.registers.V[ins.x])

    def op_ADD_I_Vx(self, ins):
        regs = self.registers
        regs.I = (regs.I + regs.V[ins.x]) & 0xFFFF

    def op_FONT(self, ins):
        digit = self.registers.V[ins.x] & 0xF
        self.registers.I = self.config.font_base + digit * FONT_SPRITE_SIZE

    def op_BCD(self, ins):
        regs = self.registers
        v = regs.V[ins.x]
        self.memory.write8(regs.I, v // 100)
        self.memory.write8(regs.I + 1, (v // 10) % 10)
        self.memory.write8(regs.I + 2, v % 10)

    def op_STORE(self, ins):
        regs = self.registers
        for i in range(ins.x + 1):
            self.memory.write8(regs.I + i, regs.V[i])
        if self.config.increment_index:
            regs.I = (regs.I + ins.x + 1) & 0xFFFF

    def op_LOAD(self, ins):
        regs = self.registers
        for i in range(ins.x + 1):
            regs.V[i] = self.memory.read8(regs.I + i)
        if self.config.increment_index:
            regs.I = (regs.I + ins.x + 1) & 0xFFFF

    # ---- debugging ----
    def dump(self, memory=True):
        regs = self.registers
        lines = [
            "state = %s" % self.state.value,
            "pc = 0x%03x" % regs.pc,
            "i = 0x%03x" % regs.I,
        ]
        lines += ["v%x = %d" % (i, v) for i, v in enumerate(regs.V)]
        lines.append("stack = [%s]" % ", ".join("0x%03x" % a for a in regs.call_stack()))
        lines.append("dt = %d st = %d" % (self.timers.delay, self.timers.sound))
        if memory:
            lines.append(self.memory.dump())
        return "\n".join(lines)
