import numpy as np

from .config import NUM_REGISTERS, PROGRAM_START, STACK_DEPTH


class RegisterFile:
    """V0..VF, I, PC and the call stack."""

    def __init__(self, stack_depth=STACK_DEPTH):
        self.stack_depth = stack_depth
        self.reset()

    def reset(self):
        self.V = [0] * NUM_REGISTERS
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = np.zeros(self.stack_depth, dtype=np.uint16)
        self.sp = 0

    def push(self, address):
        """Returns False when the stack is full; the caller decides what that means."""
        if self.sp >= self.stack_depth:
            return False
        self.stack[self.sp] = address
        self.sp += 1
        return True

    def pop(self):
        """Returns None on an empty stack."""
        if self.sp == 0:
            return None
        self.sp -= 1
        return int(self.stack[self.sp])

    def call_stack(self):
        return [int(a) for a in self.stack[:self.sp]]

    def snapshot(self):
        return (tuple(self.V), self.I, self.pc, tuple(self.call_stack()))
