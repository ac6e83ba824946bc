import random

import pytest

from chip8vm import Interpreter, MachineConfig


def assemble(*words):
    """Big-endian bytes for a list of 16-bit opcodes."""
    out = bytearray()
    for w in words:
        out += bytes([(w >> 8) & 0xFF, w & 0xFF])
    return bytes(out)


@pytest.fixture
def machine():
    return Interpreter(MachineConfig(), rng=random.Random(1234))


@pytest.fixture
def run(machine):
    """Load opcodes at 0x200 and execute `steps` cycles (default: one per opcode)."""
    def _run(*words, steps=None):
        machine.load(assemble(*words))
        for _ in range(len(words) if steps is None else steps):
            machine.cycle()
        return machine
    return _run
