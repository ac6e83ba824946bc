import argparse
import logging
import random
import sys

from .config import CPU_HZ, STACK_DEPTH, FlagOrder, MachineConfig, ShiftMode, scale, timer_HZ
from .driver import Clock
from .errors import Chip8Error
from .interpreter import Interpreter
from .rom import load_rom

log = logging.getLogger(__name__)


def build_parser():
    aparser = argparse.ArgumentParser(prog="chip8vm", description="CHIP-8 virtual machine")
    aparser.add_argument('rom',
        help="A CHIP-8 program to load at 0x200")
    aparser.add_argument('--hz',
        help="Instructions per second (default %(default)s)",
        type=int,
        default=CPU_HZ)
    aparser.add_argument('--scale',
        help="Window pixels per CHIP-8 pixel (default %(default)s)",
        type=int,
        default=scale)
    aparser.add_argument('--stack-depth',
        help="Call stack bound (default %(default)s)",
        type=int,
        default=STACK_DEPTH)
    aparser.add_argument('--shift-from-vy',
        help="8xy6/8xyE shift Vy into Vx (COSMAC VIP) instead of Vx in place",
        action="store_true")
    aparser.add_argument('--value-last',
        help="When VF is the destination, keep the result rather than the flag",
        action="store_true")
    aparser.add_argument('--increment-index',
        help="Fx55/Fx65 advance I past the block (COSMAC VIP)",
        action="store_true")
    aparser.add_argument('--headless',
        help="Run SECONDS of machine time without a window, then print the machine state",
        metavar="SECONDS",
        type=float)
    aparser.add_argument('--dump',
        help="Include the memory listing in the headless state dump",
        action="store_true")
    aparser.add_argument('--seed',
        help="Seed for the RND instruction",
        type=int)
    aparser.add_argument('--debug',
        help="Enable verbose debug logging (instruction trace)",
        action="store_true")
    return aparser


def config_from_args(args):
    return MachineConfig(
        cpu_hz=args.hz,
        timer_hz=timer_HZ,
        stack_depth=args.stack_depth,
        shift_mode=ShiftMode.FROM_VY if args.shift_from_vy else ShiftMode.IN_PLACE,
        flag_order=FlagOrder.VALUE_LAST if args.value_last else FlagOrder.FLAG_LAST,
        increment_index=args.increment_index,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print("Invalid option:", e, file=sys.stderr)
        return 2

    machine = Interpreter(config, rng=random.Random(args.seed))
    try:
        machine.load(load_rom(args.rom))
    except Chip8Error as e:
        print("Cannot load ROM:", e, file=sys.stderr)
        return 1

    if args.headless is not None:
        clock = Clock(machine, config.cpu_hz, config.timer_hz)
        try:
            clock.run_for(args.headless)
        except Chip8Error as e:
            print("Emulation stopped:", e, file=sys.stderr)
            print(machine.dump(memory=args.dump))
            return 1
        print(machine.dump(memory=args.dump))
        print(machine.display)
        return 0

    # imported late so headless runs work without a display
    from . import frontend
    log.info("Emulation starting")
    frontend.run(machine, config.cpu_hz, config.timer_hz, scale=args.scale,
                 caption="CHIP-8 Emulator - %s" % args.rom)
    return 1 if machine.halted else 0


if __name__ == "__main__":
    sys.exit(main())
