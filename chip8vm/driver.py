import logging

from .config import CPU_HZ, timer_HZ

log = logging.getLogger(__name__)

# float slack when turning seconds into whole budget units
_EPSILON = 1e-6


class Clock:
    """Runs an Interpreter against wall-clock time.

    CPU cycles and timer ticks have separate budgets: advance(dt) adds dt
    seconds to both and spends each at its own rate, so changing the
    instruction rate never changes the 60Hz timer cadence.
    """

    # a stalled host (window drag, debugger) would otherwise replay seconds of cycles
    MAX_CATCHUP = 0.25

    def __init__(self, machine, cpu_hz=CPU_HZ, timer_hz=timer_HZ):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ValueError("clock rates must be positive")
        self.machine = machine
        self.cpu_hz = cpu_hz
        self.timer_hz = timer_hz
        # budgets count units of 1/(cpu_hz * timer_hz) seconds: a cycle costs
        # timer_hz units and a tick costs cpu_hz units, so both are whole numbers
        self._units_per_second = cpu_hz * timer_hz
        self._cpu_budget = 0
        self._timer_budget = 0
        self._carry = 0.0
        self.cycles_run = 0
        self.ticks_run = 0

    def advance(self, dt):
        """Spend dt seconds. Returns the number of cycles executed.

        Fatal machine errors propagate; the budgets are left as they were
        at the failing cycle.
        """
        dt = min(max(dt, 0.0), self.MAX_CATCHUP)
        self._carry += dt * self._units_per_second
        units = int(self._carry + _EPSILON)
        self._carry -= units
        self._cpu_budget += units
        self._timer_budget += units

        cycle_cost = self.timer_hz
        tick_cost = self.cpu_hz
        executed = 0

        # interleave so timers observed by the program move during long frames;
        # when a tick and a cycle fall due together the tick goes first
        while self._cpu_budget >= cycle_cost or self._timer_budget >= tick_cost:
            # tick_due >= cpu_due, cross-multiplied to stay in integers
            if (self._timer_budget >= tick_cost
                    and self._timer_budget * self.timer_hz >= self._cpu_budget * self.cpu_hz):
                self._timer_budget -= tick_cost
                self.machine.tick()
                self.ticks_run += 1
            else:
                self._cpu_budget -= cycle_cost
                self.machine.cycle()
                self.cycles_run += 1
                executed += 1
        return executed

    def run_for(self, seconds, step=1.0 / 60):
        """Headless: emulate `seconds` of machine time without sleeping."""
        remaining = seconds
        while remaining > 1e-9:
            dt = min(step, remaining)
            self.advance(dt)
            remaining -= dt
        log.info("Ran %d cycles and %d timer ticks", self.cycles_run, self.ticks_run)

