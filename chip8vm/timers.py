class TimerUnit:
    """Delay and sound counters. tick() is called at 60Hz by the driver."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    @property
    def sound_active(self):
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
