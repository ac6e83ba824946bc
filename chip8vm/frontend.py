# pyglet window around an Interpreter: handles graphics, sound output and
# keyboard handling. The machine never calls in here; we read its
# framebuffer and sound timer and feed it key transitions.

import logging
import random

import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from .config import height, scale as default_scale, width
from .driver import Clock
from .errors import Chip8Error

log = logging.getLogger(__name__)

# map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, cpu_hz, timer_hz, scale=default_scale, caption="CHIP-8 Emulator"):
        self.scale = scale
        self.window_width, self.window_height = width * scale, height * scale
        super().__init__(
            width=self.window_width,
            height=self.window_height,
            caption=caption,
            vsync=False
        )

        self.machine = machine
        self.clock = Clock(machine, cpu_hz, timer_hz)
        self.sound_playing = False
        self._last_ticks = 0

        # Performance tracking counters
        self._fps_counter = 0
        self._cps_counter = 0
        self._bench_time = pyglet.clock.get_default().time()

        # Labels for HUD
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=5,
            y=self.window_height - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=self.window_height - 30,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        # creating ImageData once, updated in place on every redraw
        self.image = pyglet.image.ImageData(
            self.window_width,
            self.window_height,
            'RGBA',
            machine.display.to_rgba(scale).tobytes()
        )

        # Schedule the loops
        pyglet.clock.schedule(self._step)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    # emulation
    def _step(self, dt):
        if self.machine.halted:
            return
        try:
            self._cps_counter += self.clock.advance(dt)
        except Chip8Error as e:
            log.error("Emulation error: %s", e)
            pyglet.clock.unschedule(self._step)
            self.set_caption("CHIP-8 Emulator - halted: %s" % e)
            return

        if self.clock.ticks_run != self._last_ticks:
            self._last_ticks = self.clock.ticks_run
            self._update_sound()

    # FPS / CPS
    def _update_bench(self, dt):
        now = pyglet.clock.get_default().time()
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            self.fps_label.text = f"FPS: {self._fps_counter / elapsed:.1f}"
            self.cps_label.text = f"Cycles/s: {self._cps_counter}"

            self._fps_counter = 0
            self._cps_counter = 0
            self._bench_time = now

    # sound
    def _update_sound(self):
        if self.machine.timers.sound_active:
            if not self.sound_playing:
                self._play_beep()
        else:
            self.sound_playing = False

    def _play_beep(self, duration=0.2, frequency=440, pitch_variation=15):
        freq = frequency + random.randint(-pitch_variation, pitch_variation)
        wave = synthesis.Sine(duration=duration, frequency=freq, sample_rate=44100)
        player = pyglet.media.Player()
        player.queue(wave)
        player.play()
        self.sound_playing = True

        def on_eos():
            self.sound_playing = False
            player.delete()

        player.on_eos = on_eos

    # draw
    def on_draw(self):
        display = self.machine.display
        if display.dirty:
            frame = display.to_rgba(self.scale)
            # updates existing image without creating new object
            self.image.set_data('RGBA', self.window_width * 4, frame.tobytes())
            display.dirty = False

        self.clear()
        self.image.blit(0, 0)
        self.fps_label.draw()
        self.cps_label.draw()
        self._fps_counter += 1

    # keyboard
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            trace = logging.getLogger("chip8vm.interpreter")
            trace.setLevel(logging.INFO if trace.isEnabledFor(logging.DEBUG) else logging.DEBUG)
            log.info("Instruction trace %s", "on" if trace.isEnabledFor(logging.DEBUG) else "off")
        elif symbol in keymap:
            self.machine.set_key(keymap[symbol], True)

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], False)


def run(machine, cpu_hz, timer_hz, scale=default_scale, caption="CHIP-8 Emulator"):
    Chip8Window(machine, cpu_hz, timer_hz, scale=scale, caption=caption)
    pyglet.app.run()
