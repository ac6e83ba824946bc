from collections import deque

import numpy as np

from .config import NUM_KEYS


class KeypadState:
    """Logical state of the 16-key hex keypad.

    Only the input collaborator mutates it, through set_key(). Presses
    (released -> pressed transitions) are also queued so the key-wait
    instruction can react to a new press rather than a held key.
    """

    def __init__(self):
        self.keys = np.zeros(NUM_KEYS, dtype=np.uint8)
        self._presses = deque(maxlen=NUM_KEYS)

    def set_key(self, code, pressed):
        if not 0 <= code < NUM_KEYS:
            raise ValueError("key code out of range: %r" % (code,))
        if pressed and not self.keys[code]:
            self._presses.append(code)
        self.keys[code] = 1 if pressed else 0

    def is_pressed(self, code):
        return bool(self.keys[code & 0xF])

    def pressed(self):
        return [int(k) for k in np.flatnonzero(self.keys)]

    def next_press(self):
        """Oldest unconsumed press, or None."""
        if self._presses:
            return self._presses.popleft()
        return None

    def discard_presses(self):
        self._presses.clear()

    def release_all(self):
        self.keys[:] = 0
        self._presses.clear()
