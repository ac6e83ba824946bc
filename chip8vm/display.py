import numpy as np

from .config import height, scale, width


class FrameBuffer:
    """64x32 monochrome pixels, indexed [row, column]."""

    def __init__(self):
        self.pixels = np.zeros((height, width), dtype=bool)
        self.dirty = True

    def clear(self):
        self.pixels[:] = False
        self.dirty = True

    def draw(self, x, y, sprite):
        """XOR `sprite` rows at (x, y), wrapping on both axes.

        Returns True when any lit pixel was switched off.
        """
        collision = False
        for row, bits in enumerate(sprite):
            py = (y + row) % height
            for bit in range(8):
                if bits & (0x80 >> bit):
                    px = (x + bit) % width
                    if self.pixels[py, px]:
                        collision = True
                    self.pixels[py, px] ^= True
        self.dirty = True
        return collision

    def view(self):
        """Read-only view for the display sink."""
        v = self.pixels.view()
        v.flags.writeable = False
        return v

    def is_blank(self):
        return not self.pixels.any()

    def to_rgba(self, scale=scale, on=(255, 255, 255, 255), off=(0, 0, 0, 255)):
        """Upscaled RGBA image, bottom row first (pyglet's origin is bottom-left)."""
        small = np.where(self.pixels[::-1, :, None], np.array(on, dtype=np.uint8),
                         np.array(off, dtype=np.uint8)).astype(np.uint8)
        if scale != 1:
            small = np.repeat(np.repeat(small, scale, axis=0), scale, axis=1)
        return small

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.pixels)
