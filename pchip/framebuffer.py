#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and read back by the host rendering system
at 60Hz.  Programs for this system cannot write directly into video RAM.
Instead, sprites are drawn using an XOR method, and any pixel that was set but
is unset by an XOR is reported as a collision.

Pixels off the right or bottom edge are clipped rather than wrapped.  The
renderer never touches this object directly, it only receives snapshots from
get_pixels(), so drawing and painting can run on different threads.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane = RAM(self.vid_size)

    def clear(self):
        self.plane.clear()

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel is off-screen
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.plane.read(vram_loc)
        self.plane.write(vram_loc, pixel ^ 0xFF)

        return pixel != 0

    def get_pixel(self, x, y):
        return self.plane.read(y * self.vid_width + x) != 0

    def get_pixels(self):
        # A copy, as rows of booleans
        vid_width = self.vid_width
        mem = self.plane.mem

        return [
            [pixel != 0 for pixel in mem[row:row + vid_width]]
            for row in range(0, self.vid_size, vid_width)
        ]

    def get_vid_size(self):
        return self.vid_width, self.vid_height
