#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Paints framebuffer snapshots onto an SDL window surface via PyGame.  The
surface is allocated at the emulated resolution, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied

        super().__init__(scale, palette)
        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes([i >> 16, (i >> 8) & 0xFF, i & 0xFF]) for i in self.palette]

    def set_resolution(self, width, height):
        super().set_resolution(width, height)
        self.rgb_buffer = bytearray(width * height * 3)  # 24-bit

    def draw(self, pixels):
        height = len(pixels)
        width = len(pixels[0]) if height else 0

        if (width, height) != (self.width, self.height):
            self.set_resolution(width, height)

        # Fill the RGB buffer in-place, then blit it in one go.  This is much faster than per-pixel surface calls.
        background, foreground = self.rgb_map
        rgb_buffer = self.rgb_buffer
        rgb_location = 0

        for row in pixels:
            for pixel in row:
                rgb_buffer[rgb_location:rgb_location + 3] = foreground if pixel else background
                rgb_location += 3

        if rgb_buffer:
            render_surface = pygame.image.frombuffer(bytes(rgb_buffer), (width, height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().draw(pixels)

    def set_title(self, title):
        super().set_title(title)
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
