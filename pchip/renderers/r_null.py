#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin when running headless.
It keeps the last frame it was given, so the display can still be inspected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import DEFAULT_PALETTE


class RendererError(Exception):
    pass


def parse_palette(palette):
    # Returns (background, foreground) as 24-bit integers
    palette_split = (DEFAULT_PALETTE if palette is None else palette).split(",")

    if len(palette_split) != 2:
        raise RendererError("Palette must define exactly 2 colours: background and foreground.")

    colours = []

    for colour in palette_split:
        if len(colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colours.append(int(colour, 16))
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return tuple(colours)


class Renderer:
    def __init__(self, scale=None, palette=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.palette = parse_palette(palette)
        self.title = ""
        self.last_frame = None
        self.frames_drawn = 0
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def draw(self, pixels):
        self.last_frame = pixels
        self.frames_drawn += 1

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
