#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PlainChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
FONT_LOC = 0x50
PROGRAM_LOC = 0x200
MAX_PROGRAM_SIZE = MEM_SIZE - PROGRAM_LOC

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Timing
TIMER_FREQ = 60.0        # 60Hz timer decrement, display refresh and input scan
DEFAULT_CLOCK_SPEED = 1000
TIMER_START = 0xFF       # Delay and sound timers power on full

# Machine states
STATE_RUNNING = "running"
STATE_WAITING_FOR_KEY = "waiting_for_key"

# 4x5 hexadecimal digit glyphs, 0-F
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5

# Default mappings for keys 0-F.  These are the keyscan codes (and ASCII characters) for the keys '0' to '9' then 'a'
# to 'f', so each keypad key is labelled with its own hex digit
DEFAULT_KEYMAP = "48,49,50,51,52,53,54,55,56,57,97,98,99,100,101,102"

# Window colours, background then foreground
DEFAULT_PALETTE = "000000,FFFFFF"
