#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Owns the whole machine: RAM, registers, program counter, index register, call
stack, timers, framebuffer and the last key pressed.  The driver advances it
with step() at the instruction rate, and with tick_timers() at 60Hz.

Both of those may be called from different threads, as may set_key() and
get_framebuffer(), so each takes the machine lock.  A complete
fetch/decode/execute cycle therefore never interleaves with a timer tick, a
key event, or a framebuffer read.  fetch() and execute() do not lock, and are
intended for single-threaded use (tests, or code already holding the lock).

Faults stop the current cycle by raising:
    * CPUError   - fetch past the end of memory
    * StackError - return with an empty call stack
    * RAMError   - memory access past the end of memory through I

Unrecognized opcodes are logged and skipped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import randint
from threading import Lock
from .constants import (
    MEM_SIZE, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, SYSTEM_FONT, STATE_RUNNING, STATE_WAITING_FOR_KEY, TIMER_START
)
from .framebuffer import Framebuffer
from .hostio import check_rom_size
from .quirks import Quirks
from .ram import RAM
from .stack import Stack

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
I_BITMASK = 0xFFFF  # Index register is 16 bits wide

logger = logging.getLogger(__name__)


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, quirks=None, ram=None, stack=None, framebuffer=None):
        self.quirks = Quirks() if quirks is None else quirks
        self.ram = RAM(MEM_SIZE) if ram is None else ram
        self.stack = Stack() if stack is None else stack
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer
        self.lock = Lock()
        self.program = None

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self._power_on()

    def _power_on(self):
        self.ram.clear()
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)
        self.v[:] = bytes(16)
        self.i = 0  # Index register
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC  # Address of the last instruction fetched
        self.opcode = 0
        self.stack.clear()

        # Timers, decremented externally at 60Hz
        self.dt = TIMER_START  # Delay timer
        self.ds = TIMER_START  # Sound timer

        self.framebuffer.clear()

        # Input-related vars
        self.key = None
        self.state = STATE_RUNNING
        self.key_register = 0  # Register waiting on Fx0A

    def load_program(self, data):
        # Check first, so nothing is written if the program is too big
        data = bytes(data)
        check_rom_size(data)

        with self.lock:
            self.ram.write_block(PROGRAM_LOC, data)
            self.program = data

    def reset(self):
        with self.lock:
            self._power_on()

            if self.program is not None:
                self.ram.write_block(PROGRAM_LOC, self.program)

    def step(self):
        # Returns whether an instruction ran.  Nothing runs while waiting for a key.
        with self.lock:
            if self.state == STATE_WAITING_FOR_KEY:
                return False

            self.execute(self.fetch())
            return True

    def tick_timers(self):
        with self.lock:
            if self.dt > 0:
                self.dt -= 1

            if self.ds > 0:
                self.ds -= 1

    def set_key(self, key):
        # Only one key can be held.  Anything outside 0-F (such as 0xFF) means released.
        if key is not None and not 0 <= key <= 0xF:
            key = None

        with self.lock:
            self.key = key

            if key is not None and self.state == STATE_WAITING_FOR_KEY:
                self.v[self.key_register] = key
                self.state = STATE_RUNNING
                logger.debug("Key 0x%01x received in V%01x", key, self.key_register)

    def get_framebuffer(self):
        with self.lock:
            return self.framebuffer.get_pixels()

    def is_waiting_for_key(self):
        return self.state == STATE_WAITING_FOR_KEY

    def fetch(self):
        pc = self.pc

        if pc + 1 > self.ram.mem_top:
            raise CPUError("Instruction fetch out of range at 0x{:04x}".format(pc))

        self.debug_pc = pc
        self.pc = pc + 2  # Program counter updates after fetch, but before execute
        return int.from_bytes(self.ram.read_block(pc, 2), CPU_ENDIAN, signed=False)

    def execute(self, opcode):
        self.opcode = opcode
        self.decode_exec()

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()
            return

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def skip(self):
        self.pc += 2

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication.  Don't reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        # Carry on at the next instruction
        logger.warning("Unrecognized instruction 0x%04x at address 0x%03x", self.opcode, self.debug_pc)

    def _0nnn(self):
        opcode = self.opcode

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing the first nibble
            self._opcode_unsupported()
            return

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self.skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self.skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.vx] == self.v[self.vy]:
            self.skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.vx] + self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this must happen AFTER Vx is set, as Vf may be the destination
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx {, Vy}
        # Original interpreters shift Vy into Vx.  Modern ones shift Vx in place.
        val = self.v[self.vx if self.quirks.shift_uses_vy else self.vy]
        self.v[self.vx] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx {, Vy}
        val = self.v[self.vx if self.quirks.shift_uses_vy else self.vy]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.vx] != self.v[self.vy]:
            self.skip()

    def _Annn(self):  # LD I, addr
        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # This quirk breaks lots of games if set incorrectly.  The x nibble is also the top nibble of nnn.
        addr = self.addr

        if self.quirks.jump_adds_vx:
            addr += self.v[self.vx]
        elif self.quirks.jump_adds_v0:
            addr += self.v[0x0]

        self.pc = addr

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Coordinates are read before Vf is touched, as either may be Vf.  The sprite's start wraps, but anything
        # past the right or bottom edge is trimmed.
        framebuffer = self.framebuffer
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = self.v[self.vx] % vid_width
        vy_pos = self.v[self.vy] % vid_height
        collided = False
        i = self.i

        for y in range(self.nibble):
            scr_y = y + vy_pos

            if scr_y >= vid_height:
                break

            spr_data = self.ram.read(i + y)

            for x in range(8):
                if spr_data & (0x80 >> x) and framebuffer.xor_pixel(x + vx_pos, scr_y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        self.v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.v[self.vx] == self.key:
            self.skip()

    def _ExA1(self):  # SKNP Vx
        if self.v[self.vx] != self.key:
            self.skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.dt

    def _Fx0A(self):  # LD Vx, K
        # If nothing is held, stop executing until set_key() delivers a key.  Timers and the display carry on.
        if self.key is not None:
            self.v[self.vx] = self.key
            return

        self.key_register = self.vx
        self.state = STATE_WAITING_FOR_KEY
        logger.debug("Waiting for key into V%01x", self.key_register)

    def _Fx15(self):  # LD DT, Vx
        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.ds = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        val = self.i + self.v[self.vx]
        self.i = val & I_BITMASK
        overflow_limit = self.quirks.index_overflow_limit

        if overflow_limit is not None:
            self.v[0xF] = int(val > overflow_limit)

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_LOC + FONT_GLYPH_SIZE * (self.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        i = self.i
        self.ram.check_overflow(i + 2)            # Nothing is written unless all 3 digits fit
        self.ram.write(i, val // 100)             # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)   # Middle digit
        self.ram.write(i + 2, val % 10)           # Least-significant digit

    def _post_Fx55_Fx65(self):
        if not self.quirks.memory_ops_preserve_index:
            self.i = (self.i + self.vx + 1) & I_BITMASK

    def _Fx55(self):  # LD [I], Vx
        # Block transfers are bounds checked before anything moves
        vx = self.vx
        self.ram.write_block(self.i, self.v[:vx + 1])
        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
        self._post_Fx55_Fx65()
