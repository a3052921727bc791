#!/usr/bin/env python3

"""
RAM Emulator

A fixed block of byte-addressable memory.  Supports reading and writing of
individual bytes or blocks, and zeroing of blocks.  Every access is bounds
checked, so a program that wanders off the end of memory raises RAMError
rather than silently reading garbage.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top or location < 0:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)
        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
