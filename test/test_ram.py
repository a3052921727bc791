#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.constants import MEM_SIZE
from pchip.ram import RAM, RAMError


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(MEM_SIZE)

    def test_ram_size(self):
        self.assertEqual(0x1000, self.ram.mem_size)
        self.assertEqual(0xFFF, self.ram.mem_top)
        self.assertEqual(bytes(0x1000), bytes(self.ram.mem))
        self.assertEqual(0, RAM().mem_size)

    def test_ram_resize_clears(self):
        self.ram.write(0x200, 0x12)
        self.ram.resize(0x10)
        self.assertEqual(bytes(0x10), bytes(self.ram.mem))
        self.assertRaises(RAMError, self.ram.read, 0x10)

    def test_ram_bytes(self):
        self.ram.write(0x000, 0x01)
        self.ram.write(0xFFF, 0xFF)
        self.assertEqual(0x01, self.ram.read(0x000))
        self.assertEqual(0xFF, self.ram.read(0xFFF))

    def test_ram_blocks(self):
        self.ram.write_block(0x200, b"\x60\x0A\x12\x02")
        self.assertEqual("600a1202", self.ram.read_block(0x200, 4).hex())
        self.assertEqual("0a12", self.ram.read_block(0x201, 2).hex())
        self.assertEqual("00", self.ram.read_block(0x204).hex())

        # The last bytes of memory are reachable, but no further
        self.ram.write_block(0xFFE, b"\xAB\xCD")
        self.assertEqual("abcd", self.ram.read_block(0xFFE, 2).hex())

    def test_ram_out_of_range(self):
        self.assertRaises(RAMError, self.ram.read, 0x1000)
        self.assertRaises(RAMError, self.ram.read, -1)
        self.assertRaises(RAMError, self.ram.write, 0x1000, 0x00)
        self.assertRaises(RAMError, self.ram.read_block, 0xFFF, 2)

        # A block that does not fit is not partially written
        self.assertRaises(RAMError, self.ram.write_block, 0xFFE, b"\x01\x02\x03")
        self.assertEqual("0000", self.ram.read_block(0xFFE, 2).hex())

    def test_ram_error_message(self):
        with self.assertRaises(RAMError) as context:
            self.ram.read(0x1234)

        self.assertIn("0x1234", str(context.exception))

    def test_ram_zero_block(self):
        self.ram.write_block(0x300, b"\xFC\xFD\xFE\xFF")
        self.ram.zero_block(0x301, 2)
        self.assertEqual("fc0000ff", self.ram.read_block(0x300, 4).hex())
        self.assertRaises(RAMError, self.ram.zero_block, 0xFFF, 2)

    def test_ram_clear(self):
        self.ram.write_block(0x050, b"\xF0\x90\x90\x90\xF0")
        self.ram.clear()
        self.assertEqual(bytes(0x1000), bytes(self.ram.mem))
