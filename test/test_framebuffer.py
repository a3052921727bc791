#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer(4, 5)

    def test_framebuffer_default_size(self):
        framebuffer = Framebuffer()
        self.assertEqual((64, 32), framebuffer.get_vid_size())
        self.assertEqual(64 * 32, framebuffer.plane.mem_size)

    def test_framebuffer_bad_size(self):
        self.assertRaises(FramebufferError, Framebuffer, 0, 32)
        self.assertRaises(FramebufferError, Framebuffer, 64, -1)

    def test_framebuffer_writes(self):
        fb = self.framebuffer
        plane = fb.plane
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("ff00000000000000000000000000000000000000", plane.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("ff00000000ff0000000000000000000000000000", plane.mem.hex())
        self.assertIsNone(fb.xor_pixel(4, 0))  # Should do nothing, as there is no wrapping
        self.assertIsNone(fb.xor_pixel(0, 5))
        self.assertEqual("ff00000000ff0000000000000000000000000000", plane.mem.hex())

        # Check collisions are reported, and the pixel is erased
        self.assertTrue(fb.xor_pixel(0, 0))
        self.assertEqual("0000000000ff0000000000000000000000000000", plane.mem.hex())

        # Check clear works
        fb.clear()
        self.assertEqual("0000000000000000000000000000000000000000", plane.mem.hex())

    def test_framebuffer_get_pixels(self):
        fb = self.framebuffer
        fb.xor_pixel(3, 4)
        fb.xor_pixel(1, 0)
        pixels = fb.get_pixels()
        self.assertEqual(5, len(pixels))
        self.assertEqual([False, True, False, False], pixels[0])
        self.assertEqual([False, False, False, True], pixels[4])
        self.assertTrue(fb.get_pixel(3, 4))
        self.assertFalse(fb.get_pixel(2, 4))
