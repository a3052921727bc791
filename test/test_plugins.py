#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.constants import DEFAULT_KEYMAP
from pchip.cpu import CPU
from pchip.inputs.i_null import Inputs, InputsError
from pchip.renderers.r_null import Renderer, RendererError, parse_palette


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()

    def test_inputs_default_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.assertEqual(16, len(inputs.keymap_dict))
        self.assertEqual(0x0, inputs.keymap_dict[ord("0")])
        self.assertEqual(0x9, inputs.keymap_dict[ord("9")])
        self.assertEqual(0xA, inputs.keymap_dict[ord("a")])
        self.assertEqual(0xF, inputs.keymap_dict[ord("f")])

    def test_inputs_bad_keymaps(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", self.renderer)
        self.assertRaises(InputsError, Inputs, ",".join(["x"] * 16), self.renderer)
        self.assertRaises(InputsError, Inputs, ",".join(["1"] * 16), self.renderer)

    def test_inputs_null_messages(self):
        cpu = CPU()
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.assertFalse(inputs.process_messages(cpu))
        self.assertIsNone(cpu.key)
        inputs.shutdown()


class TestRenderer(unittest.TestCase):
    def test_renderer_palette(self):
        self.assertEqual((0x000000, 0xFFFFFF), parse_palette(None))
        self.assertEqual((0x123456, 0xABCDEF), parse_palette("123456,ABCDEF"))

    def test_renderer_bad_palettes(self):
        for palette in "000000", "000000,FFFFFF,888888", "00000,FFFFFF", "GGGGGG,FFFFFF":
            self.assertRaises(RendererError, parse_palette, palette)

    def test_renderer_null(self):
        renderer = Renderer(palette="111111,EEEEEE")
        self.assertEqual(1, renderer.scale)
        self.assertEqual((0, 0), (renderer.width, renderer.height))
        pixels = CPU().get_framebuffer()
        renderer.draw(pixels)
        self.assertIs(pixels, renderer.last_frame)
        self.assertEqual(1, renderer.frames_drawn)
        renderer.set_title("Title")
        self.assertEqual("Title", renderer.title)
        renderer.shutdown()
