#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.stack import Stack, StackError


class TestStack(unittest.TestCase):
    def test_stack_returns_in_reverse_order(self):
        stack = Stack()

        for return_address in 0x202, 0x30A, 0xFFE:
            stack.push(return_address)

        self.assertEqual([0x202, 0x30A, 0xFFE], stack.get_items())
        self.assertEqual([0xFFE, 0x30A, 0x202], [stack.pop() for _ in range(3)])
        self.assertEqual([], stack.get_items())

    def test_stack_empty_return(self):
        stack = Stack()
        self.assertRaises(StackError, stack.pop)

        stack.push(0x202)
        stack.pop()
        self.assertRaises(StackError, stack.pop)

    def test_stack_depth_limit(self):
        # The COSMAC VIP had room for 12 levels
        stack = Stack(12)

        for depth in range(12):
            stack.push(0x200 + depth * 2)

        self.assertRaises(StackError, stack.push, 0x300)
        self.assertEqual(12, len(stack.get_items()))

    def test_stack_unbounded(self):
        stack = Stack()

        for address in range(0x200, 0x400, 2):
            stack.push(address)

        self.assertEqual(0x100, len(stack.get_items()))
        self.assertEqual(0x3FE, stack.pop())

    def test_stack_clear(self):
        stack = Stack(2)
        stack.push(0x204)
        stack.push(0x206)
        stack.clear()
        self.assertEqual([], stack.get_items())

        # Full depth is available again
        stack.push(0x208)
        stack.push(0x20A)
        self.assertRaises(StackError, stack.push, 0x20C)
