#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location for the call stack in memory, and no stack
pointer register exposed to the running program, so a wrapped list emulates it
fully.  The original COSMAC VIP interpreter only had room for 12-16 return
addresses.  Here the depth is unbounded unless a size is given.

Returning with nothing on the stack is a program fault, and is reported as a
StackError rather than jumping somewhere undefined.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=None):
        self.items = []
        self.size = size

    def push(self, item):
        if self.size is not None and len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        return self.items
