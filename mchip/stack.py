#!/usr/bin/env python3

"""
Stack Emulator

The call stack has no specified location in interpreter RAM and no stack
pointer register is exposed to the running program, so a bounded list is
enough to emulate it.

The reference machine leaves overflow (more than 16 nested calls) and
underflow (a return with no matching call) undefined.  Here both are fatal and
raise StackError, so a runaway program can never trample unrelated memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def get_items(self):
        # For debugging
        return self.items
