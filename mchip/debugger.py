#!/usr/bin/env python3

"""
CPU Debugger

If live output is enabled, this will print information before each
instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

If a crash occurs, all of the above will be included in the error, with the
addition of the stack contents.

Unknown opcodes are not fatal.  They are reported on stderr once per address,
because the program counter does not move past them and the same report
would otherwise be repeated every cycle.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys


class Debugger:
    def __init__(self):
        self.live = False
        self.reported = set()

    def debug(self, cpu, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [cpu.i, cpu.dt, cpu.st, cpu.debug_pc, cpu.opcode, instruction]
        )

        if verbose:
            stack_items = cpu.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += ("\nStack:{}").format(stack_str or " (Empty)")

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))

    def warn_unknown(self, cpu):
        location = cpu.debug_pc

        if location in self.reported:
            return

        self.reported.add(location)
        print(
            "Ignoring unknown opcode 0x{:04x} at address 0x{:03x}".format(cpu.opcode, location),
            file=sys.stderr
        )
