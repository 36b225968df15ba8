#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to cycle() fetches, decodes and executes at most one instruction.  There is no
clock of its own: the host decides how many cycles happen per frame, when the
timers count down, and when a frame ends.

The program counter is advanced straight after fetch, before execution, just
as on the original interpreter.  So CALL pushes the address of the following
instruction, skips only need to add one more step, and instructions which
must run again (waiting for a key, unknown opcodes) step the counter back.

Quirks
------

- Display wait quirks: after a sprite is drawn, no further instructions run
  until the host ends the frame.  Matches the original COSMAC VIP, which waited
  for the vertical blank interrupt before drawing.
- Clip quirks: sprites which run past the right or bottom edge of the screen
  are cut off rather than wrapped around.  The sprite origin always wraps.

The logic instructions (OR, AND, XOR) always reset Vf.  This is not
configurable.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import (
    APP_INTRO, ADDR_MASK, INDEX_MASK, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, SYSTEM_FONT
)
from .instructions import Op, decode, disassemble
from .stack import StackError


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, ram, stack, framebuffer, debugger, display_wait_quirks=None, clip_quirks=None):
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()

        # Both quirks are enabled by default, to match the original interpreter
        self.display_wait_quirks = True if display_wait_quirks is None else display_wait_quirks
        self.clip_quirks = True if clip_quirks is None else clip_quirks

        # Single dispatch over the decoded instruction kind
        self.instructions = {
            Op.UNKNOWN: self._opcode_unknown,
            Op.CLS: self._00E0,
            Op.RET: self._00EE,
            Op.JP: self._1nnn,
            Op.CALL: self._2nnn,
            Op.SE_BYTE: self._3xnn,
            Op.SNE_BYTE: self._4xnn,
            Op.SE_REG: self._5xy0,
            Op.LD_BYTE: self._6xnn,
            Op.ADD_BYTE: self._7xnn,
            Op.LD_REG: self._8xy0,
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD_REG: self._8xy4,
            Op.SUB: self._8xy5,
            Op.SHR: self._8xy6,
            Op.SUBN: self._8xy7,
            Op.SHL: self._8xyE,
            Op.SNE_REG: self._9xy0,
            Op.LD_I: self._Annn,
            Op.JP_V0: self._Bnnn,
            Op.RND: self._Cxnn,
            Op.DRW: self._Dxyn,
            Op.SKP: self._Ex9E,
            Op.SKNP: self._ExA1,
            Op.LD_VX_DT: self._Fx07,
            Op.LD_VX_K: self._Fx0A,
            Op.LD_DT_VX: self._Fx15,
            Op.LD_ST_VX: self._Fx18,
            Op.ADD_I: self._Fx1E,
            Op.LD_F: self._Fx29,
            Op.LD_B: self._Fx33,
            Op.LD_MEM_VX: self._Fx55,
            Op.LD_VX_MEM: self._Fx65
        }

        # Initialise registers
        self.v = memoryview(bytearray(16))
        self.i = 0  # Index register

        # Initialise timers
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        # Initialise program counter and current opcode
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0

        # Display-related vars
        self.vblank_wait = False

        # Input-related vars.  'key_latched' is None while idle, otherwise it holds the key being waited on
        self.keys = [False] * 0x10
        self.key_latched = None

        self.load_font()

    def load_font(self):
        self.ram.write_block(FONT_LOC, SYSTEM_FONT)

    def load_rom(self, data):
        # Raises RAMError if the ROM does not fit
        self.ram.write_block(PROGRAM_LOC, data)

    def cycle(self):
        # Returns True if an instruction was executed
        if self.vblank_wait:
            return False

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()

        try:
            self.decode_exec()
        except StackError as error:
            self._halt(str(error))

        return True

    def decrement_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def end_frame(self):
        self.vblank_wait = False

    def key_press(self, key):
        self.keys[key] = True

    def key_release(self, key):
        self.keys[key] = False

    def snapshot(self):
        return self.framebuffer.snapshot()

    def is_sound_on(self):
        return self.st > 0

    def fetch(self):
        pc = self.pc
        return (self.ram.read(pc) << 8) | self.ram.read((pc + 1) & ADDR_MASK)

    def decode_exec(self):
        instruction = decode(self.opcode)

        if self.live_debug:
            self.debug(disassemble(instruction))

        self.instructions[instruction.op](instruction)

    def inc_pc(self):
        self.pc = (self.pc + 2) & ADDR_MASK

    def dec_pc(self):
        # Only used to re-run instructions (key waits and unknown opcodes)
        self.pc = (self.pc - 2) & ADDR_MASK

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _halt(self, reason):
        raise CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{} at address 0x{:03x} (opcode 0x{:04x})."
            ).format(
                APP_INTRO, self.debugger.debug(self, disassemble(decode(self.opcode)), verbose=True),
                reason, self.debug_pc, self.opcode
            )
        ) from None

    def _opcode_unknown(self, ins):  # pylint: disable=unused-argument
        # Not fatal.  The program counter stays put, so the same opcode is fetched again next cycle.
        self.debugger.warn_unknown(self)
        self.dec_pc()

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self.pc = ins.nnn

    def _3xnn(self, ins):  # SE Vx, byte
        if self.v[ins.x] == ins.nn:
            self.inc_pc()

    def _4xnn(self, ins):  # SNE Vx, byte
        if self.v[ins.x] != ins.nn:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.x] == self.v[ins.y]:
            self.inc_pc()

    def _6xnn(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.nn

    def _7xnn(self, ins):  # ADD Vx, byte
        self.v[ins.x] = (self.v[ins.x] + ins.nn) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]
        self.v[0xF] = 0

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]
        self.v[0xF] = 0

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]
        self.v[0xF] = 0

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, vx, val):  # Post-SUB/SUBN
        self.v[vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this must happen AFTER Vx is set, as Vf may be one of the parameters
        self.v[0xF] = int(val >= 0)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins.x, self.v[ins.x] - self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx, Vy
        val = self.v[ins.y]
        self.v[ins.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(ins.x, self.v[ins.y] - self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx, Vy
        val = self.v[ins.y]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.x] != self.v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self.pc = (self.v[0] + ins.nnn) & ADDR_MASK

    def _Cxnn(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = randint(0, 0xFF) & ins.nn

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # The sprite's start always wraps.  What happens past the bottom-right edges depends on the clip quirk.
        vid_width, vid_height = self.framebuffer.get_vid_size()
        vx_pos = self.v[ins.x] % vid_width
        vy_pos = self.v[ins.y] % vid_height
        clip = self.clip_quirks
        collided = False
        i = self.i

        for y in range(ins.n):
            scr_y = vy_pos + y

            if scr_y >= vid_height:
                if clip:
                    break

                scr_y %= vid_height

            spr_data = self.ram.read((i + y) & ADDR_MASK)

            for x in range(8):
                if spr_data & (0x80 >> x):
                    scr_x = vx_pos + x

                    if scr_x >= vid_width:
                        if clip:
                            break

                        scr_x %= vid_width

                    if self.framebuffer.toggle(scr_x, scr_y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.v[0xF] = int(collided)

        # Wait for vertical blank before running anything else
        if self.display_wait_quirks:
            self.vblank_wait = True

    def _Ex9E(self, ins):  # SKP Vx
        if self.keys[self.v[ins.x] & 0xF]:
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.keys[self.v[ins.x] & 0xF]:
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # This opcode waits for a key to be pressed and then released.  The host still needs to render and process
        # inputs meanwhile, so control is returned and the program counter is stepped back to run this again.
        key = self.key_latched

        if key is None:
            for key_num in range(0x10):
                if self.keys[key_num]:
                    self.key_latched = key_num
                    break

            self.dec_pc()
        elif self.keys[key]:
            # Still held
            self.dec_pc()
        else:
            self.v[ins.x] = key
            self.key_latched = None

    def _Fx15(self, ins):  # LD DT, Vx
        self.dt = self.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.st = self.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        self.i = (self.i + self.v[ins.x]) & INDEX_MASK

    def _Fx29(self, ins):  # LD F, Vx
        self.i = (FONT_LOC + FONT_GLYPH_SIZE * self.v[ins.x]) & INDEX_MASK

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.x]
        i = self.i
        self.ram.write(i & ADDR_MASK, val // 100)              # Most-significant digit
        self.ram.write((i + 1) & ADDR_MASK, (val // 10) % 10)  # Middle digit
        self.ram.write((i + 2) & ADDR_MASK, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        i = self.i

        for reg in range(ins.x + 1):
            self.ram.write((i + reg) & ADDR_MASK, self.v[reg])

        self.i = (i + ins.x + 1) & INDEX_MASK

    def _Fx65(self, ins):  # LD Vx, [I]
        i = self.i

        for reg in range(ins.x + 1):
            self.v[reg] = self.ram.read((i + reg) & ADDR_MASK)

        self.i = (i + ins.x + 1) & INDEX_MASK
