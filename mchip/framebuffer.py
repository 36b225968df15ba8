#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing individual pixels, and each XOR
reports whether a lit pixel was erased (a collision).

The pixel store is a single RAM bank of one byte per pixel, holding 0 or 1.
Coordinates are expected to be wrapped or clipped by the caller already.

The host never sees the RAM bank.  It asks for a snapshot once per frame and
maps 0/1 to whichever two colours it likes.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.ram_bank = RAM(self.vid_size)

    def toggle(self, x, y):
        # Returns True if a lit pixel was erased
        vram_loc = y * self.vid_width + x
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 1)
        return pixel != 0

    def clear(self):
        self.ram_bank.clear()

    def snapshot(self):
        vid_width = self.vid_width
        return [list(self.ram_bank.read_block(y * vid_width, vid_width)) for y in range(self.vid_height)]

    def get_vid_size(self):
        return self.vid_width, self.vid_height
