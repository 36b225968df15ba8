#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws each frame snapshot in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell.  Every lit pixel is an inverted run of spaces,
'scale' characters wide.  The top line of the pad holds the title bar.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        super().__init__(scale)
        self.pixel_char = " " * scale
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.refresh_needed = False
        self.cursor_mode = 0 if curses_cursor_mode is None else curses_cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.cbreak()

        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.
        self.pad = curses.newpad(self.height + 1, self.width * scale + 1)

    def draw_frame(self, pixels):
        for y, row in enumerate(pixels):
            for x, pixel in enumerate(row):
                self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if pixel else curses.A_NORMAL)

        self.refresh_needed = True
        super().draw_frame(pixels)

    def refresh_display(self, content_changed=False):
        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if self.refresh_needed:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
                self.refresh_needed = False
        else:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

    def set_title(self, title):
        title_len = len(title)
        bar_len = self.width * self.scale

        if bar_len > title_len:
            self.pad.addstr(0, 0, title + " " * (bar_len - title_len), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
