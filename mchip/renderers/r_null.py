#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  Without a renderer, performance data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import VID_WIDTH, VID_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.width = VID_WIDTH
        self.height = VID_HEIGHT
        self.title = None
        self.frames_drawn = 0

    def draw_frame(self, pixels):  # pylint: disable=unused-argument
        # 'pixels' is a list of rows, each a list of 0/1 values
        self.frames_drawn += 1

    def refresh_display(self, content_changed=False):
        pass

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
