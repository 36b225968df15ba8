#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws each frame snapshot onto an SDL window surface via PyGame.  The surface
is allocated at the emulated 64x32 resolution, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Only two colours are ever needed: one for unlit pixels and one for lit pixels.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_PALETTE = [0x0A0E27, 0x00FF9F]  # Off, on


def parse_palette(pygame_palette):
    colour_map = list(DEFAULT_PALETTE)

    if pygame_palette is None:
        return colour_map

    pygame_palette_split = pygame_palette.split(",")

    if len(pygame_palette_split) > len(colour_map):
        raise RendererError("Too many palette colours defined.")

    for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
        if len(pygame_colour) != 6:
            raise RendererError("Palette colours must all be 6 hex digits long.")

        try:
            colour_map[pygame_colour_num] = int(pygame_colour, 16)
        except ValueError:
            raise RendererError("Invalid palette colour defined.") from None

    return colour_map


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied, or set to default

        super().__init__(scale)

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes([i >> 16, (i >> 8) & 0xFF, i & 0xFF]) for i in parse_palette(pygame_palette)]

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_buffer = memoryview(bytearray(self.width * self.height * 3))  # 24-bit
        self.draw_frame([[0] * self.width] * self.height)
        self.refresh_display(True)

    def draw_frame(self, pixels):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_map = self.rgb_map
        rgb_location = 0

        for row in pixels:
            for pixel in row:
                self.rgb_buffer[rgb_location:rgb_location + 3] = rgb_map[pixel]
                rgb_location += 3

        super().draw_frame(pixels)

    def refresh_display(self, content_changed=False):
        if content_changed:
            # Blit the bytearray straight to the surface, rather than setting pixels one at a time
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
