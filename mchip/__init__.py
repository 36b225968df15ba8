#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, MEM_SIZE, STACK_SIZE
from .cpu import CPU
from .debugger import Debugger
from .framebuffer import Framebuffer
from .host import Host
from .hostio import Loader
from .ram import RAM
from .stack import Stack


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer

    # Read the ROM before any window or terminal takes over the display
    rom = Loader().load_binary(args["filename"])

    # Set up a new rendering system
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"]
    )

    inputs = None

    try:
        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = Inputs(args["keymap"], renderer)

        # Set up debugger and live output if necessary
        debugger = Debugger()
        debugger.set_live(args["debug"])

        # Create a new CPU with 4K of RAM and a 16-level stack.  The system font is written into RAM on creation
        cpu = CPU(RAM(MEM_SIZE), Stack(STACK_SIZE), Framebuffer(), debugger, **quirk_settings)
        cpu.load_rom(rom)

        Host(cpu, inputs, renderer, cycles_per_frame=args["cycles_per_frame"]).run()
    finally:
        # The host has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        if inputs is not None:
            inputs.shutdown()

        renderer.shutdown()
