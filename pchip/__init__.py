#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from .cpu import CPU, CPUError
from .driver import Driver
from .hostio import Loader, ROMError
from .quirks import Quirks, QUIRK_TOGGLES
from .ram import RAMError
from .stack import StackError

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def build_quirks(args):
    quirk_settings = {}

    for quirk in QUIRK_TOGGLES:
        quirk_setting = args[quirk]
        quirk_settings[quirk] = None if quirk_setting is None else bool(quirk_setting)

    quirks = Quirks.from_preset(args["preset"] or "reference", **quirk_settings)
    limit = args["index_overflow_limit"]

    if limit is not None:
        # A negative limit switches the Fx1E flag off
        quirks.index_overflow_limit = limit if limit >= 0 else None

    return quirks


def select_plugins(opt_renderer):
    # Returns the Renderer and Inputs classes.  If no renderer is chosen, try PyGame first, then fall back to null.
    auto_select_renderer = opt_renderer is None

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if not auto_select_renderer:
                raise StartupError("PyGame does not appear to be installed.")

            logger.warning("PyGame does not appear to be installed.  Running without a display.")
            opt_renderer = "null"
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer
            return Renderer, Inputs

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        return Renderer, Inputs

    raise StartupError("Unknown renderer '{}'".format(opt_renderer))


def main(args):
    logging.basicConfig(
        level=getattr(logging, (args["log_level"] or "WARNING").upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirks = build_quirks(args)
    logger.info("Using %r", quirks)

    # Read the ROM before anything else, so a bad ROM never opens a window
    try:
        rom = Loader().load_rom(args["filename"])
    except ROMError as err:
        logger.error("%s", err)
        return 1

    cpu = CPU(quirks)
    cpu.load_program(rom)

    Renderer, Inputs = select_plugins(args["renderer"])
    renderer = Renderer(scale=args["scale"], palette=args["palette"])
    inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer)
    clock_speed = args["clock_speed"]
    driver = Driver(cpu, renderer, inputs, clock_speed=DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed)

    try:
        driver.run()
    except KeyboardInterrupt:
        driver.stop()
    except (CPUError, StackError, RAMError):
        # Already logged by the driver
        return 1
    finally:
        # __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()

    return 0
