#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import sys
from argparse import ArgumentParser
from pchip import main
from pchip.constants import DEFAULT_KEYMAP, DEFAULT_PALETTE
from pchip.quirks import QUIRK_PRESETS, QUIRK_TOGGLES


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-p", "--preset", choices=list(QUIRK_PRESETS.keys()), default="reference",
        help="set all CPU quirks for the original COSMAC VIP, modern interpreters, or the reference behaviour"
    )
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in operations/second (default 1000, 0 = uncapped)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering and input systems (pygame by default if available, otherwise null)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 640)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes for keys 0-F.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--palette", default=DEFAULT_PALETTE,
        help="redefine the background and foreground colours in comma-separated hex, e.g. 000000,FFFFFF"
    )

    for quirk in QUIRK_TOGGLES:
        parser.add_argument(
            "--{}".format(quirk), type=int, choices=[0, 1],
            help="manually disable or enable the {} quirk".format(quirk.replace("_", " "))
        )

    parser.add_argument(
        "--index_overflow_limit", type=lambda value: int(value, 0),
        help="set the value above which ADD I, Vx sets Vf (e.g. 0xFF or 0xFFF).  A negative value disables the flag"
    )
    parser.add_argument(
        "--log_level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING",
        help="set the logging verbosity (default WARNING)"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run():
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    sys.exit(main(vars(parse_args())))


if __name__ == "__main__":
    run()
