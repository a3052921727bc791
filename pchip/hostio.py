#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host for later writing into RAM.  The
only validation done on a ROM is that it fits in the memory above the program
start address.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import MAX_PROGRAM_SIZE

logger = logging.getLogger(__name__)


class ROMError(Exception):
    pass


def check_rom_size(data):
    if len(data) > MAX_PROGRAM_SIZE:
        raise ROMError("ROM is {} bytes, but only {} bytes fit in memory".format(len(data), MAX_PROGRAM_SIZE))


class Loader:
    def load_binary(self, filename, max_size=-1):
        with open(filename, "rb") as f:
            return f.read(max_size)

    def load_rom(self, filename):
        try:
            # One byte more than fits is enough to reject an oversized or endless source
            data = self.load_binary(filename, MAX_PROGRAM_SIZE + 1)
        except OSError as err:
            raise ROMError("Unable to read ROM '{}': {}".format(filename, err.strerror or err)) from None

        check_rom_size(data)
        logger.info("Loaded ROM '%s' (%d bytes)", filename, len(data))
        return data
