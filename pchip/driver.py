#!/usr/bin/env python3

"""
Driver Loop

Runs the two activities that share a CPU:

    * The CPU thread calls step() at the chosen clock speed (instructions per
      second, or as fast as possible if 0).
    * The display loop, on the calling thread, runs at 60Hz.  Each frame it
      processes host inputs, ticks the timers, and hands a framebuffer
      snapshot to the renderer.  Once a second the frame and instruction rates
      are shown in the window title.

The CPU serialises these through its own lock.  Both loops poll a shared
'running' event once per iteration, so stopping takes at most one frame.

If the CPU faults, the fault is logged, both loops stop, and run() raises it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from threading import Event, Thread
from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ
from .cpu import CPUError
from .ram import RAMError
from .stack import StackError

DISPLAY_INTERVAL = 1.0 / TIMER_FREQ
MAX_LAG = 0.1  # Give up catching up if this far behind, in seconds

logger = logging.getLogger(__name__)


class Driver:
    def __init__(self, cpu, renderer, inputs, clock_speed=DEFAULT_CLOCK_SPEED):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.core_interval = None if clock_speed is None or clock_speed <= 0 else 1.0 / clock_speed
        self.running = Event()
        self.fault = None

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

    def run(self):
        self.fault = None
        self.running.set()
        cpu_thread = Thread(target=self._cpu_loop, name="CPU", daemon=True)
        cpu_thread.start()

        try:
            self._display_loop()
        finally:
            # The display loop has ended, for whatever reason, so make sure the CPU follows
            self.running.clear()
            cpu_thread.join()

        if self.fault is not None:
            raise self.fault

    def stop(self):
        self.running.clear()

    def is_running(self):
        return self.running.is_set()

    def _cpu_loop(self):
        cpu = self.cpu
        core_interval = self.core_interval
        running = self.running
        next_time = perf_counter()

        while running.is_set():
            try:
                executed = cpu.step()
            except (CPUError, StackError, RAMError) as err:
                logger.error("Emulation halted by instruction at address 0x%03x: %s", cpu.debug_pc, err)
                self.fault = err
                running.clear()
                return

            if executed:
                self.perf_counter_ops += 1

            if core_interval is not None:
                # Wait for the next instruction, taking into account the time spent on this one
                next_time += core_interval
                delay = next_time - perf_counter()

                if delay > 0:
                    sleep(delay)
                elif delay < -MAX_LAG:
                    next_time = perf_counter()

    def _display_loop(self):
        cpu = self.cpu
        running = self.running
        next_frame_time = perf_counter()
        self.next_perf_report_time = next_frame_time + 1.0

        while running.is_set():
            this_time = perf_counter()

            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = this_time + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.inputs.process_messages(cpu):
                logger.info("Quit requested")
                running.clear()
                break

            cpu.tick_timers()
            self.renderer.draw(cpu.get_framebuffer())
            self.perf_counter_fps += 1

            next_frame_time += DISPLAY_INTERVAL
            delay = next_frame_time - perf_counter()

            if delay > 0:
                sleep(delay)
            elif delay < -MAX_LAG:
                next_frame_time = perf_counter()

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
