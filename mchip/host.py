#!/usr/bin/env python3

"""
Presentation Host

Owns all timing.  The CPU has no clock of its own, so once per rendered frame
(60Hz) the host:

    1. Processes host inputs, passing key presses/releases to the CPU
    2. Runs a fixed number of CPU cycles (the throughput multiplier)
    3. Decrements the CPU timers once for every 1/60th of a second of real time
       which has passed, catching up if frames arrived late
    4. Ends the frame, releasing the CPU's display wait
    5. Renders the frame snapshot, if it has changed

Timer decrements are tied to wall-clock time rather than the number of
instructions run, so the timers count down at the right speed whatever the
cycles-per-frame setting is, and even if the host is lagging.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CYCLES_PER_FRAME, DISPLAY_INTERVAL, TIMER_INTERVAL, TIMER_MAX_BACKLOG


class HostError(Exception):
    pass


class Host:
    def __init__(self, cpu, inputs, renderer, cycles_per_frame=None, clock=perf_counter):
        self.cpu = cpu
        self.inputs = inputs
        self.renderer = renderer
        self.cycles_per_frame = DEFAULT_CYCLES_PER_FRAME if cycles_per_frame is None else cycles_per_frame
        self.clock = clock

        if self.cycles_per_frame < 1:
            raise HostError("At least one CPU cycle per frame is required")

        self.last_timer_update = 0
        self.last_snapshot = None

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        this_time = self.clock()
        self.last_timer_update = this_time
        next_frame_time = this_time

        while self.run_frame():
            # Wait for the next frame, unless we're already running late
            next_frame_time += DISPLAY_INTERVAL
            this_time = self.clock()

            if next_frame_time > this_time:
                sleep(next_frame_time - this_time)
            else:
                next_frame_time = this_time

    def run_frame(self):
        # Returns False once the host has asked to quit
        if self.inputs.process_messages(self.cpu):
            return False

        cpu = self.cpu

        for _ in range(self.cycles_per_frame):
            if cpu.cycle():
                self.perf_counter_ops += 1

        this_time = self.clock()
        self.update_timers(this_time)
        cpu.end_frame()
        self.render()
        self.update_perf(this_time)
        return True

    def update_timers(self, this_time):
        # Returns the number of 60Hz ticks applied.  The tick deadline advances by exact intervals, so a frame which
        # arrives slightly early or late never loses a tick, and a lagging host catches up on the next frame.
        if this_time - self.last_timer_update > TIMER_MAX_BACKLOG:
            # Far behind (e.g. the process was suspended), so drop the excess rather than burst through it
            self.last_timer_update = this_time - TIMER_MAX_BACKLOG

        ticks = 0

        while this_time - self.last_timer_update >= TIMER_INTERVAL:
            self.cpu.decrement_timers()
            self.last_timer_update += TIMER_INTERVAL
            ticks += 1

        return ticks

    def render(self):
        snapshot = self.cpu.snapshot()
        content_changed = snapshot != self.last_snapshot

        if content_changed:
            self.renderer.draw_frame(snapshot)
            self.last_snapshot = snapshot

        self.renderer.refresh_display(content_changed)
        self.perf_counter_fps += 1

    def update_perf(self, this_time):
        if this_time >= self.next_perf_report_time:
            self.next_perf_report_time = int(this_time) + 1.0
            self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
            self.perf_counter_ops = 0
            self.perf_counter_fps = 0

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
