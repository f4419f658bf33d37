# pathviz/app/playback.py
#!/usr/bin/env python3
"""
Playback clock: turns a Trace into frames at a fixed cadence.

No pygame in here: the viewer calls tick() once per display frame and
draws whatever open/closed/path the playback currently exposes.
"""

import time
from typing import Callable, List, Optional, Tuple

from pathviz.core.config import clamp_speed
from pathviz.core.trace import Trace
from pathviz.core.types import Coord, SearchOutcome, Snapshot


class Playback:
    def __init__(self, steps_per_sec: int = 8, show_visualization: bool = True,
                 clock: Callable[[], float] = time.monotonic):
        self.steps_per_sec = clamp_speed(steps_per_sec)
        self.show_visualization = show_visualization
        self._clock = clock
        self.trace: Optional[Trace] = None
        self.outcome: Optional[SearchOutcome] = None
        self.frame: Optional[Snapshot] = None
        self.frames_shown = 0
        self._last_step_t: Optional[float] = None

    # -------------------- lifecycle --------------------

    def start(self, trace: Trace) -> None:
        self.trace = trace
        self.outcome = None
        self.frame = None
        self.frames_shown = 0
        self._last_step_t = None

    def stop(self) -> None:
        self.trace = None
        self.outcome = None
        self.frame = None
        self.frames_shown = 0

    def set_outcome(self, outcome: Optional[SearchOutcome]) -> None:
        self.outcome = outcome

    def bump_speed(self, dv: int) -> None:
        self.steps_per_sec = clamp_speed(self.steps_per_sec + dv)

    # -------------------- ticking --------------------

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance at most one frame; returns True when the frame changed."""
        if self.trace is None:
            return False
        if not self.show_visualization:
            frames = self.trace.drain()
            if not frames:
                return False
            self.frame = frames[-1]
            self.frames_shown += len(frames)
            return True

        now = self._clock() if now is None else now
        interval = 1.0 / self.steps_per_sec
        if self._last_step_t is not None and now - self._last_step_t < interval:
            return False
        snap = self.trace.pop()
        if snap is None:
            return False
        self._last_step_t = now
        self.frame = snap
        self.frames_shown += 1
        return True

    # -------------------- what to draw --------------------

    @property
    def finished(self) -> bool:
        return self.trace is None or self.trace.finished

    @property
    def open_cells(self) -> Tuple[Coord, ...]:
        return self.frame.open if self.frame is not None else ()

    @property
    def closed_cells(self) -> Tuple[Coord, ...]:
        return self.frame.closed if self.frame is not None else ()

    @property
    def path(self) -> List[Coord]:
        """Travel-order route, only once every frame has been shown."""
        if self.outcome is None or not self.finished:
            return []
        return self.outcome.route()
