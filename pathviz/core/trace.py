# pathviz/core/trace.py
#!/usr/bin/env python3
"""
Trace: FIFO of Snapshots shared by one search thread (producer) and one
playback loop (consumer).

Snapshots are frozen tuples, so only the container needs the lock.
The producer calls close() when the search is over; the consumer knows it
has seen everything once `finished` is true.
"""

import threading
from collections import deque
from typing import Deque, Iterable, List, Optional

from pathviz.core.types import Coord, Snapshot


class Trace:
    def __init__(self):
        self._frames: Deque[Snapshot] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._appended = 0
        self._last: Optional[Snapshot] = None

    # -------------------- producer side --------------------

    def append(self, open_cells: Iterable[Coord], closed_cells: Iterable[Coord]) -> Snapshot:
        snap = Snapshot.capture(open_cells, closed_cells)
        with self._cond:
            self._frames.append(snap)
            self._appended += 1
            self._last = snap
            self._cond.notify_all()
        return snap

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    # -------------------- consumer side --------------------

    def pop(self) -> Optional[Snapshot]:
        """Oldest unread snapshot, or None when nothing is queued right now."""
        with self._cond:
            return self._frames.popleft() if self._frames else None

    def drain(self) -> List[Snapshot]:
        with self._cond:
            out = list(self._frames)
            self._frames.clear()
            return out

    def last(self) -> Optional[Snapshot]:
        """Most recently appended snapshot, popped or not."""
        with self._cond:
            return self._last

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until a snapshot is queued or the trace is closed."""
        with self._cond:
            return bool(self._cond.wait_for(lambda: self._frames or self._closed, timeout))

    # -------------------- state --------------------

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def finished(self) -> bool:
        with self._cond:
            return self._closed and not self._frames

    @property
    def appended(self) -> int:
        with self._cond:
            return self._appended

    def __len__(self) -> int:
        with self._cond:
            return len(self._frames)
