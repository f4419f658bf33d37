# pathviz/core/runner.py
#!/usr/bin/env python3
"""
Run orchestration: validate the board, build the graph, dispatch to the
selected algorithm, rebuild the path and time the whole thing.

run_search() is synchronous. SearchWorker wraps it in a thread so a
playback loop can drain the Trace while the search is still producing it.
"""

import logging
import threading
import time
from typing import Optional, Union

from pathviz.core.astar import AStarResult, a_star
from pathviz.core.bfs import BfsResult, bfs
from pathviz.core.board import Board
from pathviz.core.config import RunConfig
from pathviz.core.errors import ConfigurationError, PathvizError, SearchCancelled
from pathviz.core.graph import build_graph
from pathviz.core.path import reconstruct
from pathviz.core.trace import Trace
from pathviz.core.types import Algorithm, SearchOutcome

logger = logging.getLogger(__name__)


def _require_configured(board: Board) -> None:
    if not board.is_configured:
        logger.warning("START and END nodes required.")
        raise ConfigurationError("START and END nodes required")


def run_search(board: Board,
               config: Optional[RunConfig] = None,
               trace: Optional[Trace] = None,
               cancel: Optional[threading.Event] = None) -> SearchOutcome:
    """
    Search `board` with the settings in `config`.

    Snapshots go to `trace` only when config.record_trace is set; a missing
    trace is created in that case and returned on the outcome.
    """
    config = config or RunConfig()
    _require_configured(board)

    frozen = board.snapshot()
    start, end = frozen.start, frozen.end
    if config.record_trace:
        trace = trace if trace is not None else Trace()
    else:
        trace = None

    t0 = time.perf_counter()
    graph = build_graph(frozen, config.use_diagonals)
    if config.algorithm == Algorithm.ASTAR:
        result: Union[AStarResult, BfsResult] = a_star(
            graph, start, end, trace=trace, cancel=cancel, heuristic=config.heuristic)
    else:
        result = bfs(graph, start, end, trace=trace, cancel=cancel)
    path = reconstruct(result, start, end)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    outcome = SearchOutcome(
        algorithm=config.algorithm,
        start=start,
        end=end,
        path=path,
        found=result.found,
        expanded=result.expanded,
        reopened=getattr(result, "reopened", 0),
        elapsed_ms=elapsed_ms,
        snapshots=trace.appended if trace is not None else 0,
        trace=trace,
    )
    outcome.metrics = {
        "algo": config.algorithm.value,
        "popped": outcome.expanded,
        "reopened": outcome.reopened,
        "path_len": outcome.path_length,
        "snapshots": outcome.snapshots,
        "elapsed_ms": round(elapsed_ms, 3),
    }
    if outcome.found:
        logger.info("Computation finished in: %d ms. Shortest path: %d blocks.",
                    round(elapsed_ms), outcome.path_length)
    else:
        logger.info("Computation finished in: %d ms. No path from %s to %s.",
                    round(elapsed_ms), start, end)
    return outcome


class SearchWorker(threading.Thread):
    """
    Runs one search on a background thread.

    The board is copied on construction, so the caller may keep editing it.
    The trace is closed when the thread finishes, whatever the outcome.
    """

    def __init__(self, board: Board, config: Optional[RunConfig] = None,
                 trace: Optional[Trace] = None):
        super().__init__(name="pathviz-search", daemon=True)
        _require_configured(board)
        self.board = board.snapshot()
        self.config = config or RunConfig()
        self.trace = trace if trace is not None else Trace()
        self.outcome: Optional[SearchOutcome] = None
        self.error: Optional[Exception] = None
        self._cancel = threading.Event()

    def run(self) -> None:
        try:
            self.outcome = run_search(self.board, self.config, self.trace, self._cancel)
        except SearchCancelled as ex:
            logger.info("%s", ex)
            self.error = ex
        except PathvizError as ex:
            logger.error("search failed: %s", ex)
            self.error = ex
        except Exception as ex:
            logger.exception("search crashed")
            self.error = ex
        finally:
            self.trace.close()

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()
