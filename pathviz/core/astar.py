# pathviz/core/astar.py
#!/usr/bin/env python3
"""
A* over a WeightedGraph, one expansion per step(), run() loops to the end.

Heuristic:
- Manhattan by default (consistent on 4-connected boards).
- Chebyshev on request, for diagonal boards where Manhattan overestimates.

Priority queue:
- heapq of (f, h, -g, seq, cell): lower f, then lower h, then deeper g,
  then FIFO by seq, so runs are deterministic.
- Lazy deletion: relaxing a queued cell pushes a fresh entry and records its
  seq in `live`; older entries for that cell are skipped when popped.

A CLOSED cell whose f improves is reopened. With Manhattan on a
4-connected board that branch never fires; it does with inconsistent
heuristics (Manhattan + diagonals).
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import heapq
import threading

from pathviz.core.errors import SearchCancelled
from pathviz.core.graph import WeightedGraph
from pathviz.core.trace import Trace
from pathviz.core.types import AStarNode, Coord, NodeState


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


HEURISTICS: Dict[str, Callable[[Coord, Coord], int]] = {
    "manhattan": manhattan,
    "chebyshev": chebyshev,
}


@dataclass
class AStarResult:
    nodes: List[List[AStarNode]]  # [y][x]
    start: Coord
    end: Coord
    expanded: int = 0
    reopened: int = 0

    def node(self, c: Coord) -> AStarNode:
        return self.nodes[c[1]][c[0]]

    def parent(self, c: Coord) -> Optional[Coord]:
        return self.node(c).parent

    @property
    def found(self) -> bool:
        return self.start == self.end or self.parent(self.end) is not None


@dataclass
class AStarSearch:
    graph: WeightedGraph
    start: Coord
    end: Coord
    trace: Optional[Trace] = None
    heuristic: str = "manhattan"
    name: str = "A*"

    # Internal state
    nodes: List[List[AStarNode]] = field(default_factory=list)
    open_pq: List[Tuple[float, int, float, int, Coord]] = field(default_factory=list)
    live: Dict[Coord, int] = field(default_factory=dict)     # cell -> seq of its valid entry
    open_cells: Dict[Coord, None] = field(default_factory=dict)    # insertion-ordered sets
    closed_cells: Dict[Coord, None] = field(default_factory=dict)
    expanded: int = 0
    reopened: int = 0
    done: bool = False
    seq: int = 0

    def __post_init__(self):
        self.graph.check(self.start)
        self.graph.check(self.end)
        try:
            self._h = HEURISTICS[self.heuristic]
        except KeyError:
            raise ValueError(f"unknown heuristic: {self.heuristic!r}") from None
        self.reset()

    # -------------------- lifecycle --------------------

    def reset(self) -> None:
        """Fresh node table seeded with the start cell."""
        g = self.graph
        self.nodes = [[AStarNode(h=self._h((x, y), self.end)) for x in range(g.width)]
                      for y in range(g.height)]
        self.open_pq.clear()
        self.live.clear()
        self.open_cells.clear()
        self.closed_cells.clear()
        self.expanded = 0
        self.reopened = 0
        self.done = False
        self.seq = 0

        s = self._node(self.start)
        s.g = 0
        s.f = s.h
        s.state = NodeState.OPEN
        self._push(self.start, s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _node(self, c: Coord) -> AStarNode:
        return self.nodes[c[1]][c[0]]

    def _push(self, c: Coord, n: AStarNode) -> None:
        seq = self._bump()
        self.live[c] = seq
        heapq.heappush(self.open_pq, (n.f, n.h, -n.g, seq, c))
        self.open_cells.pop(c, None)
        self.open_cells[c] = None

    def _pop(self) -> Optional[Coord]:
        while self.open_pq:
            _, _, _, seq, c = heapq.heappop(self.open_pq)
            if self.live.get(c) == seq:
                del self.live[c]
                return c
        return None

    # -------------------- main stepping logic --------------------

    def step(self) -> bool:
        """
        One expansion. Returns False once the goal is popped or the open
        queue is exhausted.
        """
        if self.done:
            return False
        cur = self._pop()
        if cur is None or cur == self.end:
            self.done = True
            return False

        cn = self._node(cur)
        for e in self.graph.edges(cur):
            if e.weight == 0:
                continue
            nb = e.target
            n = self._node(nb)
            new_g = cn.g + e.weight
            new_f = n.h + new_g
            if new_f >= n.f:
                continue
            if n.state == NodeState.CLOSED:
                self.reopened += 1
                self.closed_cells.pop(nb, None)
            n.g = new_g
            n.f = new_f
            n.parent = cur
            n.state = NodeState.OPEN
            self._push(nb, n)

        self.open_cells.pop(cur, None)
        cn.state = NodeState.CLOSED
        self.closed_cells[cur] = None
        self.expanded += 1

        if self.trace is not None:
            self.trace.append(self.open_cells, self.closed_cells)
        return True

    def run(self, cancel: Optional[threading.Event] = None) -> AStarResult:
        while True:
            if cancel is not None and cancel.is_set():
                raise SearchCancelled(f"{self.name} cancelled after {self.expanded} expansions")
            if not self.step():
                break
        return self.result()

    def result(self) -> AStarResult:
        return AStarResult(self.nodes, self.start, self.end,
                           expanded=self.expanded, reopened=self.reopened)


def a_star(graph: WeightedGraph, start: Coord, end: Coord,
           trace: Optional[Trace] = None,
           cancel: Optional[threading.Event] = None,
           heuristic: str = "manhattan") -> AStarResult:
    """Run A* to completion and return the per-cell node table."""
    return AStarSearch(graph, start, end, trace=trace, heuristic=heuristic).run(cancel)
