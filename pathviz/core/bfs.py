# pathviz/core/bfs.py
#!/usr/bin/env python3
"""
Breadth-first search over a WeightedGraph.

Edges are unweighted, so the first time END is discovered its depth is
already the shortest hop count: the search stops right after the
expansion that gave END a parent.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional
import threading

from pathviz.core.errors import SearchCancelled
from pathviz.core.graph import WeightedGraph
from pathviz.core.trace import Trace
from pathviz.core.types import BfsNode, Color, Coord


@dataclass
class BfsResult:
    nodes: List[List[BfsNode]]  # [y][x]
    start: Coord
    end: Coord
    expanded: int = 0

    def node(self, c: Coord) -> BfsNode:
        return self.nodes[c[1]][c[0]]

    def parent(self, c: Coord) -> Optional[Coord]:
        return self.node(c).parent

    @property
    def found(self) -> bool:
        return self.start == self.end or self.parent(self.end) is not None


@dataclass
class BfsSearch:
    graph: WeightedGraph
    start: Coord
    end: Coord
    trace: Optional[Trace] = None
    name: str = "BFS"

    nodes: List[List[BfsNode]] = field(default_factory=list)
    queue: Deque[Coord] = field(default_factory=deque)
    gray: Dict[Coord, None] = field(default_factory=dict)
    black: Dict[Coord, None] = field(default_factory=dict)
    expanded: int = 0
    done: bool = False

    def __post_init__(self):
        self.graph.check(self.start)
        self.graph.check(self.end)
        self.reset()

    def reset(self) -> None:
        g = self.graph
        self.nodes = [[BfsNode() for _ in range(g.width)] for _ in range(g.height)]
        self.queue.clear()
        self.gray.clear()
        self.black.clear()
        self.expanded = 0
        self.done = self.start == self.end

        s = self._node(self.start)
        s.color = Color.GRAY
        s.depth = 0
        self.queue.append(self.start)
        self.gray[self.start] = None

    def _node(self, c: Coord) -> BfsNode:
        return self.nodes[c[1]][c[0]]

    def step(self) -> bool:
        if self.done or not self.queue:
            self.done = True
            return False

        cur = self.queue.popleft()
        cn = self._node(cur)
        for nb in self.graph.neighbors(cur):
            n = self._node(nb)
            if n.color != Color.WHITE:
                continue
            n.color = Color.GRAY
            n.depth = cn.depth + 1
            n.parent = cur
            self.queue.append(nb)
            self.gray[nb] = None

        cn.color = Color.BLACK
        self.gray.pop(cur, None)
        self.black[cur] = None
        self.expanded += 1

        if self.trace is not None:
            self.trace.append(self.gray, self.black)

        if self._node(self.end).parent is not None:
            self.done = True
            return False
        return True

    def run(self, cancel: Optional[threading.Event] = None) -> BfsResult:
        while True:
            if cancel is not None and cancel.is_set():
                raise SearchCancelled(f"{self.name} cancelled after {self.expanded} expansions")
            if not self.step():
                break
        return self.result()

    def result(self) -> BfsResult:
        return BfsResult(self.nodes, self.start, self.end, expanded=self.expanded)


def bfs(graph: WeightedGraph, start: Coord, end: Coord,
        trace: Optional[Trace] = None,
        cancel: Optional[threading.Event] = None) -> BfsResult:
    """Run BFS to completion (or early stop) and return the color/depth/parent table."""
    return BfsSearch(graph, start, end, trace=trace).run(cancel)
