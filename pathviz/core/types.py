# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple, Optional, Dict, Any, Iterable

if TYPE_CHECKING:
    from pathviz.core.trace import Trace

Coord = Tuple[int, int]  # (x, y) == (col, row)

INF = float("inf")


class Cell(Enum):
    FREE = 0
    START = 1
    WALL = 2
    END = 3

    @classmethod
    def from_char(cls, ch: str) -> "Cell":
        return _CHAR_TO_CELL[ch]

    def to_char(self) -> str:
        return _CELL_TO_CHAR[self]


_CHAR_TO_CELL = {".": Cell.FREE, "S": Cell.START, "#": Cell.WALL, "E": Cell.END}
_CELL_TO_CHAR = {v: k for k, v in _CHAR_TO_CELL.items()}


class Algorithm(Enum):
    ASTAR = "A*"
    BFS = "Breadth First Search"

    @classmethod
    def parse(cls, value: str) -> "Algorithm":
        """Accept the display label or a short name ("astar", "a*", "bfs")."""
        key = value.strip().lower()
        for algo in cls:
            if key == algo.value.lower() or key == algo.name.lower():
                return algo
        if key in ("a*", "a_star", "a-star"):
            return cls.ASTAR
        raise ValueError(f"unknown algorithm: {value!r}")


class NodeState(Enum):
    UNVISITED = 2
    OPEN = 0
    CLOSED = 1


class Color(Enum):
    WHITE = 0
    GRAY = 1
    BLACK = 2


@dataclass(frozen=True)
class Edge:
    x: int
    y: int
    weight: int  # 0 = no traversable edge, 1 = traversable

    @property
    def target(self) -> Coord:
        return (self.x, self.y)


@dataclass(frozen=True)
class Snapshot:
    """One recorded frame: open/gray and closed/black cells after an expansion."""
    open: Tuple[Coord, ...] = ()
    closed: Tuple[Coord, ...] = ()

    @classmethod
    def capture(cls, open_cells: Iterable[Coord], closed_cells: Iterable[Coord]) -> "Snapshot":
        # tuple() copies, so later engine mutation never reaches the frame
        return cls(tuple(open_cells), tuple(closed_cells))


@dataclass
class AStarNode:
    h: int
    state: NodeState = NodeState.UNVISITED
    g: float = INF
    f: float = INF
    parent: Optional[Coord] = None


@dataclass
class BfsNode:
    color: Color = Color.WHITE
    depth: float = INF
    parent: Optional[Coord] = None


@dataclass
class SearchOutcome:
    """What a finished run hands to the playback side."""
    algorithm: Algorithm
    start: Coord
    end: Coord
    path: Tuple[Coord, ...] = ()
    found: bool = False
    expanded: int = 0
    reopened: int = 0
    elapsed_ms: float = 0.0
    snapshots: int = 0
    trace: Optional["Trace"] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def path_length(self) -> int:
        """Number of edges traversed from start to end (0 when unreachable)."""
        if not self.found or self.start == self.end:
            return 0
        return len(self.path) + 1

    def route(self) -> List[Coord]:
        """Full travel-order route start -> end, empty when unreachable."""
        if not self.found:
            return []
        if self.start == self.end:
            return [self.start]
        return [self.start] + list(reversed(self.path)) + [self.end]
