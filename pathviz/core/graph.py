# pathviz/core/graph.py
#!/usr/bin/env python3
"""
Board -> weighted adjacency structure.

Every cell gets a fixed-size tuple of edges (4, or 8 with diagonals).
An edge has weight 1 when the target is in bounds and neither endpoint is
a wall, weight 0 otherwise. Diagonals are allowed to cut corners.
"""

from typing import Iterator, List, Tuple

from pathviz.core.board import Board
from pathviz.core.errors import OutOfBoundsError
from pathviz.core.types import Coord, Edge

DIR4: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAG4: Tuple[Coord, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class WeightedGraph:
    """Immutable adjacency table, edges[y][x] -> tuple of Edge."""

    __slots__ = ("width", "height", "diagonals", "_edges")

    def __init__(self, width: int, height: int, diagonals: bool,
                 edges: Tuple[Tuple[Tuple[Edge, ...], ...], ...]):
        self.width = width
        self.height = height
        self.diagonals = diagonals
        self._edges = edges

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def check(self, c: Coord) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(c, self.width, self.height)

    def edges(self, c: Coord) -> Tuple[Edge, ...]:
        x, y = c
        return self._edges[y][x]

    def neighbors(self, c: Coord) -> Iterator[Coord]:
        """Targets of the traversable (weight > 0) edges out of c."""
        for e in self.edges(c):
            if e.weight > 0:
                yield e.target

    def cells(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    @property
    def degree(self) -> int:
        return 8 if self.diagonals else 4


def build_graph(board: Board, use_diagonals: bool = False) -> WeightedGraph:
    """Pure function of (board, use_diagonals); O(width * height * k)."""
    offsets = DIR4 + DIAG4 if use_diagonals else DIR4
    rows: List[Tuple[Tuple[Edge, ...], ...]] = []
    for y in range(board.height):
        row: List[Tuple[Edge, ...]] = []
        for x in range(board.width):
            blocked = board.is_wall((x, y))
            out: List[Edge] = []
            for dx, dy in offsets:
                nx, ny = x + dx, y + dy
                ok = (not blocked
                      and board.in_bounds((nx, ny))
                      and not board.is_wall((nx, ny)))
                out.append(Edge(nx, ny, 1 if ok else 0))
            row.append(tuple(out))
        rows.append(tuple(row))
    return WeightedGraph(board.width, board.height, use_diagonals, tuple(rows))
