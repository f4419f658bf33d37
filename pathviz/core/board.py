# pathviz/core/board.py
#!/usr/bin/env python3
"""
Board: the painted grid the editor mutates and every run reads from.

- Cells are stored row-major: cells[y][x].
- At most one START and one END: placing a new one frees the previous cell,
  overwriting either with another kind unsets it.
- snapshot() gives a run its own copy so the editor can keep painting.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathviz.core.errors import MapFormatError, OutOfBoundsError
from pathviz.core.types import Cell, Coord


class Board:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"board must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = []
        self.start: Optional[Coord] = None
        self.end: Optional[Coord] = None
        self.clear()

    # -------------------- editing --------------------

    def clear(self) -> None:
        """Fill with FREE cells and forget START/END."""
        self.cells = [[Cell.FREE for _ in range(self.width)] for _ in range(self.height)]
        self.start = None
        self.end = None

    def set_tile(self, kind: Cell, x: int, y: int) -> None:
        self._check((x, y))
        if kind == Cell.START:
            if self.start is not None and self.start != (x, y):
                self.cells[self.start[1]][self.start[0]] = Cell.FREE
            if self.end == (x, y):
                self.end = None
            self.start = (x, y)
        elif kind == Cell.END:
            if self.end is not None and self.end != (x, y):
                self.cells[self.end[1]][self.end[0]] = Cell.FREE
            if self.start == (x, y):
                self.start = None
            self.end = (x, y)
        else:
            if self.start == (x, y):
                self.start = None
            elif self.end == (x, y):
                self.end = None
        self.cells[y][x] = kind

    def get_tile(self, x: int, y: int) -> Cell:
        self._check((x, y))
        return self.cells[y][x]

    # -------------------- queries --------------------

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, c: Coord) -> bool:
        x, y = c
        return self.cells[y][x] == Cell.WALL

    @property
    def is_configured(self) -> bool:
        return self.start is not None and self.end is not None

    def snapshot(self) -> "Board":
        """Independent copy; later edits to self never reach it."""
        copy = Board.__new__(Board)
        copy.width = self.width
        copy.height = self.height
        copy.cells = [row[:] for row in self.cells]
        copy.start = self.start
        copy.end = self.end
        return copy

    def _check(self, c: Coord) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(c, self.width, self.height)

    # -------------------- text form --------------------

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build from ASCII rows: '.' free, '#' wall, 'S' start, 'E' end."""
        if not rows:
            raise MapFormatError("no rows")
        width = len(rows[0])
        if width == 0 or any(len(r) != width for r in rows):
            raise MapFormatError("rows must be non-empty and of equal length")
        board = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                try:
                    kind = Cell.from_char(ch)
                except KeyError:
                    raise MapFormatError(f"unknown cell {ch!r} at ({x}, {y})") from None
                if kind == Cell.START and board.start is not None:
                    raise MapFormatError("more than one start")
                if kind == Cell.END and board.end is not None:
                    raise MapFormatError("more than one end")
                board.set_tile(kind, x, y)
        return board

    def to_rows(self) -> List[str]:
        return ["".join(c.to_char() for c in row) for row in self.cells]

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, start={self.start}, end={self.end})"


# ---------- Loader ----------
def load_map(path: Union[str, Path]) -> Board:
    """
    Read a JSON map: width, height, cells ([row][col], 0 free / 1 wall),
    optional start/goal as [x, y]. A missing start or goal leaves the board
    unconfigured.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as ex:
        raise MapFormatError(f"{path}: {ex}") from ex
    return board_from_dict(data)


def board_from_dict(data: dict) -> Board:
    try:
        width = int(data["width"])
        height = int(data["height"])
        cells = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"missing or invalid field: {ex}") from ex
    if len(cells) != height or any(len(r) != width for r in cells):
        raise MapFormatError("cells size mismatch")

    board = Board(width, height)
    for y, row in enumerate(cells):
        for x, v in enumerate(row):
            if v == 1:
                board.set_tile(Cell.WALL, x, y)
            elif v != 0:
                raise MapFormatError(f"unknown cell value {v!r} at ({x}, {y})")

    for key, kind in (("start", Cell.START), ("goal", Cell.END)):
        raw = data.get(key)
        if raw is None:
            continue
        try:
            x, y = (int(v) for v in raw)
        except (TypeError, ValueError) as ex:
            raise MapFormatError(f"{key} must be [x, y], got {raw!r}") from ex
        board.set_tile(kind, x, y)
    return board
