import random
import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from pathviz.core.board import Board
from pathviz.core.types import Cell


@pytest.fixture
def maps_dir() -> Path:
    return ROOT / "maps"


@pytest.fixture
def make_random_board():
    """Factory for seeded random boards with distinct START and END on free cells."""

    def _make(seed: int, width: int = 12, height: int = 9, wall_p: float = 0.3) -> Board:
        rng = random.Random(seed)
        board = Board(width, height)
        for y in range(height):
            for x in range(width):
                if rng.random() < wall_p:
                    board.set_tile(Cell.WALL, x, y)
        cells = [(x, y) for y in range(height) for x in range(width)]
        start, end = rng.sample(cells, 2)
        board.set_tile(Cell.START, *start)
        board.set_tile(Cell.END, *end)
        return board

    return _make
