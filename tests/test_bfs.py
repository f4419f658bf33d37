import threading

import pytest

from pathviz.core.bfs import BfsSearch, bfs
from pathviz.core.board import Board
from pathviz.core.errors import SearchCancelled
from pathviz.core.graph import build_graph
from pathviz.core.path import reconstruct
from pathviz.core.trace import Trace
from pathviz.core.types import Cell, Color


def _solve(board, diagonals=False, trace=None):
    graph = build_graph(board, diagonals)
    result = bfs(graph, board.start, board.end, trace=trace)
    return result, reconstruct(result, board.start, board.end)


def test_shortest_hop_count_and_depth_agree():
    board = Board.from_rows([
        "S#...",
        ".#.#.",
        "...#E",
    ])
    result, path = _solve(board)
    assert result.found
    assert len(path) + 1 == 10
    assert result.node(board.end).depth == 10


def test_depths_follow_parents():
    board = Board.from_rows(["S....", ".##..", "....E"])
    result, _ = _solve(board)
    for row in result.nodes:
        for n in row:
            if n.parent is not None:
                assert n.depth == result.node(n.parent).depth + 1


def test_stops_right_after_end_is_discovered():
    board = Board.from_rows(["S.E...."])
    trace = Trace()
    result, path = _solve(board, trace=trace)
    assert path == ((1, 0),)
    # (0,0) then (1,0) expanded; (1,0) discovered the end
    assert result.expanded == 2
    assert result.node(board.end).color == Color.GRAY
    assert result.node((3, 0)).color == Color.WHITE
    assert trace.last().closed == ((0, 0), (1, 0))
    assert trace.last().open == ((2, 0),)


def test_start_equals_end_is_immediate():
    graph = build_graph(Board(3, 3))
    trace = Trace()
    result = bfs(graph, (1, 1), (1, 1), trace=trace)
    assert result.found
    assert result.expanded == 0
    assert trace.appended == 0
    assert reconstruct(result, (1, 1), (1, 1)) == ()


def test_unreachable_end_explores_component_then_stops():
    board = Board.from_rows([
        "S.#..",
        "..#.E",
    ])
    result, path = _solve(board)
    assert not result.found
    assert path == ()
    assert result.parent(board.end) is None
    assert result.expanded == 4
    assert result.node(board.end).color == Color.WHITE


def test_gray_black_snapshots():
    board = Board.from_rows(["S...", "....", "...E"])
    trace = Trace()
    result, _ = _solve(board, trace=trace)
    frames = trace.drain()
    assert len(frames) == result.expanded
    seen = set()
    for f in frames:
        assert len(set(f.closed)) == len(f.closed)
        assert not set(f.open) & set(f.closed)
        seen.update(f.closed)
    black = {(x, y) for y, row in enumerate(result.nodes)
             for x, n in enumerate(row) if n.color == Color.BLACK}
    assert seen == black


def test_diagonal_shortcut():
    board = Board(6, 6)
    board.set_tile(Cell.START, 0, 0)
    board.set_tile(Cell.END, 5, 5)
    _, path = _solve(board, diagonals=True)
    assert len(path) + 1 == 5


def test_step_api():
    board = Board.from_rows(["S..", "..E"])
    search = BfsSearch(build_graph(board), board.start, board.end)
    while search.step():
        pass
    assert search.done
    assert search.result().found


def test_cancel_between_expansions():
    graph = build_graph(Board(5, 5))
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(SearchCancelled):
        bfs(graph, (0, 0), (4, 4), cancel=cancel)
