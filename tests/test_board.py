import json

import pytest

from pathviz.core.board import Board, board_from_dict, load_map
from pathviz.core.errors import MapFormatError, OutOfBoundsError
from pathviz.core.types import Cell


def test_new_board_is_free_and_unconfigured():
    board = Board(4, 3)
    assert all(c == Cell.FREE for row in board.cells for c in row)
    assert board.start is None and board.end is None
    assert not board.is_configured


def test_zero_sized_board_rejected():
    with pytest.raises(ValueError):
        Board(0, 5)


def test_placing_second_start_frees_the_first():
    board = Board(5, 5)
    board.set_tile(Cell.START, 1, 1)
    board.set_tile(Cell.START, 3, 2)
    assert board.start == (3, 2)
    assert board.get_tile(1, 1) == Cell.FREE
    assert board.get_tile(3, 2) == Cell.START


def test_placing_second_end_frees_the_first():
    board = Board(5, 5)
    board.set_tile(Cell.END, 0, 0)
    board.set_tile(Cell.END, 4, 4)
    assert board.end == (4, 4)
    assert board.get_tile(0, 0) == Cell.FREE


def test_overwriting_start_with_wall_unsets_it():
    board = Board(3, 3)
    board.set_tile(Cell.START, 1, 1)
    board.set_tile(Cell.WALL, 1, 1)
    assert board.start is None
    assert board.get_tile(1, 1) == Cell.WALL


def test_end_placed_on_start_unsets_start():
    board = Board(3, 3)
    board.set_tile(Cell.START, 1, 1)
    board.set_tile(Cell.END, 1, 1)
    assert board.start is None
    assert board.end == (1, 1)


def test_clear_resets_everything():
    board = Board.from_rows(["S#", "#E"])
    board.clear()
    assert board.to_rows() == ["..", ".."]
    assert not board.is_configured


def test_out_of_bounds_access_fails_fast():
    board = Board(3, 2)
    with pytest.raises(OutOfBoundsError):
        board.get_tile(3, 0)
    with pytest.raises(OutOfBoundsError):
        board.set_tile(Cell.WALL, 0, -1)


def test_rows_round_trip():
    rows = ["S..#", ".#..", "...E"]
    board = Board.from_rows(rows)
    assert board.to_rows() == rows
    assert board.start == (0, 0)
    assert board.end == (3, 2)


@pytest.mark.parametrize("rows", [[], ["..", "."], ["S.S"], ["E.E"], ["..x"]])
def test_bad_rows_rejected(rows):
    with pytest.raises(MapFormatError):
        Board.from_rows(rows)


def test_snapshot_is_independent():
    board = Board.from_rows(["S..E"])
    snap = board.snapshot()
    board.set_tile(Cell.WALL, 1, 0)
    board.set_tile(Cell.END, 2, 0)
    assert snap.to_rows() == ["S..E"]
    assert snap.end == (3, 0)


def test_load_bundled_map(maps_dir):
    board = load_map(maps_dir / "01_open_field.json")
    assert (board.width, board.height) == (30, 12)
    assert board.start == (3, 5)
    assert board.end == (26, 5)
    assert board.get_tile(9, 2) == Cell.WALL


def test_map_without_goal_is_unconfigured(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps({"width": 2, "height": 1, "cells": [[0, 1]], "start": [0, 0]}))
    board = load_map(path)
    assert board.start == (0, 0)
    assert board.end is None
    assert not board.is_configured


def test_map_size_mismatch_rejected():
    with pytest.raises(MapFormatError):
        board_from_dict({"width": 3, "height": 1, "cells": [[0, 0]]})


def test_map_start_out_of_bounds_rejected():
    with pytest.raises(OutOfBoundsError):
        board_from_dict({"width": 2, "height": 1, "cells": [[0, 0]], "start": [5, 0]})


def test_invalid_json_is_a_map_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(MapFormatError):
        load_map(path)


def test_is_wall_reads_the_painted_cell():
    board = Board.from_rows(["S#", ".E"])
    assert board.is_wall((1, 0))
    assert not board.is_wall((0, 0))
    assert not board.is_wall((1, 1))
