import pytest

from pathviz.core.config import MAX_SPEED, RunConfig, resolve_config
from pathviz.core.types import Algorithm


def test_defaults():
    cfg = resolve_config(environ={}, argv=[])
    assert cfg == RunConfig()
    assert cfg.algorithm == Algorithm.ASTAR
    assert not cfg.use_diagonals
    assert cfg.record_trace


def test_environment_overrides():
    cfg = resolve_config(environ={
        "PATHVIZ_ALGO": "bfs",
        "PATHVIZ_DIAGONALS": "yes",
        "PATHVIZ_TRACE": "0",
        "PATHVIZ_HEURISTIC": "Chebyshev",
        "PATHVIZ_SPEED": "20",
    }, argv=[])
    assert cfg == RunConfig(Algorithm.BFS, True, False, "chebyshev", 20)


def test_command_line_wins_over_environment():
    cfg = resolve_config(environ={"PATHVIZ_ALGO": "bfs"},
                         argv=["--algo=A*", "--diagonals=on", "ignored", "--unknown=1"])
    assert cfg.algorithm == Algorithm.ASTAR
    assert cfg.use_diagonals


def test_speed_is_clamped():
    assert resolve_config(environ={}, argv=["--speed=500"]).steps_per_sec == MAX_SPEED
    assert resolve_config(environ={}, argv=["--speed=0"]).steps_per_sec == 1


@pytest.mark.parametrize("argv", [["--trace=maybe"], ["--heuristic=euclid"],
                                  ["--algo=dijkstra"], ["--speed=fast"]])
def test_bad_values_raise(argv):
    with pytest.raises(ValueError):
        resolve_config(environ={}, argv=argv)


@pytest.mark.parametrize("label", ["A*", "astar", "a_star", "Breadth First Search", "BFS"])
def test_algorithm_labels(label):
    assert isinstance(Algorithm.parse(label), Algorithm)


def test_hand_built_config_rejects_unknown_heuristic():
    with pytest.raises(ValueError):
        RunConfig(heuristic="bogus")
