from pathviz.app.playback import Playback
from pathviz.core.board import Board
from pathviz.core.runner import run_search
from pathviz.core.trace import Trace


def _recorded_run():
    board = Board.from_rows(["S...E"])
    trace = Trace()
    outcome = run_search(board, trace=trace)
    trace.close()
    return trace, outcome


def test_one_frame_per_interval():
    trace, outcome = _recorded_run()
    pb = Playback(steps_per_sec=10)
    pb.start(trace)
    pb.set_outcome(outcome)

    assert pb.tick(now=0.0)
    assert pb.closed_cells == ((0, 0),)
    assert not pb.tick(now=0.05)
    assert pb.tick(now=0.1)
    assert pb.closed_cells == ((0, 0), (1, 0))
    assert pb.path == []


def test_path_shown_once_trace_is_exhausted():
    trace, outcome = _recorded_run()
    pb = Playback(steps_per_sec=60)
    pb.start(trace)
    pb.set_outcome(outcome)
    t = 0.0
    while not pb.finished:
        pb.tick(now=t)
        t += 1.0
    assert pb.frames_shown == outcome.snapshots
    assert pb.path == outcome.route()


def test_visualization_off_jumps_to_last_frame():
    trace, outcome = _recorded_run()
    pb = Playback(show_visualization=False)
    pb.start(trace)
    assert pb.tick()
    assert pb.frame == trace.last()
    assert pb.finished
    assert not pb.tick()


def test_speed_bump_is_clamped():
    pb = Playback(steps_per_sec=59)
    pb.bump_speed(+5)
    assert pb.steps_per_sec == 60
    pb.bump_speed(-100)
    assert pb.steps_per_sec == 1


def test_idle_playback():
    pb = Playback()
    assert not pb.tick()
    assert pb.finished
    assert pb.open_cells == () and pb.closed_cells == ()
    assert pb.path == []
