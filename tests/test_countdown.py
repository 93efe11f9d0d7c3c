import io
import sys
import threading

from chanworks.countdown import countdown, launch, main

HEADER = "Commencing countdown.  Press return to abort."


def test_launch_message():
    out = io.StringIO()
    launch(out)
    assert out.getvalue() == "Lift off!\n"


def test_countdown_runs_to_launch():
    out = io.StringIO()
    assert countdown(3, 0, threading.Event(), out) is True
    lines = out.getvalue().splitlines()
    assert lines[0] == HEADER
    assert lines[1:-1] == [str(n) for n in range(3, 0, -1)]
    assert lines[-1] == "Lift off!"


def test_countdown_aborted_stops_after_first_number():
    abort = threading.Event()
    abort.set()
    out = io.StringIO()
    assert countdown(5, 10, abort, out) is False
    assert out.getvalue().splitlines() == [HEADER, "5", "Launch aborted!"]


def test_countdown_abort_midway():
    abort = threading.Event()
    out = io.StringIO()
    timer = threading.Timer(0.05, abort.set)
    timer.start()
    launched = countdown(1000, 0.01, abort, out)
    timer.join()
    lines = out.getvalue().splitlines()
    assert launched is False
    assert lines[-1] == "Launch aborted!"
    assert "Lift off!" not in lines


def test_countdown_zero_launches_immediately():
    out = io.StringIO()
    assert countdown(0, 10, threading.Event(), out) is True
    assert out.getvalue().splitlines() == [HEADER, "Lift off!"]


def test_main_aborts_on_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
    assert main(["-n", "3", "-i", "5"]) == 0
    out = capsys.readouterr().out
    assert "Launch aborted!" in out
    assert "Lift off!" not in out