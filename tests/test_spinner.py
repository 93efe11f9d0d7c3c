import io
import threading

from chanworks.spinner import fib, main, spinner


def test_fib_small_values():
    assert [fib(0), fib(1)] == [0, 1]


def test_fib_known_value():
    assert fib(10) == 55


def test_fib_recurrence():
    for n in range(2, 20):
        assert fib(n) == fib(n - 1) + fib(n - 2)


def test_spinner_stopped_writes_nothing():
    stop = threading.Event()
    stop.set()
    out = io.StringIO()
    spinner(0.01, stop, out)
    assert out.getvalue() == ""


def test_spinner_cycles_frames_in_order():
    stop = threading.Event()
    out = io.StringIO()
    timer = threading.Timer(0.05, stop.set)
    timer.start()
    result = spinner(0.001, stop, out)
    timer.join(2)
    assert result is None
    assert stop.is_set()
    frames = out.getvalue().split("\r")[1:]
    assert len(frames) >= 1
    cycle = "-\\|/"
    assert frames == [cycle[i % len(cycle)] for i in range(len(frames))]


def test_main_prints_result(capsys):
    assert main(["15"]) == 0
    out = capsys.readouterr().out
    assert out.endswith(f"\rFibonacci(15) = {fib(15)}\n")