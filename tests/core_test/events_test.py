import threading

import pytest

from conecta.core.events import EventLoop


def test_run_pending_is_fifo():
    loop = EventLoop()
    order = []
    for i in range(5):
        loop.post(order.append, i)

    assert loop.run_pending() == 5
    assert order == [0, 1, 2, 3, 4]
    assert loop.run_pending() == 0


def test_call_without_worker_runs_inline_after_queue():
    loop = EventLoop()
    order = []
    loop.post(order.append, "tick")

    result = loop.call(lambda: order.append("command") or len(order))

    assert order == ["tick", "command"]
    assert result == 2


def test_call_on_worker_thread():
    loop = EventLoop()
    loop.start()
    try:
        name = loop.call(lambda: threading.current_thread().name)
    finally:
        loop.stop()

    assert name == "core-loop"


def test_call_reraises_errors():
    loop = EventLoop()
    loop.start()

    def boom():
        raise ValueError("bad input")

    try:
        with pytest.raises(ValueError):
            loop.call(boom)
        # loop keeps working afterwards
        assert loop.call(lambda: 42) == 42
    finally:
        loop.stop()


def test_failing_posted_event_does_not_stop_the_loop():
    loop = EventLoop()
    done = []

    def boom():
        raise RuntimeError("tick failed")

    loop.post(boom)
    loop.post(done.append, 1)
    loop.run_pending()

    assert done == [1]


def test_stop_drains_queued_work():
    loop = EventLoop()
    loop.start()
    seen = []
    for i in range(20):
        loop.post(seen.append, i)
    loop.stop()

    assert seen == list(range(20))


def test_stop_timeout_keeps_a_single_context():
    loop = EventLoop()
    loop.start()
    release = threading.Event()
    order = []

    def busy():
        release.wait(5)
        order.append("busy")

    loop.post(busy)
    loop.stop(timeout=0.05)
    assert loop.running

    threading.Timer(0.1, release.set).start()
    loop.call(order.append, "command")

    assert order == ["busy", "command"]
    assert not loop.running


def test_call_from_loop_thread_does_not_drain_the_queue():
    loop = EventLoop()
    order = []

    def outer():
        order.append("outer")
        loop.call(order.append, "nested")

    loop.start()
    try:
        loop.post(outer)
        loop.post(order.append, "next")
        loop.call(lambda: None)
    finally:
        loop.stop()

    assert order == ["outer", "nested", "next"]
