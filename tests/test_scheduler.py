import threading

import pytest

from enginecore.scheduler import AsyncScheduler, TaskPriority


def _blocked_scheduler():
    sched = AsyncScheduler(threads=1)
    started = threading.Event()
    gate = threading.Event()

    def block():
        started.set()
        gate.wait(5)

    blocker = sched.submit(block, TaskPriority.LOW)
    assert started.wait(2)
    return sched, gate, blocker


def test_submit_returns_result_with_args_and_kwargs():
    with AsyncScheduler(threads=2) as sched:
        future = sched.submit(lambda a, b, scale=1: (a + b) * scale, TaskPriority.NORMAL, 2, 3, scale=10)
        assert future.result(timeout=2) == 50


def test_exception_is_delivered_through_future():
    def fail():
        raise KeyError("missing")

    with AsyncScheduler(threads=1) as sched:
        future = sched.submit(fail, TaskPriority.HIGH)
        with pytest.raises(KeyError):
            future.result(timeout=2)
        # the worker survives the failure
        assert sched.submit(lambda: "ok", TaskPriority.LOW).result(timeout=2) == "ok"


def test_higher_priority_runs_first():
    sched, gate, blocker = _blocked_scheduler()
    order = []
    try:
        futures = [
            sched.submit(order.append, priority, priority)
            for priority in (TaskPriority.LOW, TaskPriority.HIGH, TaskPriority.NORMAL, TaskPriority.CRITICAL)
        ]
        gate.set()
        for future in futures:
            future.result(timeout=2)
    finally:
        gate.set()
        sched.shutdown()
    assert order == [TaskPriority.CRITICAL, TaskPriority.HIGH, TaskPriority.NORMAL, TaskPriority.LOW]


def test_equal_priority_runs_in_submission_order():
    sched, gate, blocker = _blocked_scheduler()
    order = []
    try:
        futures = [sched.submit(order.append, TaskPriority.NORMAL, n) for n in range(6)]
        gate.set()
        for future in futures:
            future.result(timeout=2)
    finally:
        gate.set()
        sched.shutdown()
    assert order == list(range(6))


def test_shutdown_drains_queued_tasks():
    sched, gate, blocker = _blocked_scheduler()
    futures = [sched.submit(lambda n=n: n * n, TaskPriority.NORMAL) for n in range(4)]
    timer = threading.Timer(0.1, gate.set)
    timer.start()
    sched.shutdown()
    timer.join()
    assert all(future.done() for future in futures)
    assert [future.result() for future in futures] == [n * n for n in range(4)]


def test_submit_after_shutdown_raises():
    sched = AsyncScheduler(threads=1)
    sched.shutdown()
    with pytest.raises(RuntimeError, match="submit on stopped AsyncScheduler"):
        sched.submit(lambda: None, TaskPriority.NORMAL)


def test_invalid_priority_rejected():
    with AsyncScheduler(threads=1) as sched:
        with pytest.raises(ValueError):
            sched.submit(lambda: None, 7)


def test_negative_thread_count_rejected():
    with pytest.raises(ValueError):
        AsyncScheduler(threads=-1)


def test_get_instance_is_shared():
    first = AsyncScheduler.get_instance()
    assert AsyncScheduler.get_instance() is first
    assert first.submit(lambda: 42, TaskPriority.CRITICAL).result(timeout=2) == 42