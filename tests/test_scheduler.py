import threading

from statusboard.services import SchedulerService


def test_run_pending_respects_interval():
    calls = []
    scheduler = SchedulerService()
    scheduler.add_task("tick", 10.0, lambda: calls.append("tick"))

    assert scheduler.run_pending(now=100.0) == 1
    assert scheduler.run_pending(now=105.0) == 0
    assert scheduler.run_pending(now=110.0) == 1
    assert calls == ["tick", "tick"]


def test_failing_task_is_logged_and_retried(caplog):
    attempts = []

    def broken():
        attempts.append(1)
        raise RuntimeError("boom")

    scheduler = SchedulerService()
    scheduler.add_task("broken", 10.0, broken)
    assert scheduler.run_pending(now=100.0) == 0
    assert scheduler.run_pending(now=101.0) == 0
    assert len(attempts) == 2
    assert "Scheduled task broken failed" in caplog.text


def test_remove_task():
    scheduler = SchedulerService()
    scheduler.add_task("tick", 0.0, lambda: None)
    scheduler.remove_task("tick")
    scheduler.remove_task("missing")
    assert scheduler.run_pending(now=1.0) == 0


def test_background_thread():
    ran = threading.Event()
    scheduler = SchedulerService(resolution=0.01)
    scheduler.add_task("tick", 0.0, ran.set)
    scheduler.start()
    try:
        assert scheduler.running
        assert ran.wait(timeout=2)
    finally:
        scheduler.stop()
    assert not scheduler.running
