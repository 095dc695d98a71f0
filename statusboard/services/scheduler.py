"""Background scheduler that triggers periodic board maintenance."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

LOGGER = logging.getLogger("statusboard.scheduler")


@dataclass
class ScheduledTask:
    name: str
    interval: float
    handler: Callable[[], object]
    last_run: float = 0.0


class SchedulerService:
    def __init__(self, resolution: float = 0.05):
        self.resolution = max(0.001, float(resolution))
        self._tasks: Dict[str, ScheduledTask] = {}
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None

    def add_task(self, name: str, interval: float, handler: Callable[[], object]) -> None:
        self._tasks[name] = ScheduledTask(name=name, interval=interval, handler=handler)

    def remove_task(self, name: str) -> None:
        self._tasks.pop(name, None)

    def run_pending(self, now: float | None = None) -> int:
        now = time.monotonic() if now is None else now
        ran = 0
        for task in list(self._tasks.values()):
            if now - task.last_run >= task.interval:
                try:
                    task.handler()
                    task.last_run = now
                    ran += 1
                except Exception as exc:
                    LOGGER.exception("Scheduled task %s failed: %s", task.name, exc)
        return ran

    def start(self) -> None:
        if self._thread:
            return

        def _loop():
            while not self._stop.is_set():
                self.run_pending()
                self._stop.wait(self.resolution)

        self._thread = threading.Thread(target=_loop, name="statusboard-scheduler", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread:
            self._stop.set()
            self._thread.join(timeout=2)
            self._thread = None
            self._stop.clear()
