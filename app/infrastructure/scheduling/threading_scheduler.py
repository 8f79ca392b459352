from __future__ import annotations

import threading
from typing import Callable

from app.application.ports.scheduler import ScheduledHandle, SchedulerPort


class _TimerHandle(ScheduledHandle):
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler(SchedulerPort):
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return _TimerHandle(timer)
