from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from app.application.ports.scheduler import ScheduledHandle, SchedulerPort


@dataclass
class _ManualHandle(ScheduledHandle):
    due_at: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(SchedulerPort):
    """Scheduler driven by an explicit clock; nothing runs until advance() is called."""

    now: float = 0.0
    _handles: list[_ManualHandle] = field(default_factory=list)

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        handle = _ManualHandle(due_at=self.now + delay_seconds, callback=callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled and not h.fired)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that came due. Returns how many ran."""
        self.now += seconds
        due = [h for h in self._handles if not h.cancelled and not h.fired and h.due_at <= self.now]
        for handle in sorted(due, key=lambda h: h.due_at):
            handle.fired = True
            handle.callback()
        self._handles = [h for h in self._handles if not h.cancelled and not h.fired]
        if due:
            logging.getLogger(__name__).debug("Manual scheduler fired %s callbacks", len(due))
        return len(due)
