from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class ScheduledHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Cancel the pending callback. No-op if it already ran."""
        raise NotImplementedError


class SchedulerPort(ABC):
    @abstractmethod
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledHandle:
        """Run callback once after delay_seconds."""
        raise NotImplementedError
