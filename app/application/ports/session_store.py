from __future__ import annotations

from abc import ABC, abstractmethod

from app.application.client_session import ClientSession


class SessionStorePort(ABC):
    @abstractmethod
    def create(self) -> ClientSession:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> ClientSession | None:
        """Return the session and refresh its activity timestamp, or None if unknown or expired."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        raise NotImplementedError
