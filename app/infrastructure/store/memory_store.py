from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Callable

from app.application.client_session import ClientSession
from app.application.ports.session_store import SessionStorePort


class MemorySessionStore(SessionStorePort):
    def __init__(
        self,
        session_factory: Callable[[str], ClientSession],
        ttl_seconds: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: dict[str, ClientSession] = {}
        self._factory = session_factory
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def create(self) -> ClientSession:
        session_id = uuid.uuid4().hex
        session = self._factory(session_id)
        session.last_seen_at = self._clock()
        with self._lock:
            self._evict_expired()
            self._sessions[session_id] = session
        self._logger.info("Session created", extra={"session_id": session_id})
        return session

    def get(self, session_id: str) -> ClientSession | None:
        with self._lock:
            self._evict_expired()
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_seen_at = self._clock()
            return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        self._logger.info("Session deleted", extra={"session_id": session_id})
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [
            sid
            for sid, session in self._sessions.items()
            if session.last_seen_at is not None and now - session.last_seen_at > self._ttl_seconds
        ]
        for sid in expired:
            session = self._sessions.pop(sid)
            session.close()
            self._logger.info("Session expired", extra={"session_id": sid})
