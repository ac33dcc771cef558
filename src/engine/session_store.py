"""Volatile in-memory session map keyed by user id.

Everything here is lost when the process restarts.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional

from src.engine.state import Session


class SessionStore:
    """Thread-safe ``user_id -> Session`` map."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(user_id)

    def put(self, session: Session) -> None:
        """Store *session*, replacing any earlier story for the same user."""
        with self._lock:
            self._sessions[session.user_id] = session

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
