"""Session services for switchyard.

The application talks to sessions only through the SessionService
contract: create a session, fetch it, and record an exchange in it.

InMemorySessionService keeps sessions in process memory behind a
threading lock, so one service may be shared by concurrent
``Application.process`` calls.

Example:
    >>> service = InMemorySessionService()
    >>> session_id = service.create()
    >>> session = service.get_session(session_id)
    >>> service.update(session_id, SessionObject(request_id="r1", request=request))
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Optional, Protocol, runtime_checkable

from switchyard.config.settings import SwitchyardSettings, get_settings
from switchyard.core.exceptions import SessionError, SessionNotFoundError
from switchyard.sessions.session import Session, SessionObject

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionService(Protocol):
    """Storage capability for sessions."""

    def create(self) -> str:
        """Create a session and return its identifier."""
        ...

    def get_session(self, session_id: str) -> Session:
        """Return the session with the given identifier."""
        ...

    def update(self, session_id: str, session_object: SessionObject) -> None:
        """Record an exchange in a session."""
        ...


class InMemorySessionService:
    """Session service backed by a dictionary.

    Data is lost when the process ends.

    Attributes:
        max_history: Exchanges kept per session.
    """

    def __init__(
        self,
        max_history: Optional[int] = None,
        settings: Optional[SwitchyardSettings] = None,
    ) -> None:
        """Initialize the service.

        Args:
            max_history: Exchanges kept per session. Defaults to
                settings.sessions.max_history.
            settings: Settings instance; uses get_settings() if omitted.
        """
        if max_history is None:
            max_history = (settings or get_settings()).sessions.max_history
        self.max_history = max_history
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self) -> str:
        session_id = str(uuid.uuid4())
        with self._lock:
            self._sessions[session_id] = Session(session_id, max_history=self.max_history)
        logger.debug("Created session %s", session_id)
        return session_id

    def get_session(self, session_id: str) -> Session:
        """Return a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def update(self, session_id: str, session_object: SessionObject) -> None:
        """Record an exchange.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionError: If the session is closed.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if not session.is_active:
                raise SessionError(
                    f"Session {session_id} is closed",
                    code="SESSION_CLOSED",
                    context={"session_id": session_id},
                )
            session.add_exchange(session_object)

    def close(self, session_id: str) -> None:
        """Close a session; later updates are rejected."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.close()

    def delete(self, session_id: str) -> bool:
        """Delete a session.

        Returns:
            True if the session existed.
        """
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = [
    "SessionService",
    "InMemorySessionService",
]
