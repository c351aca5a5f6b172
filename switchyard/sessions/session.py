"""Session state for switchyard conversations.

A Session groups the exchanges of one conversation under an identifier.
Each exchange is a SessionObject recording the (filtered) request and the
response it received.

Sessions are owned by a SessionService; the application only reads and
writes them through the service contract.

Example:
    >>> session = Session(id="sess-123")
    >>> session.add_exchange(SessionObject(request_id="r1", request=request))
    >>> len(session.history)
    1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from switchyard.core.types import Request, Response


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStatus(str, Enum):
    """Lifecycle status of a session."""

    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class SessionObject:
    """One request-response exchange within a session.

    Attributes:
        request_id: Identifier of the original request.
        request: The request after filtering.
        response: The response, or None if no agent answered.
        timestamp: When the exchange was recorded.
    """

    request_id: str
    request: Request
    response: Optional[Response] = None
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "request": self.request.to_dict(),
            "response": self.response.to_dict() if self.response else None,
            "timestamp": self.timestamp.isoformat(),
        }


class Session:
    """A conversation and its accumulated exchange history.

    Attributes:
        id: Unique session identifier.
        created_at: When the session was created.
        status: Current lifecycle status.
    """

    def __init__(
        self,
        id: str,
        created_at: Optional[datetime] = None,
        max_history: Optional[int] = None,
    ) -> None:
        """Initialize a session.

        Args:
            id: Unique session identifier.
            created_at: Creation time. Defaults to now.
            max_history: Exchanges to keep; older ones are dropped. Unbounded
                if None.
        """
        self.id = id
        self.created_at = created_at or _utc_now()
        self.updated_at = self.created_at
        self.status = SessionStatus.ACTIVE
        self._max_history = max_history
        self._history: list[SessionObject] = []

    @property
    def history(self) -> list[SessionObject]:
        """Exchanges in chronological order."""
        return self._history.copy()

    @property
    def last_exchange(self) -> Optional[SessionObject]:
        return self._history[-1] if self._history else None

    def add_exchange(self, exchange: SessionObject) -> None:
        """Append an exchange, trimming history to the configured limit."""
        self._history.append(exchange)
        if self._max_history is not None and len(self._history) > self._max_history:
            del self._history[: len(self._history) - self._max_history]
        self.updated_at = _utc_now()

    def close(self) -> None:
        self.status = SessionStatus.CLOSED
        self.updated_at = _utc_now()

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "status": self.status.value,
            "history": [exchange.to_dict() for exchange in self._history],
        }

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, exchanges={len(self._history)}, status={self.status.value})"


__all__ = [
    "SessionStatus",
    "SessionObject",
    "Session",
]
