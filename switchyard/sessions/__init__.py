"""Session management for switchyard.

Key Components:
    Session: A conversation and its exchange history.
    SessionObject: One request-response exchange.
    SessionStatus: Session lifecycle status.
    SessionService: Protocol for session storage.
    InMemorySessionService: Thread-safe in-process session storage.
"""

from switchyard.sessions.session import (
    SessionStatus,
    SessionObject,
    Session,
)
from switchyard.sessions.service import (
    SessionService,
    InMemorySessionService,
)

__all__ = [
    "SessionStatus",
    "SessionObject",
    "Session",
    "SessionService",
    "InMemorySessionService",
]
