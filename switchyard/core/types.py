"""Request and response value types for switchyard.

Requests and responses are frozen dataclasses. Filters never mutate them;
they return a new value via ``with_text``, so a single request object can
be shared between concurrent ``Application.process`` calls safely.

Example:
    >>> request = Request("What is the weather?")
    >>> shouted = request.with_text(request.text.upper())
    >>> shouted.id == request.id
    True
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from switchyard.agents.base import AgentResponse
    from switchyard.sessions.session import Session


def _generate_request_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# Status and Type Enumerations
# =============================================================================


class ResponseStatus(str, Enum):
    """Terminal status of a request-response cycle.

    SUCCESS, NO_AVAILABLE_AGENT and NO_RESPONSE_FROM_AGENT are produced by
    the application itself. The remaining statuses are for agents that
    answer but want to signal why they could not help.
    """

    SUCCESS = "success"
    NO_AVAILABLE_AGENT = "no_available_agent"
    NO_RESPONSE_FROM_AGENT = "no_response_from_agent"
    AGENT_DID_NOT_UNDERSTAND_REQUEST = "agent_did_not_understand_request"
    AGENT_DID_NOT_KNOW_ANSWER = "agent_did_not_know_answer"
    AGENT_INTERNAL_ERROR = "agent_internal_error"
    INVALID_REQUEST = "invalid_request"

    @property
    def message(self) -> str:
        """Default human-readable message for the status."""
        return _STATUS_MESSAGES[self]

    @property
    def is_success(self) -> bool:
        return self is ResponseStatus.SUCCESS


_STATUS_MESSAGES: dict[ResponseStatus, str] = {
    ResponseStatus.SUCCESS: "Success",
    ResponseStatus.NO_AVAILABLE_AGENT: "No agent was available to handle the request.",
    ResponseStatus.NO_RESPONSE_FROM_AGENT: "The agent did not provide a response.",
    ResponseStatus.AGENT_DID_NOT_UNDERSTAND_REQUEST: "The agent did not understand the request.",
    ResponseStatus.AGENT_DID_NOT_KNOW_ANSWER: "The agent did not know the answer.",
    ResponseStatus.AGENT_INTERNAL_ERROR: "Something failed with this agent.",
    ResponseStatus.INVALID_REQUEST: "The request was not valid.",
}


class ResponseType(str, Enum):
    """Kind of content carried by a response."""

    TEXT = "text"
    JSON = "json"
    ERROR = "error"


# =============================================================================
# User
# =============================================================================


@dataclass(frozen=True)
class User:
    """The user on whose behalf agents are invoked.

    Attributes:
        id: Unique user identifier.
        username: Display name.
        attributes: Free-form user attributes available to agents.
    """

    id: str
    username: Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Request
# =============================================================================


@dataclass(frozen=True)
class Request:
    """A textual request entering the application.

    Attributes:
        text: The request text.
        id: Unique request identifier, generated when omitted.
        session: Ongoing session, or None to have the application open one.
    """

    text: str
    id: str = field(default_factory=_generate_request_id)
    session: Optional["Session"] = None

    def with_text(self, text: str) -> "Request":
        """Return a copy of this request carrying new text."""
        return replace(self, text=text)

    def with_session(self, session: Optional["Session"]) -> "Request":
        """Return a copy of this request bound to another session."""
        return replace(self, session=session)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "session_id": self.session.id if self.session else None,
        }


# =============================================================================
# Response
# =============================================================================


@dataclass(frozen=True)
class Response:
    """The outcome of one request-response cycle.

    Attributes:
        text: Response text; None for status-only responses.
        status: Terminal status of the cycle.
        type: Content kind (text, json or error).
        payload: Optional structured data returned by the agent.
    """

    text: Optional[str]
    status: ResponseStatus = ResponseStatus.SUCCESS
    type: ResponseType = ResponseType.TEXT
    payload: Optional[dict[str, Any]] = None

    @classmethod
    def from_status(cls, status: ResponseStatus) -> "Response":
        """Build a status-only response carrying the status message."""
        response_type = ResponseType.TEXT if status.is_success else ResponseType.ERROR
        return cls(text=status.message, status=status, type=response_type)

    @classmethod
    def from_agent_response(cls, agent_response: "AgentResponse") -> "Response":
        """Wrap the answer of an agent."""
        return cls(
            text=agent_response.text,
            status=agent_response.status,
            type=agent_response.type,
            payload=agent_response.payload,
        )

    def is_success(self) -> bool:
        return self.status.is_success

    def with_text(self, text: Optional[str]) -> "Response":
        """Return a copy of this response carrying new text."""
        return replace(self, text=text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "status": self.status.value,
            "type": self.type.value,
            "payload": self.payload,
        }


__all__ = [
    "ResponseStatus",
    "ResponseType",
    "User",
    "Request",
    "Response",
]
