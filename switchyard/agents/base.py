"""Agent contract for switchyard.

An agent is anything with a ``process(AgentRequest)`` method returning an
AgentResponse, or None to decline the request. The application tries the
candidate agents chosen by the router in order and stops at the first one
that answers.

Classes:
    Agent: Protocol every agent satisfies.
    BaseAgent: Convenience base class with a name and description.
    AgentRequest: What an agent receives.
    AgentResponse: What an agent answers with.

Example:
    >>> class EchoAgent(BaseAgent):
    ...     name = "echo"
    ...     description = "Repeats the request text."
    ...
    ...     def process(self, request: AgentRequest) -> Optional[AgentResponse]:
    ...         return AgentResponse(request.text)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

from switchyard.core.types import ResponseStatus, ResponseType, User

if TYPE_CHECKING:
    from switchyard.sessions.session import Session


# =============================================================================
# Agent Request / Response
# =============================================================================


@dataclass(frozen=True)
class AgentRequest:
    """Input handed to an agent.

    Attributes:
        text: The filtered request text.
        user: The application user, if one is configured.
        session: The session of the current conversation.
    """

    text: str
    user: Optional[User] = None
    session: Optional["Session"] = None


@dataclass(frozen=True)
class AgentResponse:
    """Answer produced by an agent.

    An agent that cannot help but still wants to say why answers with an
    error status such as AGENT_DID_NOT_UNDERSTAND_REQUEST. Returning None
    instead lets the next candidate agent try.

    Attributes:
        text: Answer text.
        status: Status of the answer, SUCCESS by default.
        payload: Optional structured data; marks the response as JSON.
    """

    text: Optional[str]
    status: ResponseStatus = ResponseStatus.SUCCESS
    payload: Optional[dict[str, Any]] = None

    @classmethod
    def from_status(cls, status: ResponseStatus) -> "AgentResponse":
        """Build an answer that only reports a status."""
        return cls(text=status.message, status=status)

    @property
    def type(self) -> ResponseType:
        if not self.status.is_success:
            return ResponseType.ERROR
        if self.payload is not None:
            return ResponseType.JSON
        return ResponseType.TEXT

    def is_success(self) -> bool:
        return self.status.is_success


# =============================================================================
# Agent Protocol and Base Class
# =============================================================================


@runtime_checkable
class Agent(Protocol):
    """Capability that may answer a request or decline it."""

    def process(self, request: AgentRequest) -> Optional[AgentResponse]:
        """Process a request.

        Args:
            request: The agent request.

        Returns:
            An AgentResponse, or None to decline.
        """
        ...


class BaseAgent(ABC):
    """Abstract base class for agents.

    To create a new agent:
    1. Subclass BaseAgent
    2. Set ``name`` (used in reports and logs)
    3. Optionally set ``description``
    4. Implement ``process()``

    Attributes:
        name: Agent identifier, defaults to the class name.
        description: One-line summary of what the agent answers.
    """

    name: str = ""
    description: str = ""

    def __init__(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if not self.name:
            self.name = self.__class__.__name__

    @abstractmethod
    def process(self, request: AgentRequest) -> Optional[AgentResponse]:
        """Process a request, returning None to decline."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def agent_name(agent: Any) -> str:
    """Return the reporting name of an agent.

    Uses the ``name`` attribute when the agent has one, otherwise the class
    name.
    """
    name = getattr(agent, "name", None)
    if isinstance(name, str) and name:
        return name
    return agent.__class__.__name__


__all__ = [
    "AgentRequest",
    "AgentResponse",
    "Agent",
    "BaseAgent",
    "agent_name",
]
