"""Report of one request-response cycle.

The application builds exactly one Report per ``process`` call and hands it
to the configured Reporter. Reports are frozen: the application never reads
them back or changes them once stored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from switchyard.core.types import ResponseStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Report:
    """Timing and outcome of one request-response cycle.

    Attributes:
        request_id: Identifier of the request.
        request_text: Request text after filtering.
        response_text: Final response text after filtering.
        response_status: Terminal status of the cycle.
        agent_name: Name of the agent that answered, or None.
        agents_tried: Names of every agent invoked, in order.
        route_time_ms: Time spent routing, in milliseconds.
        agent_time_ms: Time spent invoking agents, in milliseconds; 0.0
            when routing found no candidates.
        session_id: Session the request belonged to.
        timestamp: When the cycle finished.
    """

    request_id: str
    request_text: str
    response_text: Optional[str]
    response_status: ResponseStatus
    agent_name: Optional[str] = None
    agents_tried: tuple[str, ...] = ()
    route_time_ms: float = 0.0
    agent_time_ms: float = 0.0
    session_id: Optional[str] = None
    timestamp: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate timing values after initialization."""
        if self.route_time_ms < 0.0:
            raise ValueError(f"route_time_ms must be non-negative, got {self.route_time_ms}")
        if self.agent_time_ms < 0.0:
            raise ValueError(f"agent_time_ms must be non-negative, got {self.agent_time_ms}")

    @property
    def total_time_ms(self) -> float:
        return self.route_time_ms + self.agent_time_ms

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        data = asdict(self)
        data["response_status"] = self.response_status.value
        data["agents_tried"] = list(self.agents_tried)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        """Rebuild a report from ``to_dict`` output."""
        return cls(
            request_id=data["request_id"],
            request_text=data["request_text"],
            response_text=data.get("response_text"),
            response_status=ResponseStatus(data["response_status"]),
            agent_name=data.get("agent_name"),
            agents_tried=tuple(data.get("agents_tried", ())),
            route_time_ms=data.get("route_time_ms", 0.0),
            agent_time_ms=data.get("agent_time_ms", 0.0),
            session_id=data.get("session_id"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


__all__ = ["Report"]
