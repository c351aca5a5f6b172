"""Custom exceptions for the switchyard dispatch framework.

This module defines the hierarchy of exceptions raised by switchyard. All
exceptions inherit from SwitchyardError, enabling catch-all handling while
still allowing specific exception types.

Routing and dispatch outcomes (no agent found, no agent answered) are never
exceptions: they are reported through ResponseStatus values. Exceptions are
reserved for programming errors and collaborator failures.

Exception Hierarchy:
    SwitchyardError (base)
    ├── ConfigurationError: Invalid configuration or settings
    ├── RoutingError: Routing layer failures
    │   ├── TreeConstructionError: Malformed routing tree
    │   └── InvalidNodeOperationError: Operation not defined for a node kind
    ├── AgentError: Agent failures
    ├── SessionError: Session service failures
    │   └── SessionNotFoundError: Unknown session identifier
    └── ReportingError: Reporter failures
"""

from typing import Any, Optional


class SwitchyardError(Exception):
    """Base exception for all switchyard errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        context: Additional context information about the error
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "SWITCHYARD_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_log_dict(self) -> dict[str, Any]:
        """Return structured dict for logging.

        Returns:
            Dictionary with error details suitable for structured logging
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(SwitchyardError):
    """Raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that caused the error
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if config_key:
            context["config_key"] = config_key
        super().__init__(message, code="CONFIG_ERROR", context=context)
        self.config_key = config_key


class RoutingError(SwitchyardError):
    """Base exception for routing errors."""

    def __init__(self, message: str, code: str = "ROUTING_ERROR", **kwargs: Any) -> None:
        super().__init__(message, code=code, context=kwargs.pop("context", None))


class TreeConstructionError(RoutingError):
    """Raised when a routing tree is malformed.

    Covers cycles, children that are not nodes, invalid keywords and
    trees deeper than the configured limit.

    Attributes:
        node: Description of the offending node, if known
    """

    def __init__(self, message: str, node: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if node:
            context["node"] = node
        super().__init__(message, code="TREE_CONSTRUCTION_ERROR", context=context)
        self.node = node


class InvalidNodeOperationError(RoutingError):
    """Raised when an operation is called on a node kind that lacks it.

    Selecting a child of a leaf node is the canonical case. It signals a
    defect in the caller, not a runtime condition.
    """

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if operation:
            context["operation"] = operation
        super().__init__(message, code="INVALID_NODE_OPERATION", context=context)
        self.operation = operation


class AgentError(SwitchyardError):
    """Raised by agents that fail while processing a request.

    Attributes:
        agent_name: Name of the agent that failed
    """

    def __init__(self, message: str, agent_name: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if agent_name:
            context["agent_name"] = agent_name
        super().__init__(message, code="AGENT_ERROR", context=context)
        self.agent_name = agent_name


class SessionError(SwitchyardError):
    """Base exception for session service errors."""

    def __init__(self, message: str, code: str = "SESSION_ERROR", **kwargs: Any) -> None:
        super().__init__(message, code=code, context=kwargs.pop("context", None))


class SessionNotFoundError(SessionError):
    """Raised when a session id is unknown to the session service.

    Attributes:
        session_id: The identifier that was looked up
    """

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Session not found: {session_id}",
            code="SESSION_NOT_FOUND",
            context={"session_id": session_id},
        )
        self.session_id = session_id


class ReportingError(SwitchyardError):
    """Raised when a reporter cannot store a report."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, code="REPORTING_ERROR", context=kwargs.pop("context", None))


__all__ = [
    "SwitchyardError",
    "ConfigurationError",
    "RoutingError",
    "TreeConstructionError",
    "InvalidNodeOperationError",
    "AgentError",
    "SessionError",
    "SessionNotFoundError",
    "ReportingError",
]
