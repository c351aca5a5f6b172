"""Core module for switchyard.

This module contains the building blocks shared by every other module:
- Value types: Request, Response, ResponseStatus, ResponseType, User
- Custom exceptions for error handling

Usage:
    from switchyard.core import Request, ResponseStatus, SwitchyardError

    try:
        router = TreeRouter(root)
    except SwitchyardError as e:
        print(f"Error: {e.code} - {e.message}")
"""

from switchyard.core.types import (
    ResponseStatus,
    ResponseType,
    User,
    Request,
    Response,
)

from switchyard.core.exceptions import (
    SwitchyardError,
    ConfigurationError,
    RoutingError,
    TreeConstructionError,
    InvalidNodeOperationError,
    AgentError,
    SessionError,
    SessionNotFoundError,
    ReportingError,
)

__all__ = [
    # Types
    "ResponseStatus",
    "ResponseType",
    "User",
    "Request",
    "Response",
    # Exceptions
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
