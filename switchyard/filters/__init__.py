"""Request and response filters for switchyard.

Key Components:
    RequestFilter: Protocol for request rewriting.
    ResponseFilter: Protocol for response rewriting.
    FilterChain: Ordered chain of filters or plain callables.
    LowercaseRequestFilter: Lowercases request text.
    WhitespaceRequestFilter: Normalizes whitespace in request text.
"""

from switchyard.filters.base import (
    RequestFilter,
    ResponseFilter,
    RequestFilterLike,
    ResponseFilterLike,
    FilterChain,
    LowercaseRequestFilter,
    WhitespaceRequestFilter,
    filter_name,
)

__all__ = [
    "RequestFilter",
    "ResponseFilter",
    "RequestFilterLike",
    "ResponseFilterLike",
    "FilterChain",
    "LowercaseRequestFilter",
    "WhitespaceRequestFilter",
    "filter_name",
]
