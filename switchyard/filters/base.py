"""Request and response filters.

Filters rewrite requests before routing and responses before they are
returned. A filter is either an object with a ``filter`` method or a plain
callable; both take a value and return a (possibly new) value of the same
type. Requests and responses are immutable, so filters return new values
via ``with_text`` rather than mutating their input.

Filters run in registration order. A failing filter propagates its
exception; the chain does not retry or skip.

Example:
    >>> chain = FilterChain[Request]()
    >>> chain.add(lambda r: r.with_text(r.text.strip()))
    >>> chain.add(LowercaseRequestFilter())
    >>> chain.apply(Request("  Hello ")).text
    'hello'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, Protocol, TypeVar, Union, runtime_checkable

from switchyard.core.types import Request, Response

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Filter Protocols
# =============================================================================


@runtime_checkable
class RequestFilter(Protocol):
    """Rewrites a request before it is routed."""

    def filter(self, request: Request) -> Request:
        ...


@runtime_checkable
class ResponseFilter(Protocol):
    """Rewrites a response before it is returned."""

    def filter(self, response: Response) -> Response:
        ...


RequestFilterLike = Union[RequestFilter, Callable[[Request], Request]]
ResponseFilterLike = Union[ResponseFilter, Callable[[Response], Response]]


def filter_name(f: object) -> str:
    """Return a readable name for a filter object or callable."""
    return getattr(f, "__name__", None) or f.__class__.__name__


# =============================================================================
# Filter Chain
# =============================================================================


@dataclass
class FilterChain(Generic[T]):
    """Ordered chain of filters applied first to last.

    Attributes:
        filters: Filters in application order.
    """

    filters: list = field(default_factory=list)

    def add(self, f: Union[Callable[[T], T], object]) -> "FilterChain[T]":
        """Add a filter to the end of the chain.

        Args:
            f: Object with a ``filter`` method, or a callable.

        Returns:
            Self for method chaining

        Raises:
            TypeError: If ``f`` is neither a filter nor callable.
        """
        if not (hasattr(f, "filter") or callable(f)):
            raise TypeError(f"Not a filter: {f!r}")
        self.filters.append(f)
        return self

    def insert(self, index: int, f: Union[Callable[[T], T], object]) -> "FilterChain[T]":
        """Insert a filter at a specific position."""
        if not (hasattr(f, "filter") or callable(f)):
            raise TypeError(f"Not a filter: {f!r}")
        self.filters.insert(index, f)
        return self

    def clear(self) -> None:
        """Remove all filters from the chain."""
        self.filters.clear()

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator:
        return iter(self.filters)

    def apply_one(self, f: object, value: T) -> T:
        """Apply a single filter to a value."""
        if hasattr(f, "filter"):
            return f.filter(value)  # type: ignore[attr-defined]
        return f(value)  # type: ignore[operator]

    def apply(self, value: T) -> T:
        """Apply every filter in order.

        Args:
            value: The request or response to filter.

        Returns:
            The value returned by the last filter.
        """
        for f in self.filters:
            value = self.apply_one(f, value)
            logger.debug("Applied filter %s", filter_name(f))
        return value


# =============================================================================
# Built-in Filters
# =============================================================================


class LowercaseRequestFilter:
    """Lowercases request text."""

    def filter(self, request: Request) -> Request:
        return request.with_text(request.text.lower())


class WhitespaceRequestFilter:
    """Collapses runs of whitespace and trims the request text."""

    def filter(self, request: Request) -> Request:
        return request.with_text(" ".join(request.text.split()))


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
