"""Tests for filter chains and built-in filters."""

from __future__ import annotations

import pytest

from switchyard.core.types import Request, Response
from switchyard.filters import (
    FilterChain,
    LowercaseRequestFilter,
    RequestFilter,
    WhitespaceRequestFilter,
    filter_name,
)


class Suffix:
    def __init__(self, suffix: str) -> None:
        self.suffix = suffix

    def filter(self, request: Request) -> Request:
        return request.with_text(request.text + self.suffix)


class TestFilterChain:
    """Tests for FilterChain."""

    def test_applies_in_order(self):
        chain: FilterChain[Request] = FilterChain()
        chain.add(Suffix("-a")).add(Suffix("-b"))
        assert chain.apply(Request("x")).text == "x-a-b"

    def test_accepts_callables(self):
        chain: FilterChain[Response] = FilterChain()
        chain.add(lambda r: r.with_text(r.text.upper()))
        assert chain.apply(Response("done")).text == "DONE"

    def test_insert(self):
        chain: FilterChain[Request] = FilterChain()
        chain.add(Suffix("-b"))
        chain.insert(0, Suffix("-a"))
        assert chain.apply(Request("x")).text == "x-a-b"

    def test_empty_chain_returns_input(self):
        request = Request("x")
        assert FilterChain().apply(request) is request

    def test_len_iter_clear(self):
        first, second = Suffix("1"), Suffix("2")
        chain: FilterChain[Request] = FilterChain()
        chain.add(first).add(second)
        assert len(chain) == 2
        assert list(chain) == [first, second]
        chain.clear()
        assert len(chain) == 0

    @pytest.mark.parametrize("bad", [None, 42, "text"])
    def test_rejects_non_filters(self, bad):
        with pytest.raises(TypeError):
            FilterChain().add(bad)
        with pytest.raises(TypeError):
            FilterChain().insert(0, bad)

    def test_errors_propagate(self):
        def fail(request):
            raise RuntimeError("filter failed")

        chain: FilterChain[Request] = FilterChain()
        chain.add(fail)
        with pytest.raises(RuntimeError, match="filter failed"):
            chain.apply(Request("x"))

    def test_filter_name(self):
        def strip(request):
            return request

        assert filter_name(strip) == "strip"
        assert filter_name(Suffix("x")) == "Suffix"


class TestBuiltinFilters:
    """Tests for the bundled request filters."""

    def test_lowercase_keeps_identity(self):
        request = Request("HeLLo")
        filtered = LowercaseRequestFilter().filter(request)
        assert filtered.text == "hello"
        assert filtered.id == request.id
        assert request.text == "HeLLo"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("  hello   world ", "hello world"),
            ("tab\tand\nnewline", "tab and newline"),
            ("", ""),
        ],
    )
    def test_whitespace(self, text, expected):
        assert WhitespaceRequestFilter().filter(Request(text)).text == expected

    def test_builtins_satisfy_protocol(self):
        assert isinstance(LowercaseRequestFilter(), RequestFilter)
        assert isinstance(WhitespaceRequestFilter(), RequestFilter)
