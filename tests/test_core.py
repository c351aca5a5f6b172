"""Tests for core value types, exceptions, agents and tokenizers."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from switchyard.agents import AgentRequest, AgentResponse, BaseAgent, agent_name
from switchyard.core.exceptions import (
    AgentError,
    ConfigurationError,
    InvalidNodeOperationError,
    RoutingError,
    SessionNotFoundError,
    SwitchyardError,
    TreeConstructionError,
)
from switchyard.core.types import Request, Response, ResponseStatus, ResponseType
from switchyard.nlp import RuleBasedTokenizer, WhitespaceTokenizer
from switchyard.sessions import Session


# =============================================================================
# Requests and Responses
# =============================================================================


class TestRequest:
    """Tests for Request."""

    def test_generates_unique_ids(self):
        assert Request("a").id != Request("a").id

    def test_with_text_keeps_identity(self):
        session = Session("s1")
        request = Request("hello", id="r1", session=session)
        changed = request.with_text("bye")
        assert (changed.id, changed.text, changed.session) == ("r1", "bye", session)
        assert request.text == "hello"

    def test_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            Request("hello").text = "changed"

    def test_to_dict(self):
        request = Request("hi", id="r1", session=Session("s1"))
        assert request.to_dict() == {"id": "r1", "text": "hi", "session_id": "s1"}


class TestResponse:
    """Tests for Response and ResponseStatus."""

    def test_from_success_status(self):
        response = Response.from_status(ResponseStatus.SUCCESS)
        assert response.is_success()
        assert response.type == ResponseType.TEXT

    @pytest.mark.parametrize(
        "status",
        [s for s in ResponseStatus if s is not ResponseStatus.SUCCESS],
    )
    def test_from_failure_status(self, status):
        response = Response.from_status(status)
        assert not response.is_success()
        assert response.type == ResponseType.ERROR
        assert response.text == status.message

    def test_every_status_has_a_message(self):
        assert all(status.message for status in ResponseStatus)

    def test_from_agent_response(self):
        response = Response.from_agent_response(AgentResponse("ok", payload={"n": 1}))
        assert response.text == "ok"
        assert response.type == ResponseType.JSON
        assert response.to_dict() == {
            "text": "ok",
            "status": "success",
            "type": "json",
            "payload": {"n": 1},
        }


# =============================================================================
# Agents
# =============================================================================


class TestAgents:
    """Tests for the agent contract."""

    def test_base_agent_defaults_name_to_class(self):
        class WeatherAgent(BaseAgent):
            def process(self, request):
                return None

        assert WeatherAgent().name == "WeatherAgent"
        assert WeatherAgent(name="forecast").name == "forecast"

    def test_base_agent_is_abstract(self):
        with pytest.raises(TypeError):
            BaseAgent()

    def test_agent_name_falls_back_to_class(self):
        class Plain:
            def process(self, request):
                return None

        assert agent_name(Plain()) == "Plain"

    def test_agent_response_type(self):
        assert AgentResponse("x").type == ResponseType.TEXT
        assert AgentResponse("x", payload={}).type == ResponseType.JSON
        failed = AgentResponse.from_status(ResponseStatus.AGENT_INTERNAL_ERROR)
        assert failed.type == ResponseType.ERROR
        assert not failed.is_success()

    def test_agent_request_defaults(self):
        request = AgentRequest("hi")
        assert request.user is None
        assert request.session is None


# =============================================================================
# Exceptions
# =============================================================================


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (SwitchyardError("x"), "SWITCHYARD_ERROR"),
            (ConfigurationError("x", config_key="k"), "CONFIG_ERROR"),
            (RoutingError("x"), "ROUTING_ERROR"),
            (TreeConstructionError("x"), "TREE_CONSTRUCTION_ERROR"),
            (InvalidNodeOperationError("x"), "INVALID_NODE_OPERATION"),
            (AgentError("x", agent_name="a"), "AGENT_ERROR"),
            (SessionNotFoundError("s1"), "SESSION_NOT_FOUND"),
        ],
    )
    def test_codes(self, error, code):
        assert error.code == code
        assert isinstance(error, SwitchyardError)
        assert str(error).startswith(f"[{code}]")

    def test_routing_hierarchy(self):
        assert issubclass(TreeConstructionError, RoutingError)
        assert issubclass(InvalidNodeOperationError, RoutingError)

    def test_to_log_dict(self):
        error = TreeConstructionError("cycle", node="KeywordNode('a')")
        assert error.to_log_dict() == {
            "error_type": "TreeConstructionError",
            "error_code": "TREE_CONSTRUCTION_ERROR",
            "message": "cycle",
            "context": {"node": "KeywordNode('a')"},
        }


# =============================================================================
# Tokenizers
# =============================================================================


class TestTokenizers:
    """Tests for tokenizers."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("What's the weather, today?", ["What's", "the", "weather", ",", "today", "?"]),
            ("pi is 3.14 not 1,000", ["pi", "is", "3.14", "not", "1,000"]),
            ("send an e-mail", ["send", "an", "e-mail"]),
            ("2fa", ["2fa"]),
            ("4th floor", ["4th", "floor"]),
            ("enable 2fa-codes", ["enable", "2fa-codes"]),
            ("costs 12.50.", ["costs", "12.50", "."]),
            ("", []),
            ("   ", []),
        ],
    )
    def test_rule_based(self, text, expected):
        assert RuleBasedTokenizer().tokenize(text) == expected

    def test_rule_based_keeps_case(self):
        assert RuleBasedTokenizer().tokenize("Weather") == ["Weather"]

    def test_whitespace(self):
        assert WhitespaceTokenizer().tokenize(" a  b\tc? ") == ["a", "b", "c?"]
