"""Shared pytest fixtures for switchyard tests.

This module provides common fixtures used across all test modules:
- Settings cache and environment isolation
- A recording agent factory for dispatch tests
- In-memory reporter and session service instances
"""

from __future__ import annotations

import os
from typing import Callable, Optional

import pytest

from switchyard.agents.base import AgentRequest, AgentResponse, BaseAgent
from switchyard.config.settings import SwitchyardSettings, clear_settings_cache
from switchyard.reporting.reporters import InMemoryReporter
from switchyard.sessions.service import InMemorySessionService


# -----------------------------------------------------------------------------
# Test Isolation Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with a clean settings cache and no SWITCHYARD_ env vars.

    The working directory is moved to an empty temporary directory so that
    pydantic-settings does not pick up a developer's .env file.
    """
    for key in [k for k in os.environ if k.startswith("SWITCHYARD_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


# -----------------------------------------------------------------------------
# Agents
# -----------------------------------------------------------------------------


class RecordingAgent(BaseAgent):
    """Agent that records every request it receives.

    Answers with ``answer`` when given, echoes the request text when
    ``echo`` is set, raises ``error`` when given, and declines otherwise.
    """

    def __init__(
        self,
        name: str,
        answer: Optional[str] = None,
        echo: bool = False,
        error: Optional[Exception] = None,
    ) -> None:
        super().__init__(name=name)
        self.answer = answer
        self.echo = echo
        self.error = error
        self.requests: list[AgentRequest] = []

    def process(self, request: AgentRequest) -> Optional[AgentResponse]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.echo:
            return AgentResponse(request.text)
        if self.answer is None:
            return None
        return AgentResponse(self.answer)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_agent() -> Callable[..., RecordingAgent]:
    """Provide a factory for recording agents.

    Returns:
        Callable taking the agent name and RecordingAgent options.
    """
    return RecordingAgent


# -----------------------------------------------------------------------------
# Collaborators
# -----------------------------------------------------------------------------


@pytest.fixture
def settings() -> SwitchyardSettings:
    """Provide settings built from the cleaned environment."""
    return SwitchyardSettings()


@pytest.fixture
def reporter() -> InMemoryReporter:
    return InMemoryReporter()


@pytest.fixture
def session_service(settings) -> InMemorySessionService:
    return InMemorySessionService(settings=settings)
