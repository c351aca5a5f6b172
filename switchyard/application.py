"""Application - the switchyard request-response cycle.

The application owns the router, the filter chains, the session service
and the reporter, and runs one synchronous request-response cycle per
``process`` call.

Pipeline Flow:
    1. Session: Use the request's session or open a new one
    2. Filter: Apply request filters in registration order
    3. Route: Ask the router for ordered candidate agents
    4. Dispatch: Try candidates in order; the first answer wins
    5. Filter: Apply response filters in registration order
    6. Report: Hand a Report of the cycle to the reporter
    7. Return: The final Response

Outcomes are values, never exceptions: a request no agent can handle
yields NO_AVAILABLE_AGENT, and one every candidate declines yields
NO_RESPONSE_FROM_AGENT.

Configuration (user, session service, reporter) is fixed at construction,
and ``process`` keeps its state in locals, so one application may serve
concurrent callers as long as its collaborators are thread-safe.

Example:
    >>> agent = EchoAgent()
    >>> app = Application(SingleAgentRouter(agent))
    >>> response = app.process(Request("hello"))
    >>> response.text
    'hello'
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Iterable, Optional, Protocol, Union, runtime_checkable

from switchyard.agents.base import Agent, AgentRequest, AgentResponse, agent_name
from switchyard.config.settings import SwitchyardSettings, get_settings
from switchyard.core.exceptions import AgentError, SessionError
from switchyard.core.types import Request, Response, ResponseStatus, User
from switchyard.filters.base import FilterChain, RequestFilterLike, ResponseFilterLike
from switchyard.reporting.report import Report
from switchyard.reporting.reporters import Reporter, reporter_from_settings
from switchyard.routing.router import Router
from switchyard.sessions.service import InMemorySessionService, SessionService
from switchyard.sessions.session import Session, SessionObject


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Shutdown Listener
# =============================================================================


@runtime_checkable
class ShutdownListener(Protocol):
    """Called when the application shuts down."""

    def shutdown(self) -> None:
        ...


ShutdownListenerLike = Union[ShutdownListener, Callable[[], Any]]


def _elapsed_ms(start: float) -> float:
    return max((time.perf_counter() - start) * 1000, 0.0)


# =============================================================================
# Application
# =============================================================================


class Application:
    """Processes requests by routing them to agents.

    Attributes:
        router: Selects candidate agents for a request.
        reporter: Stores one report per request.
        session_service: Creates and updates sessions.
        user: The user agents act for, if the application has one.
        settings: Framework settings.

    Example:
        >>> router = KeywordRouter({"weather": weather_agent}, default=[chat_agent])
        >>> app = Application(router, reporter=InMemoryReporter())
        >>> app.add_request_filter(WhitespaceRequestFilter())
        >>> response = app.process(Request("  weather in   Paris "))
    """

    def __init__(
        self,
        router: Router,
        reporter: Optional[Reporter] = None,
        session_service: Optional[SessionService] = None,
        user: Optional[User] = None,
        request_filters: Iterable[RequestFilterLike] = (),
        response_filters: Iterable[ResponseFilterLike] = (),
        settings: Optional[SwitchyardSettings] = None,
    ) -> None:
        """Initialize the application.

        Args:
            router: Router that finds the agents for a request.
            reporter: Report storage. Defaults to the reporter selected by
                settings.reporting.backend.
            session_service: Session storage. Defaults to an
                InMemorySessionService.
            user: The user of a single-user application.
            request_filters: Request filters, in application order.
            response_filters: Response filters, in application order.
            settings: Settings instance; uses get_settings() if omitted.
        """
        self._settings = settings or get_settings()
        self._router = router
        self._reporter = reporter if reporter is not None else reporter_from_settings(self._settings)
        self._session_service = (
            session_service
            if session_service is not None
            else InMemorySessionService(settings=self._settings)
        )
        self._user = user

        self._request_filters: FilterChain[Request] = FilterChain()
        for f in request_filters:
            self._request_filters.add(f)
        self._response_filters: FilterChain[Response] = FilterChain()
        for f in response_filters:
            self._response_filters.add(f)
        self._shutdown_listeners: list[ShutdownListenerLike] = []

        # Request metrics
        self._metrics_lock = threading.Lock()
        self._total_requests: int = 0
        self._answered_requests: int = 0
        self._no_available_agent: int = 0
        self._no_response_from_agent: int = 0
        self._total_time_ms: float = 0.0

        logger.info(
            "Application initialized with %d agent(s)", len(self._router.get_agents())
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def router(self) -> Router:
        return self._router

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    @property
    def session_service(self) -> SessionService:
        return self._session_service

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def settings(self) -> SwitchyardSettings:
        return self._settings

    def get_agents(self) -> list[Agent]:
        """Return every agent the router can route to."""
        return self._router.get_agents()

    def add_request_filter(self, request_filter: RequestFilterLike) -> None:
        """Register a request filter; filters run in registration order."""
        self._request_filters.add(request_filter)

    def add_response_filter(self, response_filter: ResponseFilterLike) -> None:
        """Register a response filter; filters run in registration order."""
        self._response_filters.add(response_filter)

    def add_shutdown_listener(self, listener: ShutdownListenerLike) -> None:
        """Register a listener that runs when shutdown() is called.

        Args:
            listener: Object with a ``shutdown()`` method, or a callable.
        """
        if not (hasattr(listener, "shutdown") or callable(listener)):
            raise TypeError(f"Not a shutdown listener: {listener!r}")
        self._shutdown_listeners.append(listener)

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    def process(self, request: Request) -> Response:
        """Run one request-response cycle.

        Args:
            request: The incoming request.

        Returns:
            The agent's answer, or a status-only response when no agent
            was available or none answered.
        """
        logger.info("Processing request %s: %s", request.id, request.text)

        session_id, session = self._resolve_session(request)
        session_object = SessionObject(request_id=request.id, request=request)

        for f in self._request_filters:
            request = self._request_filters.apply_one(f, request)
            session_object.request = request

        response = Response.from_status(ResponseStatus.NO_AVAILABLE_AGENT)
        answered_by: Optional[str] = None
        agents_tried: list[str] = []
        agent_time_ms = 0.0

        start = time.perf_counter()
        agents = self._router.route(request)
        route_time_ms = _elapsed_ms(start)

        if agents:
            response = Response.from_status(ResponseStatus.NO_RESPONSE_FROM_AGENT)
            start = time.perf_counter()
            for agent in agents:
                name = agent_name(agent)
                agents_tried.append(name)
                agent_request = AgentRequest(text=request.text, user=self._user, session=session)
                agent_response = self._invoke_agent(agent, name, agent_request)
                if agent_response is not None:
                    response = Response.from_agent_response(agent_response)
                    answered_by = name
                    session_object.response = response
                    self._record_exchange(session_id, session_object)
                    break
            agent_time_ms = _elapsed_ms(start)
        else:
            logger.info("No agent available for request %s", request.id)

        # Metrics count the dispatch outcome, whatever filters do to it
        outcome = response.status
        response = self._response_filters.apply(response)

        self._reporter.store(
            Report(
                request_id=request.id,
                request_text=request.text,
                response_text=response.text,
                response_status=response.status,
                agent_name=answered_by,
                agents_tried=tuple(agents_tried),
                route_time_ms=route_time_ms,
                agent_time_ms=agent_time_ms,
                session_id=session_id,
            )
        )
        self._record_metrics(outcome, answered_by, route_time_ms + agent_time_ms)

        logger.debug(
            "Request %s finished: status=%s agent=%s route=%.2fms agent=%.2fms",
            request.id,
            response.status.value,
            answered_by,
            route_time_ms,
            agent_time_ms,
        )
        return response

    def _resolve_session(self, request: Request) -> tuple[str, Session]:
        if request.session is not None:
            return request.session.id, request.session
        session_id = self._session_service.create()
        return session_id, self._session_service.get_session(session_id)

    def _invoke_agent(
        self, agent: Agent, name: str, agent_request: AgentRequest
    ) -> Optional[AgentResponse]:
        """Call an agent; an agent that raises is treated as declining.

        An AgentError is a failure the agent reported itself and is logged
        without a traceback; any other exception is logged with one.
        """
        try:
            return agent.process(agent_request)
        except AgentError as e:
            logger.warning("Agent %s failed, trying next candidate: %s", name, e)
            return None
        except Exception:
            logger.warning("Agent %s failed, trying next candidate", name, exc_info=True)
            return None

    def _record_exchange(self, session_id: str, session_object: SessionObject) -> None:
        """Store an answered exchange; a session service failure is only logged."""
        try:
            self._session_service.update(session_id, session_object)
        except SessionError:
            logger.warning(
                "Could not record exchange %s in session %s",
                session_object.request_id,
                session_id,
                exc_info=True,
            )

    def _record_metrics(
        self, status: ResponseStatus, answered_by: Optional[str], elapsed_ms: float
    ) -> None:
        with self._metrics_lock:
            self._total_requests += 1
            self._total_time_ms += elapsed_ms
            if answered_by is not None:
                self._answered_requests += 1
            elif status == ResponseStatus.NO_AVAILABLE_AGENT:
                self._no_available_agent += 1
            else:
                self._no_response_from_agent += 1

    # -------------------------------------------------------------------------
    # Metrics and Lifecycle
    # -------------------------------------------------------------------------

    def get_metrics(self) -> dict[str, Any]:
        """Get request metrics.

        Returns:
            Dictionary with request counters and timing averages
        """
        with self._metrics_lock:
            return {
                "total_requests": self._total_requests,
                "answered_requests": self._answered_requests,
                "no_available_agent": self._no_available_agent,
                "no_response_from_agent": self._no_response_from_agent,
                "answer_rate": (
                    self._answered_requests / max(self._total_requests, 1)
                ),
                "total_time_ms": self._total_time_ms,
                "avg_time_per_request_ms": (
                    self._total_time_ms / max(self._total_requests, 1)
                ),
            }

    def reset_metrics(self) -> None:
        """Reset request metrics."""
        with self._metrics_lock:
            self._total_requests = 0
            self._answered_requests = 0
            self._no_available_agent = 0
            self._no_response_from_agent = 0
            self._total_time_ms = 0.0
        logger.info("Application metrics reset")

    def shutdown(self) -> None:
        """Notify shutdown listeners in registration order.

        Call this when the application is done running.
        """
        logger.info("Shutting down application")
        for listener in self._shutdown_listeners:
            if hasattr(listener, "shutdown"):
                listener.shutdown()
            else:
                listener()


__all__ = [
    "Application",
    "ShutdownListener",
]
