"""switchyard - keyword-tree request dispatch framework.

A framework for answering textual requests with pluggable agents:
- Routing trees that narrow requests to candidate agents by keyword
- First-answer-wins dispatch over the ordered candidates
- Request and response filter chains
- Session tracking across requests
- Per-request timing reports

Usage:
    from switchyard import Application, KeywordRouter, Request

    router = KeywordRouter({"weather": weather_agent}, default=[chat_agent])
    app = Application(router)
    response = app.process(Request("What's the weather?"))
"""

from switchyard.agents import AgentRequest, AgentResponse, BaseAgent
from switchyard.application import Application
from switchyard.core import Request, Response, ResponseStatus, ResponseType, User
from switchyard.routing import (
    ChainedRouter,
    KeywordNode,
    KeywordRouter,
    LeafNode,
    SingleAgentRouter,
    TreeRouter,
)

__version__ = "0.1.0"
__all__ = [
    "Application",
    "AgentRequest",
    "AgentResponse",
    "BaseAgent",
    "Request",
    "Response",
    "ResponseStatus",
    "ResponseType",
    "User",
    "KeywordNode",
    "LeafNode",
    "TreeRouter",
    "KeywordRouter",
    "SingleAgentRouter",
    "ChainedRouter",
]
