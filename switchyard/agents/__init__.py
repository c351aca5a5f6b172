"""Agent contract for switchyard.

Key Components:
    Agent: Protocol for request handlers.
    BaseAgent: Base class with name and description.
    AgentRequest: Request handed to an agent.
    AgentResponse: Answer returned by an agent.
"""

from switchyard.agents.base import (
    AgentRequest,
    AgentResponse,
    Agent,
    BaseAgent,
    agent_name,
)

__all__ = [
    "AgentRequest",
    "AgentResponse",
    "Agent",
    "BaseAgent",
    "agent_name",
]
