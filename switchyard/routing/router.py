"""Routers for switchyard.

A router maps a request to an ordered list of candidate agents. The order is
the priority in which the application tries them; an empty list means no
agent can handle the request, which is a normal outcome, not an error.

Key Components:
    Router: Protocol every router satisfies.
    TreeRouter: Walks a routing tree from its root down to a leaf.
    KeywordRouter: Builds a keyword tree from an ordered keyword mapping.
    SingleAgentRouter: Always routes to one agent.
    ChainedRouter: Asks several routers in turn until one finds candidates.

Usage:
    from switchyard.routing import KeywordRouter

    router = KeywordRouter(
        {"weather": weather_agent, "time": clock_agent},
        default=[chat_agent],
    )
    candidates = router.route(Request("what time is it?"))
    # [clock_agent]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Protocol, Union, runtime_checkable

from switchyard.agents.base import agent_name
from switchyard.config.settings import SwitchyardSettings, get_settings
from switchyard.core.exceptions import TreeConstructionError
from switchyard.nlp.tokenizer import Tokenizer
from switchyard.routing.tree import KeywordNode, LeafNode, Node, iter_leaves, validate_tree

if TYPE_CHECKING:
    from switchyard.agents.base import Agent
    from switchyard.core.types import Request


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Router Protocol
# =============================================================================


@runtime_checkable
class Router(Protocol):
    """Capability that selects candidate agents for a request."""

    def route(self, request: "Request") -> list["Agent"]:
        """Return the candidate agents for a request, highest priority first."""
        ...

    def get_agents(self) -> list["Agent"]:
        """Return every agent this router can route to."""
        ...


def _unique(agents: Iterable["Agent"]) -> list["Agent"]:
    seen: set[int] = set()
    result: list["Agent"] = []
    for agent in agents:
        if id(agent) not in seen:
            seen.add(id(agent))
            result.append(agent)
    return result


# =============================================================================
# Tree Router
# =============================================================================


class TreeRouter:
    """Routes requests by walking a routing tree.

    Starting at the root, the router asks each decision node to select a
    child until it reaches a leaf, then returns the leaf's agents in their
    stored order. The tree never scores or ranks agents.

    The tree is validated on construction unless validation is disabled
    in settings or by the ``validate`` argument.

    Attributes:
        root: Root node of the routing tree.
        depth: Depth of the tree when validated, else None.

    Example:
        >>> tree = KeywordNode("weather", LeafNode([weather]), LeafNode([chat]))
        >>> TreeRouter(tree).route(Request("Weather today?"))
        [weather]
    """

    def __init__(
        self,
        root: Node,
        validate: Optional[bool] = None,
        settings: Optional[SwitchyardSettings] = None,
    ) -> None:
        """Initialize the router.

        Args:
            root: Root node of the routing tree.
            validate: Whether to validate the tree. Defaults to
                settings.routing.validate_trees.
            settings: Settings instance; uses get_settings() if omitted.

        Raises:
            TreeConstructionError: If validation is on and the tree is malformed.
        """
        settings = settings or get_settings()
        if validate is None:
            validate = settings.routing.validate_trees

        self.root = root
        self.depth: Optional[int] = None
        if validate:
            self.depth = validate_tree(root, max_depth=settings.routing.max_tree_depth)
        logger.debug("TreeRouter initialized (depth=%s)", self.depth)

    def route(self, request: "Request") -> list["Agent"]:
        node = self.root
        while not node.is_leaf():
            node = node.select_child(request)
        agents = node.get_value() or []
        logger.debug(
            "Routed request %s to %d candidate(s): %s",
            request.id,
            len(agents),
            [agent_name(a) for a in agents],
        )
        return list(agents)

    def get_agents(self) -> list["Agent"]:
        agents: list["Agent"] = []
        for leaf in iter_leaves(self.root):
            agents.extend(leaf.get_value() or [])
        return _unique(agents)


# =============================================================================
# Keyword Router
# =============================================================================


AgentOrAgents = Union["Agent", Iterable["Agent"]]


class KeywordRouter(TreeRouter):
    """Tree router built from an ordered keyword mapping.

    Keywords are checked in mapping order; the first keyword present in
    the request selects its agents. Requests matching no keyword go to the
    default agents.

    The mapping ``{"weather": w, "time": t}`` with default ``[c]`` builds::

        KeywordNode("weather")
        ├── LeafNode([w])
        └── KeywordNode("time")
            ├── LeafNode([t])
            └── LeafNode([c])
    """

    def __init__(
        self,
        keywords: Mapping[str, AgentOrAgents],
        default: Iterable["Agent"] = (),
        tokenizer: Optional[Tokenizer] = None,
        settings: Optional[SwitchyardSettings] = None,
    ) -> None:
        """Initialize the router.

        Args:
            keywords: Ordered mapping from keyword to an agent or a list of
                agents.
            default: Agents for requests matching no keyword.
            tokenizer: Tokenizer shared by every keyword node.
            settings: Settings instance; uses get_settings() if omitted.

        Raises:
            TreeConstructionError: If a keyword is invalid or repeated.
        """
        node: Node = LeafNode(default)
        seen: set[str] = set()
        for keyword in reversed(list(keywords)):
            normalized = keyword.strip().lower()
            if normalized in seen:
                raise TreeConstructionError(f"Duplicate keyword '{keyword}'")
            seen.add(normalized)
            node = KeywordNode(
                keyword,
                LeafNode(self._as_agents(keywords[keyword])),
                node,
                tokenizer=tokenizer,
            )
        super().__init__(node, settings=settings)

    @staticmethod
    def _as_agents(value: AgentOrAgents) -> list["Agent"]:
        if hasattr(value, "process"):
            return [value]  # type: ignore[list-item]
        return list(value)  # type: ignore[arg-type]


# =============================================================================
# Single Agent Router
# =============================================================================


class SingleAgentRouter:
    """Routes every request to the same agent."""

    def __init__(self, agent: "Agent") -> None:
        self.agent = agent

    def route(self, request: "Request") -> list["Agent"]:
        return [self.agent]

    def get_agents(self) -> list["Agent"]:
        return [self.agent]


# =============================================================================
# Chained Router
# =============================================================================


class ChainedRouter:
    """Asks routers in order and returns the first non-empty candidate list.

    Useful for layering a specific router (for example a keyword tree) in
    front of a catch-all SingleAgentRouter.
    """

    def __init__(self, *routers: Router) -> None:
        if not routers:
            raise ValueError("ChainedRouter needs at least one router")
        self.routers: tuple[Router, ...] = routers

    def route(self, request: "Request") -> list["Agent"]:
        for index, router in enumerate(self.routers):
            agents = router.route(request)
            if agents:
                logger.debug("Router %d of chain answered request %s", index, request.id)
                return agents
        return []

    def get_agents(self) -> list["Agent"]:
        return _unique(agent for router in self.routers for agent in router.get_agents())


__all__ = [
    "Router",
    "TreeRouter",
    "KeywordRouter",
    "SingleAgentRouter",
    "ChainedRouter",
]
