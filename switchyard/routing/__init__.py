"""Routing module for switchyard.

This module selects which agents may handle a request. The central piece
is the routing tree: keyword decision nodes that narrow the request down
to a leaf of candidate agents.

Key Components:
    Node: Protocol for routing tree elements.
    KeywordNode: Decision node branching on a whole-token keyword.
    LeafNode: Terminal node holding ordered candidate agents.
    validate_tree: Rejects cyclic, incomplete or overly deep trees.
    Router: Protocol for routing strategies.
    TreeRouter: Walks a routing tree from the root to a leaf.
    KeywordRouter: Builds a keyword tree from an ordered mapping.
    SingleAgentRouter: Routes everything to one agent.
    ChainedRouter: Falls through routers until one has candidates.

Usage:
    from switchyard.routing import KeywordNode, LeafNode, TreeRouter

    tree = KeywordNode(
        "weather",
        LeafNode([weather_agent]),
        LeafNode([chat_agent]),
    )
    router = TreeRouter(tree)
    agents = router.route(request)
"""

from switchyard.routing.tree import (
    Node,
    KeywordNode,
    LeafNode,
    validate_tree,
    iter_leaves,
)
from switchyard.routing.router import (
    Router,
    TreeRouter,
    KeywordRouter,
    SingleAgentRouter,
    ChainedRouter,
)

__all__ = [
    "Node",
    "KeywordNode",
    "LeafNode",
    "validate_tree",
    "iter_leaves",
    "Router",
    "TreeRouter",
    "KeywordRouter",
    "SingleAgentRouter",
    "ChainedRouter",
]
