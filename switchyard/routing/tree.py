"""Routing decision trees.

A routing tree is a hand-authored decision procedure that narrows the set
of agents able to handle a request. Decision nodes branch on request
content; leaf nodes hold the ordered candidate agents.

Node kinds are a flat family behind the Node protocol rather than an
inheritance hierarchy:

    KeywordNode: Branches on whether a keyword occurs as a whole token in
        the request text, ignoring case.
    LeafNode: Terminal node holding an ordered tuple of candidate agents.

Trees are immutable once built and are shared read-only by every request,
so traversal needs no locking. ``validate_tree`` checks a tree for cycles,
non-node children and excessive depth; TreeRouter calls it on construction.

Example:
    >>> weather = LeafNode([weather_agent])
    >>> fallback = LeafNode([chat_agent])
    >>> root = KeywordNode("weather", weather, fallback)
    >>> root.select_child(Request("Weather in Paris?")) is weather
    True
    >>> root.select_child(Request("weathering the storm")) is fallback
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Protocol, runtime_checkable

from switchyard.config.settings import DEFAULT_MAX_TREE_DEPTH
from switchyard.core.exceptions import InvalidNodeOperationError, TreeConstructionError
from switchyard.nlp.tokenizer import RuleBasedTokenizer, Tokenizer

if TYPE_CHECKING:
    from switchyard.agents.base import Agent
    from switchyard.core.types import Request


logger = logging.getLogger(__name__)


# =============================================================================
# Node Protocol
# =============================================================================


@runtime_checkable
class Node(Protocol):
    """Element of a routing tree.

    Decision nodes implement ``select_child`` and ``get_children``; leaf
    nodes implement ``get_value``. Calling ``select_child`` on a leaf is a
    programming error and raises InvalidNodeOperationError.
    """

    def select_child(self, request: "Request") -> "Node":
        ...

    def get_children(self) -> list["Node"]:
        ...

    def is_leaf(self) -> bool:
        ...

    def get_value(self) -> Optional[list["Agent"]]:
        ...


# =============================================================================
# Keyword Node
# =============================================================================


class KeywordNode:
    """Decision node that branches on a keyword.

    The request text is lowercased and tokenized; the matched child is
    selected when the keyword equals one of the tokens. Substrings never
    match: keyword "weather" does not match "weathering".

    Attributes:
        keyword: The lowercased keyword.
        matched: Child selected when the keyword is present.
        non_matched: Child selected otherwise.
    """

    __slots__ = ("_keyword", "_matched", "_non_matched", "_tokenizer")

    def __init__(
        self,
        keyword: str,
        matched: Node,
        non_matched: Node,
        tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        """Create a keyword node.

        Args:
            keyword: Keyword to look for. Must be a single token under the
                node's tokenizer.
            matched: Node returned when the keyword is present.
            non_matched: Node returned when the keyword is absent.
            tokenizer: Tokenizer applied to request text. Defaults to
                RuleBasedTokenizer.

        Raises:
            TreeConstructionError: If the keyword is empty or not a single
                token, or if a child is not a Node.
        """
        tokenizer = tokenizer or RuleBasedTokenizer()
        normalized = (keyword or "").strip().lower()
        if not normalized:
            raise TreeConstructionError("Keyword must not be empty")
        if tokenizer.tokenize(normalized) != [normalized]:
            raise TreeConstructionError(
                f"Keyword '{keyword}' is not a single token and could never match",
                node=f"KeywordNode({keyword!r})",
            )
        for label, child in (("matched", matched), ("non_matched", non_matched)):
            if not isinstance(child, Node):
                raise TreeConstructionError(
                    f"{label} child of keyword '{normalized}' is not a Node: {child!r}",
                    node=f"KeywordNode({normalized!r})",
                )

        self._keyword = normalized
        self._matched = matched
        self._non_matched = non_matched
        self._tokenizer = tokenizer

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def matched(self) -> Node:
        return self._matched

    @property
    def non_matched(self) -> Node:
        return self._non_matched

    def matches(self, text: str) -> bool:
        """Check whether the keyword occurs as a token of ``text``."""
        return self._keyword in self._tokenizer.tokenize(text.lower())

    def select_child(self, request: "Request") -> Node:
        if self.matches(request.text):
            logger.debug("Keyword '%s' matched request %s", self._keyword, request.id)
            return self._matched
        return self._non_matched

    def get_children(self) -> list[Node]:
        return [self._matched, self._non_matched]

    def is_leaf(self) -> bool:
        return False

    def get_value(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"KeywordNode(keyword={self._keyword!r})"


# =============================================================================
# Leaf Node
# =============================================================================


class LeafNode:
    """Terminal node holding the candidate agents.

    The order of the agents is their priority: the application tries them
    first to last. An empty leaf is a valid "no route" outcome.
    """

    __slots__ = ("_agents",)

    def __init__(self, agents: Iterable["Agent"] = ()) -> None:
        self._agents: tuple["Agent", ...] = tuple(agents)

    def select_child(self, request: "Request") -> Node:
        raise InvalidNodeOperationError(
            "Leaf nodes have no children to select", operation="select_child"
        )

    def get_children(self) -> list[Node]:
        return []

    def is_leaf(self) -> bool:
        return True

    def get_value(self) -> list["Agent"]:
        return list(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __repr__(self) -> str:
        return f"LeafNode(agents={len(self._agents)})"


# =============================================================================
# Validation
# =============================================================================

_EXHAUSTED = object()


def _children_of(node: Node) -> list[Node]:
    if node.is_leaf():
        if node.get_value() is None:
            raise TreeConstructionError("Leaf node has no candidate list", node=repr(node))
        return []
    children = node.get_children()
    if not children:
        raise TreeConstructionError("Decision node has no children", node=repr(node))
    for child in children:
        if not isinstance(child, Node):
            raise TreeConstructionError(
                f"Child of {node!r} is not a Node: {child!r}", node=repr(node)
            )
    return list(children)


def validate_tree(root: Node, max_depth: int = DEFAULT_MAX_TREE_DEPTH) -> int:
    """Check that a routing tree is finite and well formed.

    Walks every path from the root. Subtrees shared by several parents are
    allowed and visited once.

    Args:
        root: Root node of the tree.
        max_depth: Maximum number of decisions on any root-to-leaf path.

    Returns:
        The depth of the tree (0 for a lone leaf).

    Raises:
        TreeConstructionError: If a node is reachable from itself, a child
            is not a Node, a leaf has no candidate list, a decision node has
            no children, or the tree is deeper than ``max_depth``.
    """
    if not isinstance(root, Node):
        raise TreeConstructionError(f"Root is not a Node: {root!r}")

    heights: dict[int, int] = {}
    on_path: set[int] = {id(root)}
    # Frames are [node, child iterator, depth, height of subtree so far]
    stack: list[list] = [[root, iter(_children_of(root)), 0, 0]]

    while stack:
        frame = stack[-1]
        node, children, depth = frame[0], frame[1], frame[2]
        child = next(children, _EXHAUSTED)

        if child is _EXHAUSTED:
            stack.pop()
            on_path.discard(id(node))
            heights[id(node)] = frame[3]
            if stack:
                stack[-1][3] = max(stack[-1][3], frame[3] + 1)
            continue

        if id(child) in on_path:
            raise TreeConstructionError(
                f"Routing tree has a cycle through {child!r}", node=repr(child)
            )
        if id(child) in heights:
            if depth + 1 + heights[id(child)] > max_depth:
                raise TreeConstructionError(
                    f"Routing tree is deeper than {max_depth}", node=repr(child)
                )
            frame[3] = max(frame[3], heights[id(child)] + 1)
            continue
        if depth + 1 > max_depth:
            raise TreeConstructionError(
                f"Routing tree is deeper than {max_depth}", node=repr(child)
            )

        on_path.add(id(child))
        stack.append([child, iter(_children_of(child)), depth + 1, 0])

    return heights[id(root)]


def iter_leaves(root: Node) -> list[Node]:
    """Return the distinct leaves of a tree, depth-first, matched branch first."""
    leaves: list[Node] = []
    seen: set[int] = set()
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if node.is_leaf():
            leaves.append(node)
        else:
            stack.extend(reversed(node.get_children()))
    return leaves


__all__ = [
    "Node",
    "KeywordNode",
    "LeafNode",
    "validate_tree",
    "iter_leaves",
]
