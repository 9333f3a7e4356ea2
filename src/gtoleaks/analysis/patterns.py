"""Classify the bet behind a finding as a stab, probe or donk.

The classifier works from an ``id -> parent`` index built once per tree, so
nodes never need back-references to their parents.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Literal, Union

from ..core.models import AnnotatedNode, DecisionNode, is_aggressive

__all__ = ["PATTERNS", "Pattern", "TreeIndex", "classify_pattern", "last_aggressor"]

Pattern = Literal["stab", "donk", "probe"]
PATTERNS: tuple[str, ...] = ("stab", "donk", "probe")

TreeNode = Union[AnnotatedNode, DecisionNode]


@dataclass(frozen=True, slots=True)
class TreeIndex:
    nodes: Mapping[str, TreeNode]
    parents: Mapping[str, str | None]

    @classmethod
    def build(cls, tree: TreeNode) -> TreeIndex:
        nodes: dict[str, TreeNode] = {}
        parents: dict[str, str | None] = {}
        stack: list[tuple[TreeNode, str | None]] = [(tree, None)]
        while stack:
            node, parent_id = stack.pop()
            nodes[node.id] = node
            parents[node.id] = parent_id
            stack.extend((child, node.id) for child in node.children)
        return cls(nodes=nodes, parents=parents)

    def parent(self, node_id: str) -> TreeNode | None:
        parent_id = self.parents.get(node_id)
        return None if parent_id is None else self.nodes.get(parent_id)

    def ancestors(self, node_id: str) -> Iterator[TreeNode]:
        """Yield the node itself and then each ancestor up to the root."""

        current = self.nodes.get(node_id)
        while current is not None:
            yield current
            current = self.parent(current.id)


def last_aggressor(index: TreeIndex, node_id: str) -> str | None:
    """Return the player behind the most recent bet/raise at or above ``node_id``."""

    for node in index.ancestors(node_id):
        if is_aggressive(node.action):
            return node.player
    return None


def classify_pattern(index: TreeIndex, node_id: str) -> Pattern | None:
    node = index.nodes.get(node_id)
    if node is None:
        return None

    if is_aggressive(node.action):
        bet = node
    else:
        parent = index.parent(node_id)
        if parent is None or not is_aggressive(parent.action):
            return None
        bet = parent

    before = index.parent(bet.id)
    if before is None:
        return None

    if bet.player == "IP" and before.action == "check" and before.player == "OOP":
        # IP continuing its own aggression is a c-bet, not a stab
        return "stab" if last_aggressor(index, before.id) != "IP" else None
    if bet.player == "OOP" and before.action == "check" and before.player == "IP":
        return "probe"
    if before.action == "call" and before.player == bet.player:
        return "donk"
    return None
