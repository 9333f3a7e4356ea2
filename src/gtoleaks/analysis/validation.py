from __future__ import annotations

import math

from ..core.errors import InvalidFrequencyError, MalformedTreeError
from ..core.models import ACTIONS, PLAYERS, STREETS, DecisionNode, FrequencyProfile, ProfilePair

__all__ = ["validate_profile", "validate_profiles", "validate_tree"]


def validate_tree(tree: DecisionNode) -> int:
    """Check ids, structure and enums; return the node count.

    A node object reachable along two paths is reported as malformed, which
    also rejects cycles built from mutable child lists.
    """

    seen_ids: set[str] = set()
    on_path: set[int] = set()
    visited: set[int] = set()

    def _check(node: DecisionNode) -> None:
        marker = id(node)
        if marker in on_path:
            raise MalformedTreeError(f"cycle detected at node '{node.id}'", node_id=node.id)
        if marker in visited:
            raise MalformedTreeError(f"node '{node.id}' appears under more than one parent", node_id=node.id)
        if node.id in seen_ids:
            raise MalformedTreeError(f"duplicate node id '{node.id}'", node_id=node.id)
        if node.action not in ACTIONS:
            raise MalformedTreeError(f"node '{node.id}' has unknown action {node.action!r}", node_id=node.id)
        if node.player not in PLAYERS:
            raise MalformedTreeError(f"node '{node.id}' has unknown player {node.player!r}", node_id=node.id)
        if node.street not in STREETS:
            raise MalformedTreeError(f"node '{node.id}' has unknown street {node.street!r}", node_id=node.id)
        seen_ids.add(node.id)
        visited.add(marker)
        on_path.add(marker)
        for child in node.children:
            _check(child)
        on_path.discard(marker)

    _check(tree)
    return len(seen_ids)


def _check_unit(value: float | None, *, node_id: str, field: str) -> None:
    if value is None:
        return
    if isinstance(value, float) and math.isnan(value):
        raise InvalidFrequencyError(f"{field} for node '{node_id}' is NaN", node_id=node_id, value=value)
    if not 0.0 <= value <= 1.0:
        raise InvalidFrequencyError(
            f"{field} for node '{node_id}' must be within [0, 1]; got {value}",
            node_id=node_id,
            value=value,
        )


def validate_profile(profile: FrequencyProfile) -> None:
    for node_id, entry in profile.node_data.items():
        _check_unit(entry.frequency, node_id=node_id, field="frequency")
        _check_unit(entry.weak_percent, node_id=node_id, field="weakPercent")


def validate_profiles(*pairs: ProfilePair | None) -> None:
    for pair in pairs:
        if pair is None:
            continue
        validate_profile(pair.oop)
        validate_profile(pair.ip)
