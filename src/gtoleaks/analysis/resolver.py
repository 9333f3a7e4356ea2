"""Merge GTO and active profiles onto a decision tree.

Active profiles only need to store the nodes where they deviate: any node
missing from the active profile inherits the GTO values unchanged.
"""

from __future__ import annotations

from ..core.config import DEFAULT_UNSET_FREQUENCY
from ..core.models import AnnotatedNode, DecisionNode, FrequencyProfile, ProfilePair

__all__ = ["resolve_node", "resolve_tree"]


def resolve_node(
    node: DecisionNode,
    gto: FrequencyProfile,
    active: FrequencyProfile,
    *,
    unset_frequency: float = DEFAULT_UNSET_FREQUENCY,
    children: tuple[AnnotatedNode, ...] = (),
) -> AnnotatedNode:
    gto_entry = gto.entry(node.id)
    active_entry = active.entry(node.id)

    gto_frequency = gto_entry.frequency if gto_entry is not None else unset_frequency
    gto_weak = gto_entry.weak_percent if gto_entry is not None else None

    frequency = gto_frequency
    weak = gto_weak
    if active_entry is not None:
        frequency = active_entry.frequency
        if active_entry.weak_percent is not None:
            weak = active_entry.weak_percent

    return AnnotatedNode(
        id=node.id,
        action=node.action,
        player=node.player,
        street=node.street,
        sizing=node.sizing,
        frequency=frequency,
        gto_frequency=gto_frequency,
        weak_percent=weak,
        gto_weak_percent=gto_weak,
        children=children,
    )


def resolve_tree(
    tree: DecisionNode,
    gto_profiles: ProfilePair,
    active_profiles: ProfilePair | None = None,
    *,
    unset_frequency: float = DEFAULT_UNSET_FREQUENCY,
) -> AnnotatedNode:
    """Annotate every node of ``tree`` with actual and GTO frequencies.

    Profiles are picked per node by the acting player.  Without
    ``active_profiles`` the GTO profiles are compared against themselves.
    """

    active_pair = active_profiles or gto_profiles

    def _resolve(node: DecisionNode) -> AnnotatedNode:
        children = tuple(_resolve(child) for child in node.children)
        return resolve_node(
            node,
            gto_profiles.for_player(node.player),
            active_pair.for_player(node.player),
            unset_frequency=unset_frequency,
            children=children,
        )

    return _resolve(tree)
