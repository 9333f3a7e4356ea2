"""Second-order findings: deviations that answer (or ignore) an opponent leak.

Calling deviations are judged against whether the opponent has overbluffed
anywhere earlier on the same line.  Betting deviations are judged against
whether the opponent overfolds directly to the bet.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import AnnotatedNode, ExploitKind, Finding, is_aggressive, opponent
from .leaks import relative_difference
from .traversal import NodeContext, walk

__all__ = ["OverbluffState", "classify_exploit", "find_exploits", "opponent_overfolds"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OverbluffState:
    """Whether each player has overbluffed somewhere above the current node."""

    oop: bool = False
    ip: bool = False

    def has_overbluffed(self, player: str) -> bool:
        return self.oop if player == "OOP" else self.ip

    def after(self, node: AnnotatedNode) -> OverbluffState:
        if not node.is_overbluff or self.has_overbluffed(node.player):
            return self
        if node.player == "OOP":
            return OverbluffState(oop=True, ip=self.ip)
        return OverbluffState(oop=self.oop, ip=True)


def opponent_overfolds(node: AnnotatedNode) -> bool:
    """True when some immediate fold response by the other player exceeds GTO."""

    return any(
        child.action == "fold" and child.player != node.player and child.frequency > child.gto_frequency
        for child in node.children
    )


def classify_exploit(node: AnnotatedNode, state: OverbluffState) -> ExploitKind | None:
    """Return the exploit kind for ``node`` given the overbluffs above it."""

    overbluffed = state.has_overbluffed(opponent(node.player))
    freq, gto = node.frequency, node.gto_frequency

    if node.action == "fold" and overbluffed:
        if freq > gto:
            return "missed-exploit-call"
        if freq < gto:
            return "exploiting-call"
    if node.action == "call" and overbluffed and freq > gto:
        return "exploiting-call"
    if is_aggressive(node.action) and freq != gto and opponent_overfolds(node):
        return "missed-exploit-bet" if freq < gto else "exploiting-bet"
    return None


def _exploit(ctx: NodeContext, kind: ExploitKind) -> Finding:
    node = ctx.node
    difference = abs(node.frequency - node.gto_frequency)
    return Finding(
        node_id=node.id,
        player=node.player,
        kind=kind,
        actual_value=node.frequency,
        baseline_value=node.gto_frequency,
        absolute_difference=difference,
        relative_difference=relative_difference(difference, node.gto_frequency),
        reach_probability=ctx.reach,
        street=node.street,
        pot_size_at_node=ctx.pot_after,
        acting_player_combos_at_node=ctx.acting_combos,
        line=ctx.line,
    )


def find_exploits(
    tree: AnnotatedNode,
    *,
    pot_size: float,
    oop_combos: float,
    ip_combos: float,
    hide_root_from_line: bool = False,
) -> list[Finding]:
    """Return exploit findings in traversal order, at most one per node."""

    def _visit(ctx: NodeContext, state: OverbluffState) -> Iterable[Finding]:
        kind = classify_exploit(ctx.node, state)
        return () if kind is None else (_exploit(ctx, kind),)

    def _step(ctx: NodeContext, state: OverbluffState) -> OverbluffState:
        return state.after(ctx.node)

    exploits = walk(
        tree,
        _visit,
        pot_size=pot_size,
        oop_combos=oop_combos,
        ip_combos=ip_combos,
        hide_root_from_line=hide_root_from_line,
        state=OverbluffState(),
        step=_step,
    )
    logger.debug("exploit scan complete", extra={"root": tree.id, "exploits": len(exploits)})
    return exploits
