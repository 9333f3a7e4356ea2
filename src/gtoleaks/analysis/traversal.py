"""Depth-first walk shared by the leak and exploit detectors.

Each visited node gets a :class:`NodeContext` describing the betting line at
that point: the pot and facing bet on either side of the node's action, the
probability of reaching the node, both players' remaining combos and both
players' formatted lines.  Detectors plug in as visitor callbacks, and an
optional ``step`` callback threads an immutable per-path value (such as the
exploit detector's overbluff flags) from a node to its children.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.formatting import EMPTY_PATH, LinePath, action_label, append_action, format_path
from ..core.models import AnnotatedNode, Finding
from ..core.pot import advance

__all__ = ["NodeContext", "Step", "Visitor", "node_contexts", "walk"]

S = TypeVar("S")

Visitor = Callable[["NodeContext", Any], Iterable[Finding]]
Step = Callable[["NodeContext", Any], Any]


@dataclass(frozen=True, slots=True)
class NodeContext:
    node: AnnotatedNode
    reach: float
    pot_before: float
    facing_bet_before: float
    pot_after: float
    facing_bet_after: float
    oop_combos: float
    ip_combos: float
    oop_path: LinePath
    ip_path: LinePath
    is_root: bool = False

    @property
    def child_reach(self) -> float:
        return self.reach * self.node.frequency

    def combos_for(self, player: str) -> float:
        return self.oop_combos if player == "OOP" else self.ip_combos

    def path_for(self, player: str) -> LinePath:
        return self.oop_path if player == "OOP" else self.ip_path

    def line_for(self, player: str) -> str:
        return format_path(self.path_for(player))

    @property
    def acting_combos(self) -> float:
        return self.combos_for(self.node.player)

    @property
    def line(self) -> str:
        return self.line_for(self.node.player)


def _descend(
    node: AnnotatedNode,
    *,
    reach: float,
    pot: float,
    facing_bet: float,
    oop_combos: float,
    ip_combos: float,
    oop_path: LinePath,
    ip_path: LinePath,
    is_root: bool,
    hide_root_from_line: bool,
    state: Any,
    step: Step | None,
) -> Iterator[tuple[NodeContext, Any]]:
    if node.player == "OOP":
        oop_combos = oop_combos * node.frequency
    else:
        ip_combos = ip_combos * node.frequency

    after = advance(node.action, pot, facing_bet, node.sizing)

    if not (is_root and hide_root_from_line):
        label = action_label(node.action, node.sizing, pot_before=pot, facing_bet_before=facing_bet)
        if node.player == "OOP":
            oop_path = append_action(oop_path, node.street, label)
        else:
            ip_path = append_action(ip_path, node.street, label)

    ctx = NodeContext(
        node=node,
        reach=reach,
        pot_before=pot,
        facing_bet_before=facing_bet,
        pot_after=after.pot,
        facing_bet_after=after.facing_bet,
        oop_combos=oop_combos,
        ip_combos=ip_combos,
        oop_path=oop_path,
        ip_path=ip_path,
        is_root=is_root,
    )
    yield ctx, state

    child_state = step(ctx, state) if step is not None else state
    for child in node.children:
        yield from _descend(
            child,
            reach=ctx.child_reach,
            pot=after.pot,
            facing_bet=after.facing_bet,
            oop_combos=oop_combos,
            ip_combos=ip_combos,
            oop_path=oop_path,
            ip_path=ip_path,
            is_root=False,
            hide_root_from_line=hide_root_from_line,
            state=child_state,
            step=step,
        )


def node_contexts(
    tree: AnnotatedNode,
    *,
    pot_size: float,
    oop_combos: float,
    ip_combos: float,
    hide_root_from_line: bool = False,
    state: Any = None,
    step: Step | None = None,
) -> Iterator[tuple[NodeContext, Any]]:
    """Yield ``(context, state)`` for every node in pre-order.

    ``state`` is the per-path value in effect when the node is reached, before
    ``step`` folds the node itself in for its children.
    """

    return _descend(
        tree,
        reach=1.0,
        pot=pot_size,
        facing_bet=0.0,
        oop_combos=oop_combos,
        ip_combos=ip_combos,
        oop_path=EMPTY_PATH,
        ip_path=EMPTY_PATH,
        is_root=True,
        hide_root_from_line=hide_root_from_line,
        state=state,
        step=step,
    )


def walk(
    tree: AnnotatedNode,
    visit: Visitor,
    *,
    pot_size: float,
    oop_combos: float,
    ip_combos: float,
    hide_root_from_line: bool = False,
    state: S | None = None,
    step: Step | None = None,
) -> list[Finding]:
    """Run ``visit`` on every node in pre-order and collect its findings."""

    findings: list[Finding] = []
    for ctx, node_state in node_contexts(
        tree,
        pot_size=pot_size,
        oop_combos=oop_combos,
        ip_combos=ip_combos,
        hide_root_from_line=hide_root_from_line,
        state=state,
        step=step,
    ):
        findings.extend(visit(ctx, node_state))
    return findings
