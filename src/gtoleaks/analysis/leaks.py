from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.models import AnnotatedNode, Finding, LeakKind, opponent
from ..core.pot import bet_amount
from .traversal import NodeContext, walk

__all__ = ["best_float_ev", "find_leaks", "relative_difference"]

logger = logging.getLogger(__name__)


def relative_difference(difference: float, baseline: float) -> float:
    """Return ``difference`` relative to ``baseline``, or 0 when the baseline is 0."""

    if baseline > 0:
        return difference / baseline
    return 0.0


def _deviation(ctx: NodeContext, kind: LeakKind, actual: float, baseline: float) -> Finding:
    node = ctx.node
    difference = abs(actual - baseline)
    return Finding(
        node_id=node.id,
        player=node.player,
        kind=kind,
        actual_value=actual,
        baseline_value=baseline,
        absolute_difference=difference,
        relative_difference=relative_difference(difference, baseline),
        reach_probability=ctx.reach,
        street=node.street,
        pot_size_at_node=ctx.pot_after,
        acting_player_combos_at_node=ctx.acting_combos,
        line=ctx.line,
    )


def _fold_leak(ctx: NodeContext) -> Finding | None:
    node = ctx.node
    if node.action != "fold":
        return None
    if node.frequency > node.gto_frequency:
        return _deviation(ctx, "overfold", node.frequency, node.gto_frequency)
    if node.frequency < node.gto_frequency:
        return _deviation(ctx, "underfold", node.frequency, node.gto_frequency)
    return None


def _bluff_leak(ctx: NodeContext) -> Finding | None:
    node = ctx.node
    if node.action not in ("bet", "raise"):
        return None
    weak, gto_weak = node.weak_percent, node.gto_weak_percent
    if weak is None or gto_weak is None or weak == gto_weak:
        return None
    kind = "overbluff" if weak > gto_weak else "underbluff"
    return _deviation(ctx, kind, weak, gto_weak)


def best_float_ev(call: AnnotatedNode, *, pot_after_call: float, call_amount: float) -> float | None:
    """Return the best positive EV of floating ``call``, if any line is profitable.

    A float line is: the next action checks, the caller then bets, and the
    original bettor folds to that bet.  EV is measured in big blinds against
    the chips spent on the call.
    """

    best: float | None = None
    for check in call.children:
        if check.action != "check":
            continue
        for bet in check.children:
            if bet.player != call.player or bet.action != "bet":
                continue
            risk = bet_amount(pot_after_call, bet.sizing)
            for fold in bet.children:
                if fold.action != "fold" or fold.player == call.player:
                    continue
                ev = (
                    check.frequency * (fold.frequency * pot_after_call - (1.0 - fold.frequency) * risk)
                    - call_amount
                )
                if ev > 0 and (best is None or ev > best):
                    best = ev
    return best


def _float_opportunity(ctx: NodeContext) -> Finding | None:
    node = ctx.node
    if node.action != "call":
        return None
    ev = best_float_ev(node, pot_after_call=ctx.pot_after, call_amount=ctx.facing_bet_before)
    if ev is None:
        return None
    exploited = opponent(node.player)
    return Finding(
        node_id=node.id,
        player=exploited,
        kind="float",
        actual_value=0.0,
        baseline_value=0.0,
        absolute_difference=ev,
        relative_difference=0.0,
        reach_probability=ctx.reach,
        street=node.street,
        pot_size_at_node=ctx.pot_after,
        acting_player_combos_at_node=ctx.combos_for(exploited),
        line=ctx.line_for(exploited),
        float_ev=ev,
    )


def find_leaks(
    tree: AnnotatedNode,
    *,
    pot_size: float,
    oop_combos: float,
    ip_combos: float,
    hide_root_from_line: bool = False,
    include_floats: bool = True,
) -> list[Finding]:
    """Return fold, bluff and float leaks in traversal order.

    A node can carry more than one leak; float findings are attributed to the
    player who would be floated, not to the caller.
    """

    def _visit(ctx: NodeContext, _state: object) -> Iterable[Finding]:
        found = [_fold_leak(ctx), _bluff_leak(ctx)]
        if include_floats:
            found.append(_float_opportunity(ctx))
        return [finding for finding in found if finding is not None]

    leaks = walk(
        tree,
        _visit,
        pot_size=pot_size,
        oop_combos=oop_combos,
        ip_combos=ip_combos,
        hide_root_from_line=hide_root_from_line,
    )
    logger.debug("leak scan complete", extra={"root": tree.id, "leaks": len(leaks)})
    return leaks
