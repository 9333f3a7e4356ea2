"""Pot and facing-bet bookkeeping for a single betting action.

Bet sizing is a percentage of the pot before the bet.  Raise sizing is a
multiple of the bet being faced, so a raise with nothing to face adds nothing
to the pot.  Values stay unrounded; formatting rounds at display time.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DEFAULT_BET_SIZING", "DEFAULT_RAISE_MULTIPLIER", "PotState", "advance", "bet_amount"]

DEFAULT_BET_SIZING = 50.0
DEFAULT_RAISE_MULTIPLIER = 3.0


@dataclass(frozen=True, slots=True)
class PotState:
    pot: float
    facing_bet: float = 0.0


def bet_amount(pot: float, sizing: float | None) -> float:
    """Return the chips put in by a bet of ``sizing`` percent of ``pot``."""

    return pot * (sizing or DEFAULT_BET_SIZING) / 100.0


def advance(action: str, pot_before: float, facing_bet_before: float, sizing: float | None = None) -> PotState:
    """Return the pot and facing bet after ``action`` resolves."""

    if action == "bet":
        amount = bet_amount(pot_before, sizing)
        return PotState(pot=pot_before + amount, facing_bet=amount)
    if action == "raise":
        total = (sizing or DEFAULT_RAISE_MULTIPLIER) * facing_bet_before
        return PotState(pot=pot_before + total, facing_bet=total - facing_bet_before)
    if action == "call":
        return PotState(pot=pot_before + facing_bet_before, facing_bet=0.0)
    # check, fold
    return PotState(pot=pot_before, facing_bet=0.0)
