from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = [
    "ACTION_CODES",
    "EMPTY_PATH",
    "LINE_SEPARATOR",
    "STREET_CODES",
    "LinePath",
    "PathSegment",
    "action_label",
    "append_action",
    "format_path",
    "round_half_up",
]

ACTION_CODES: dict[str, str] = {
    "bet": "B",
    "check": "X",
    "raise": "R",
    "fold": "F",
    "call": "C",
}

STREET_CODES: dict[str, str] = {
    "flop": "F",
    "turn": "T",
    "river": "R",
}

LINE_SEPARATOR = " → "


@dataclass(frozen=True, slots=True)
class PathSegment:
    street: str
    actions: tuple[str, ...]


LinePath = tuple[PathSegment, ...]
EMPTY_PATH: LinePath = ()


def _fmt_number(value: float) -> str:
    if float(value).is_integer():
        return f"{value:.0f}"
    return repr(float(value))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def action_label(
    action: str,
    sizing: float | None = None,
    *,
    pot_before: float = 0.0,
    facing_bet_before: float = 0.0,
) -> str:
    """Return the compact label for one action, e.g. ``B33``, ``R3X`` or ``C50``.

    Calls are tagged with the price laid to the caller as a percentage of the
    pot before the bet was made, when there is a bet to call.
    """

    code = ACTION_CODES.get(action, action[:1].upper())
    if action == "bet" and sizing is not None:
        return f"{code}{_fmt_number(sizing)}"
    if action == "raise" and sizing is not None:
        return f"{code}{_fmt_number(sizing)}X"
    if action == "call" and facing_bet_before > 0 and pot_before > facing_bet_before:
        pct = round_half_up(facing_bet_before / (pot_before - facing_bet_before) * 100.0)
        return f"{code}{pct}"
    return code


def append_action(path: LinePath, street: str, label: str) -> LinePath:
    """Return ``path`` extended by ``label``, merging into the current street."""

    if path and path[-1].street == street:
        last = path[-1]
        return path[:-1] + (PathSegment(street=street, actions=last.actions + (label,)),)
    return path + (PathSegment(street=street, actions=(label,)),)


def format_path(path: LinePath) -> str:
    return LINE_SEPARATOR.join("".join(segment.actions) for segment in path)
