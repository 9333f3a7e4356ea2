from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from gtoleaks.core.models import DecisionNode, FrequencyProfile, NodeFrequencies, ProfilePair  # noqa: E402


def node(node_id: str, action: str, player: str, street: str = "flop", sizing: float | None = None, *children):
    return DecisionNode(id=node_id, action=action, player=player, street=street, sizing=sizing, children=tuple(children))


def profile(player: str, data: dict | None = None, *, is_gto: bool = False) -> FrequencyProfile:
    """Build a profile from ``{node_id: frequency}`` or ``{node_id: (frequency, weak)}``."""

    entries = {}
    for node_id, value in (data or {}).items():
        if isinstance(value, tuple):
            entries[node_id] = NodeFrequencies(frequency=value[0], weak_percent=value[1])
        else:
            entries[node_id] = NodeFrequencies(frequency=value)
    role = "gto" if is_gto else "player"
    return FrequencyProfile(
        id=f"{player.lower()}-{role}",
        name=f"{player} {role}",
        player=player,
        node_data=entries,
        is_gto=is_gto,
    )


def pair(oop: dict | None = None, ip: dict | None = None, *, is_gto: bool = False) -> ProfilePair:
    return ProfilePair(oop=profile("OOP", oop, is_gto=is_gto), ip=profile("IP", ip, is_gto=is_gto))


@pytest.fixture
def seed_tree() -> DecisionNode:
    """BB checks, BTN bets or checks back; three streets deep."""

    return node(
        "root", "check", "OOP", "flop", None,
        node(
            "bb-x-btn-b", "bet", "IP", "flop", 33,
            node(
                "bb-x-btn-b-bb-c", "call", "OOP", "flop", None,
                node(
                    "bb-x-btn-b-bb-c-btn-b", "bet", "IP", "turn", 66,
                    node("bb-x-btn-b-bb-c-btn-b-bb-f", "fold", "OOP", "turn"),
                ),
                node(
                    "bb-x-btn-b-bb-c-btn-x", "check", "IP", "turn", None,
                    node(
                        "bb-x-btn-b-bb-c-btn-x-bb-b", "bet", "OOP", "turn", 75,
                        node("bb-x-btn-b-bb-c-btn-x-bb-b-btn-r", "raise", "IP", "turn", 3),
                        node("bb-x-btn-b-bb-c-btn-x-bb-b-btn-c", "call", "IP", "turn"),
                        node("bb-x-btn-b-bb-c-btn-x-bb-b-btn-f", "fold", "IP", "turn"),
                    ),
                    node(
                        "bb-x-btn-b-bb-c-btn-x-bb-x", "check", "OOP", "turn", None,
                        node("bb-x-btn-b-bb-c-btn-x-bb-x-btn-x", "check", "IP", "river"),
                        node(
                            "bb-x-btn-b-bb-c-btn-x-bb-x-btn-b", "bet", "IP", "river", 75,
                            node("bb-x-btn-b-bb-c-btn-x-bb-x-btn-b-bb-f", "fold", "OOP", "river"),
                            node("bb-x-btn-b-bb-c-btn-x-bb-x-btn-b-bb-c", "call", "OOP", "river"),
                        ),
                    ),
                ),
            ),
            node("bb-x-btn-b-bb-r", "raise", "OOP", "flop", 3),
            node("bb-x-btn-b-bb-f", "fold", "OOP", "flop"),
        ),
        node(
            "bb-x-btn-x", "check", "IP", "flop", None,
            node(
                "bb-x-btn-x-bb-b", "bet", "OOP", "turn", 50,
                node("bb-x-btn-x-bb-b-btn-f", "fold", "IP", "turn"),
                node("bb-x-btn-x-bb-b-btn-c", "call", "IP", "turn"),
            ),
            node(
                "bb-x-btn-x-bb-x", "check", "OOP", "turn", None,
                node(
                    "bb-x-btn-x-bb-x-btn-b", "bet", "IP", "turn", 66,
                    node("bb-x-btn-x-bb-x-btn-b-bb-f", "fold", "OOP", "turn"),
                    node("bb-x-btn-x-bb-x-btn-b-bb-c", "call", "OOP", "turn"),
                ),
            ),
        ),
    )


@pytest.fixture
def seed_gto() -> ProfilePair:
    return pair(
        {
            "root": 1.0,
            "bb-x-btn-b-bb-c": 0.55,
            "bb-x-btn-b-bb-r": 0.1,
            "bb-x-btn-b-bb-f": 0.35,
            "bb-x-btn-b-bb-c-btn-b-bb-f": 0.4,
            "bb-x-btn-b-bb-c-btn-x-bb-b": (0.3, 0.35),
            "bb-x-btn-b-bb-c-btn-x-bb-x": 0.7,
            "bb-x-btn-b-bb-c-btn-x-bb-x-btn-b-bb-f": 0.45,
            "bb-x-btn-b-bb-c-btn-x-bb-x-btn-b-bb-c": 0.55,
            "bb-x-btn-x-bb-b": (0.4, 0.3),
            "bb-x-btn-x-bb-x": 0.6,
            "bb-x-btn-x-bb-x-btn-b-bb-f": 0.4,
            "bb-x-btn-x-bb-x-btn-b-bb-c": 0.6,
        },
        {
            "bb-x-btn-b": (0.6, 0.4),
            "bb-x-btn-x": 0.4,
            "bb-x-btn-b-bb-c-btn-b": (0.5, 0.3),
            "bb-x-btn-b-bb-c-btn-x": 0.5,
            "bb-x-btn-b-bb-c-btn-x-bb-b-btn-r": (0.1, 0.5),
            "bb-x-btn-b-bb-c-btn-x-bb-b-btn-c": 0.55,
            "bb-x-btn-b-bb-c-btn-x-bb-b-btn-f": 0.35,
            "bb-x-btn-b-bb-c-btn-x-bb-x-btn-x": 0.5,
            "bb-x-btn-b-bb-c-btn-x-bb-x-btn-b": (0.5, 0.35),
            "bb-x-btn-x-bb-b-btn-f": 0.45,
            "bb-x-btn-x-bb-b-btn-c": 0.55,
            "bb-x-btn-x-bb-x-btn-b": (0.55, 0.4),
        },
        is_gto=True,
    )
