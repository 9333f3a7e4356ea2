from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

Action = Literal["bet", "check", "raise", "fold", "call"]
Street = Literal["flop", "turn", "river"]
Player = Literal["OOP", "IP"]

ACTIONS: tuple[str, ...] = ("bet", "check", "raise", "fold", "call")
STREETS: tuple[str, ...] = ("flop", "turn", "river")
PLAYERS: tuple[str, ...] = ("OOP", "IP")
AGGRESSIVE_ACTIONS = frozenset({"bet", "raise"})

LeakKind = Literal["overfold", "underfold", "overbluff", "underbluff", "float"]
ExploitKind = Literal["missed-exploit-call", "exploiting-call", "missed-exploit-bet", "exploiting-bet"]

LEAK_KINDS: tuple[str, ...] = ("overfold", "underfold", "overbluff", "underbluff", "float")
EXPLOIT_KINDS: tuple[str, ...] = ("missed-exploit-call", "exploiting-call", "missed-exploit-bet", "exploiting-bet")


def opponent(player: str) -> Player:
    return "IP" if player == "OOP" else "OOP"


def is_aggressive(action: str) -> bool:
    return action in AGGRESSIVE_ACTIONS


@dataclass(frozen=True, slots=True)
class DecisionNode:
    """One action in the betting tree. Children are owned by their parent."""

    id: str
    action: Action
    player: Player
    street: Street
    sizing: float | None = None
    children: tuple[DecisionNode, ...] = ()


@dataclass(frozen=True, slots=True)
class NodeFrequencies:
    frequency: float
    weak_percent: float | None = None


@dataclass(frozen=True, slots=True)
class FrequencyProfile:
    """Per-player strategy keyed by node id."""

    id: str
    name: str
    player: Player
    node_data: Mapping[str, NodeFrequencies] = field(default_factory=dict)
    description: str = ""
    spot_id: str = ""
    is_gto: bool = False

    def entry(self, node_id: str) -> NodeFrequencies | None:
        return self.node_data.get(node_id)


@dataclass(frozen=True, slots=True)
class ProfilePair:
    """The OOP and IP profiles playing one role (GTO baseline or active)."""

    oop: FrequencyProfile
    ip: FrequencyProfile

    def for_player(self, player: str) -> FrequencyProfile:
        return self.oop if player == "OOP" else self.ip


@dataclass(frozen=True, slots=True)
class Spot:
    id: str
    name: str
    tree: DecisionNode
    description: str = ""
    pot_size: float = 6.5
    oop_combos: float = 100.0
    ip_combos: float = 100.0


@dataclass(frozen=True, slots=True)
class AnnotatedNode:
    """A decision node with resolved actual and baseline frequencies."""

    id: str
    action: Action
    player: Player
    street: Street
    frequency: float
    gto_frequency: float
    sizing: float | None = None
    weak_percent: float | None = None
    gto_weak_percent: float | None = None
    children: tuple[AnnotatedNode, ...] = ()

    @property
    def is_overbluff(self) -> bool:
        if not is_aggressive(self.action):
            return False
        if self.weak_percent is None or self.gto_weak_percent is None:
            return False
        return self.weak_percent > self.gto_weak_percent


@dataclass(frozen=True, slots=True)
class Finding:
    """A leak or exploit located at a single node.

    ``reach_probability`` excludes the node's own frequency.  ``pot_size_at_node``
    and ``acting_player_combos_at_node`` are measured after the node's action.
    For float findings ``player`` is the caller's opponent and ``float_ev`` holds
    the expected value of the float in big blinds.
    """

    node_id: str
    player: Player
    kind: LeakKind | ExploitKind
    actual_value: float
    baseline_value: float
    absolute_difference: float
    relative_difference: float
    reach_probability: float
    street: Street
    pot_size_at_node: float
    acting_player_combos_at_node: float
    line: str
    float_ev: float | None = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    leaks: tuple[Finding, ...]
    exploits: tuple[Finding, ...]

    def for_player(self, player: str) -> AnalysisResult:
        return AnalysisResult(
            leaks=tuple(f for f in self.leaks if f.player == player),
            exploits=tuple(f for f in self.exploits if f.player == player),
        )
