from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...core.models import (
    DecisionNode,
    Finding,
    FrequencyProfile,
    NodeFrequencies,
    ProfilePair,
    Spot,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "FindingPayload",
    "NodeFrequenciesPayload",
    "ProfilePairPayload",
    "ProfilePayload",
    "SpotPayload",
    "TreeNodePayload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TreeNodePayload(_APIModel):
    id: str
    action: Literal["bet", "check", "raise", "fold", "call"]
    player: Literal["OOP", "IP"]
    street: Literal["flop", "turn", "river"]
    sizing: float | None = None
    children: list[TreeNodePayload] = Field(default_factory=list)

    def to_node(self) -> DecisionNode:
        return DecisionNode(
            id=self.id,
            action=self.action,
            player=self.player,
            street=self.street,
            sizing=self.sizing,
            children=tuple(child.to_node() for child in self.children),
        )


class NodeFrequenciesPayload(_APIModel):
    frequency: float
    weak_percent: float | None = Field(default=None, alias="weakPercent")


class ProfilePayload(_APIModel):
    id: str
    name: str
    player: Literal["OOP", "IP"]
    description: str = ""
    spot_id: str = Field(default="", alias="spotId")
    is_gto: bool = Field(default=False, alias="isGto")
    node_data: dict[str, NodeFrequenciesPayload] = Field(default_factory=dict, alias="nodeData")

    def to_profile(self) -> FrequencyProfile:
        return FrequencyProfile(
            id=self.id,
            name=self.name,
            player=self.player,
            description=self.description,
            spot_id=self.spot_id,
            is_gto=self.is_gto,
            node_data={
                node_id: NodeFrequencies(frequency=entry.frequency, weak_percent=entry.weak_percent)
                for node_id, entry in self.node_data.items()
            },
        )


class ProfilePairPayload(_APIModel):
    oop: ProfilePayload = Field(alias="OOP")
    ip: ProfilePayload = Field(alias="IP")

    @model_validator(mode="after")
    def _players_match_slots(self) -> ProfilePairPayload:
        if self.oop.player != "OOP":
            raise ValueError(f"profile '{self.oop.id}' belongs to {self.oop.player}, not OOP")
        if self.ip.player != "IP":
            raise ValueError(f"profile '{self.ip.id}' belongs to {self.ip.player}, not IP")
        return self

    def to_pair(self) -> ProfilePair:
        return ProfilePair(oop=self.oop.to_profile(), ip=self.ip.to_profile())


class SpotPayload(_APIModel):
    id: str
    name: str
    tree: TreeNodePayload
    description: str = ""
    pot_size: float = Field(default=6.5, alias="potSize")
    oop_combos: float = Field(default=100.0, alias="oopCombos")
    ip_combos: float = Field(default=100.0, alias="ipCombos")

    def to_spot(self) -> Spot:
        return Spot(
            id=self.id,
            name=self.name,
            description=self.description,
            pot_size=self.pot_size,
            oop_combos=self.oop_combos,
            ip_combos=self.ip_combos,
            tree=self.tree.to_node(),
        )


class AnalysisRequest(_APIModel):
    spot: SpotPayload
    gto_profiles: ProfilePairPayload = Field(alias="gtoProfiles")
    active_profiles: ProfilePairPayload | None = Field(default=None, alias="activeProfiles")
    hide_root_from_line: bool | None = Field(default=None, alias="hideRootFromLine")


class FindingPayload(_APIModel):
    node_id: str = Field(alias="nodeId")
    player: str
    type: str
    actual_value: float = Field(alias="actualValue")
    baseline_value: float = Field(alias="baselineValue")
    absolute_difference: float = Field(alias="absoluteDifference")
    relative_difference: float = Field(alias="relativeDifference")
    reach_probability: float = Field(alias="reachProbability")
    street: str
    pot_size_at_node: float = Field(alias="potSizeAtNode")
    acting_player_combos_at_node: float = Field(alias="actingPlayerCombosAtNode")
    line: str
    float_ev: float | None = Field(default=None, alias="floatEV")
    pattern: str | None = None

    @classmethod
    def from_finding(cls, finding: Finding, *, pattern: str | None = None) -> FindingPayload:
        return cls(
            node_id=finding.node_id,
            player=finding.player,
            type=finding.kind,
            actual_value=finding.actual_value,
            baseline_value=finding.baseline_value,
            absolute_difference=finding.absolute_difference,
            relative_difference=finding.relative_difference,
            reach_probability=finding.reach_probability,
            street=finding.street,
            pot_size_at_node=finding.pot_size_at_node,
            acting_player_combos_at_node=finding.acting_player_combos_at_node,
            line=finding.line,
            float_ev=finding.float_ev,
            pattern=pattern,
        )


class AnalysisResponse(_APIModel):
    leaks: list[FindingPayload]
    exploits: list[FindingPayload]


TreeNodePayload.model_rebuild()
