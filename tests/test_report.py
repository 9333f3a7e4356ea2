from __future__ import annotations

import pytest
from conftest import node, pair

from gtoleaks.analysis import report
from gtoleaks.analysis.engine import analyze_spot
from gtoleaks.analysis.patterns import TreeIndex
from gtoleaks.core.models import Finding, Spot


def _finding(node_id: str, kind: str = "overfold", **overrides) -> Finding:
    values = {
        "node_id": node_id,
        "player": "OOP",
        "kind": kind,
        "actual_value": 0.5,
        "baseline_value": 0.2,
        "absolute_difference": 0.3,
        "relative_difference": 1.5,
        "reach_probability": 1.0,
        "street": "flop",
        "pot_size_at_node": 15.0,
        "acting_player_combos_at_node": 50.0,
        "line": "XF",
    }
    values.update(overrides)
    return Finding(**values)


def _check_bet_fold_spot() -> Spot:
    tree = node(
        "root", "check", "OOP", "flop", None,
        node("A", "bet", "IP", "flop", 50, node("B", "fold", "OOP", "flop")),
    )
    return Spot(id="x-b", name="Check, bet", tree=tree, pot_size=10.0)


def test_tsv_row_for_overfold() -> None:
    result = analyze_spot(_check_bet_fold_spot(), pair({"B": 0.2}, is_gto=True), pair({"B": 0.5}))

    lines = report.to_tsv(result.leaks).split("\n")

    assert lines[0].split("\t") == [
        "Type", "Street", "Line", "Pot (BB)", "Reach %", "Combos", "Actual %", "GTO %", "Diff %", "Rel. Diff %",
    ]
    assert lines[1] == "Overfold\tF\tXF\t15.0\t100.0\t50.0\t50\t20\t+30%\t150"


def test_tsv_marks_below_baseline_kinds_negative() -> None:
    row = report.to_tsv([_finding("B", "underbluff", actual_value=0.1, baseline_value=0.4)]).split("\n")[1]

    assert row.split("\t")[0] == "Underbluff"
    assert row.split("\t")[8] == "-30%"


def test_tsv_float_row() -> None:
    finding = _finding("call", "float", actual_value=0.0, baseline_value=0.0, absolute_difference=1.4,
                       relative_difference=0.0, float_ev=1.4, pot_size_at_node=20.0, line="B50")

    cells = report.to_tsv([finding]).split("\n")[1].split("\t")

    assert cells == ["Float", "F", "B50", "20.0", "100.0", "50.0", "-", "-", "+1.40 BB", "-"]


def test_tsv_without_findings_is_header_only() -> None:
    assert report.to_tsv([]).count("\n") == 0


def test_sort_by_relative_difference_descending_by_default() -> None:
    findings = [
        _finding("a", relative_difference=0.5),
        _finding("b", relative_difference=2.0),
        _finding("c", relative_difference=1.0),
    ]

    assert [f.node_id for f in report.sort_findings(findings)] == ["b", "c", "a"]
    assert [f.node_id for f in report.sort_findings(findings, "rel_diff", descending=False)] == ["a", "c", "b"]


def test_sort_by_street_follows_street_order() -> None:
    findings = [_finding("r", street="river"), _finding("f", street="flop"), _finding("t", street="turn")]

    assert [f.node_id for f in report.sort_findings(findings, "street", descending=False)] == ["f", "t", "r"]


def test_sort_rejects_unknown_field() -> None:
    with pytest.raises(ValueError, match="unknown sort field"):
        report.sort_findings([], "ev")


def test_filter_by_kind_and_street() -> None:
    findings = [
        _finding("a", "overfold", street="flop"),
        _finding("b", "overfold", street="turn"),
        _finding("c", "overbluff", street="turn"),
    ]

    assert [f.node_id for f in report.filter_findings(findings, kind="overfold")] == ["a", "b"]
    assert [f.node_id for f in report.filter_findings(findings, street="turn")] == ["b", "c"]
    assert [f.node_id for f in report.filter_findings(findings, kind="overfold", street="turn")] == ["b"]


def test_filter_by_pattern(seed_tree) -> None:
    index = TreeIndex.build(seed_tree)
    findings = [_finding("bb-x-btn-b-bb-f"), _finding("bb-x-btn-x-bb-b-btn-f"), _finding("root")]

    stabs = report.filter_findings(findings, pattern="stab", index=index)
    probes = report.filter_findings(findings, pattern="probe", index=index)

    assert [f.node_id for f in stabs] == ["bb-x-btn-b-bb-f"]
    assert [f.node_id for f in probes] == ["bb-x-btn-x-bb-b-btn-f"]


def test_filter_by_pattern_needs_index() -> None:
    with pytest.raises(ValueError, match="tree index"):
        report.filter_findings([_finding("a")], pattern="stab")


def test_summary_weights_by_reach_and_keeps_floats_apart() -> None:
    findings = [
        _finding("a", absolute_difference=0.2, reach_probability=0.5),
        _finding("b", "overbluff", street="turn", absolute_difference=0.4, reach_probability=0.25),
        _finding("c", "float", absolute_difference=1.4, float_ev=1.4),
    ]

    summary = report.summarize_findings(findings)

    assert summary.total == 3
    assert summary.by_kind == {"overfold": 1, "overbluff": 1, "float": 1}
    assert summary.by_street == {"flop": 2, "turn": 1}
    assert summary.weighted_deviation == pytest.approx(0.2)
    assert summary.total_float_ev == pytest.approx(1.4)
