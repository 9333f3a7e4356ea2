from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.formatting import STREET_CODES, round_half_up
from ..core.models import STREETS, Finding
from .patterns import TreeIndex, classify_pattern

__all__ = [
    "KIND_LABELS",
    "SORT_FIELDS",
    "FindingSummary",
    "filter_findings",
    "sort_findings",
    "summarize_findings",
    "to_tsv",
]

KIND_LABELS: dict[str, str] = {
    "overfold": "Overfold",
    "underfold": "Underfold",
    "overbluff": "Overbluff",
    "underbluff": "Underbluff",
    "float": "Float",
    "missed-exploit-call": "Missed (Call)",
    "missed-exploit-bet": "Missed (Bet)",
    "exploiting-call": "Exploit (Call)",
    "exploiting-bet": "Exploit (Bet)",
}

_STREET_ORDER = {street: idx for idx, street in enumerate(STREETS)}

_SORT_KEYS = {
    "type": lambda f: f.kind,
    "street": lambda f: _STREET_ORDER.get(f.street, len(_STREET_ORDER)),
    "pot": lambda f: f.pot_size_at_node,
    "reach": lambda f: f.reach_probability,
    "diff": lambda f: f.absolute_difference,
    "combos": lambda f: f.acting_player_combos_at_node,
    "rel_diff": lambda f: f.relative_difference,
}
SORT_FIELDS: tuple[str, ...] = tuple(_SORT_KEYS)

_TSV_HEADERS = ("Type", "Street", "Line", "Pot (BB)", "Reach %", "Combos", "Actual %", "GTO %", "Diff %", "Rel. Diff %")

_BELOW_BASELINE = frozenset({"underfold", "underbluff"})


def filter_findings(
    findings: Iterable[Finding],
    *,
    kind: str | None = None,
    street: str | None = None,
    pattern: str | None = None,
    index: TreeIndex | None = None,
) -> list[Finding]:
    """Keep findings matching every given criterion.

    Filtering by ``pattern`` needs the :class:`TreeIndex` of the analysed tree.
    """

    if pattern is not None and index is None:
        raise ValueError("pattern filtering requires a tree index")
    selected: list[Finding] = []
    for finding in findings:
        if kind is not None and finding.kind != kind:
            continue
        if street is not None and finding.street != street:
            continue
        if pattern is not None and classify_pattern(index, finding.node_id) != pattern:
            continue
        selected.append(finding)
    return selected


def sort_findings(findings: Iterable[Finding], field: str = "rel_diff", *, descending: bool = True) -> list[Finding]:
    try:
        key = _SORT_KEYS[field]
    except KeyError as exc:
        raise ValueError(f"unknown sort field '{field}'; expected one of {', '.join(SORT_FIELDS)}") from exc
    return sorted(findings, key=key, reverse=descending)


@dataclass(frozen=True)
class FindingSummary:
    total: int
    by_kind: dict[str, int]
    by_street: dict[str, int]
    weighted_deviation: float
    total_float_ev: float


def summarize_findings(findings: Sequence[Finding]) -> FindingSummary:
    """Aggregate counts and the reach-weighted deviation of ``findings``.

    Float findings contribute to ``total_float_ev`` rather than to the weighted
    frequency deviation, since their difference is measured in big blinds.
    """

    by_kind = Counter(f.kind for f in findings)
    by_street = Counter(f.street for f in findings)
    weighted = sum(f.absolute_difference * f.reach_probability for f in findings if f.float_ev is None)
    float_ev = sum(f.float_ev for f in findings if f.float_ev is not None)
    return FindingSummary(
        total=len(findings),
        by_kind=dict(by_kind),
        by_street=dict(by_street),
        weighted_deviation=weighted,
        total_float_ev=float_ev,
    )


def _pct(value: float) -> str:
    return str(round_half_up(value * 100))


def _diff_cell(finding: Finding) -> str:
    if finding.float_ev is not None:
        return f"+{finding.float_ev:.2f} BB"
    sign = "-" if finding.kind in _BELOW_BASELINE else "+"
    return f"{sign}{_pct(finding.absolute_difference)}%"


def _row(finding: Finding) -> list[str]:
    is_float = finding.float_ev is not None
    return [
        KIND_LABELS.get(finding.kind, finding.kind),
        STREET_CODES.get(finding.street, finding.street),
        finding.line,
        f"{finding.pot_size_at_node:.1f}",
        f"{finding.reach_probability * 100:.1f}",
        f"{finding.acting_player_combos_at_node:.1f}",
        "-" if is_float else _pct(finding.actual_value),
        "-" if is_float else _pct(finding.baseline_value),
        _diff_cell(finding),
        "-" if is_float else _pct(finding.relative_difference),
    ]


def to_tsv(findings: Iterable[Finding]) -> str:
    """Render findings as tab-separated text with a header row, ready to paste."""

    rows = [list(_TSV_HEADERS), *(_row(finding) for finding in findings)]
    return "\n".join("\t".join(row) for row in rows)
