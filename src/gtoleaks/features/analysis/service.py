from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from ...analysis import report
from ...analysis.engine import analyze_spot
from ...analysis.patterns import TreeIndex, classify_pattern
from ...core.config import AnalysisConfig
from ...core.errors import AnalysisError
from ...core.models import EXPLOIT_KINDS, LEAK_KINDS, AnalysisResult, Finding
from .concurrency import run_blocking
from .schemas import AnalysisRequest, AnalysisResponse, FindingPayload

__all__ = ["AnalysisService", "ExportOptions"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportOptions:
    """Which findings to export and how to order them."""

    section: str = "leaks"
    player: str | None = None
    kind: str | None = None
    street: str | None = None
    pattern: str | None = None
    sort: str = "rel_diff"
    descending: bool = True


class AnalysisService:
    """Runs analyses for the HTTP layer; holds no per-request state."""

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        self.config = config or AnalysisConfig.from_flags()

    def _config_for(self, request: AnalysisRequest) -> AnalysisConfig:
        if request.hide_root_from_line is None:
            return self.config
        return replace(self.config, hide_root_from_line=request.hide_root_from_line)

    def run(self, request: AnalysisRequest) -> tuple[AnalysisResult, TreeIndex]:
        spot = request.spot.to_spot()
        gto = request.gto_profiles.to_pair()
        active = request.active_profiles.to_pair() if request.active_profiles is not None else None
        try:
            result = analyze_spot(spot, gto, active, self._config_for(request))
        except AnalysisError as exc:
            logger.warning("rejected analysis input", extra={"spot_id": spot.id, "error": str(exc)})
            raise
        return result, TreeIndex.build(spot.tree)

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        result, index = self.run(request)
        return AnalysisResponse(
            leaks=_payloads(result.leaks, index),
            exploits=_payloads(result.exploits, index),
        )

    async def analyze_async(self, request: AnalysisRequest) -> AnalysisResponse:
        return await run_blocking(self.analyze, request)

    def export(self, request: AnalysisRequest, options: ExportOptions) -> str:
        if options.section not in ("leaks", "exploits"):
            raise ValueError(f"unknown section '{options.section}'; expected 'leaks' or 'exploits'")
        section_kinds = LEAK_KINDS if options.section == "leaks" else EXPLOIT_KINDS
        if options.kind is not None and options.kind not in section_kinds:
            raise ValueError(
                f"kind '{options.kind}' does not belong to section '{options.section}'; "
                f"expected one of {', '.join(section_kinds)}"
            )
        result, index = self.run(request)
        if options.player is not None:
            result = result.for_player(options.player)
        findings: Sequence[Finding] = result.leaks if options.section == "leaks" else result.exploits
        selected = report.filter_findings(
            findings,
            kind=options.kind,
            street=options.street,
            pattern=options.pattern,
            index=index,
        )
        ordered = report.sort_findings(selected, options.sort, descending=options.descending)
        return report.to_tsv(ordered)

    async def export_async(self, request: AnalysisRequest, options: ExportOptions) -> str:
        return await run_blocking(self.export, request, options)


def _payloads(findings: Sequence[Finding], index: TreeIndex) -> list[FindingPayload]:
    return [FindingPayload.from_finding(f, pattern=classify_pattern(index, f.node_id)) for f in findings]
