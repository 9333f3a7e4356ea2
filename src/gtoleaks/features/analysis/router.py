from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ...core.errors import AnalysisError
from .schemas import AnalysisRequest
from .service import AnalysisService, ExportOptions

__all__ = ["create_analysis_router"]


class _AnalysisController:
    def __init__(self, service: AnalysisService) -> None:
        self.service = service

    async def analyze(self, body: AnalysisRequest) -> Response:
        try:
            payload = await self.service.analyze_async(body)
        except AnalysisError as exc:
            raise HTTPException(422, str(exc)) from exc
        return JSONResponse(payload.to_dict())

    async def export(self, body: AnalysisRequest, options: ExportOptions) -> Response:
        try:
            tsv = await self.service.export_async(body, options)
        except AnalysisError as exc:
            raise HTTPException(422, str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return PlainTextResponse(tsv, media_type="text/tab-separated-values")


def create_analysis_router(service: AnalysisService) -> APIRouter:
    controller = _AnalysisController(service)
    router = APIRouter(prefix="/api/v1/analysis", tags=["analysis"])

    @router.post("")
    async def analyze(body: AnalysisRequest) -> Response:
        return await controller.analyze(body)

    @router.post("/export")
    async def export(
        body: AnalysisRequest,
        section: str = "leaks",
        player: str | None = None,
        kind: str | None = None,
        street: str | None = None,
        pattern: str | None = None,
        sort: str = "rel_diff",
        descending: bool = True,
    ) -> Response:
        options = ExportOptions(
            section=section,
            player=player,
            kind=kind,
            street=street,
            pattern=pattern,
            sort=sort,
            descending=descending,
        )
        return await controller.export(body, options)

    return router
