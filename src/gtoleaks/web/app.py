from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..core.config import AnalysisConfig
from ..features.analysis import AnalysisService, create_analysis_router
from ..features.analysis.concurrency import shutdown_executor


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    shutdown_executor()


def create_app(config: AnalysisConfig | None = None) -> FastAPI:
    app = FastAPI(title="GTO Leaks", lifespan=_lifespan)
    service = AnalysisService(config)
    app.include_router(create_analysis_router(service))

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:  # pragma: no cover - runner
    import uvicorn

    host = os.environ.get("BIND", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("gtoleaks.web.app:app", host=host, port=port, factory=False)


if __name__ == "__main__":  # pragma: no cover
    main()
