"""Analysis feature: service layer, schemas, and API router."""

from .router import create_analysis_router
from .schemas import (
    AnalysisRequest,
    AnalysisResponse,
    FindingPayload,
    ProfilePairPayload,
    ProfilePayload,
    SpotPayload,
    TreeNodePayload,
)
from .service import AnalysisService, ExportOptions

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisService",
    "ExportOptions",
    "FindingPayload",
    "ProfilePairPayload",
    "ProfilePayload",
    "SpotPayload",
    "TreeNodePayload",
    "create_analysis_router",
]
