"""REST API routes for scouting reports."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from scouting.config import SynthesisConfig
from scouting.errors import (
    InsufficientDataError,
    NotFoundError,
    PipelineStageError,
    UpstreamError,
    ValidationError,
)
from scouting.normalize import load_synthesis_input
from scouting.render import render_text
from scouting.report import build_digestible_report

from ..dependencies import get_analyzer, get_config, get_match_data, get_repository
from ..transformers.report_transformer import (
    transform_matchup_to_frontend,
    transform_report_summary,
    transform_report_to_frontend,
)
from ...application.ports.analyzer import AnalyzerPort
from ...application.ports.match_data import MatchDataPort
from ...application.ports.report_repository import ReportRepositoryPort
from ...application.use_cases.generate_matchup import (
    GenerateMatchupRequest,
    GenerateMatchupUseCase,
)
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])


class GenerateRequest(BaseModel):
    """Request body for report generation."""

    team_id: str = Field(
        default="",
        alias="teamId",
        description="GRID team id to scout",
    )
    team_name: str = Field(
        default="",
        alias="teamName",
        description="Display name used when GRID has none",
    )
    title_id: str = Field(
        default="3",
        alias="titleId",
        description="GRID title id: 3 for LoL, 6 for VALORANT",
    )
    match_count: Optional[int] = Field(
        default=None,
        alias="matchCount",
        ge=1,
        le=50,
        description="Recent series to analyze",
    )
    include_events: bool = Field(
        default=False,
        alias="includeEvents",
        description="Also download per-series event streams",
    )

    class Config:
        populate_by_name = True


def _error(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


def http_error(exc: Exception) -> HTTPException:
    """Map a scouting error onto the REST error envelope."""
    if isinstance(exc, ValidationError):
        return _error(400, "INVALID_REQUEST", str(exc))
    if isinstance(exc, NotFoundError):
        return _error(404, "NOT_FOUND", str(exc))
    if isinstance(exc, InsufficientDataError):
        return _error(404, "NO_DATA", str(exc))
    if isinstance(exc, UpstreamError):
        return _error(502, "UPSTREAM_ERROR", str(exc))
    if isinstance(exc, PipelineStageError):
        return _error(500, "INTERNAL_ERROR", str(exc), {"stage": exc.stage})
    logger.exception("Unhandled error", exc_info=exc)
    return _error(500, "INTERNAL_ERROR", f"Error generating report: {exc}")


@router.post("/reports/synthesize")
async def synthesize_report(
    payload: Dict[str, Any] = Body(...),
    repository: ReportRepositoryPort = Depends(get_repository),
):
    """Build a report from precomputed analyzer aggregates.

    Args:
        payload: ``teamAnalysis`` plus optional ``playerProfiles``,
            ``compositions``, ``trends`` and ``howToWin`` blocks

    Returns:
        DigestibleReport in frontend format
    """
    try:
        inputs = load_synthesis_input(payload)
        report = build_digestible_report(
            inputs.team, inputs.players, inputs.compositions, inputs.trends, inputs.counter
        )
    except Exception as e:
        raise http_error(e)
    repository.save(report)
    return transform_report_to_frontend(report)


@router.post("/reports/generate")
async def generate_report(
    request: GenerateRequest,
    match_data: MatchDataPort = Depends(get_match_data),
    analyzer: AnalyzerPort = Depends(get_analyzer),
    repository: ReportRepositoryPort = Depends(get_repository),
    config: SynthesisConfig = Depends(get_config),
):
    """Generate a fresh report from live GRID data.

    Args:
        request: Team id, title and match count

    Returns:
        DigestibleReport in frontend format
    """
    try:
        use_case = GenerateReportUseCase(match_data, analyzer, repository, config)
        report = await use_case.execute(
            GenerateReportRequest(
                team_id=request.team_id,
                team_name=request.team_name,
                title_id=request.title_id,
                match_count=request.match_count or config.default_match_count,
                include_events=request.include_events,
            )
        )
    except Exception as e:
        raise http_error(e)
    return transform_report_to_frontend(report)


@router.get("/reports")
async def list_reports(repository: ReportRepositoryPort = Depends(get_repository)) -> List[Dict[str, Any]]:
    """Summaries of stored reports, newest first."""
    return [transform_report_summary(r) for r in repository.list_all()]


@router.get("/reports/{report_id}")
async def get_report(report_id: str, repository: ReportRepositoryPort = Depends(get_repository)):
    report = repository.get(report_id)
    if report is None:
        raise _error(404, "NOT_FOUND", f"report {report_id} not found", {"reportId": report_id})
    return transform_report_to_frontend(report)


@router.get("/reports/{report_id}/text", response_class=PlainTextResponse)
async def get_report_text(report_id: str, repository: ReportRepositoryPort = Depends(get_repository)):
    report = repository.get(report_id)
    if report is None:
        raise _error(404, "NOT_FOUND", f"report {report_id} not found", {"reportId": report_id})
    return render_text(report)


@router.get("/matchup")
async def get_matchup(
    team1: str = Query("", description="First team id"),
    team2: str = Query("", description="Second team id"),
    title: str = Query("3", description="GRID title id or name"),
    matches: Optional[int] = Query(None, ge=1, le=50, description="Recent series per team"),
    match_data: MatchDataPort = Depends(get_match_data),
    analyzer: AnalyzerPort = Depends(get_analyzer),
    config: SynthesisConfig = Depends(get_config),
):
    """Head-to-head report for two teams.

    Args:
        team1: First team id
        team2: Second team id
        title: GRID title id (3 for LoL, 6 for VALORANT)
        matches: Recent series to scan per team

    Returns:
        HeadToHeadReport in frontend format
    """
    try:
        use_case = GenerateMatchupUseCase(match_data, analyzer, config)
        report = await use_case.execute(
            GenerateMatchupRequest(
                team1_id=team1,
                team2_id=team2,
                title_id=title,
                match_count=matches or config.matchup_match_count,
            )
        )
    except Exception as e:
        raise http_error(e)
    return transform_matchup_to_frontend(report)
