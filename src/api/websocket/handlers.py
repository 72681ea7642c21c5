"""WebSocket handlers for real-time report generation progress."""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect

from scouting.config import SynthesisConfig
from scouting.errors import ScoutingError

from ..transformers.report_transformer import transform_report_to_frontend
from ...application.ports.analyzer import AnalyzerPort
from ...application.ports.match_data import MatchDataPort, ProgressCallbackPort
from ...application.ports.report_repository import ReportRepositoryPort
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)

logger = logging.getLogger(__name__)


class WebSocketProgressCallback(ProgressCallbackPort):
    """Progress callback that sends updates via WebSocket."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket

    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Send progress update via WebSocket."""
        await self._websocket.send_json({
            "status": status,
            "progress": progress,
            "message": message,
        })


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({
        "status": "error",
        "progress": 0,
        "message": message,
    })


async def handle_report_websocket(
    websocket: WebSocket,
    match_data_factory,
    analyzer: AnalyzerPort,
    repository: ReportRepositoryPort,
    config: Optional[SynthesisConfig] = None,
) -> None:
    """Handle WebSocket connection for report generation.

    Expected client message format:
    {
        "action": "generate",
        "teamId": "47351",
        "titleId": "3",        // Optional
        "matchCount": 10       // Optional
    }

    Server sends progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "error",
        "progress": 0-100,
        "message": "Human-readable status"
    }

    Args:
        websocket: FastAPI WebSocket connection
        match_data_factory: Zero-argument callable returning a MatchDataPort
        analyzer: Analyzer port
        repository: Report repository
        config: Synthesis configuration
    """
    config = config or SynthesisConfig()
    await websocket.accept()

    try:
        data = await websocket.receive_json()

        action = data.get("action")
        if action != "generate":
            await _send_error(websocket, f"Unknown action: {action}")
            return

        team_id = data.get("teamId")
        if not team_id:
            await _send_error(websocket, "teamId is required")
            return

        await websocket.send_json({
            "status": "connecting",
            "progress": 0,
            "message": "Initializing...",
        })

        try:
            request = GenerateReportRequest(
                team_id=str(team_id),
                team_name=data.get("teamName") or "",
                title_id=str(data.get("titleId") or "3"),
                match_count=int(data.get("matchCount") or config.default_match_count),
                include_events=bool(data.get("includeEvents", False)),
            )
            match_data: MatchDataPort = match_data_factory()
        except (ScoutingError, ValueError) as e:
            await _send_error(websocket, str(e))
            return

        progress_callback = WebSocketProgressCallback(websocket)
        try:
            use_case = GenerateReportUseCase(match_data, analyzer, repository, config)
            report = await use_case.execute(request, progress_callback)
        except Exception as e:
            # the use case already reported the error through the callback
            logger.warning("Report generation failed for team %s: %s", team_id, e)
            return

        await websocket.send_json({
            "status": "completed",
            "progress": 100,
            "message": "Report ready!",
            "report": transform_report_to_frontend(report),
        })

    except WebSocketDisconnect:
        logger.debug("Client disconnected")
    except json.JSONDecodeError:
        await _send_error(websocket, "Invalid JSON message")
    finally:
        try:
            await websocket.close()
        except RuntimeError:
            # already closed by the client
            pass
