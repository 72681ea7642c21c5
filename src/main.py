"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from scouting.config import SynthesisConfig
from scouting.errors import ScoutingError

from .api.dependencies import get_analyzer, get_config, get_match_data_factory, get_repository
from .api.rest.routes import http_error
from .api.rest.routes import router as reports_router
from .api.websocket.handlers import handle_report_websocket
from .application.ports.analyzer import AnalyzerPort
from .application.ports.report_repository import ReportRepositoryPort

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("SCOUTING_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Scout9 API starting")
    yield
    logger.info("Scout9 API stopped")


app = FastAPI(
    title="Scout9 API",
    description="Automated esports scouting reports for League of Legends and VALORANT",
    version=VERSION,
    lifespan=lifespan,
)

# CORS configuration for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",  # Alternative dev port
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def error_envelope_handler(request: Request, exc: HTTPException):
    """Return ``{"error": {...}}`` bodies as-is instead of nesting them under ``detail``."""
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content=exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "INVALID_REQUEST",
                "message": "Request validation failed",
                "details": {"errors": [str(e.get("msg")) for e in exc.errors()]},
            }
        },
    )


@app.exception_handler(ScoutingError)
async def scouting_error_handler(request: Request, exc: ScoutingError):
    # raised while resolving dependencies, outside the routes' own handling
    mapped = http_error(exc)
    return JSONResponse(status_code=mapped.status_code, content=mapped.detail)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    api_key_configured: bool


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Scout9 API",
        "version": VERSION,
        "description": "Automated esports scouting reports",
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "synthesize": "POST /api/reports/synthesize",
            "generate": "POST /api/reports/generate",
            "reports": "GET /api/reports",
            "report": "GET /api/reports/{report_id}",
            "reportText": "GET /api/reports/{report_id}/text",
            "matchup": "GET /api/matchup",
            "websocket": "WS /ws/report",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    api_key = os.environ.get("GRID_API_KEY")
    return HealthResponse(
        status="healthy",
        version=VERSION,
        api_key_configured=bool(api_key),
    )


# Include REST routes
app.include_router(reports_router)


# WebSocket endpoint for report generation with progress
@app.websocket("/ws/report")
async def websocket_report(
    websocket: WebSocket,
    match_data_factory=Depends(get_match_data_factory),
    analyzer: AnalyzerPort = Depends(get_analyzer),
    repository: ReportRepositoryPort = Depends(get_repository),
    config: SynthesisConfig = Depends(get_config),
):
    """WebSocket endpoint for real-time report generation.

    Connect and send ``{"action": "generate", "teamId": "..."}``. Progress
    messages follow; the final ``completed`` message carries the report.
    """
    await handle_report_websocket(websocket, match_data_factory, analyzer, repository, config)
