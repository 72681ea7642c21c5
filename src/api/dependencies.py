"""FastAPI dependency providers for the ports.

Tests swap these out through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from scouting.config import SynthesisConfig, synthesis_config_from_env

from ..application.ports.analyzer import AnalyzerPort
from ..application.ports.match_data import MatchDataPort
from ..application.ports.report_repository import ReportRepositoryPort
from ..infrastructure.adapters.grid_data_adapter import GridMatchDataAdapter
from ..infrastructure.adapters.report_repository import (
    InMemoryReportRepository,
    JsonFileReportRepository,
)
from ..infrastructure.adapters.series_state_analyzer import SeriesStateAnalyzer


@lru_cache(maxsize=1)
def get_config() -> SynthesisConfig:
    return synthesis_config_from_env()


@lru_cache(maxsize=1)
def get_repository() -> ReportRepositoryPort:
    path = get_config().reports_backup_path
    if path is None:
        return InMemoryReportRepository()
    return JsonFileReportRepository(path)


def get_match_data() -> MatchDataPort:
    return GridMatchDataAdapter(workers=get_config().enrichment_workers)


def get_match_data_factory() -> Callable[[], MatchDataPort]:
    """Deferred provider for the WebSocket route, which builds the adapter after accepting."""
    return get_match_data


def get_analyzer() -> AnalyzerPort:
    return SeriesStateAnalyzer()
