"""Infrastructure adapters."""

from .grid_data_adapter import GridMatchDataAdapter
from .report_repository import InMemoryReportRepository, JsonFileReportRepository
from .series_state_analyzer import SeriesStateAnalyzer

__all__ = [
    "GridMatchDataAdapter",
    "InMemoryReportRepository",
    "JsonFileReportRepository",
    "SeriesStateAnalyzer",
]
