"""Application ports (interfaces)."""

from .analyzer import AnalyzerPort
from .match_data import MatchDataPort, ProgressCallbackPort
from .report_repository import ReportRepositoryPort

__all__ = [
    "AnalyzerPort",
    "MatchDataPort",
    "ProgressCallbackPort",
    "ReportRepositoryPort",
]
