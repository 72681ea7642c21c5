"""Application use cases."""

from .generate_matchup import GenerateMatchupRequest, GenerateMatchupUseCase
from .generate_report import GenerateReportRequest, GenerateReportUseCase

__all__ = [
    "GenerateMatchupRequest",
    "GenerateMatchupUseCase",
    "GenerateReportRequest",
    "GenerateReportUseCase",
]
