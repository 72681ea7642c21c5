"""Port (interface) for per-team analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Sequence

from scouting.models import CompositionData, PlayerProfile, TeamAnalysis, TrendAnalysis
from scouting.normalize import SeriesState, TeamRef

EventsBySeries = Mapping[str, List[Dict[str, Any]]]


class AnalyzerPort(ABC):
    """Port for turning series data into the aggregates a report is built from.

    ``events`` maps series ids to their downloaded event streams. It is empty
    when events were not requested or could not be fetched.
    """

    @abstractmethod
    def analyze_team(
        self, team: TeamRef, title: str, states: Sequence[SeriesState], events: EventsBySeries
    ) -> TeamAnalysis:
        ...

    @abstractmethod
    def analyze_players(
        self, team: TeamRef, title: str, states: Sequence[SeriesState], events: EventsBySeries
    ) -> List[PlayerProfile]:
        ...

    @abstractmethod
    def analyze_compositions(
        self, team: TeamRef, title: str, states: Sequence[SeriesState]
    ) -> CompositionData:
        ...

    @abstractmethod
    def analyze_trends(self, team: TeamRef, states: Sequence[SeriesState]) -> TrendAnalysis:
        ...
