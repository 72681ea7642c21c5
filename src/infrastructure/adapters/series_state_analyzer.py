"""Analyzer adapter backed by the series-state baseline analyzers."""

from __future__ import annotations

from typing import List, Sequence

from scouting import analysis
from scouting.models import CompositionData, PlayerProfile, TeamAnalysis, TrendAnalysis
from scouting.normalize import SeriesState, TeamRef

from ...application.ports.analyzer import AnalyzerPort, EventsBySeries


class SeriesStateAnalyzer(AnalyzerPort):
    """Runs :mod:`scouting.analysis`. Event streams feed the LoL team metrics."""

    def analyze_team(
        self, team: TeamRef, title: str, states: Sequence[SeriesState], events: EventsBySeries
    ) -> TeamAnalysis:
        return analysis.analyze_team(team.id, team.name, states, title, events)

    def analyze_players(
        self, team: TeamRef, title: str, states: Sequence[SeriesState], events: EventsBySeries
    ) -> List[PlayerProfile]:
        return analysis.analyze_players(team.id, states)

    def analyze_compositions(
        self, team: TeamRef, title: str, states: Sequence[SeriesState]
    ) -> CompositionData:
        return analysis.analyze_compositions(team.id, states, title)

    def analyze_trends(self, team: TeamRef, states: Sequence[SeriesState]) -> TrendAnalysis:
        return analysis.analyze_trends(team.id, states)
