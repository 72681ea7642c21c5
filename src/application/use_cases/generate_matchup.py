"""Use case for head-to-head matchup reports."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Dict, List, Optional

from scouting.config import SynthesisConfig, resolve_title
from scouting.errors import ScoutingError, ValidationError
from scouting.head_to_head import find_head_to_head, shared_series_ids, synthesize_head_to_head
from scouting.models import HeadToHeadReport, TeamAnalysis
from scouting.normalize import SeriesInfo, SeriesState, TeamRef

from ..ports.analyzer import AnalyzerPort
from ..ports.match_data import MatchDataPort
from .generate_report import _executor, download_events

logger = logging.getLogger(__name__)


@dataclass
class GenerateMatchupRequest:
    """Request to compare two teams."""

    team1_id: str
    team2_id: str
    title_id: str = "3"
    match_count: int = 20


class GenerateMatchupUseCase:
    """Use case for head-to-head matchup reports.

    Team lookups and series listings are mandatory. Winner detection and the
    per-side style enrichment are best effort: failures are logged and the
    report is built from whatever remains.
    """

    def __init__(
        self,
        match_data: MatchDataPort,
        analyzer: AnalyzerPort,
        config: Optional[SynthesisConfig] = None,
    ):
        self._match_data = match_data
        self._analyzer = analyzer
        self._config = config or SynthesisConfig()

    def _shared_states(self, series_ids: List[str]) -> Optional[Dict[str, SeriesState]]:
        if not series_ids:
            return {}
        try:
            return self._match_data.get_series_states(series_ids)
        except ScoutingError as exc:
            logger.warning("Head-to-head states unavailable: %s", exc)
            return None

    def _enrich(self, team: TeamRef, title: str, series: List[SeriesInfo]) -> Optional[TeamAnalysis]:
        """Team analysis over every listed series.

        Only the event downloads are capped, at ``enrichment_series_cap``.
        """
        ids = [s.id for s in series]
        if not ids:
            return None
        try:
            states_by_id = self._match_data.get_series_states(ids)
            states = [states_by_id[sid] for sid in ids if sid in states_by_id]
            if not states:
                return None
            events = download_events(self._match_data, ids, self._config.enrichment_series_cap)
            return self._analyzer.analyze_team(team, title, states, events)
        except ScoutingError as exc:
            logger.warning("Style enrichment skipped for %s: %s", team.name, exc)
            return None

    async def execute(self, request: GenerateMatchupRequest) -> HeadToHeadReport:
        """Execute the matchup use case.

        Args:
            request: Matchup request

        Returns:
            Head-to-head report

        Raises:
            ValidationError: A team id is missing or the title is unknown
            NotFoundError: A team lookup returned nothing
        """
        if not request.team1_id or not request.team2_id:
            raise ValidationError("team1 and team2 are required")
        title = resolve_title(request.title_id)
        limit = request.match_count or self._config.matchup_match_count
        loop = asyncio.get_running_loop()

        def run(fn, *args):
            return loop.run_in_executor(_executor, partial(fn, *args))

        team1, team2 = await asyncio.gather(
            run(self._match_data.get_team_by_id, request.team1_id),
            run(self._match_data.get_team_by_id, request.team2_id),
        )
        series1, series2 = await asyncio.gather(
            run(self._match_data.get_series_for_team, team1.id, limit),
            run(self._match_data.get_series_for_team, team2.id, limit),
        )
        logger.info(
            "Matchup %s vs %s: %d and %d series listed", team1.name, team2.name, len(series1), len(series2)
        )

        shared = shared_series_ids(series1, series2, team1.id, team2.id)
        states, analysis1, analysis2 = await asyncio.gather(
            run(self._shared_states, shared),
            run(self._enrich, team1, title, series1),
            run(self._enrich, team2, title, series2),
        )
        matches = find_head_to_head(series1, series2, team1.id, team2.id, states)

        return synthesize_head_to_head(team1, team2, matches, title, analysis1, analysis2)
