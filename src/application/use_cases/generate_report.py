"""Use case for generating a team scouting report from live match data."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from scouting.config import SynthesisConfig, resolve_title
from scouting.counter_plan import plan_counter_strategy
from scouting.errors import InsufficientDataError, PipelineStageError, ScoutingError, ValidationError
from scouting.models import DigestibleReport
from scouting.report import build_digestible_report

from ..ports.analyzer import AnalyzerPort
from ..ports.match_data import MatchDataPort, ProgressCallbackPort
from ..ports.report_repository import ReportRepositoryPort

logger = logging.getLogger(__name__)

# Thread pool for running blocking I/O and analysis
_executor = ThreadPoolExecutor(max_workers=4)


def download_events(match_data: MatchDataPort, series_ids: List[str], cap: int) -> Dict[str, List[Dict[str, Any]]]:
    """Event streams for the first ``cap`` series. A failed download skips that series."""
    events: Dict[str, List[Dict[str, Any]]] = {}
    for series_id in series_ids[:cap]:
        try:
            events[series_id] = match_data.download_events(series_id)
        except ScoutingError as exc:
            logger.warning("Skipping events for series %s: %s", series_id, exc)
    return events


@dataclass
class GenerateReportRequest:
    """Request to generate a report."""

    team_id: str
    team_name: str = ""
    title_id: str = "3"
    match_count: int = 10
    include_events: bool = False


class GenerateReportUseCase:
    """Use case for generating team scouting reports.

    This orchestrates the process of:
    1. Looking up the team and its recent series
    2. Fetching series states (and, optionally, event streams)
    3. Running the analyzers and the counter-strategy planner
    4. Synthesizing and storing the digestible report
    """

    def __init__(
        self,
        match_data: MatchDataPort,
        analyzer: AnalyzerPort,
        repository: ReportRepositoryPort,
        config: Optional[SynthesisConfig] = None,
    ):
        self._match_data = match_data
        self._analyzer = analyzer
        self._repository = repository
        self._config = config or SynthesisConfig()

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_executor, partial(fn, *args))

    async def _stage(self, stage: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await self._run(fn, *args)
        except Exception as exc:
            raise PipelineStageError(stage, exc) from exc

    async def execute(
        self,
        request: GenerateReportRequest,
        progress_callback: Optional[ProgressCallbackPort] = None,
    ) -> DigestibleReport:
        """Execute the report generation use case.

        Args:
            request: Report generation request
            progress_callback: Optional callback for progress updates

        Returns:
            The stored report

        Raises:
            ValidationError: Missing team id or unknown title
            NotFoundError: Unknown team
            InsufficientDataError: The team has no series
            PipelineStageError: An analyzer failed
        """

        async def progress(pct: int, message: str) -> None:
            if progress_callback:
                await progress_callback.report_progress(pct, message, "processing")

        try:
            if not request.team_id:
                raise ValidationError("teamId is required")
            title = resolve_title(request.title_id)
            limit = request.match_count or self._config.default_match_count

            await progress(10, "Looking up team...")
            team = await self._run(self._match_data.get_team_by_id, request.team_id)
            if request.team_name and not team.name:
                team = replace(team, name=request.team_name)
            logger.info("Generating %s report for %s (%s)", title, team.name, team.id)

            await progress(25, "Fetching recent series...")
            series = await self._run(self._match_data.get_series_for_team, team.id, limit)
            if not series:
                raise InsufficientDataError(f"no matches found for team {team.id}")

            await progress(40, f"Found {len(series)} series, fetching match states...")
            series_ids = [s.id for s in series]
            states_by_id = await self._run(self._match_data.get_series_states, series_ids)
            states = [states_by_id[sid] for sid in series_ids if sid in states_by_id]
            if not states:
                raise InsufficientDataError(f"no series states available for team {team.id}")

            events: Dict[str, List[Dict[str, Any]]] = {}
            if request.include_events:
                await progress(50, "Downloading event streams...")
                events = await self._run(
                    download_events, self._match_data, series_ids, self._config.enrichment_series_cap
                )
                logger.info("Downloaded events for %d/%d series", len(events), len(series_ids))

            await progress(60, "Analyzing team and players...")
            team_analysis = await self._stage(
                "analyze team", self._analyzer.analyze_team, team, title, states, events
            )
            players = await self._stage(
                "analyze players", self._analyzer.analyze_players, team, title, states, events
            )
            await progress(75, "Analyzing compositions and trends...")
            compositions = await self._stage(
                "analyze compositions", self._analyzer.analyze_compositions, team, title, states
            )
            trends = await self._stage("analyze trends", self._analyzer.analyze_trends, team, states)

            await progress(85, "Planning counter strategy...")
            counter = await self._run(plan_counter_strategy, team_analysis, players)

            await progress(95, "Synthesizing report...")
            report = await self._run(
                build_digestible_report, team_analysis, players, compositions, trends, counter
            )
            self._repository.save(report)
            logger.info("Report %s ready for %s", report.id, team.name)
            return report

        except Exception as exc:
            if progress_callback:
                await progress_callback.report_progress(0, f"Error: {exc}", "error")
            raise
