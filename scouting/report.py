from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional, Sequence

from .compositions import extract_compositions
from .counter import assemble_how_to_win
from .errors import ValidationError
from .models import (
    CompositionData,
    CounterStrategy,
    DigestibleReport,
    PlayerProfile,
    TeamAnalysis,
    TrendAnalysis,
)
from .strategies import extract_strategies
from .summary import build_executive_summary
from .tendencies import extract_tendencies

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_digestible_report(
    team: TeamAnalysis,
    players: Sequence[PlayerProfile] = (),
    compositions: Optional[CompositionData] = None,
    trends: Optional[TrendAnalysis] = None,
    counter: Optional[CounterStrategy] = None,
    now: Optional[datetime] = None,
    report_id: Optional[str] = None,
) -> DigestibleReport:
    """Run the extractors and the how-to-win assembler over one team's aggregates.

    ``now`` and ``report_id`` are the only non-deterministic inputs; pass them
    to get byte-identical output for identical aggregates.
    """
    if team is None:
        raise ValidationError("team analysis is required to build a report")

    strategies = extract_strategies(team)
    tendencies = extract_tendencies(players, team.title)
    comps = extract_compositions(compositions, team.matches_analyzed)
    how_to_win = assemble_how_to_win(counter, team, players)

    report = DigestibleReport(
        id=report_id or uuid.uuid4().hex,
        team_id=team.team_id,
        team_name=team.team_name,
        title=team.title,
        matches_analyzed=team.matches_analyzed,
        generated_at=(now or datetime.now()).strftime(TIMESTAMP_FORMAT),
        executive_summary=build_executive_summary(team, trends),
        common_strategies=strategies,
        player_tendencies=tuple(tendencies),
        recent_compositions=tuple(comps),
        how_to_win=how_to_win,
    )
    logger.debug(
        "Built report %s for %s: %d tendencies, %d compositions, %d actionable insights",
        report.id,
        team.team_name,
        len(report.player_tendencies),
        len(report.recent_compositions),
        len(how_to_win.actionable_insights),
    )
    return report
