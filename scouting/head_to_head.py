"""Two-team matchup synthesis: historical record plus optional style comparison."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from .confidence import score_confidence
from .models import (
    HeadToHeadInsight,
    HeadToHeadMatch,
    HeadToHeadReport,
    LoLMetrics,
    StyleComparison,
    TeamAnalysis,
    ValorantMetrics,
)
from .normalize import SeriesInfo, SeriesState, TeamRef
from .thresholds import DOMINANCE, classify, percent, whole

logger = logging.getLogger(__name__)

ADVANTAGE_MARGIN = 5.0
AGGRESSION_GAP = 15.0
HIGH_SIGNAL_MATCHES = 5


def shared_series_ids(
    team1_series: Sequence[SeriesInfo],
    team2_series: Sequence[SeriesInfo],
    team1_id: str,
    team2_id: str,
) -> List[str]:
    """Ids of series that appear in both listings with both teams present."""
    in_team2 = {s.id for s in team2_series}
    out: List[str] = []
    for series in team1_series:
        if series.id not in in_team2 or series.id in out:
            continue
        ids = series.team_ids
        if team1_id in ids and team2_id in ids:
            out.append(series.id)
    return out


def find_head_to_head(
    team1_series: Sequence[SeriesInfo],
    team2_series: Sequence[SeriesInfo],
    team1_id: str,
    team2_id: str,
    states: Optional[Mapping[str, SeriesState]] = None,
) -> List[HeadToHeadMatch]:
    """Series both teams played, with winners taken from finished states.

    ``states`` is ``None`` when they could not be fetched; every shared series
    then counts with no winner. When states are available, unfinished or
    missing ones are left out.
    """
    ids = shared_series_ids(team1_series, team2_series, team1_id, team2_id)
    if states is None:
        return [HeadToHeadMatch(series_id=sid) for sid in ids]

    matches: List[HeadToHeadMatch] = []
    for sid in ids:
        state = states.get(sid)
        if state is None or not state.finished:
            continue
        matches.append(HeadToHeadMatch(series_id=sid, winner_id=state.winner_id))
    return matches


def _advantage(rating1: float, rating2: float) -> str:
    diff = rating1 - rating2
    if diff > ADVANTAGE_MARGIN:
        return "team1"
    if diff < -ADVANTAGE_MARGIN:
        return "team2"
    return "even"


def _dominant_phase(early: float, mid: float, late: float) -> str:
    if early >= mid and early >= late:
        return "early game"
    if mid >= late:
        return "mid game"
    return "late game"


def _compare_lol(a: TeamAnalysis, b: TeamAnalysis, m1: LoLMetrics, m2: LoLMetrics) -> StyleComparison:
    phase1 = _dominant_phase(m1.early_game_rating, m1.mid_game_rating, m1.late_game_rating)
    phase2 = _dominant_phase(m2.early_game_rating, m2.mid_game_rating, m2.late_game_rating)
    if phase1 == phase2:
        style = f"Both teams excel in {phase1} - expect a close match in that phase"
    else:
        style = f"{a.team_name} is stronger in {phase1} while {b.team_name} excels in {phase2}"

    def line(phase: str, r1: float, r2: float) -> str:
        return f"{a.team_name} has {whole(r1)} {phase} rating vs {b.team_name}'s {whole(r2)}"

    return StyleComparison(
        team1_early_game_rating=m1.early_game_rating,
        team2_early_game_rating=m2.early_game_rating,
        early_game_advantage=_advantage(m1.early_game_rating, m2.early_game_rating),
        early_game_insight=line("early game", m1.early_game_rating, m2.early_game_rating),
        team1_mid_game_rating=m1.mid_game_rating,
        team2_mid_game_rating=m2.mid_game_rating,
        mid_game_advantage=_advantage(m1.mid_game_rating, m2.mid_game_rating),
        mid_game_insight=line("mid game", m1.mid_game_rating, m2.mid_game_rating),
        team1_late_game_rating=m1.late_game_rating,
        team2_late_game_rating=m2.late_game_rating,
        late_game_advantage=_advantage(m1.late_game_rating, m2.late_game_rating),
        late_game_insight=line("late game", m1.late_game_rating, m2.late_game_rating),
        team1_aggression=m1.aggression_score,
        team2_aggression=m2.aggression_score,
        style_insight=style,
    )


def _compare_valorant(
    a: TeamAnalysis, b: TeamAnalysis, m1: ValorantMetrics, m2: ValorantMetrics
) -> StyleComparison:
    # pistol, attack and defense rates stand in for early, mid and late game
    early1, early2 = m1.pistol_win_rate * 100, m2.pistol_win_rate * 100
    mid1, mid2 = m1.attack_win_rate * 100, m2.attack_win_rate * 100
    late1, late2 = m1.defense_win_rate * 100, m2.defense_win_rate * 100

    attack1 = m1.attack_win_rate > m1.defense_win_rate
    attack2 = m2.attack_win_rate > m2.defense_win_rate
    if attack1 and not attack2:
        style = (
            f"{a.team_name} is attack-focused ({percent(m1.attack_win_rate)}% attack WR) while "
            f"{b.team_name} is defense-focused ({percent(m2.defense_win_rate)}% defense WR)"
        )
    elif attack2 and not attack1:
        style = (
            f"{a.team_name} is defense-focused ({percent(m1.defense_win_rate)}% defense WR) while "
            f"{b.team_name} is attack-focused ({percent(m2.attack_win_rate)}% attack WR)"
        )
    else:
        style = "Both teams have similar playstyles - expect a balanced match"

    return StyleComparison(
        team1_early_game_rating=early1,
        team2_early_game_rating=early2,
        early_game_advantage=_advantage(early1, early2),
        early_game_insight=(
            f"{a.team_name} wins {percent(m1.pistol_win_rate)}% of pistol rounds vs "
            f"{b.team_name}'s {percent(m2.pistol_win_rate)}%"
        ),
        team1_mid_game_rating=mid1,
        team2_mid_game_rating=mid2,
        mid_game_advantage=_advantage(mid1, mid2),
        mid_game_insight=(
            f"{a.team_name} has {percent(m1.attack_win_rate)}% attack win rate vs "
            f"{b.team_name}'s {percent(m2.attack_win_rate)}%"
        ),
        team1_late_game_rating=late1,
        team2_late_game_rating=late2,
        late_game_advantage=_advantage(late1, late2),
        late_game_insight=(
            f"{a.team_name} has {percent(m1.defense_win_rate)}% defense win rate vs "
            f"{b.team_name}'s {percent(m2.defense_win_rate)}%"
        ),
        team1_aggression=m1.aggression_score,
        team2_aggression=m2.aggression_score,
        style_insight=style,
    )


def compare_styles(a: TeamAnalysis, b: TeamAnalysis) -> Optional[StyleComparison]:
    """Contrast two analyses of the same title; None when metrics don't line up."""
    if isinstance(a.metrics, LoLMetrics) and isinstance(b.metrics, LoLMetrics):
        return _compare_lol(a, b, a.metrics, b.metrics)
    if isinstance(a.metrics, ValorantMetrics) and isinstance(b.metrics, ValorantMetrics):
        return _compare_valorant(a, b, a.metrics, b.metrics)
    return None


def _historical_confidence(total: int) -> float:
    if total >= 5:
        return 0.9
    if total >= 3:
        return 0.7
    if total >= 1:
        return 0.5
    return 0.3


def _recommendation(team1_name: str, wins: int, total: int) -> str:
    if total == 0:
        return "No recent head-to-head matches found - focus on general team analysis"
    rate = wins / total
    band = classify(rate, DOMINANCE)
    if band == "dominant":
        return f"{team1_name} has historically dominated this matchup ({percent(rate)}% win rate)"
    if band == "struggling":
        return (
            f"{team1_name} has struggled in this matchup ({percent(rate)}% win rate) - "
            "consider adjusting strategy"
        )
    return "This is an even matchup historically - preparation will be key"


def _matchup_insights(
    team1_name: str, team2_name: str, style: StyleComparison
) -> List[HeadToHeadInsight]:
    out: List[HeadToHeadInsight] = []
    if style.early_game_advantage != "even":
        leader = team1_name if style.early_game_advantage == "team1" else team2_name
        out.append(
            HeadToHeadInsight(text=f"{leader} has the early game advantage", type="early_game", confidence=0.7)
        )
    gap = style.team1_aggression - style.team2_aggression
    if gap > AGGRESSION_GAP:
        out.append(
            HeadToHeadInsight(
                text=(
                    f"{team1_name} plays more aggressively "
                    f"({whole(style.team1_aggression)} vs {whole(style.team2_aggression)})"
                ),
                type="style",
                confidence=0.6,
            )
        )
    elif gap < -AGGRESSION_GAP:
        out.append(
            HeadToHeadInsight(
                text=(
                    f"{team2_name} plays more aggressively "
                    f"({whole(style.team2_aggression)} vs {whole(style.team1_aggression)})"
                ),
                type="style",
                confidence=0.6,
            )
        )
    return out


def synthesize_head_to_head(
    team1: TeamRef,
    team2: TeamRef,
    matches: Sequence[HeadToHeadMatch],
    title: str,
    team1_analysis: Optional[TeamAnalysis] = None,
    team2_analysis: Optional[TeamAnalysis] = None,
) -> HeadToHeadReport:
    total = len(matches)
    team1_wins = sum(1 for m in matches if m.winner_id == team1.id)
    team2_wins = sum(1 for m in matches if m.winner_id == team2.id)

    insights: List[HeadToHeadInsight] = []
    warnings: List[str] = []
    if total > 0:
        if team2_wins > team1_wins:
            leader, trailer = team2.name, team1.name
        else:
            leader, trailer = team1.name, team2.name
        insights.append(
            HeadToHeadInsight(
                text=f"Historical record: {leader} leads {team1_wins}-{team2_wins} against {trailer}",
                type="historical",
                confidence=_historical_confidence(total),
            )
        )
    else:
        warnings.append("No historical matches found between these teams")

    style: Optional[StyleComparison] = None
    both_high_signal = False
    if team1_analysis is not None and team2_analysis is not None:
        style = compare_styles(team1_analysis, team2_analysis)
        if style is None:
            logger.info("No comparable metrics for %s vs %s", team1.name, team2.name)
        else:
            insights.extend(_matchup_insights(team1.name, team2.name, style))
        both_high_signal = (
            team1_analysis.matches_analyzed >= HIGH_SIGNAL_MATCHES
            and team2_analysis.matches_analyzed >= HIGH_SIGNAL_MATCHES
        )

    return HeadToHeadReport(
        team1_id=team1.id,
        team1_name=team1.name,
        team2_id=team2.id,
        team2_name=team2.name,
        title=title,
        total_matches=total,
        team1_wins=team1_wins,
        team2_wins=team2_wins,
        recommendation=_recommendation(team1.name, team1_wins, total),
        style_comparison=style,
        insights=tuple(insights),
        confidence_score=score_confidence(total, style is not None, both_high_signal, len(insights)),
        warnings=tuple(warnings),
    )
