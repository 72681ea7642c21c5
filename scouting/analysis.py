"""Baseline analyzers over GRID series states.

These need nothing but the series-state documents. When LoL event streams
are supplied, analyze_team also fills in the objective metrics from
:mod:`scouting.events`; VALORANT metrics stay unset.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .config import LOL
from .events import lol_metrics_from_events
from .models import (
    CharacterStats,
    Composition,
    CompositionData,
    DraftPriority,
    Insight,
    PlayerProfile,
    TeamAnalysis,
    TrendAnalysis,
)
from .normalize import SeriesState, TeamGameState
from .thresholds import clamp

logger = logging.getLogger(__name__)

COMPOSITION_SIZE = 5
MAX_COMPOSITIONS = 5
MAX_PICK_PRIORITIES = 10
SIGNATURE_PICKS = 3
TREND_SLOPE = 0.01
FORM_SHIFT = 0.15


def _finished_games(states: Sequence[SeriesState], team_id: str) -> List[Tuple[TeamGameState, TeamGameState]]:
    """(ours, theirs) for every finished game the team played, in state order."""
    out: List[Tuple[TeamGameState, TeamGameState]] = []
    for state in states:
        for game in state.games:
            if not game.finished:
                continue
            ours = game.team(team_id)
            theirs = game.opponent(team_id)
            if ours is None or theirs is None:
                continue
            out.append((ours, theirs))
    return out


def _rate(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


def analyze_team(
    team_id: str,
    team_name: str,
    states: Sequence[SeriesState],
    title: str = LOL,
    events: Optional[Mapping[str, Sequence[Dict[str, Any]]]] = None,
) -> TeamAnalysis:
    played = [s for s in states if s.team(team_id) is not None]
    series_wins = sum(1 for s in played if s.winner_id == team_id)
    games = _finished_games(played, team_id)
    game_wins = sum(1 for ours, _ in games if ours.won)
    kills = sum(ours.kills for ours, _ in games)
    deaths = sum(ours.deaths for ours, _ in games)

    win_rate = _rate(series_wins, len(played))
    strengths: List[Insight] = []
    weaknesses: List[Insight] = []

    if played and win_rate >= 0.6:
        strengths.append(
            Insight(
                title="High Win Rate",
                description="Wins most of the series it plays",
                value=win_rate * 100,
                impact=60,
                sample_size=len(played),
            )
        )
    elif played and win_rate < 0.45:
        weaknesses.append(
            Insight(
                title="Low Win Rate",
                description="Loses more series than it wins",
                value=win_rate * 100,
                impact=60,
                sample_size=len(played),
            )
        )

    game_rate = _rate(game_wins, len(games))
    if games and game_rate < 0.45:
        weaknesses.append(
            Insight(
                title="Inconsistent Games",
                description="Drops individual games even in series it contests",
                value=game_rate * 100,
                impact=50,
                sample_size=len(games),
            )
        )

    if kills + deaths > 0:
        kill_share = kills / (kills + deaths) * 100
        if kill_share > 55:
            strengths.append(
                Insight(
                    title="Favorable Trades",
                    description="Wins more fights than it loses",
                    value=kill_share,
                    impact=50,
                    sample_size=len(games),
                )
            )
        elif kill_share < 45:
            weaknesses.append(
                Insight(
                    title="Losing Trades",
                    description="Gives up more kills than it takes",
                    value=kill_share,
                    impact=50,
                    sample_size=len(games),
                )
            )

    return TeamAnalysis(
        team_id=team_id,
        team_name=team_name,
        title=title,
        matches_analyzed=len(played),
        games_analyzed=len(games),
        win_rate=win_rate,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        metrics=lol_metrics_from_events(events, team_id) if events and title == LOL else None,
    )


@dataclass
class _PlayerAgg:
    nickname: str
    games: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    picks: Dict[str, List[int]] = field(default_factory=dict)  # character -> [games, wins, kills, deaths, assists]


def _kda(kills: int, deaths: int, assists: int) -> float:
    if deaths > 0:
        return (kills + assists) / deaths
    return float(kills + assists)


def threat_level(kda: float, pool: Sequence[CharacterStats]) -> int:
    threat = 5
    if kda > 4.0:
        threat += 2
    elif kda > 3.0:
        threat += 1
    elif kda < 2.0:
        threat -= 1
    if any(c.games_played >= 3 and c.win_rate > 0.7 for c in pool):
        threat += 1
    return int(clamp(threat, 1, 10))


def threat_reason(level: int) -> str:
    if level >= 8:
        return "High-impact player with excellent stats"
    if level >= 6:
        return "Solid performer, key to team success"
    if level >= 4:
        return "Average performer"
    return "Lower priority target"


def _player_weaknesses(avg_deaths: float, games: int, pool: Sequence[CharacterStats]) -> List[Insight]:
    out: List[Insight] = []
    if avg_deaths > 4.0:
        out.append(
            Insight(
                title="High Death Count",
                description="Dies frequently, can be targeted",
                value=avg_deaths,
                sample_size=games,
            )
        )
    for c in pool:
        if c.games_played >= 3 and c.win_rate < 0.4:
            out.append(
                Insight(
                    title=f"Weak on {c.character}",
                    description="Low win rate despite frequent play",
                    value=c.win_rate * 100,
                    sample_size=c.games_played,
                )
            )
    return out


def analyze_players(team_id: str, states: Sequence[SeriesState]) -> List[PlayerProfile]:
    """Per-player profiles, highest threat first."""
    aggs: Dict[str, _PlayerAgg] = {}
    for ours, _ in _finished_games(states, team_id):
        for p in ours.players:
            key = p.player_id or p.name
            if not key:
                continue
            agg = aggs.setdefault(key, _PlayerAgg(nickname=p.name or key))
            agg.games += 1
            agg.kills += p.kills
            agg.deaths += p.deaths
            agg.assists += p.assists
            if p.character:
                row = agg.picks.setdefault(p.character, [0, 0, 0, 0, 0])
                row[0] += 1
                row[1] += 1 if ours.won else 0
                row[2] += p.kills
                row[3] += p.deaths
                row[4] += p.assists

    profiles: List[PlayerProfile] = []
    for player_id, agg in aggs.items():
        pool = sorted(
            (
                CharacterStats(
                    character=name,
                    games_played=row[0],
                    win_rate=_rate(row[1], row[0]),
                    kda=_kda(row[2], row[3], row[4]),
                    pick_rate=_rate(row[0], agg.games),
                )
                for name, row in agg.picks.items()
            ),
            key=lambda c: (-c.games_played, c.character),
        )
        kda = _kda(agg.kills, agg.deaths, agg.assists)
        level = threat_level(kda, pool)
        avg_deaths = _rate(agg.deaths, agg.games)
        profiles.append(
            PlayerProfile(
                player_id=player_id,
                nickname=agg.nickname,
                team_id=team_id,
                games_played=agg.games,
                kda=kda,
                avg_kills=_rate(agg.kills, agg.games),
                avg_deaths=avg_deaths,
                avg_assists=_rate(agg.assists, agg.games),
                character_pool=tuple(pool),
                signature_picks=tuple(c.character for c in pool[:SIGNATURE_PICKS]),
                threat_level=level,
                threat_reason=threat_reason(level),
                weaknesses=tuple(_player_weaknesses(avg_deaths, agg.games, pool)),
            )
        )
    profiles.sort(key=lambda p: (-p.threat_level, p.nickname))
    return profiles


def analyze_compositions(team_id: str, states: Sequence[SeriesState], title: str = LOL) -> CompositionData:
    games = _finished_games(states, team_id)
    comps: Dict[Tuple[str, ...], List[int]] = {}
    picks: Dict[str, List[int]] = {}
    pickers: Dict[str, Set[str]] = defaultdict(set)

    for ours, _ in games:
        chars = []
        for p in ours.players:
            if not p.character:
                continue
            chars.append(p.character)
            row = picks.setdefault(p.character, [0, 0])
            row[0] += 1
            row[1] += 1 if ours.won else 0
            pickers[p.character].add(p.player_id or p.name)
        if len(chars) != COMPOSITION_SIZE:
            continue
        key = tuple(sorted(chars))
        row = comps.setdefault(key, [0, 0])
        row[0] += 1
        row[1] += 1 if ours.won else 0

    total = len(games)
    top = sorted(
        (
            Composition(
                characters=key,
                games_played=row[0],
                win_rate=_rate(row[1], row[0]),
                frequency=_rate(row[0], total),
            )
            for key, row in comps.items()
        ),
        key=lambda c: (-c.games_played, c.characters),
    )[:MAX_COMPOSITIONS]

    priorities = sorted(
        (
            DraftPriority(
                character=name,
                rate=_rate(row[0], total),
                win_rate=_rate(row[1], row[0]),
                games_played=row[0],
            )
            for name, row in picks.items()
        ),
        key=lambda d: (-d.rate, d.character),
    )[:MAX_PICK_PRIORITIES]

    flex = sorted(name for name, who in pickers.items() if len(who) > 1)
    return CompositionData(
        team_id=team_id,
        title=title,
        top_compositions=tuple(top),
        first_pick_priorities=tuple(priorities),
        flex_picks=tuple(flex),
    )


def trend_direction(values: Sequence[float]) -> str:
    """Sign of the least-squares slope of ``values`` over their index."""
    n = len(values)
    if n < 3:
        return "stable"
    xs = range(n)
    sum_x = sum(xs)
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in zip(xs, values))
    sum_x2 = sum(x * x for x in xs)
    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return "stable"
    slope = (n * sum_xy - sum_x * sum_y) / denom
    if slope > TREND_SLOPE:
        return "improving"
    if slope < -TREND_SLOPE:
        return "declining"
    return "stable"


def form(recent: float, overall: float) -> Tuple[str, float]:
    diff = recent - overall
    score = clamp(diff * 200, -100.0, 100.0)
    if recent >= 0.7 or diff > FORM_SHIFT:
        return "hot", score
    if recent <= 0.3 or diff < -FORM_SHIFT:
        return "cold", score
    return "stable", score


def analyze_trends(team_id: str, states: Sequence[SeriesState]) -> TrendAnalysis:
    ordered = sorted(states, key=lambda s: s.started_at)
    results = [bool(ours.won) for ours, _ in _finished_games(ordered, team_id)]
    if not results:
        return TrendAnalysis(team_id=team_id)

    progression: List[float] = []
    wins = 0
    for i, won in enumerate(results, start=1):
        wins += won
        progression.append(wins / i)

    last5 = results[-5:]
    last10 = results[-10:]
    last5_rate = sum(last5) / len(last5)
    overall = wins / len(results)
    indicator, score = form(last5_rate, overall)
    logger.debug("Trend for %s: %d games, form %s", team_id, len(results), indicator)
    return TrendAnalysis(
        team_id=team_id,
        last5_win_rate=last5_rate,
        last10_win_rate=sum(last10) / len(last10),
        overall_win_rate=overall,
        form_indicator=indicator,
        form_score=score,
        direction=trend_direction(progression),
    )

