"""Counter-strategy planner.

Produces the ``CounterStrategy`` consumed by :func:`scouting.counter.assemble_how_to_win`
when a caller has not computed one itself: weakness targets, draft
recommendations, in-game plans, target players, a base confidence and the
headline win condition.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import (
    CounterStrategy,
    DraftRecommendation,
    Insight,
    LoLMetrics,
    PlayerProfile,
    PlayerTarget,
    StrategyPlan,
    TeamAnalysis,
    ValorantMetrics,
    WeaknessTarget,
)
from .thresholds import one_decimal, percent, whole

MAX_DRAFT_RECOMMENDATIONS = 5
MAX_TARGET_PLAYERS = 3
BAN_MIN_GAMES = 3
BAN_WIN_RATE = 0.65
LOW_THREAT = 4
LOW_SAMPLE_GAMES = 5


def weakness_impact(weakness: Insight) -> float:
    """Impact of an analyzer weakness from its sample size and severity."""
    impact = 50.0
    if weakness.sample_size >= 10:
        impact += 20
    elif weakness.sample_size >= 5:
        impact += 10
    # values are percentages; lower is worse
    if weakness.value < 30:
        impact += 20
    elif weakness.value < 40:
        impact += 10
    return min(impact, 100.0)


def _analysis_weaknesses(team: TeamAnalysis) -> List[WeaknessTarget]:
    return [
        WeaknessTarget(
            title=w.title,
            description=w.description,
            evidence=f"{one_decimal(w.value)}% (n={w.sample_size})",
            impact=weakness_impact(w),
        )
        for w in team.weaknesses
    ]


def _lol_rules(
    m: LoLMetrics, team: TeamAnalysis, weaknesses: List[WeaknessTarget], plans: List[StrategyPlan]
) -> None:
    if m.first_blood_rate < 0.4:
        weaknesses.append(
            WeaknessTarget(
                title="Passive Early Game",
                description="Team rarely secures first blood, vulnerable to early aggression",
                evidence=f"{percent(m.first_blood_rate)}% first blood rate",
                impact=70,
            )
        )
        plans.append(
            StrategyPlan(
                title="Early Aggression",
                description="Play aggressively in lanes and invade jungle early",
                timing="0-10 minutes",
                evidence="Low first blood rate indicates passive early game",
            )
        )
    if m.first_dragon_rate < 0.4:
        weaknesses.append(
            WeaknessTarget(
                title="Poor Dragon Control",
                description="Team struggles to secure first dragon",
                evidence=f"{percent(m.first_dragon_rate)}% first dragon rate",
                impact=65,
            )
        )
        plans.append(
            StrategyPlan(
                title="Dragon Priority",
                description="Set up vision and contest every dragon spawn",
                timing="5-25 minutes",
                evidence="Low dragon control rate",
            )
        )
    if 0 < m.avg_game_duration < 28 and team.win_rate > 0.5:
        plans.append(
            StrategyPlan(
                title="Scale to Late Game",
                description="Draft scaling compositions and avoid early fights",
                timing="Draft and 0-20 minutes",
                evidence="Team wins quickly, may struggle in extended games",
            )
        )


def _valorant_rules(
    m: ValorantMetrics, weaknesses: List[WeaknessTarget], plans: List[StrategyPlan]
) -> None:
    if m.attack_win_rate < 0.45:
        weaknesses.append(
            WeaknessTarget(
                title="Weak Attack Execution",
                description="Team struggles on attack side",
                evidence=f"{percent(m.attack_win_rate)}% attack round win rate",
                impact=75,
            )
        )
        plans.append(
            StrategyPlan(
                title="Force Attack Rounds",
                description="Play aggressive defense to build economy advantage, then hold on attack",
                timing="Throughout match",
                evidence="Low attack win rate",
            )
        )
    if m.defense_win_rate < 0.45:
        weaknesses.append(
            WeaknessTarget(
                title="Weak Defense Setup",
                description="Team struggles on defense side",
                evidence=f"{percent(m.defense_win_rate)}% defense round win rate",
                impact=75,
            )
        )
        plans.append(
            StrategyPlan(
                title="Aggressive Attack Executes",
                description="Execute quickly on attack to exploit weak defensive setups",
                timing="Attack rounds",
                evidence="Low defense win rate",
            )
        )
    if m.pistol_win_rate < 0.4:
        weaknesses.append(
            WeaknessTarget(
                title="Poor Pistol Rounds",
                description="Team loses pistol rounds frequently",
                evidence=f"{percent(m.pistol_win_rate)}% pistol win rate",
                impact=60,
            )
        )
        plans.append(
            StrategyPlan(
                title="Pistol Round Focus",
                description="Prioritize pistol round preparation and execution",
                timing="Rounds 1 and 13",
                evidence="Low pistol win rate gives economy advantage",
            )
        )
    if m.first_death_rate > 0.55:
        weaknesses.append(
            WeaknessTarget(
                title="Opening Duel Vulnerability",
                description="Team often loses first engagement",
                evidence=f"{percent(m.first_death_rate)}% first death rate",
                impact=65,
            )
        )
        plans.append(
            StrategyPlan(
                title="Aggressive Opening Duels",
                description="Take aggressive early peeks to secure first blood",
                timing="Round start",
                evidence="High first death rate",
            )
        )
    for entry in m.map_pool:
        if entry.strength == "weak" and entry.games_played >= 3:
            plans.append(
                StrategyPlan(
                    title=f"Force {entry.map_name}",
                    description=(
                        f"Pick {entry.map_name} in map veto - opponent has "
                        f"{percent(entry.win_rate)}% win rate"
                    ),
                    timing="Map veto",
                    evidence=f"{percent(entry.win_rate)}% win rate on {entry.map_name}",
                )
            )


def _bans(players: Sequence[PlayerProfile]) -> List[DraftRecommendation]:
    out: List[DraftRecommendation] = []
    for player in players:
        for char in player.character_pool:
            if char.games_played >= BAN_MIN_GAMES and char.win_rate > BAN_WIN_RATE:
                out.append(
                    DraftRecommendation(
                        type="ban",
                        character=char.character,
                        reason=(
                            f"{player.nickname}'s {char.character} has "
                            f"{percent(char.win_rate)}% win rate"
                        ),
                        priority=1,
                    )
                )
    return out


def _targets(players: Sequence[PlayerProfile]) -> List[PlayerTarget]:
    out: List[PlayerTarget] = []
    seen = set()
    for player in players:
        if player.nickname in seen:
            continue
        if player.threat_level <= LOW_THREAT or player.weaknesses:
            reason = player.threat_reason
            if player.weaknesses and player.weaknesses[0].description:
                reason = player.weaknesses[0].description
            out.append(
                PlayerTarget(
                    player_name=player.nickname,
                    role=player.role,
                    reason=reason,
                    priority=10 - player.threat_level,
                )
            )
            seen.add(player.nickname)
    return out


def plan_confidence(
    games_analyzed: int, weaknesses: int, draft_recommendations: int, targets: int
) -> float:
    confidence = 50.0
    if games_analyzed >= 15:
        confidence += 25
    elif games_analyzed >= 10:
        confidence += 15
    elif games_analyzed >= 5:
        confidence += 5
    if weaknesses >= 3:
        confidence += 15
    elif weaknesses >= 1:
        confidence += 5
    if draft_recommendations >= 3:
        confidence += 10
    if targets >= 2:
        confidence += 5
    return min(confidence, 100.0)


def win_condition(
    team: TeamAnalysis, weaknesses: Sequence[WeaknessTarget], targets: Sequence[PlayerTarget]
) -> str:
    name = team.team_name
    if not weaknesses:
        return f"To beat {name}, maintain consistent execution and capitalize on any mistakes."
    top = max(weaknesses, key=lambda w: w.impact)

    m = team.metrics
    if isinstance(m, LoLMetrics):
        if m.first_blood_rate < 0.4 and m.first_dragon_rate < 0.4:
            return (
                f"To beat {name}, dominate the early game with aggressive plays and secure "
                f"dragon control. Their passive early game ({percent(m.first_blood_rate)}% "
                "first blood) leaves them vulnerable to snowballing."
            )
        if 0 < m.avg_game_duration < 28:
            return (
                f"To beat {name}, draft scaling compositions and survive the early game. "
                f"They win fast (avg {whole(m.avg_game_duration)} min) but may struggle in "
                "extended games."
            )
        if targets:
            return (
                f"To beat {name}, focus pressure on {targets[0].player_name} "
                f"({targets[0].role}) while exploiting their {top.title}."
            )
        return f"To beat {name}, exploit their {top.title} and maintain objective control."

    if isinstance(m, ValorantMetrics):
        if m.attack_win_rate < 0.45:
            return (
                f"To beat {name}, play solid defense and force them into attack rounds. "
                f"Their {percent(m.attack_win_rate)}% attack win rate is exploitable."
            )
        if m.defense_win_rate < 0.45:
            return (
                f"To beat {name}, execute quickly on attack to exploit their weak defensive "
                f"setups ({percent(m.defense_win_rate)}% defense win rate)."
            )
        if m.pistol_win_rate < 0.4:
            return (
                f"To beat {name}, win pistol rounds to build economy advantage. "
                f"Their {percent(m.pistol_win_rate)}% pistol win rate gives you a head start."
            )
        for entry in m.map_pool:
            if entry.strength == "weak" and entry.games_played >= 3:
                return (
                    f"To beat {name}, force {entry.map_name} in map veto. They have only "
                    f"{percent(entry.win_rate)}% win rate on this map."
                )
        return (
            f"To beat {name}, exploit their {top.title} and maintain round-by-round discipline."
        )

    return f"To beat {name}, exploit their {top.title}."


def sample_size_warning(games_analyzed: int) -> Optional[str]:
    if games_analyzed < LOW_SAMPLE_GAMES:
        return (
            f"Warning: Only {games_analyzed} games analyzed - insights may be less "
            "reliable due to low sample size."
        )
    return None


def plan_counter_strategy(
    team: TeamAnalysis, players: Sequence[PlayerProfile] = ()
) -> CounterStrategy:
    weaknesses = _analysis_weaknesses(team)
    plans: List[StrategyPlan] = []

    if isinstance(team.metrics, LoLMetrics):
        _lol_rules(team.metrics, team, weaknesses, plans)
    elif isinstance(team.metrics, ValorantMetrics):
        _valorant_rules(team.metrics, weaknesses, plans)

    # sorted() is stable, so equal priorities keep discovery order
    drafts = sorted(_bans(players), key=lambda d: d.priority)[:MAX_DRAFT_RECOMMENDATIONS]
    targets = sorted(_targets(players), key=lambda t: t.priority)[:MAX_TARGET_PLAYERS]

    games = team.games_analyzed or team.matches_analyzed
    warnings = []
    warning = sample_size_warning(games)
    if warning:
        warnings.append(warning)

    return CounterStrategy(
        team_id=team.team_id,
        team_name=team.team_name,
        win_condition=win_condition(team, weaknesses, targets),
        weaknesses=tuple(weaknesses),
        draft_recommendations=tuple(drafts),
        in_game_strategies=tuple(plans),
        target_players=tuple(targets),
        confidence_score=plan_confidence(games, len(weaknesses), len(drafts), len(targets)),
        warnings=tuple(warnings),
    )
