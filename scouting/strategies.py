"""Common-strategy statements derived from a team's title metrics."""

from __future__ import annotations

from typing import List

from .models import (
    CommonStrategiesSection,
    LoLMetrics,
    StrategyInsight,
    TeamAnalysis,
    ValorantMetrics,
)
from .thresholds import (
    ATTACK_STYLE,
    DEFENSE_STYLE,
    ECO_STYLE,
    FORCE_BUY_STYLE,
    FULL_BUY_STYLE,
    GAME_PACE,
    classify,
    map_strength_label,
    percent,
    whole,
)

MIN_MAP_GAMES = 3


def extract_strategies(team: TeamAnalysis) -> CommonStrategiesSection:
    metrics = team.metrics
    if isinstance(metrics, LoLMetrics):
        return _lol_strategies(metrics, team.matches_analyzed)
    if isinstance(metrics, ValorantMetrics):
        return _valorant_strategies(metrics, team.matches_analyzed)
    return CommonStrategiesSection()


def _lol_strategies(m: LoLMetrics, sample: int) -> CommonStrategiesSection:
    objectives: List[StrategyInsight] = []
    timing: List[StrategyInsight] = []

    if m.first_dragon_rate > 0.5:
        objectives.append(
            StrategyInsight(
                text=f"Prioritizes first Drake ({percent(m.first_dragon_rate)}% contest rate)",
                metric="first_dragon_rate",
                value=m.first_dragon_rate,
                sample_size=sample,
                context="early game",
            )
        )
    if m.herald_control_rate > 0.5:
        objectives.append(
            StrategyInsight(
                text=f"Strong Herald priority ({percent(m.herald_control_rate)}% control rate)",
                metric="herald_control_rate",
                value=m.herald_control_rate,
                sample_size=sample,
                context="early game",
            )
        )
    if m.baron_control_rate > 0.5:
        objectives.append(
            StrategyInsight(
                text=f"High Baron priority ({percent(m.baron_control_rate)}% control rate)",
                metric="baron_control_rate",
                value=m.baron_control_rate,
                sample_size=sample,
                context="mid-late game",
            )
        )

    if m.first_tower_avg_time > 0:
        timing.append(
            StrategyInsight(
                text=(
                    f"Average first tower at ~{whole(m.first_tower_avg_time)} mins "
                    f"({percent(m.first_tower_rate)}% first tower rate)"
                ),
                metric="first_tower_timing",
                value=m.first_tower_avg_time,
                sample_size=sample,
                context="early game",
            )
        )
    if m.avg_game_duration > 0:
        pace = classify(m.avg_game_duration, GAME_PACE)
        timing.append(
            StrategyInsight(
                text=f"Average game duration: {whole(m.avg_game_duration)} mins ({pace})",
                metric="avg_game_duration",
                value=m.avg_game_duration,
                sample_size=sample,
                context="game pace",
            )
        )

    return CommonStrategiesSection(
        objective_priorities=tuple(objectives),
        timing_patterns=tuple(timing),
    )


def _valorant_strategies(m: ValorantMetrics, sample: int) -> CommonStrategiesSection:
    attack: List[StrategyInsight] = []
    defense: List[StrategyInsight] = []
    objectives: List[StrategyInsight] = []
    timing: List[StrategyInsight] = []

    if m.attack_pistol_win_rate > 0:
        attack.append(
            StrategyInsight(
                text=f"On Attack pistol rounds: {percent(m.attack_pistol_win_rate)}% win rate",
                metric="attack_pistol_win_rate",
                value=m.attack_pistol_win_rate,
                sample_size=sample,
                context="pistol rounds",
            )
        )
    if m.attack_win_rate > 0:
        style = classify(m.attack_win_rate, ATTACK_STYLE)
        attack.append(
            StrategyInsight(
                text=f"On Attack: {percent(m.attack_win_rate)}% round win rate ({style} style)",
                metric="attack_win_rate",
                value=m.attack_win_rate,
                sample_size=sample,
                context="attack side",
            )
        )

    if m.defense_pistol_win_rate > 0:
        defense.append(
            StrategyInsight(
                text=f"On Defense pistol rounds: {percent(m.defense_pistol_win_rate)}% win rate",
                metric="defense_pistol_win_rate",
                value=m.defense_pistol_win_rate,
                sample_size=sample,
                context="pistol rounds",
            )
        )
    if m.defense_win_rate > 0:
        style = classify(m.defense_win_rate, DEFENSE_STYLE)
        defense.append(
            StrategyInsight(
                text=f"On Defense: {percent(m.defense_win_rate)}% round win rate ({style})",
                metric="defense_win_rate",
                value=m.defense_win_rate,
                sample_size=sample,
                context="defense side",
            )
        )

    eco = m.economy
    if eco is not None:
        if eco.eco_rounds > 0:
            timing.append(
                StrategyInsight(
                    text=(
                        f"Eco rounds: {percent(eco.eco_win_rate)}% win rate "
                        f"({classify(eco.eco_win_rate, ECO_STYLE)})"
                    ),
                    metric="eco_win_rate",
                    value=eco.eco_win_rate,
                    sample_size=eco.eco_rounds,
                    context="economy",
                )
            )
        if eco.force_rounds > 0:
            timing.append(
                StrategyInsight(
                    text=(
                        f"Force buy rounds: {percent(eco.force_win_rate)}% win rate "
                        f"({classify(eco.force_win_rate, FORCE_BUY_STYLE)})"
                    ),
                    metric="force_buy_win_rate",
                    value=eco.force_win_rate,
                    sample_size=eco.force_rounds,
                    context="economy",
                )
            )
        if eco.full_buy_rounds > 0:
            timing.append(
                StrategyInsight(
                    text=(
                        f"Full buy rounds: {percent(eco.full_buy_win_rate)}% win rate "
                        f"({classify(eco.full_buy_win_rate, FULL_BUY_STYLE)})"
                    ),
                    metric="full_buy_win_rate",
                    value=eco.full_buy_win_rate,
                    sample_size=eco.full_buy_rounds,
                    context="economy",
                )
            )

    for entry in m.map_pool:
        if entry.games_played < MIN_MAP_GAMES:
            continue
        objectives.append(
            StrategyInsight(
                text=(
                    f"{entry.map_name}: {percent(entry.win_rate)}% win rate "
                    f"({entry.games_played} games) - {map_strength_label(entry.strength)}"
                ),
                metric="map_win_rate",
                value=entry.win_rate,
                sample_size=entry.games_played,
                context=entry.map_name,
            )
        )

    return CommonStrategiesSection(
        attack_patterns=tuple(attack),
        defense_setups=tuple(defense),
        objective_priorities=tuple(objectives),
        timing_patterns=tuple(timing),
    )
