"""Assemble the "How To Win" section from counter-strategy input and metrics."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .config import VALORANT
from .errors import ValidationError
from .models import (
    ActionableInsight,
    CounterStrategy,
    DraftInsight,
    DraftStrategySection,
    HowToWinSection,
    InGameStrategyInsight,
    LoLMetrics,
    PlayerProfile,
    TeamAnalysis,
    ValorantMetrics,
)
from .thresholds import IMPACT, clamp, classify, percent, whole

logger = logging.getLogger(__name__)

DRAFT_MIN_GAMES = 3
BAN_WIN_RATE = 0.7
TARGET_WIN_RATE = 0.4
MIN_VETO_GAMES = 3


class _Draft:
    """Mutable draft buckets used while the section is assembled."""

    def __init__(self) -> None:
        self.buckets: Dict[str, List[DraftInsight]] = {"ban": [], "pick": [], "target": []}

    def freeze(self) -> DraftStrategySection:
        return DraftStrategySection(
            priority_bans=tuple(self.buckets["ban"]),
            recommended_picks=tuple(self.buckets["pick"]),
            target_picks=tuple(self.buckets["target"]),
        )


def _strategy(recommendation: str, data_backing: str, confidence: float) -> ActionableInsight:
    return ActionableInsight(
        recommendation=recommendation,
        data_backing=data_backing,
        impact="HIGH",
        action_type="STRATEGY",
        confidence=confidence,
    )


def _lol_exploits(
    m: LoLMetrics, insights: List[ActionableInsight], in_game: List[InGameStrategyInsight]
) -> None:
    if m.first_blood_rate < 0.4:
        insights.append(
            _strategy(
                "Play aggressive early - invade and force fights",
                f"Opponent has only {percent(m.first_blood_rate)}% first blood rate, "
                "indicating passive early game",
                0.8,
            )
        )
    if m.first_dragon_rate < 0.4:
        insights.append(
            _strategy(
                "Prioritize dragon control - set up vision and contest every spawn",
                f"Opponent secures first dragon only {percent(m.first_dragon_rate)}% of games",
                0.85,
            )
        )
    if 0 < m.avg_game_duration < 28:
        in_game.append(
            InGameStrategyInsight(
                strategy="Draft scaling compositions and survive early",
                timing="Draft phase and 0-15 minutes",
                reason=(
                    f"Opponent wins fast (avg {whole(m.avg_game_duration)} min) - "
                    "they may struggle in extended games"
                ),
            )
        )
    elif m.avg_game_duration > 35:
        in_game.append(
            InGameStrategyInsight(
                strategy="Draft early-game compositions and force tempo",
                timing="Draft phase and 0-20 minutes",
                reason=(
                    f"Opponent prefers long games (avg {whole(m.avg_game_duration)} min) - "
                    "end before they scale"
                ),
            )
        )


def _valorant_exploits(
    m: ValorantMetrics, insights: List[ActionableInsight], in_game: List[InGameStrategyInsight]
) -> None:
    if m.attack_win_rate < 0.45:
        insights.append(
            _strategy(
                "Play solid defense and force them into attack rounds",
                f"Opponent has only {percent(m.attack_win_rate)}% attack round win rate",
                0.85,
            )
        )
    if m.defense_win_rate < 0.45:
        insights.append(
            _strategy(
                "Execute quickly on attack to exploit weak defensive setups",
                f"Opponent has only {percent(m.defense_win_rate)}% defense round win rate",
                0.85,
            )
        )
    if m.pistol_win_rate < 0.4:
        insights.append(
            _strategy(
                "Focus on pistol round preparation - win pistols to build economy advantage",
                f"Opponent has only {percent(m.pistol_win_rate)}% pistol round win rate",
                0.8,
            )
        )
    if m.first_death_rate > 0.55:
        insights.append(
            _strategy(
                "Take aggressive early peeks to secure first blood",
                f"Opponent gives up first blood {percent(m.first_death_rate)}% of rounds",
                0.8,
            )
        )
    for entry in m.map_pool:
        if entry.strength == "weak" and entry.games_played >= MIN_VETO_GAMES:
            in_game.append(
                InGameStrategyInsight(
                    strategy=f"Force {entry.map_name} in map veto",
                    timing="Map veto phase",
                    reason=(
                        f"Opponent has only {percent(entry.win_rate)}% win rate on "
                        f"{entry.map_name} ({entry.games_played} games)"
                    ),
                )
            )


def _player_targeting(players: Sequence[PlayerProfile], title: str, draft: _Draft) -> None:
    ban_verb = "Deny" if title == VALORANT else "Ban"
    for player in players:
        for char in player.character_pool:
            if char.games_played >= DRAFT_MIN_GAMES and char.win_rate < TARGET_WIN_RATE:
                draft.buckets["target"].append(
                    DraftInsight(
                        text=(
                            f"Force {player.nickname} onto {char.character} - "
                            f"{percent(char.win_rate)}% win rate"
                        ),
                        character=char.character,
                        player_name=player.nickname,
                        win_rate=char.win_rate,
                        sample_size=char.games_played,
                        priority=2,
                    )
                )
        for char in player.character_pool:
            if char.games_played >= DRAFT_MIN_GAMES and char.win_rate > BAN_WIN_RATE:
                draft.buckets["ban"].append(
                    DraftInsight(
                        text=(
                            f"{ban_verb} {char.character} from {player.nickname} - "
                            f"{percent(char.win_rate)}% win rate"
                        ),
                        character=char.character,
                        player_name=player.nickname,
                        win_rate=char.win_rate,
                        sample_size=char.games_played,
                        priority=1,
                    )
                )


def assemble_how_to_win(
    counter: Optional[CounterStrategy],
    team: Optional[TeamAnalysis],
    players: Sequence[PlayerProfile] = (),
) -> HowToWinSection:
    if team is None:
        raise ValidationError("team analysis is required to assemble the how-to-win section")
    counter = counter or CounterStrategy(team_id=team.team_id, team_name=team.team_name)

    insights: List[ActionableInsight] = []
    in_game: List[InGameStrategyInsight] = []
    draft = _Draft()

    for weakness in counter.weaknesses:
        insights.append(
            ActionableInsight(
                recommendation=f"Exploit: {weakness.title}",
                data_backing=f"{weakness.description} - {weakness.evidence}",
                impact=classify(weakness.impact, IMPACT),
                action_type="STRATEGY",
                confidence=weakness.impact / 100,
            )
        )

    for rec in counter.draft_recommendations:
        bucket = draft.buckets.get(rec.type)
        if bucket is None:
            logger.debug("Dropping draft recommendation with unknown type %r", rec.type)
            continue
        bucket.append(
            DraftInsight(
                text=f"{rec.type.upper()} {rec.character} - {rec.reason}",
                character=rec.character,
                priority=rec.priority,
            )
        )

    for plan in counter.in_game_strategies:
        in_game.append(
            InGameStrategyInsight(
                strategy=plan.title,
                timing=plan.timing,
                reason=f"{plan.description} - {plan.evidence}",
            )
        )

    for target in counter.target_players:
        priority = clamp(target.priority, 0, 10)
        insights.append(
            ActionableInsight(
                recommendation=f"Target {target.player_name} ({target.role})",
                data_backing=target.reason,
                impact="HIGH",
                action_type="TARGET_PLAYER",
                confidence=(10 - priority) / 10,
            )
        )

    if isinstance(team.metrics, LoLMetrics):
        _lol_exploits(team.metrics, insights, in_game)
    elif isinstance(team.metrics, ValorantMetrics):
        _valorant_exploits(team.metrics, insights, in_game)

    _player_targeting(players, team.title, draft)

    return HowToWinSection(
        win_condition=counter.win_condition,
        confidence_score=clamp(counter.confidence_score, 0.0, 100.0),
        actionable_insights=tuple(insights),
        draft_strategy=draft.freeze(),
        in_game_strategy=tuple(in_game),
    )
