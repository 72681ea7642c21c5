from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from .models import (
    AnalysisData,
    LoLMetrics,
    PlayerHighlight,
    PlayerProfile,
    TeamAnalysis,
    TrendAnalysis,
    ValorantMetrics,
)
from .thresholds import FORM, classify, one_decimal, percent


def current_form(trends: Optional[TrendAnalysis]) -> str:
    if trends is None:
        return "stable"
    if trends.form_indicator:
        return trends.form_indicator
    return classify(trends.last5_win_rate, FORM)


def _lol_summary(team: TeamAnalysis, m: LoLMetrics, form: str) -> str:
    if m.early_game_rating > 60:
        playstyle = "aggressive early-game"
    elif m.avg_game_duration > 35:
        playstyle = "scaling late-game"
    else:
        playstyle = "balanced"

    strength = ""
    if m.first_dragon_rate > 0.6:
        strength = f"strong dragon control ({percent(m.first_dragon_rate)}% first dragon)"
    elif m.first_blood_rate > 0.5:
        strength = f"aggressive early game ({percent(m.first_blood_rate)}% first blood)"

    weakness = ""
    if m.first_blood_rate < 0.4:
        weakness = f"passive early game ({percent(m.first_blood_rate)}% first blood)"
    elif m.first_dragon_rate < 0.4:
        weakness = f"poor dragon control ({percent(m.first_dragon_rate)}% first dragon)"

    return _compose(team, playstyle, strength, weakness, form)


def _valorant_summary(team: TeamAnalysis, m: ValorantMetrics, form: str) -> str:
    if m.attack_win_rate > m.defense_win_rate + 0.1:
        playstyle = "attack-favored"
    elif m.defense_win_rate > m.attack_win_rate + 0.1:
        playstyle = "defense-favored"
    else:
        playstyle = "balanced"

    strength = ""
    if m.pistol_win_rate > 0.55:
        strength = f"strong pistol rounds ({percent(m.pistol_win_rate)}% win rate)"
    elif m.first_blood_rate > 0.55:
        strength = f"dominant opening duels ({percent(m.first_blood_rate)}% first blood)"

    weakness = ""
    if m.attack_win_rate < 0.45:
        weakness = f"weak attack execution ({percent(m.attack_win_rate)}% attack win rate)"
    elif m.defense_win_rate < 0.45:
        weakness = f"vulnerable defense ({percent(m.defense_win_rate)}% defense win rate)"

    return _compose(team, playstyle, strength, weakness, form)


def _compose(team: TeamAnalysis, playstyle: str, strength: str, weakness: str, form: str) -> str:
    summary = (
        f"{team.team_name} is a {playstyle} team with {percent(team.win_rate)}% win rate "
        f"({team.matches_analyzed} matches). "
    )
    if strength:
        summary += f"Key strength: {strength}. "
    if weakness:
        summary += f"Exploitable weakness: {weakness}. "
    return summary + f"Current form: {form}."


def build_executive_summary(team: TeamAnalysis, trends: Optional[TrendAnalysis] = None) -> str:
    """One-paragraph overview: playstyle, a strength, a weakness and current form."""
    form = current_form(trends)
    if isinstance(team.metrics, LoLMetrics):
        return _lol_summary(team, team.metrics, form)
    if isinstance(team.metrics, ValorantMetrics):
        return _valorant_summary(team, team.metrics, form)
    return (
        f"{team.team_name} has a {percent(team.win_rate)}% win rate across "
        f"{team.matches_analyzed} matches analyzed. Current form: {form}."
    )


def _key_stats(team: TeamAnalysis) -> Dict[str, Any]:
    stats: Dict[str, Any] = {
        "win_rate": team.win_rate,
        "matches_analyzed": team.matches_analyzed,
        "games_analyzed": team.games_analyzed,
    }
    if team.metrics is not None:
        metrics = asdict(team.metrics)
        # nested economy/map pool blocks are not key stats
        stats.update({k: v for k, v in metrics.items() if isinstance(v, (int, float))})
    return stats


def build_analysis_data(team: TeamAnalysis, players: Sequence[PlayerProfile] = ()) -> AnalysisData:
    ranked = sorted(players, key=lambda p: p.threat_level, reverse=True)
    highlights: List[PlayerHighlight] = [
        PlayerHighlight(
            name=p.nickname,
            role=p.role,
            threat_level=p.threat_level,
            top_picks=tuple(c.character for c in p.character_pool[:3]),
            key_stat=f"{one_decimal(p.kda)} KDA",
        )
        for p in ranked
    ]
    return AnalysisData(
        team_name=team.team_name,
        title=team.title,
        matches_analyzed=team.matches_analyzed,
        win_rate=team.win_rate,
        strengths=tuple(s.title for s in team.strengths),
        weaknesses=tuple(w.title for w in team.weaknesses),
        key_stats=_key_stats(team),
        player_highlights=tuple(highlights),
    )
