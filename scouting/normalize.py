"""Parsing of GRID payloads and analyzer aggregates into typed records.

Two families live here:

* GRID series listings and series-state documents, parsed into
  ``SeriesInfo`` / ``SeriesState`` records the analyzers consume.
* The camelCase aggregate JSON produced by the per-title analyzers, loaded
  into the frozen synthesis models.

Both are lenient: missing keys fall back to zero values instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import LOL, resolve_title
from .errors import ValidationError
from .models import (
    AbilityUsage,
    CharacterStats,
    Composition,
    CompositionData,
    CounterStrategy,
    DraftPriority,
    DraftRecommendation,
    EconomyRoundStats,
    HeadToHeadMatch,
    Insight,
    ItemBuild,
    LoLMetrics,
    MapPoolEntry,
    MultikillStats,
    ObjectiveFocus,
    PlayerProfile,
    PlayerTarget,
    StrategyPlan,
    SynergyPartner,
    TeamAnalysis,
    TitleMetrics,
    TrendAnalysis,
    ValorantMetrics,
    WeaknessTarget,
    WeaponStat,
)


def _safe_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _safe_float(value: Any) -> float:
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _items(value: Any) -> List[Dict[str, Any]]:
    return [v for v in (value or []) if isinstance(v, dict)]


# ---------------------------------------------------------------------------
# GRID series listings and series states
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TeamRef:
    id: str
    name: str
    logo_url: str = ""


@dataclass(frozen=True)
class SeriesInfo:
    id: str
    start_time: str = ""
    format: str = ""
    tournament_name: str = ""
    title_id: str = ""
    teams: Tuple[TeamRef, ...] = ()

    @property
    def team_ids(self) -> Tuple[str, ...]:
        return tuple(t.id for t in self.teams)


@dataclass(frozen=True)
class PlayerGameState:
    player_id: str
    name: str
    character: Optional[str]
    kills: int
    deaths: int
    assists: int


@dataclass(frozen=True)
class TeamGameState:
    team_id: str
    name: str
    won: Optional[bool]
    score: int
    kills: int
    deaths: int
    players: Tuple[PlayerGameState, ...]


@dataclass(frozen=True)
class GameState:
    sequence_number: int
    finished: bool
    teams: Tuple[TeamGameState, ...]

    def team(self, team_id: str) -> Optional[TeamGameState]:
        return next((t for t in self.teams if t.team_id == team_id), None)

    def opponent(self, team_id: str) -> Optional[TeamGameState]:
        return next((t for t in self.teams if t.team_id != team_id), None)


@dataclass(frozen=True)
class SeriesState:
    id: str
    finished: bool
    started_at: str
    teams: Tuple[TeamGameState, ...]
    games: Tuple[GameState, ...]

    @property
    def winner_id(self) -> str:
        return next((t.team_id for t in self.teams if t.won), "")

    def team(self, team_id: str) -> Optional[TeamGameState]:
        return next((t for t in self.teams if t.team_id == team_id), None)


def _team_ref(entry: Dict[str, Any]) -> TeamRef:
    base = entry.get("baseInfo") or entry
    return TeamRef(
        id=_str(base.get("id")),
        name=_str(base.get("name")),
        logo_url=_str(base.get("logoUrl")),
    )


def parse_series_node(node: Dict[str, Any]) -> SeriesInfo:
    return SeriesInfo(
        id=_str(node.get("id")),
        start_time=_str(node.get("startTimeScheduled")),
        format=_str((node.get("format") or {}).get("nameShortened")),
        tournament_name=_str((node.get("tournament") or {}).get("name")),
        title_id=_str((node.get("title") or {}).get("id")),
        teams=tuple(_team_ref(t) for t in _items(node.get("teams"))),
    )


def _get_character(player: Dict[str, Any]) -> Optional[str]:
    for key in ("character", "champion", "agent"):
        val = player.get(key)
        if val:
            if isinstance(val, dict):
                return val.get("name") or val.get("id")
            return str(val)
    return None


def _players(players: List[Dict[str, Any]]) -> Tuple[PlayerGameState, ...]:
    return tuple(
        PlayerGameState(
            player_id=_str(p.get("id")),
            name=_str(p.get("name")),
            character=_get_character(p),
            kills=_safe_int(p.get("kills")),
            deaths=_safe_int(p.get("deaths")),
            assists=_safe_int(p.get("killAssistsGiven") or p.get("assists")),
        )
        for p in players
    )


def _team_state(entry: Dict[str, Any]) -> TeamGameState:
    won = entry.get("won")
    return TeamGameState(
        team_id=_str(entry.get("id")),
        name=_str(entry.get("name")),
        won=bool(won) if won is not None else None,
        score=_safe_int(entry.get("score")),
        kills=_safe_int(entry.get("kills")),
        deaths=_safe_int(entry.get("deaths")),
        players=_players(_items(entry.get("players"))),
    )


def parse_series_state(series_id: str, state: Dict[str, Any]) -> SeriesState:
    games = tuple(
        GameState(
            sequence_number=_safe_int(g.get("sequenceNumber")),
            finished=bool(g.get("finished", True)),
            teams=tuple(_team_state(t) for t in _items(g.get("teams"))),
        )
        for g in _items(state.get("games"))
    )
    return SeriesState(
        id=_str(state.get("id")) or series_id,
        finished=bool(state.get("finished")),
        started_at=_str(state.get("startedAt")),
        teams=tuple(_team_state(t) for t in _items(state.get("teams"))),
        games=games,
    )


# ---------------------------------------------------------------------------
# Analyzer aggregates (camelCase JSON) -> synthesis models
# ---------------------------------------------------------------------------


def _insight(d: Dict[str, Any]) -> Insight:
    return Insight(
        title=_str(d.get("title")),
        description=_str(d.get("description")),
        value=_safe_float(d.get("value")),
        impact=_safe_float(d.get("impact")),
        sample_size=_safe_int(d.get("sampleSize")),
        comparison=_str(d.get("comparison")),
    )


def _lol_metrics(d: Dict[str, Any]) -> LoLMetrics:
    return LoLMetrics(
        first_blood_rate=_safe_float(d.get("firstBloodRate")),
        first_dragon_rate=_safe_float(d.get("firstDragonRate")),
        first_tower_rate=_safe_float(d.get("firstTowerRate")),
        first_tower_avg_time=_safe_float(d.get("firstTowerAvgTime")),
        gold_diff_15=_safe_float(d.get("goldDiff15")),
        dragon_control_rate=_safe_float(d.get("dragonControlRate")),
        herald_control_rate=_safe_float(d.get("heraldControlRate")),
        baron_control_rate=_safe_float(d.get("baronControlRate")),
        elder_dragon_rate=_safe_float(d.get("elderDragonRate")),
        avg_game_duration=_safe_float(d.get("avgGameDuration")),
        early_game_rating=_safe_float(d.get("earlyGameRating")),
        mid_game_rating=_safe_float(d.get("midGameRating")),
        late_game_rating=_safe_float(d.get("lateGameRating")),
        aggression_score=_safe_float(d.get("aggressionScore")),
    )


def _economy(d: Optional[Dict[str, Any]]) -> Optional[EconomyRoundStats]:
    if not d:
        return None
    return EconomyRoundStats(
        eco_rounds=_safe_int(d.get("ecoRounds")),
        eco_wins=_safe_int(d.get("ecoWins")),
        eco_win_rate=_safe_float(d.get("ecoWinRate")),
        force_rounds=_safe_int(d.get("forceRounds")),
        force_wins=_safe_int(d.get("forceWins")),
        force_win_rate=_safe_float(d.get("forceWinRate")),
        full_buy_rounds=_safe_int(d.get("fullBuyRounds")),
        full_buy_wins=_safe_int(d.get("fullBuyWins")),
        full_buy_win_rate=_safe_float(d.get("fullBuyWinRate")),
        avg_loadout_value=_safe_float(d.get("avgLoadoutValue")),
    )


def _valorant_metrics(d: Dict[str, Any]) -> ValorantMetrics:
    return ValorantMetrics(
        attack_win_rate=_safe_float(d.get("attackWinRate")),
        defense_win_rate=_safe_float(d.get("defenseWinRate")),
        pistol_win_rate=_safe_float(d.get("pistolWinRate")),
        attack_pistol_win_rate=_safe_float(d.get("attackPistolWinRate")),
        defense_pistol_win_rate=_safe_float(d.get("defensePistolWinRate")),
        eco_round_win_rate=_safe_float(d.get("ecoRoundWinRate")),
        force_buy_win_rate=_safe_float(d.get("forceBuyWinRate")),
        full_buy_win_rate=_safe_float(d.get("fullBuyWinRate")),
        economy=_economy(d.get("economyStats") or d.get("economy")),
        first_blood_rate=_safe_float(d.get("firstBloodRate")),
        first_death_rate=_safe_float(d.get("firstDeathRate")),
        map_pool=tuple(
            MapPoolEntry(
                map_name=_str(m.get("mapName")),
                games_played=_safe_int(m.get("gamesPlayed")),
                win_rate=_safe_float(m.get("winRate")),
                strength=_str(m.get("strength")) or "average",
            )
            for m in _items(d.get("mapPool"))
        ),
        aggression_score=_safe_float(d.get("aggressionScore")),
        clutch_rate=_safe_float(d.get("clutchRate")),
    )


def _metrics(d: Dict[str, Any], title: str) -> Optional[TitleMetrics]:
    if d.get("lolMetrics"):
        return _lol_metrics(d["lolMetrics"])
    if d.get("valMetrics"):
        return _valorant_metrics(d["valMetrics"])
    generic = d.get("metrics")
    if not generic:
        return None
    return _lol_metrics(generic) if title == LOL else _valorant_metrics(generic)


def load_team_analysis(d: Dict[str, Any]) -> TeamAnalysis:
    if not isinstance(d, dict):
        raise ValidationError("team analysis must be an object")
    team_id = _str(d.get("teamId"))
    if not team_id:
        raise ValidationError("team analysis is missing teamId")
    title = resolve_title(d.get("title"))
    return TeamAnalysis(
        team_id=team_id,
        team_name=_str(d.get("teamName")) or team_id,
        title=title,
        matches_analyzed=_safe_int(d.get("matchesAnalyzed")),
        games_analyzed=_safe_int(d.get("gamesAnalyzed")),
        win_rate=_safe_float(d.get("winRate")),
        strengths=tuple(_insight(i) for i in _items(d.get("strengths"))),
        weaknesses=tuple(_insight(i) for i in _items(d.get("weaknesses"))),
        metrics=_metrics(d, title),
    )


def _player(d: Dict[str, Any]) -> PlayerProfile:
    multikills = d.get("multikillStats")
    focus = d.get("objectiveFocus")
    return PlayerProfile(
        player_id=_str(d.get("playerId")),
        nickname=_str(d.get("nickname")),
        role=_str(d.get("role")),
        team_id=_str(d.get("teamId")),
        games_played=_safe_int(d.get("gamesPlayed")),
        kda=_safe_float(d.get("kda")),
        avg_kills=_safe_float(d.get("avgKills")),
        avg_deaths=_safe_float(d.get("avgDeaths")),
        avg_assists=_safe_float(d.get("avgAssists")),
        assist_ratio=_safe_float(d.get("assistRatio")),
        character_pool=tuple(
            CharacterStats(
                character=_str(c.get("character")),
                games_played=_safe_int(c.get("gamesPlayed")),
                win_rate=_safe_float(c.get("winRate")),
                kda=_safe_float(c.get("kda")),
                pick_rate=_safe_float(c.get("pickRate")),
            )
            for c in _items(d.get("characterPool"))
        ),
        signature_picks=tuple(_str(s) for s in (d.get("signaturePicks") or [])),
        threat_level=_safe_int(d.get("threatLevel")),
        threat_reason=_str(d.get("threatReason")),
        weaknesses=tuple(_insight(i) for i in _items(d.get("weaknesses"))),
        multikills=(
            MultikillStats(
                double_kills=_safe_int(multikills.get("doubleKills")),
                triple_kills=_safe_int(multikills.get("tripleKills")),
                quadra_kills=_safe_int(multikills.get("quadraKills")),
                penta_kills=_safe_int(multikills.get("pentaKills")),
                total_multikills=_safe_int(multikills.get("totalMultikills")),
            )
            if isinstance(multikills, dict)
            else None
        ),
        weapons=tuple(
            WeaponStat(
                weapon_name=_str(w.get("weaponName")),
                kills=_safe_int(w.get("kills")),
                kill_share=_safe_float(w.get("killShare")),
            )
            for w in _items(d.get("weaponStats"))
        ),
        synergy_partners=tuple(
            SynergyPartner(
                player_id=_str(s.get("playerId")),
                player_name=_str(s.get("playerName")),
                assist_count=_safe_int(s.get("assistCount")),
                synergy_score=_safe_float(s.get("synergyScore")),
            )
            for s in _items(d.get("synergyPartners"))
        ),
        objective_focus=(
            ObjectiveFocus(
                towers_destroyed=_safe_int(focus.get("towersDestroyed")),
                towers_per_game=_safe_float(focus.get("towersPerGame")),
                dragons_secured=_safe_int(focus.get("dragonsSecured")),
                dragons_per_game=_safe_float(focus.get("dragonsPerGame")),
                barons_secured=_safe_int(focus.get("baronsSecured")),
                heralds_secured=_safe_int(focus.get("heraldsSecured")),
                objective_focused=bool(focus.get("objectiveFocused")),
                focus_type=_str(focus.get("objectiveFocusType") or focus.get("focusType")),
            )
            if isinstance(focus, dict)
            else None
        ),
        item_builds=tuple(
            ItemBuild(
                item_name=_str(i.get("itemName")),
                item_id=_str(i.get("itemId")),
                build_count=_safe_int(i.get("buildCount")),
                build_rate=_safe_float(i.get("buildRate")),
                avg_build_time=_safe_float(i.get("avgBuildTime")),
            )
            for i in _items(d.get("itemBuilds"))
        ),
        ability_usage=tuple(
            AbilityUsage(
                ability_id=_str(a.get("abilityId")),
                ability_name=_str(a.get("abilityName")),
                usage_count=_safe_int(a.get("usageCount")),
                usage_per_game=_safe_float(a.get("usagePerGame")),
            )
            for a in _items(d.get("abilityUsage"))
        ),
    )


def load_players(items: Any) -> List[PlayerProfile]:
    return [_player(p) for p in _items(items)]


def _draft_priorities(items: Any) -> Tuple[DraftPriority, ...]:
    return tuple(
        DraftPriority(
            character=_str(p.get("character")),
            rate=_safe_float(p.get("rate")),
            win_rate=_safe_float(p.get("winRate")),
            games_played=_safe_int(p.get("gamesPlayed")),
        )
        for p in _items(items)
    )


def load_compositions(d: Optional[Dict[str, Any]]) -> Optional[CompositionData]:
    if not d:
        return None
    return CompositionData(
        team_id=_str(d.get("teamId")),
        title=resolve_title(d.get("title")),
        top_compositions=tuple(
            Composition(
                characters=tuple(_str(c) for c in (comp.get("characters") or [])),
                games_played=_safe_int(comp.get("gamesPlayed")),
                win_rate=_safe_float(comp.get("winRate")),
                frequency=_safe_float(comp.get("frequency")),
                archetype=_str(comp.get("archetype")),
            )
            for comp in _items(d.get("topCompositions"))
        ),
        first_pick_priorities=_draft_priorities(d.get("firstPickPriorities")),
        common_bans=_draft_priorities(d.get("commonBans")),
        flex_picks=tuple(_str(f) for f in (d.get("flexPicks") or [])),
    )


def load_trends(d: Optional[Dict[str, Any]]) -> Optional[TrendAnalysis]:
    if not d:
        return None
    return TrendAnalysis(
        team_id=_str(d.get("teamId")),
        last5_win_rate=_safe_float(d.get("last5WinRate")),
        last10_win_rate=_safe_float(d.get("last10WinRate")),
        overall_win_rate=_safe_float(d.get("overallWinRate")),
        form_indicator=_str(d.get("formIndicator")),
        form_score=_safe_float(d.get("formScore")),
        direction=_str(d.get("direction")) or "stable",
    )


def load_counter_strategy(d: Optional[Dict[str, Any]]) -> Optional[CounterStrategy]:
    if not d:
        return None
    return CounterStrategy(
        team_id=_str(d.get("teamId")),
        team_name=_str(d.get("teamName")),
        win_condition=_str(d.get("winCondition")),
        weaknesses=tuple(
            WeaknessTarget(
                title=_str(w.get("title")),
                description=_str(w.get("description")),
                evidence=_str(w.get("evidence")),
                impact=_safe_float(w.get("impact")),
            )
            for w in _items(d.get("weaknesses"))
        ),
        draft_recommendations=tuple(
            DraftRecommendation(
                type=_str(r.get("type")),
                character=_str(r.get("character")),
                reason=_str(r.get("reason")),
                priority=_safe_int(r.get("priority")),
            )
            for r in _items(d.get("draftRecommendations"))
        ),
        in_game_strategies=tuple(
            StrategyPlan(
                title=_str(s.get("title")),
                description=_str(s.get("description")),
                timing=_str(s.get("timing")),
                evidence=_str(s.get("evidence")),
            )
            for s in _items(d.get("inGameStrategies"))
        ),
        target_players=tuple(
            PlayerTarget(
                player_name=_str(t.get("playerName")),
                role=_str(t.get("role")),
                reason=_str(t.get("reason")),
                priority=_safe_int(t.get("priority")),
            )
            for t in _items(d.get("targetPlayers"))
        ),
        confidence_score=_safe_float(d.get("confidenceScore")),
        warnings=tuple(_str(w) for w in (d.get("warnings") or [])),
    )


@dataclass(frozen=True)
class SynthesisInput:
    team: TeamAnalysis
    players: Tuple[PlayerProfile, ...] = ()
    compositions: Optional[CompositionData] = None
    trends: Optional[TrendAnalysis] = None
    counter: Optional[CounterStrategy] = None


def load_synthesis_input(d: Dict[str, Any]) -> SynthesisInput:
    """Load ``{teamAnalysis, playerProfiles, compositions, trends, howToWin}``."""
    if not isinstance(d, dict):
        raise ValidationError("synthesis input must be an object")
    team = d.get("teamAnalysis") or d.get("teamStrategy")
    if not team:
        raise ValidationError("teamAnalysis is required")
    return SynthesisInput(
        team=load_team_analysis(team),
        players=tuple(load_players(d.get("playerProfiles"))),
        compositions=load_compositions(d.get("compositions")),
        trends=load_trends(d.get("trends") or d.get("trendAnalysis")),
        counter=load_counter_strategy(d.get("howToWin") or d.get("counterStrategy")),
    )


@dataclass(frozen=True)
class MatchupInput:
    team1: TeamRef
    team2: TeamRef
    title: str
    matches: Tuple[HeadToHeadMatch, ...] = ()
    team1_analysis: Optional[TeamAnalysis] = None
    team2_analysis: Optional[TeamAnalysis] = None


def load_matchup_input(d: Dict[str, Any]) -> MatchupInput:
    """Load ``{team1, team2, title, matches, team1Analysis, team2Analysis}``."""
    if not isinstance(d, dict):
        raise ValidationError("matchup input must be an object")
    team1 = TeamRef(id=_str((d.get("team1") or {}).get("id")), name=_str((d.get("team1") or {}).get("name")))
    team2 = TeamRef(id=_str((d.get("team2") or {}).get("id")), name=_str((d.get("team2") or {}).get("name")))
    if not team1.id or not team2.id:
        raise ValidationError("team1.id and team2.id are required")
    t1 = d.get("team1Analysis")
    t2 = d.get("team2Analysis")
    return MatchupInput(
        team1=team1,
        team2=team2,
        title=resolve_title(d.get("title")),
        matches=tuple(
            HeadToHeadMatch(series_id=_str(m.get("seriesId")), winner_id=_str(m.get("winnerId")))
            for m in _items(d.get("matches"))
        ),
        team1_analysis=load_team_analysis(t1) if t1 else None,
        team2_analysis=load_team_analysis(t2) if t2 else None,
    )
