"""Value objects consumed and produced by the insight synthesis pipeline.

Inputs are the aggregates computed by the per-title analyzers; outputs are
the report sections. Everything is immutable: sequences are tuples and the
dataclasses are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .config import LOL


# ---------------------------------------------------------------------------
# Inputs: team level
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Insight:
    """A strength or weakness record produced by an analyzer."""

    title: str
    description: str = ""
    value: float = 0.0
    impact: float = 0.0  # 0-100
    sample_size: int = 0
    comparison: str = ""


@dataclass(frozen=True)
class LoLMetrics:
    first_blood_rate: float = 0.0
    first_dragon_rate: float = 0.0
    first_tower_rate: float = 0.0
    first_tower_avg_time: float = 0.0  # minutes
    gold_diff_15: float = 0.0
    dragon_control_rate: float = 0.0
    herald_control_rate: float = 0.0
    baron_control_rate: float = 0.0
    elder_dragon_rate: float = 0.0
    avg_game_duration: float = 0.0  # minutes
    early_game_rating: float = 0.0  # 0-100
    mid_game_rating: float = 0.0
    late_game_rating: float = 0.0
    aggression_score: float = 0.0


@dataclass(frozen=True)
class EconomyRoundStats:
    eco_rounds: int = 0
    eco_wins: int = 0
    eco_win_rate: float = 0.0
    force_rounds: int = 0
    force_wins: int = 0
    force_win_rate: float = 0.0
    full_buy_rounds: int = 0
    full_buy_wins: int = 0
    full_buy_win_rate: float = 0.0
    avg_loadout_value: float = 0.0


@dataclass(frozen=True)
class MapPoolEntry:
    map_name: str
    games_played: int = 0
    win_rate: float = 0.0
    strength: str = "average"  # "strong", "average", "weak"


@dataclass(frozen=True)
class ValorantMetrics:
    attack_win_rate: float = 0.0
    defense_win_rate: float = 0.0
    pistol_win_rate: float = 0.0
    attack_pistol_win_rate: float = 0.0
    defense_pistol_win_rate: float = 0.0
    eco_round_win_rate: float = 0.0
    force_buy_win_rate: float = 0.0
    full_buy_win_rate: float = 0.0
    economy: Optional[EconomyRoundStats] = None
    first_blood_rate: float = 0.0
    first_death_rate: float = 0.0
    map_pool: Tuple[MapPoolEntry, ...] = ()
    aggression_score: float = 0.0
    clutch_rate: float = 0.0


TitleMetrics = Union[LoLMetrics, ValorantMetrics]


@dataclass(frozen=True)
class TeamAnalysis:
    team_id: str
    team_name: str
    title: str = LOL
    matches_analyzed: int = 0
    games_analyzed: int = 0
    win_rate: float = 0.0
    strengths: Tuple[Insight, ...] = ()
    weaknesses: Tuple[Insight, ...] = ()
    metrics: Optional[TitleMetrics] = None


# ---------------------------------------------------------------------------
# Inputs: player level
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CharacterStats:
    character: str
    games_played: int = 0
    win_rate: float = 0.0
    kda: float = 0.0
    pick_rate: float = 0.0


@dataclass(frozen=True)
class MultikillStats:
    double_kills: int = 0
    triple_kills: int = 0
    quadra_kills: int = 0
    penta_kills: int = 0
    total_multikills: int = 0


@dataclass(frozen=True)
class WeaponStat:
    weapon_name: str
    kills: int = 0
    kill_share: float = 0.0


@dataclass(frozen=True)
class SynergyPartner:
    player_id: str
    player_name: str = ""
    assist_count: int = 0
    synergy_score: float = 0.0


@dataclass(frozen=True)
class ObjectiveFocus:
    towers_destroyed: int = 0
    towers_per_game: float = 0.0
    dragons_secured: int = 0
    dragons_per_game: float = 0.0
    barons_secured: int = 0
    heralds_secured: int = 0
    objective_focused: bool = False
    focus_type: str = ""  # "split-pusher", "objective-focused", "teamfighter"


@dataclass(frozen=True)
class ItemBuild:
    item_name: str
    item_id: str = ""
    build_count: int = 0
    build_rate: float = 0.0
    avg_build_time: float = 0.0


@dataclass(frozen=True)
class AbilityUsage:
    ability_id: str
    ability_name: str = ""
    usage_count: int = 0
    usage_per_game: float = 0.0


@dataclass(frozen=True)
class PlayerProfile:
    player_id: str
    nickname: str
    role: str = ""
    team_id: str = ""
    games_played: int = 0
    kda: float = 0.0
    avg_kills: float = 0.0
    avg_deaths: float = 0.0
    avg_assists: float = 0.0
    assist_ratio: float = 0.0
    character_pool: Tuple[CharacterStats, ...] = ()  # by pick rate, descending
    signature_picks: Tuple[str, ...] = ()
    threat_level: int = 0  # 1-10
    threat_reason: str = ""
    weaknesses: Tuple[Insight, ...] = ()
    multikills: Optional[MultikillStats] = None
    weapons: Tuple[WeaponStat, ...] = ()  # by kill share, descending
    synergy_partners: Tuple[SynergyPartner, ...] = ()  # by synergy score, descending
    objective_focus: Optional[ObjectiveFocus] = None
    item_builds: Tuple[ItemBuild, ...] = ()
    ability_usage: Tuple[AbilityUsage, ...] = ()  # by usage per game, descending


# ---------------------------------------------------------------------------
# Inputs: compositions, trends, counter-strategy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Composition:
    characters: Tuple[str, ...]
    games_played: int = 0
    win_rate: float = 0.0
    frequency: float = 0.0
    archetype: str = ""


@dataclass(frozen=True)
class DraftPriority:
    character: str
    rate: float = 0.0
    win_rate: float = 0.0
    games_played: int = 0


@dataclass(frozen=True)
class CompositionData:
    team_id: str = ""
    title: str = LOL
    top_compositions: Tuple[Composition, ...] = ()
    first_pick_priorities: Tuple[DraftPriority, ...] = ()
    common_bans: Tuple[DraftPriority, ...] = ()
    flex_picks: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TrendAnalysis:
    team_id: str = ""
    last5_win_rate: float = 0.0
    last10_win_rate: float = 0.0
    overall_win_rate: float = 0.0
    form_indicator: str = ""  # "hot", "stable", "cold"
    form_score: float = 0.0  # -100..100
    direction: str = "stable"


@dataclass(frozen=True)
class WeaknessTarget:
    title: str
    description: str = ""
    evidence: str = ""
    impact: float = 0.0


@dataclass(frozen=True)
class DraftRecommendation:
    type: str  # "ban", "pick", "target"
    character: str
    reason: str = ""
    priority: int = 5  # 1 = highest


@dataclass(frozen=True)
class StrategyPlan:
    title: str
    description: str = ""
    timing: str = ""
    evidence: str = ""


@dataclass(frozen=True)
class PlayerTarget:
    player_name: str
    role: str = ""
    reason: str = ""
    priority: int = 5


@dataclass(frozen=True)
class CounterStrategy:
    """Upstream counter-strategy computation; the How To Win input."""

    team_id: str = ""
    team_name: str = ""
    win_condition: str = ""
    weaknesses: Tuple[WeaknessTarget, ...] = ()
    draft_recommendations: Tuple[DraftRecommendation, ...] = ()
    in_game_strategies: Tuple[StrategyPlan, ...] = ()
    target_players: Tuple[PlayerTarget, ...] = ()
    confidence_score: float = 0.0
    warnings: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StrategyInsight:
    text: str
    metric: str
    value: float
    sample_size: int
    context: str = ""


@dataclass(frozen=True)
class CommonStrategiesSection:
    attack_patterns: Tuple[StrategyInsight, ...] = ()
    defense_setups: Tuple[StrategyInsight, ...] = ()
    objective_priorities: Tuple[StrategyInsight, ...] = ()
    timing_patterns: Tuple[StrategyInsight, ...] = ()

    def is_empty(self) -> bool:
        return not (
            self.attack_patterns
            or self.defense_setups
            or self.objective_priorities
            or self.timing_patterns
        )


@dataclass(frozen=True)
class PlayerTendencyInsight:
    text: str
    player_name: str
    role: str
    tendency_type: str
    value: float
    context: str
    sample_size: int


@dataclass(frozen=True)
class CompositionInsight:
    text: str
    characters: Tuple[str, ...] = ()
    frequency: float = 0.0
    win_rate: float = 0.0
    archetype: str = ""
    games_played: int = 0
    rank: int = 0  # 0 for the draft-priority summary lines


@dataclass(frozen=True)
class ActionableInsight:
    recommendation: str
    data_backing: str
    impact: str  # "HIGH", "MEDIUM", "LOW"
    action_type: str  # "STRATEGY", "TARGET_PLAYER", ...
    confidence: float


@dataclass(frozen=True)
class DraftInsight:
    text: str
    character: str
    player_name: str = ""
    win_rate: float = 0.0
    sample_size: int = 0
    priority: int = 0


@dataclass(frozen=True)
class DraftStrategySection:
    priority_bans: Tuple[DraftInsight, ...] = ()
    recommended_picks: Tuple[DraftInsight, ...] = ()
    target_picks: Tuple[DraftInsight, ...] = ()


@dataclass(frozen=True)
class InGameStrategyInsight:
    strategy: str
    timing: str
    reason: str
    impact: str = "HIGH"


@dataclass(frozen=True)
class HowToWinSection:
    win_condition: str = ""
    confidence_score: float = 0.0
    actionable_insights: Tuple[ActionableInsight, ...] = ()
    draft_strategy: DraftStrategySection = field(default_factory=DraftStrategySection)
    in_game_strategy: Tuple[InGameStrategyInsight, ...] = ()


@dataclass(frozen=True)
class DigestibleReport:
    id: str
    team_id: str
    team_name: str
    title: str
    matches_analyzed: int
    generated_at: str  # "YYYY-MM-DD HH:MM:SS"
    executive_summary: str
    common_strategies: CommonStrategiesSection
    player_tendencies: Tuple[PlayerTendencyInsight, ...]
    recent_compositions: Tuple[CompositionInsight, ...]
    how_to_win: HowToWinSection


@dataclass(frozen=True)
class StyleComparison:
    team1_early_game_rating: float = 0.0
    team2_early_game_rating: float = 0.0
    early_game_advantage: str = "even"  # "team1", "team2", "even"
    early_game_insight: str = ""
    team1_mid_game_rating: float = 0.0
    team2_mid_game_rating: float = 0.0
    mid_game_advantage: str = "even"
    mid_game_insight: str = ""
    team1_late_game_rating: float = 0.0
    team2_late_game_rating: float = 0.0
    late_game_advantage: str = "even"
    late_game_insight: str = ""
    team1_aggression: float = 0.0
    team2_aggression: float = 0.0
    style_insight: str = ""


@dataclass(frozen=True)
class HeadToHeadInsight:
    text: str
    type: str  # "historical", "early_game", "style"
    confidence: float


@dataclass(frozen=True)
class HeadToHeadMatch:
    series_id: str
    winner_id: str = ""


@dataclass(frozen=True)
class HeadToHeadReport:
    team1_id: str
    team1_name: str
    team2_id: str
    team2_name: str
    title: str
    total_matches: int
    team1_wins: int
    team2_wins: int
    recommendation: str
    style_comparison: Optional[StyleComparison] = None
    insights: Tuple[HeadToHeadInsight, ...] = ()
    confidence_score: float = 0.0
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlayerHighlight:
    name: str
    role: str
    threat_level: int
    top_picks: Tuple[str, ...] = ()
    key_stat: str = ""


@dataclass(frozen=True)
class AnalysisData:
    """Summary view handed to a narrative generator."""

    team_name: str
    title: str
    matches_analyzed: int
    win_rate: float
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    key_stats: Dict[str, Any] = field(default_factory=dict)
    player_highlights: Tuple[PlayerHighlight, ...] = ()
