import pytest

from scouting.config import VALORANT
from scouting.counter import assemble_how_to_win
from scouting.errors import ValidationError
from scouting.models import (
    CharacterStats,
    CounterStrategy,
    DraftRecommendation,
    LoLMetrics,
    MapPoolEntry,
    PlayerProfile,
    PlayerTarget,
    StrategyPlan,
    TeamAnalysis,
    ValorantMetrics,
    WeaknessTarget,
)


def _team(**overrides) -> TeamAnalysis:
    base = dict(team_id="t1", team_name="Cloud9", matches_analyzed=10, win_rate=0.6)
    base.update(overrides)
    return TeamAnalysis(**base)


def test_missing_team_is_rejected() -> None:
    with pytest.raises(ValidationError):
        assemble_how_to_win(CounterStrategy(), None)


def test_draft_recommendations_are_bucketed_by_type() -> None:
    counter = CounterStrategy(
        draft_recommendations=(
            DraftRecommendation(type="ban", character="Azir", reason="comfort pick", priority=1),
            DraftRecommendation(type="ban", character="Vi", priority=2),
            DraftRecommendation(type="pick", character="Ahri", priority=1),
            DraftRecommendation(type="pick", character="Jinx", priority=2),
            DraftRecommendation(type="pick", character="Nami", priority=3),
            DraftRecommendation(type="target", character="Ryze", priority=1),
            DraftRecommendation(type="swap", character="Lux", priority=1),
        )
    )
    draft = assemble_how_to_win(counter, _team()).draft_strategy

    assert len(draft.priority_bans) == 2
    assert len(draft.recommended_picks) == 3
    assert len(draft.target_picks) == 1
    assert draft.priority_bans[0].text == "BAN Azir - comfort pick"


def test_counter_strategy_blocks_are_carried_over() -> None:
    counter = CounterStrategy(
        win_condition="Out-draft them",
        confidence_score=130,
        weaknesses=(
            WeaknessTarget(title="Weak Side Lane", description="Bot lane loses", evidence="40% (n=8)", impact=75),
            WeaknessTarget(title="Slow Rotations", description="Late to objectives", evidence="n=4", impact=45),
        ),
        in_game_strategies=(
            StrategyPlan(title="Punish Bot", description="Dive bot early", timing="0-10 minutes", evidence="n=8"),
        ),
        target_players=(
            PlayerTarget(player_name="Berserker", role="adc", reason="Dies often", priority=3),
            PlayerTarget(player_name="Vulcan", role="support", reason="Low KDA", priority=12),
        ),
    )
    how = assemble_how_to_win(counter, _team())

    assert how.win_condition == "Out-draft them"
    assert how.confidence_score == 100.0
    first, second, third, fourth = how.actionable_insights
    assert first.recommendation == "Exploit: Weak Side Lane"
    assert first.data_backing == "Bot lane loses - 40% (n=8)"
    assert (first.impact, first.confidence) == ("HIGH", 0.75)
    assert second.impact == "MEDIUM"
    assert third.recommendation == "Target Berserker (adc)"
    assert third.action_type == "TARGET_PLAYER"
    assert third.confidence == pytest.approx(0.7)
    assert fourth.confidence == 0.0
    assert how.in_game_strategy[0].reason == "Dive bot early - n=8"


def test_lol_metric_exploits() -> None:
    team = _team(metrics=LoLMetrics(first_blood_rate=0.3, first_dragon_rate=0.35, avg_game_duration=25))
    how = assemble_how_to_win(None, team)

    assert [i.recommendation for i in how.actionable_insights] == [
        "Play aggressive early - invade and force fights",
        "Prioritize dragon control - set up vision and contest every spawn",
    ]
    assert [i.confidence for i in how.actionable_insights] == [0.8, 0.85]
    assert how.in_game_strategy[0].strategy == "Draft scaling compositions and survive early"
    assert "avg 25 min" in how.in_game_strategy[0].reason


def test_zero_duration_is_not_fast() -> None:
    how = assemble_how_to_win(None, _team(metrics=LoLMetrics(first_blood_rate=0.5, first_dragon_rate=0.5)))
    assert how.in_game_strategy == ()
    assert how.actionable_insights == ()


def test_valorant_exploits_and_map_veto() -> None:
    team = _team(
        title=VALORANT,
        metrics=ValorantMetrics(
            attack_win_rate=0.4,
            defense_win_rate=0.5,
            pistol_win_rate=0.5,
            first_death_rate=0.6,
            map_pool=(
                MapPoolEntry(map_name="Bind", games_played=3, win_rate=0.2, strength="weak"),
                MapPoolEntry(map_name="Lotus", games_played=2, win_rate=0.0, strength="weak"),
            ),
        ),
    )
    how = assemble_how_to_win(None, team)

    assert [i.recommendation for i in how.actionable_insights] == [
        "Play solid defense and force them into attack rounds",
        "Take aggressive early peeks to secure first blood",
    ]
    assert [s.strategy for s in how.in_game_strategy] == ["Force Bind in map veto"]


def test_player_pools_feed_bans_and_targets() -> None:
    player = PlayerProfile(
        player_id="p1",
        nickname="TenZ",
        role="duelist",
        character_pool=(
            CharacterStats("Jett", games_played=6, win_rate=0.8),
            CharacterStats("Reyna", games_played=3, win_rate=0.25),
            CharacterStats("Raze", games_played=2, win_rate=0.9),
        ),
    )
    draft = assemble_how_to_win(None, _team(title=VALORANT), [player]).draft_strategy

    assert [b.text for b in draft.priority_bans] == ["Deny Jett from TenZ - 80% win rate"]
    assert draft.priority_bans[0].priority == 1
    assert [t.text for t in draft.target_picks] == ["Force TenZ onto Reyna - 25% win rate"]
    assert draft.target_picks[0].sample_size == 3


def test_lol_ban_verb() -> None:
    player = PlayerProfile(
        player_id="p1",
        nickname="Faker",
        character_pool=(CharacterStats("Azir", games_played=4, win_rate=0.75),),
    )
    draft = assemble_how_to_win(None, _team(), [player]).draft_strategy
    assert draft.priority_bans[0].text == "Ban Azir from Faker - 75% win rate"
