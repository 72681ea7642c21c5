from scouting.config import VALORANT
from scouting.counter_plan import (
    plan_confidence,
    plan_counter_strategy,
    sample_size_warning,
    weakness_impact,
)
from scouting.models import (
    CharacterStats,
    Insight,
    LoLMetrics,
    PlayerProfile,
    TeamAnalysis,
    ValorantMetrics,
)


def _team(**overrides) -> TeamAnalysis:
    base = dict(team_id="t1", team_name="Cloud9", matches_analyzed=10, win_rate=0.6)
    base.update(overrides)
    return TeamAnalysis(**base)


def test_weakness_impact_scales_with_sample_and_severity() -> None:
    assert weakness_impact(Insight(title="a", value=25, sample_size=12)) == 90.0
    assert weakness_impact(Insight(title="b", value=35, sample_size=6)) == 70.0
    assert weakness_impact(Insight(title="c", value=50, sample_size=2)) == 50.0


def test_plan_confidence() -> None:
    assert plan_confidence(0, 0, 0, 0) == 50.0
    assert plan_confidence(15, 3, 3, 2) == 100.0
    assert plan_confidence(10, 2, 0, 1) == 70.0


def test_sample_size_warning() -> None:
    assert sample_size_warning(5) is None
    assert "Only 3 games analyzed" in sample_size_warning(3)


def test_passive_lol_team() -> None:
    team = _team(
        win_rate=0.7,
        metrics=LoLMetrics(first_blood_rate=0.3, first_dragon_rate=0.3, avg_game_duration=40),
    )
    plan = plan_counter_strategy(team)

    assert [w.title for w in plan.weaknesses] == ["Passive Early Game", "Poor Dragon Control"]
    assert plan.weaknesses[0].evidence == "30% first blood rate"
    assert [s.title for s in plan.in_game_strategies] == ["Early Aggression", "Dragon Priority"]
    assert plan.win_condition.startswith("To beat Cloud9, dominate the early game")
    assert "(30% first blood)" in plan.win_condition
    assert plan.confidence_score == 70.0
    assert plan.warnings == ()


def test_analysis_weaknesses_carry_their_evidence() -> None:
    team = _team(
        games_analyzed=3,
        weaknesses=(Insight(title="Losing Trades", description="Gives up kills", value=38.46, sample_size=3),),
    )
    plan = plan_counter_strategy(team)

    assert plan.weaknesses[0].evidence == "38.5% (n=3)"
    assert plan.weaknesses[0].impact == 60.0
    assert plan.win_condition == "To beat Cloud9, exploit their Losing Trades."
    assert len(plan.warnings) == 1


def test_no_weaknesses_gives_generic_win_condition() -> None:
    plan = plan_counter_strategy(_team())
    assert plan.win_condition == (
        "To beat Cloud9, maintain consistent execution and capitalize on any mistakes."
    )


def test_bans_and_targets_from_players() -> None:
    players = [
        PlayerProfile(
            player_id="p1",
            nickname="Faker",
            role="mid",
            threat_level=8,
            character_pool=(CharacterStats("Azir", games_played=4, win_rate=0.7),),
        ),
        PlayerProfile(player_id="p2", nickname="Oner", role="jungle", threat_level=3, threat_reason="Lower priority target"),
        PlayerProfile(
            player_id="p3",
            nickname="Gumayusi",
            role="adc",
            threat_level=6,
            weaknesses=(Insight(title="High Death Count", description="Dies frequently"),),
        ),
    ]
    team = _team(
        weaknesses=(Insight(title="Inconsistent Games", value=40, sample_size=10),),
        metrics=LoLMetrics(first_blood_rate=0.5, first_dragon_rate=0.5, avg_game_duration=31),
    )
    plan = plan_counter_strategy(team, players)

    assert [(d.type, d.character, d.reason) for d in plan.draft_recommendations] == [
        ("ban", "Azir", "Faker's Azir has 70% win rate")
    ]
    assert [(t.player_name, t.priority, t.reason) for t in plan.target_players] == [
        ("Gumayusi", 4, "Dies frequently"),
        ("Oner", 7, "Lower priority target"),
    ]
    assert plan.win_condition == (
        "To beat Cloud9, focus pressure on Gumayusi (adc) while exploiting their Inconsistent Games."
    )


def test_valorant_attack_weakness_drives_win_condition() -> None:
    team = _team(
        title=VALORANT,
        metrics=ValorantMetrics(attack_win_rate=0.4, defense_win_rate=0.5, pistol_win_rate=0.5),
    )
    plan = plan_counter_strategy(team)

    assert [w.title for w in plan.weaknesses] == ["Weak Attack Execution"]
    assert plan.win_condition == (
        "To beat Cloud9, play solid defense and force them into attack rounds. "
        "Their 40% attack win rate is exploitable."
    )
