from scouting.analysis import analyze_team
from scouting.events import entity_team, lol_metrics_from_events, split_lol_games
from scouting.models import LoLMetrics


def test_entity_team() -> None:
    assert entity_team({"type": "team", "id": "1"}) == "1"
    assert entity_team({"type": "player", "id": "p", "state": {"teamId": "4"}}) == "4"
    assert entity_team({"type": "player", "id": "p"}) == ""
    assert entity_team(None) == ""


def test_split_games_follows_sequence_numbers(lol_events) -> None:
    shuffled = list(reversed(lol_events["s1"]))
    games = split_lol_games(shuffled)

    assert len(games) == 1
    game = games[0]
    assert game.kills == ["1", "4"]
    assert game.dragons == ["1"]
    assert game.barons == ["1"]
    assert game.towers == [("1", 840)]
    assert game.duration_s == 1800


def test_split_games_on_game_start(lol_events) -> None:
    both = lol_events["s1"] + [dict(w, sequenceNumber=100 + w["sequenceNumber"]) for w in lol_events["s2"]]
    games = split_lol_games(both)

    assert [g.kills[0] for g in games] == ["1", "4"]


def test_lol_metrics_across_series(lol_events) -> None:
    metrics = lol_metrics_from_events(lol_events, "1")

    assert metrics == LoLMetrics(
        first_blood_rate=0.5,
        first_dragon_rate=0.5,
        first_tower_rate=1.0,
        first_tower_avg_time=12.0,
        dragon_control_rate=0.5,
        herald_control_rate=0.0,
        baron_control_rate=1.0,
        avg_game_duration=35.0,
    )


def test_lol_metrics_from_the_other_side(lol_events) -> None:
    metrics = lol_metrics_from_events(lol_events, "4")

    assert metrics.first_blood_rate == 0.5
    assert metrics.first_tower_rate == 0.0
    assert metrics.first_tower_avg_time == 0.0
    assert metrics.baron_control_rate == 0.0


def test_lol_metrics_need_a_kill() -> None:
    assert lol_metrics_from_events({"s1": [{"type": "kill"}]}, "1") is None
    assert lol_metrics_from_events({}, "1") is None


def test_analyze_team_fills_lol_metrics(match_data, lol_events) -> None:
    states = list(match_data.states.values())

    with_events = analyze_team("1", "Cloud9", states, "lol", lol_events)
    without = analyze_team("1", "Cloud9", states, "lol")
    valorant = analyze_team("1", "Cloud9", states, "valorant", lol_events)

    assert with_events.metrics == lol_metrics_from_events(lol_events, "1")
    assert without.metrics is None
    assert valorant.metrics is None
    assert with_events.win_rate == without.win_rate
