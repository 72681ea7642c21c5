from scouting.head_to_head import (
    compare_styles,
    find_head_to_head,
    shared_series_ids,
    synthesize_head_to_head,
)
from scouting.models import HeadToHeadMatch, LoLMetrics, TeamAnalysis, ValorantMetrics
from scouting.normalize import SeriesInfo, SeriesState, TeamGameState, TeamRef

ALPHA = TeamRef(id="t1", name="Alpha")
BETA = TeamRef(id="t2", name="Beta")
GAMMA = TeamRef(id="t3", name="Gamma")


def _series(sid: str, *teams: TeamRef) -> SeriesInfo:
    return SeriesInfo(id=sid, teams=teams)


def _state(sid: str, winner: str, finished: bool = True) -> SeriesState:
    teams = tuple(
        TeamGameState(team_id=t, name=t, won=(t == winner), score=0, kills=0, deaths=0, players=())
        for t in ("t1", "t2")
    )
    return SeriesState(id=sid, finished=finished, started_at="", teams=teams, games=())


def _analysis(team: TeamRef, metrics, matches: int = 5) -> TeamAnalysis:
    return TeamAnalysis(team_id=team.id, team_name=team.name, matches_analyzed=matches, metrics=metrics)


def test_shared_series_need_both_teams() -> None:
    s1 = [_series("a", ALPHA, BETA), _series("b", ALPHA, GAMMA), _series("c", ALPHA, BETA)]
    s2 = [_series("c", ALPHA, BETA), _series("a", ALPHA, BETA), _series("b", ALPHA, GAMMA)]
    assert shared_series_ids(s1, s2, "t1", "t2") == ["a", "c"]


def test_find_head_to_head_without_states_counts_every_shared_series() -> None:
    s = [_series("a", ALPHA, BETA), _series("b", ALPHA, BETA)]
    matches = find_head_to_head(s, s, "t1", "t2", None)
    assert matches == [HeadToHeadMatch(series_id="a"), HeadToHeadMatch(series_id="b")]


def test_find_head_to_head_skips_unfinished_and_missing_states() -> None:
    s = [_series("a", ALPHA, BETA), _series("b", ALPHA, BETA), _series("c", ALPHA, BETA)]
    states = {"a": _state("a", "t2"), "b": _state("b", "t1", finished=False)}
    matches = find_head_to_head(s, s, "t1", "t2", states)
    assert matches == [HeadToHeadMatch(series_id="a", winner_id="t2")]


def test_dominant_record() -> None:
    matches = [HeadToHeadMatch(series_id=str(i), winner_id="t1" if i < 4 else "t2") for i in range(6)]
    report = synthesize_head_to_head(ALPHA, BETA, matches, "lol")

    assert (report.total_matches, report.team1_wins, report.team2_wins) == (6, 4, 2)
    assert report.recommendation == "Alpha has historically dominated this matchup (67% win rate)"
    assert report.insights[0].text == "Historical record: Alpha leads 4-2 against Beta"
    assert report.insights[0].confidence == 0.9
    assert report.style_comparison is None
    assert report.confidence_score == 76.5
    assert report.warnings == ()


def test_struggling_record_names_the_leader() -> None:
    matches = [HeadToHeadMatch(series_id=str(i), winner_id="t2") for i in range(3)]
    report = synthesize_head_to_head(ALPHA, BETA, matches, "lol")

    assert report.recommendation.startswith("Alpha has struggled in this matchup (0% win rate)")
    assert report.insights[0].text == "Historical record: Beta leads 0-3 against Alpha"
    assert report.insights[0].confidence == 0.7


def test_no_history() -> None:
    report = synthesize_head_to_head(ALPHA, BETA, [], "lol")

    assert report.recommendation == "No recent head-to-head matches found - focus on general team analysis"
    assert report.warnings == ("No historical matches found between these teams",)
    assert report.insights == ()
    assert report.confidence_score == 50.0


def test_lol_style_comparison() -> None:
    a = _analysis(ALPHA, LoLMetrics(early_game_rating=70, mid_game_rating=50, late_game_rating=40, aggression_score=80))
    b = _analysis(BETA, LoLMetrics(early_game_rating=50, mid_game_rating=60, late_game_rating=70, aggression_score=60))
    report = synthesize_head_to_head(ALPHA, BETA, [], "lol", a, b)
    style = report.style_comparison

    assert style.early_game_advantage == "team1"
    assert style.mid_game_advantage == "team2"
    assert style.late_game_advantage == "team2"
    assert style.early_game_insight == "Alpha has 70 early game rating vs Beta's 50"
    assert style.style_insight == "Alpha is stronger in early game while Beta excels in late game"
    assert [i.text for i in report.insights] == [
        "Alpha has the early game advantage",
        "Alpha plays more aggressively (80 vs 60)",
    ]
    assert report.confidence_score == 78.0


def test_valorant_style_comparison() -> None:
    a = _analysis(ALPHA, ValorantMetrics(attack_win_rate=0.6, defense_win_rate=0.5, pistol_win_rate=0.5))
    b = _analysis(BETA, ValorantMetrics(attack_win_rate=0.45, defense_win_rate=0.55, pistol_win_rate=0.5))
    style = compare_styles(a, b)

    assert style.early_game_advantage == "even"
    assert style.mid_game_advantage == "team1"
    assert style.style_insight == (
        "Alpha is attack-focused (60% attack WR) while Beta is defense-focused (55% defense WR)"
    )


def test_mismatched_metrics_are_not_compared() -> None:
    a = _analysis(ALPHA, LoLMetrics())
    b = _analysis(BETA, ValorantMetrics())
    assert compare_styles(a, b) is None
    report = synthesize_head_to_head(ALPHA, BETA, [], "lol", a, b)
    assert report.style_comparison is None
    # both sides still carry enough matches
    assert report.confidence_score == 60.0
