from scouting.thresholds import (
    ASSIST_PLAYSTYLE,
    FORM,
    GAME_PACE,
    IMPACT,
    KDA_TIER,
    POOL_DEPTH,
    clamp,
    classify,
    one_decimal,
    percent,
    two_decimals,
    whole,
)


def test_percent_rounds_half_away_from_zero() -> None:
    assert percent(0.125) == 13
    assert percent(0.005) == 1
    assert percent(0.3) == 30
    assert percent(2 / 3) == 67
    assert percent(0.0) == 0


def test_percent_of_non_finite_is_zero() -> None:
    assert percent(float("nan")) == 0
    assert percent(float("inf")) == 0


def test_decimal_helpers() -> None:
    assert whole(27.5) == 28
    assert whole(40.0) == 40
    assert one_decimal(3.45) == "3.5"
    assert one_decimal(-0.04) == "0.0"
    assert two_decimals(0.455) == "0.46"


def test_form_bands() -> None:
    assert classify(0.7, FORM) == "excellent"
    assert classify(0.55, FORM) == "solid"
    assert classify(0.5, FORM) == "average"
    assert classify(0.39, FORM) == "struggling"


def test_kda_and_pool_bands() -> None:
    assert classify(4.5, KDA_TIER) == "exceptional"
    assert classify(3.5, KDA_TIER) == "strong"
    assert classify(2.5, KDA_TIER) == "average"
    assert classify(1.5, KDA_TIER) == "vulnerable"
    assert classify(5, POOL_DEPTH) == "deep"
    assert classify(3, POOL_DEPTH) == "moderate"
    assert classify(2, POOL_DEPTH) == "limited"


def test_isolated_carry_band_is_reachable() -> None:
    assert classify(0.45, ASSIST_PLAYSTYLE).startswith("isolated carry")
    assert classify(0.6, ASSIST_PLAYSTYLE).startswith("carry")
    assert classify(1.0, ASSIST_PLAYSTYLE) == "balanced"
    assert classify(1.3, ASSIST_PLAYSTYLE) == "team-oriented"
    assert classify(1.6, ASSIST_PLAYSTYLE).startswith("playmaker")


def test_impact_and_pace_bands() -> None:
    assert classify(70, IMPACT) == "HIGH"
    assert classify(40, IMPACT) == "MEDIUM"
    assert classify(39.9, IMPACT) == "LOW"
    assert classify(25, GAME_PACE).startswith("fast-paced")
    assert classify(40, GAME_PACE).startswith("slow-paced")
    assert classify(30, GAME_PACE) == "standard pace"


def test_clamp() -> None:
    assert clamp(12, 0, 10) == 10
    assert clamp(-3, 0, 10) == 0
    assert clamp(4, 0, 10) == 4
