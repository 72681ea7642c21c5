from __future__ import annotations

from .thresholds import clamp

BASE_CONFIDENCE = 50.0
STYLE_COMPARISON_BONUS = 15.0
HIGH_SIGNAL_BONUS = 10.0
PER_INSIGHT_BONUS = 1.5


def _history_bonus(total_matches: int) -> float:
    if total_matches >= 5:
        return 25.0
    if total_matches >= 3:
        return 15.0
    if total_matches >= 1:
        return 5.0
    return 0.0


def score_confidence(
    total_matches: int,
    has_style_comparison: bool,
    both_high_signal: bool,
    insight_count: int,
) -> float:
    """Blend match history, style data and insight volume into a 0-100 score.

    Every term is additive, so the result does not depend on the order in
    which the signals were gathered.
    """
    score = BASE_CONFIDENCE + _history_bonus(total_matches)
    if has_style_comparison:
        score += STYLE_COMPARISON_BONUS
    if both_high_signal:
        score += HIGH_SIGNAL_BONUS
    score += PER_INSIGHT_BONUS * max(insight_count, 0)
    return clamp(score, 0.0, 100.0)
