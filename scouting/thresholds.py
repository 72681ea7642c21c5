"""Band tables mapping raw metrics to qualitative labels, plus rounding helpers.

Every label that appears in report text comes from one of the tables here so
the same numeric band always reads the same way.  Rounding is half away from
zero everywhere (0.125 -> 13%), computed on the decimal form of the float.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Tuple

Band = Tuple[str, float, str]

_OPS: Dict[str, Callable[[float, float], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


@dataclass(frozen=True)
class ThresholdTable:
    """Ordered bands evaluated top to bottom; the first match wins."""

    bands: Tuple[Band, ...]
    default: str

    def __post_init__(self) -> None:
        for op, _, _ in self.bands:
            if op not in _OPS:
                raise ValueError(f"unsupported band operator: {op}")


def classify(value: float, table: ThresholdTable) -> str:
    for op, bound, label in table.bands:
        if _OPS[op](value, bound):
            return label
    return table.default


FORM = ThresholdTable(
    bands=((">=", 0.7, "excellent"), (">=", 0.55, "solid"), ("<", 0.4, "struggling")),
    default="average",
)

DOMINANCE = ThresholdTable(
    bands=((">", 0.6, "dominant"), ("<", 0.4, "struggling")),
    default="even",
)

KDA_TIER = ThresholdTable(
    bands=((">", 4.0, "exceptional"), (">", 3.0, "strong"), ("<", 2.0, "vulnerable")),
    default="average",
)

MULTIKILL_TIER = ThresholdTable(
    bands=(
        (">", 2.0, "exceptional teamfight carry"),
        (">", 1.0, "strong teamfight presence"),
        ("<", 0.5, "struggles to carry teamfights"),
    ),
    default="average",
)

WEAPON_RELIANCE = ThresholdTable(
    bands=((">", 0.5, "heavily reliant"), (">", 0.4, "prefers")),
    default="versatile",
)

SYNERGY_TIER = ThresholdTable(
    bands=((">", 0.5, "exceptional"), (">", 0.4, "strong")),
    default="good",
)

# < 0.5 is checked before < 0.7 so the isolated band is reachable.
ASSIST_PLAYSTYLE = ThresholdTable(
    bands=(
        (">", 1.5, "playmaker (sets up teammates)"),
        (">", 1.2, "team-oriented"),
        ("<", 0.5, "isolated carry (low team coordination)"),
        ("<", 0.7, "carry (receives setup)"),
    ),
    default="balanced",
)

POOL_DEPTH = ThresholdTable(
    bands=((">=", 5, "deep"), (">=", 3, "moderate")),
    default="limited",
)

IMPACT = ThresholdTable(
    bands=((">=", 70, "HIGH"), (">=", 40, "MEDIUM")),
    default="LOW",
)

# average game duration in minutes
GAME_PACE = ThresholdTable(
    bands=(("<", 28, "fast-paced, early game focused"), (">", 35, "slow-paced, scaling focused")),
    default="standard pace",
)

ATTACK_STYLE = ThresholdTable(
    bands=((">", 0.55, "aggressive"), ("<", 0.45, "passive")),
    default="balanced",
)

DEFENSE_STYLE = ThresholdTable(
    bands=((">", 0.55, "strong hold"), ("<", 0.45, "vulnerable")),
    default="balanced",
)

ECO_STYLE = ThresholdTable(
    bands=((">", 0.2, "dangerous on eco"), ("<", 0.1, "predictable saves")),
    default="average",
)

FORCE_BUY_STYLE = ThresholdTable(
    bands=((">", 0.4, "strong force buys"), ("<", 0.25, "weak force buys")),
    default="average",
)

FULL_BUY_STYLE = ThresholdTable(
    bands=((">", 0.55, "dominant when full buying"), ("<", 0.45, "struggles even with full buy")),
    default="average",
)

# Map pool entries carry a strength tag rather than a number.
MAP_STRENGTH: Dict[str, str] = {"strong": "comfort pick", "weak": "avoid in veto"}


def map_strength_label(strength: str) -> str:
    return MAP_STRENGTH.get(strength, "average")


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


def _quantize(value: float, exponent: str) -> Decimal:
    if value is None or not math.isfinite(value):
        return Decimal(exponent) * 0
    result = Decimal(repr(float(value))).quantize(Decimal(exponent), rounding=ROUND_HALF_UP)
    # avoid rendering "-0"
    return abs(result) if result == 0 else result


def percent(rate: float) -> int:
    """``rate`` in [0, 1] as a whole percentage, rounded half away from zero."""
    if rate is None or not math.isfinite(rate):
        return 0
    scaled = Decimal(repr(float(rate))) * 100
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def whole(value: float) -> int:
    return int(_quantize(value, "1"))


def one_decimal(value: float) -> str:
    return str(_quantize(value, "0.1"))


def two_decimals(value: float) -> str:
    return str(_quantize(value, "0.01"))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
