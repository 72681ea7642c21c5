"""JSON views of the report dataclasses: camelCase for clients, snake_case for storage."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Dict

from .models import (
    ActionableInsight,
    CommonStrategiesSection,
    CompositionInsight,
    DigestibleReport,
    DraftInsight,
    DraftStrategySection,
    HowToWinSection,
    InGameStrategyInsight,
    PlayerTendencyInsight,
    StrategyInsight,
)


def to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel_case(str(k)): camelize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [camelize(v) for v in value]
    return value


def to_camel_dict(obj: Any) -> Any:
    """Dataclass (or plain container) to a JSON-ready structure with camelCase keys."""
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return camelize(obj)


def _many(cls: Any, items: Any) -> tuple:
    return tuple(cls(**item) for item in (items or []))


def report_from_dict(d: Dict[str, Any]) -> DigestibleReport:
    """Inverse of ``dataclasses.asdict`` for a stored report (snake_case keys)."""
    strategies = d.get("common_strategies") or {}
    how = d.get("how_to_win") or {}
    draft = how.get("draft_strategy") or {}
    return DigestibleReport(
        id=d["id"],
        team_id=d.get("team_id", ""),
        team_name=d.get("team_name", ""),
        title=d.get("title", ""),
        matches_analyzed=d.get("matches_analyzed", 0),
        generated_at=d.get("generated_at", ""),
        executive_summary=d.get("executive_summary", ""),
        common_strategies=CommonStrategiesSection(
            attack_patterns=_many(StrategyInsight, strategies.get("attack_patterns")),
            defense_setups=_many(StrategyInsight, strategies.get("defense_setups")),
            objective_priorities=_many(StrategyInsight, strategies.get("objective_priorities")),
            timing_patterns=_many(StrategyInsight, strategies.get("timing_patterns")),
        ),
        player_tendencies=_many(PlayerTendencyInsight, d.get("player_tendencies")),
        recent_compositions=tuple(
            CompositionInsight(**{**c, "characters": tuple(c.get("characters") or ())})
            for c in (d.get("recent_compositions") or [])
        ),
        how_to_win=HowToWinSection(
            win_condition=how.get("win_condition", ""),
            confidence_score=how.get("confidence_score", 0.0),
            actionable_insights=_many(ActionableInsight, how.get("actionable_insights")),
            draft_strategy=DraftStrategySection(
                priority_bans=_many(DraftInsight, draft.get("priority_bans")),
                recommended_picks=_many(DraftInsight, draft.get("recommended_picks")),
                target_picks=_many(DraftInsight, draft.get("target_picks")),
            ),
            in_game_strategy=_many(InGameStrategyInsight, how.get("in_game_strategy")),
        ),
    )
