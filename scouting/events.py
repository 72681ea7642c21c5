"""LoL objective metrics from GRID event streams.

An events file is a list of wrappers (``sequenceNumber``, ``occurredAt``,
``events``). Each inner event has an ``action`` plus ``actor`` and ``target``
entities with ``type``, ``id`` and ``state``. A ``started`` event whose target
is a ``game`` opens a new game; everything before the first one belongs to
the first game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import LoLMetrics

logger = logging.getLogger(__name__)

DRAGON_IDS = ("drake", "dragon")
BARON_IDS = ("baron", "nashor")
HERALD_IDS = ("herald", "rift")
TOWER_TYPES = ("tower", "fortifier")


@dataclass
class LoLGameEvents:
    """What happened in one game, in event order."""

    kills: List[str] = field(default_factory=list)  # killer team ids
    dragons: List[str] = field(default_factory=list)
    barons: List[str] = field(default_factory=list)
    heralds: List[str] = field(default_factory=list)
    towers: List[Tuple[str, float]] = field(default_factory=list)  # (team id, clock seconds)
    duration_s: float = 0.0

    @property
    def has_data(self) -> bool:
        return bool(self.kills or self.dragons or self.towers)


def entity_team(entity: Any) -> str:
    """Team id behind an actor or target: its own id for teams, ``state.teamId`` otherwise."""
    if not isinstance(entity, dict):
        return ""
    if entity.get("type") == "team":
        return str(entity.get("id") or "")
    state = entity.get("state") or {}
    return str(state.get("teamId") or "")


def _entity_type(entity: Any) -> str:
    return str(entity.get("type") or "") if isinstance(entity, dict) else ""


def _clock_seconds(event: Dict[str, Any]) -> float:
    state = event.get("seriesState") or {}
    games = state.get("games") or []
    if not games or not isinstance(games[-1], dict):
        return 0.0
    clock = games[-1].get("clock") or {}
    try:
        return float(clock.get("currentSeconds") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _ordered(wrappers: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(
        (w for w in wrappers if isinstance(w, dict)),
        key=lambda w: w.get("sequenceNumber") or 0,
    )


def split_lol_games(wrappers: Sequence[Dict[str, Any]]) -> List[LoLGameEvents]:
    games: List[LoLGameEvents] = []
    current: Optional[LoLGameEvents] = None

    for wrapper in _ordered(wrappers):
        for event in wrapper.get("events") or []:
            if not isinstance(event, dict):
                continue
            action = event.get("action")
            actor = event.get("actor")
            target = event.get("target")
            target_type = _entity_type(target)

            if action == "started" and target_type == "game":
                if current is not None and current.has_data:
                    games.append(current)
                current = LoLGameEvents()
                continue
            if current is None:
                current = LoLGameEvents()

            clock = _clock_seconds(event)
            current.duration_s = max(current.duration_s, clock)

            if action == "killed" and target_type == "player" and _entity_type(actor) == "player":
                current.kills.append(entity_team(actor))
            elif action == "killed" and target_type == "ATierNPC":
                npc = str(target.get("id") or "").lower()
                team = entity_team(actor)
                if any(k in npc for k in DRAGON_IDS):
                    current.dragons.append(team)
                elif any(k in npc for k in BARON_IDS):
                    current.barons.append(team)
                elif any(k in npc for k in HERALD_IDS):
                    current.heralds.append(team)
            elif action == "destroyed" and target_type in TOWER_TYPES:
                current.towers.append((entity_team(actor), clock))

    if current is not None and current.has_data:
        games.append(current)
    return games


def _share(owners: List[str], team_id: str) -> float:
    return sum(1 for t in owners if t == team_id) / len(owners) if owners else 0.0


def lol_metrics_from_events(
    events_by_series: Mapping[str, Sequence[Dict[str, Any]]], team_id: str
) -> Optional[LoLMetrics]:
    """First-objective and control rates for ``team_id``.

    None when no downloaded game recorded a champion kill, since every
    first-objective rate would otherwise read as zero.
    """
    games: List[LoLGameEvents] = []
    for wrappers in events_by_series.values():
        games.extend(split_lol_games(wrappers))

    first_bloods = [g.kills[0] for g in games if g.kills]
    if not first_bloods:
        return None
    first_dragons = [g.dragons[0] for g in games if g.dragons]
    first_towers = [g.towers[0] for g in games if g.towers]
    own_tower_times = [t for team, t in first_towers if team == team_id and t > 0]
    durations = [g.duration_s for g in games if g.duration_s > 0]

    metrics = LoLMetrics(
        first_blood_rate=_share(first_bloods, team_id),
        first_dragon_rate=_share(first_dragons, team_id),
        first_tower_rate=_share([team for team, _ in first_towers], team_id),
        first_tower_avg_time=sum(own_tower_times) / len(own_tower_times) / 60 if own_tower_times else 0.0,
        dragon_control_rate=_share([t for g in games for t in g.dragons], team_id),
        herald_control_rate=_share([t for g in games for t in g.heralds], team_id),
        baron_control_rate=_share([t for g in games for t in g.barons], team_id),
        avg_game_duration=sum(durations) / len(durations) / 60 if durations else 0.0,
    )
    logger.debug("Event metrics for %s over %d games: %s", team_id, len(games), metrics)
    return metrics
