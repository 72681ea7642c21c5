from typing import Any, Dict, List, Optional, Sequence

import pytest

from scouting.errors import NotFoundError, UpstreamError
from scouting.normalize import (
    GameState,
    PlayerGameState,
    SeriesInfo,
    SeriesState,
    TeamGameState,
    TeamRef,
)
from src.application.ports.match_data import MatchDataPort, ProgressCallbackPort

CLOUD9 = TeamRef(id="1", name="Cloud9")
FLYQUEST = TeamRef(id="4", name="FlyQuest")
LIQUID = TeamRef(id="7", name="Team Liquid")

C9_CHAMPS = ("Ornn", "Lee Sin", "Azir", "Jinx", "Nami")
FLY_CHAMPS = ("Gnar", "Vi", "Orianna", "Kai'Sa", "Rell")


def _side(team: TeamRef, won: bool, champs: Sequence[str]) -> TeamGameState:
    players = tuple(
        PlayerGameState(
            player_id=f"{team.id}-{i}",
            name=f"{team.name} player {i}",
            character=c,
            kills=3 if won else 1,
            deaths=1 if won else 3,
            assists=5,
        )
        for i, c in enumerate(champs)
    )
    return TeamGameState(
        team_id=team.id,
        name=team.name,
        won=won,
        score=int(won),
        kills=15 if won else 5,
        deaths=5 if won else 15,
        players=players,
    )


def series_state(series_id: str, started_at: str, winner: TeamRef, loser: TeamRef) -> SeriesState:
    champs = {CLOUD9.id: C9_CHAMPS, FLYQUEST.id: FLY_CHAMPS}
    game = GameState(
        sequence_number=1,
        finished=True,
        teams=(
            _side(winner, True, champs.get(winner.id, C9_CHAMPS)),
            _side(loser, False, champs.get(loser.id, FLY_CHAMPS)),
        ),
    )
    return SeriesState(
        id=series_id,
        finished=True,
        started_at=started_at,
        teams=(_side(winner, True, ()), _side(loser, False, ())),
        games=(game,),
    )


class FakeMatchData(MatchDataPort):
    """In-memory GRID stand-in: three Cloud9 vs FlyQuest series, Cloud9 wins two."""

    def __init__(self, fail_states: bool = False):
        self.teams: Dict[str, TeamRef] = {t.id: t for t in (CLOUD9, FLYQUEST, LIQUID)}
        shared = [SeriesInfo(id=f"s{i}", teams=(CLOUD9, FLYQUEST)) for i in (1, 2, 3)]
        self.series: Dict[str, List[SeriesInfo]] = {CLOUD9.id: shared, FLYQUEST.id: list(shared), LIQUID.id: []}
        self.states: Dict[str, SeriesState] = {
            "s1": series_state("s1", "2025-11-01T18:00:00Z", CLOUD9, FLYQUEST),
            "s2": series_state("s2", "2025-11-08T18:00:00Z", FLYQUEST, CLOUD9),
            "s3": series_state("s3", "2025-11-15T18:00:00Z", CLOUD9, FLYQUEST),
        }
        self.events: Dict[str, List[Dict[str, Any]]] = {"s1": [{"type": "kill"}], "s2": [{"type": "tower"}]}
        self.fail_states = fail_states
        self.event_requests: List[str] = []

    def add_series(self, series_id: str, started_at: str, cloud9_wins: bool) -> None:
        """Another Cloud9 vs FlyQuest series, listed newest last for both teams."""
        winner, loser = (CLOUD9, FLYQUEST) if cloud9_wins else (FLYQUEST, CLOUD9)
        info = SeriesInfo(id=series_id, teams=(CLOUD9, FLYQUEST))
        self.series[CLOUD9.id].append(info)
        self.series[FLYQUEST.id].append(info)
        self.states[series_id] = series_state(series_id, started_at, winner, loser)

    def get_team_by_id(self, team_id: str) -> TeamRef:
        team = self.teams.get(team_id)
        if team is None:
            raise NotFoundError(f"team {team_id} not found")
        return team

    def get_series_for_team(self, team_id: str, limit: int) -> List[SeriesInfo]:
        return self.series.get(team_id, [])[:limit]

    def get_series_states(self, series_ids: Sequence[str]) -> Dict[str, SeriesState]:
        if self.fail_states:
            raise UpstreamError("series state endpoint unavailable")
        return {sid: self.states[sid] for sid in series_ids if sid in self.states}

    def download_events(self, series_id: str) -> List[Dict[str, Any]]:
        self.event_requests.append(series_id)
        if series_id not in self.events:
            raise NotFoundError(f"events file not available for series {series_id}")
        return self.events[series_id]


class RecordingProgress(ProgressCallbackPort):
    def __init__(self) -> None:
        self.updates: List[tuple] = []

    async def report_progress(self, progress: int, message: str, status: str = "processing") -> None:
        self.updates.append((progress, message, status))


@pytest.fixture
def match_data() -> FakeMatchData:
    return FakeMatchData()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def aggregates() -> Dict[str, Any]:
    """Analyzer output in the camelCase shape the synthesize endpoint accepts."""
    return {
        "teamAnalysis": {
            "teamId": "1",
            "teamName": "Cloud9",
            "title": "lol",
            "matchesAnalyzed": 10,
            "winRate": 0.7,
            "lolMetrics": {"firstBloodRate": 0.3, "firstDragonRate": 0.3, "avgGameDuration": 40},
        },
        "playerProfiles": [
            {
                "playerId": "p1",
                "nickname": "Blaber",
                "role": "jungle",
                "gamesPlayed": 10,
                "kda": 3.5,
                "characterPool": [
                    {"character": "Lee Sin", "gamesPlayed": 5, "winRate": 0.8, "pickRate": 0.5}
                ],
            }
        ],
        "trends": {"formIndicator": "hot"},
    }


def _entity(kind: str, entity_id: str, team_id: str = "") -> Dict[str, Any]:
    entity: Dict[str, Any] = {"type": kind, "id": entity_id}
    if team_id:
        entity["state"] = {"teamId": team_id}
    return entity


def grid_event(action: str, actor: Dict[str, Any], target: Dict[str, Any], clock: float = 0.0) -> Dict[str, Any]:
    return {
        "action": action,
        "actor": actor,
        "target": target,
        "seriesState": {"games": [{"clock": {"currentSeconds": clock}}]},
    }


def lol_game(first_blood: str, other: str, dragon: str, tower: str, tower_s: float, end_s: float,
             baron: str = "") -> List[Dict[str, Any]]:
    """Event wrappers for one LoL game, in GRID's shape."""
    events = [
        grid_event("started", _entity("series", "series"), _entity("game", "g")),
        grid_event("killed", _entity("player", "a", first_blood), _entity("player", "b", other), 200),
        grid_event("killed", _entity("player", "c", other), _entity("player", "d", first_blood), 260),
        grid_event("killed", _entity("player", "e", dragon), _entity("ATierNPC", "cloudDrake"), 400),
        grid_event("destroyed", _entity("team", tower), _entity("tower", "blue-turret-mid-1"), tower_s),
    ]
    if baron:
        events.append(grid_event("killed", _entity("player", "f", baron), _entity("ATierNPC", "baron"), 1500))
    events.append(grid_event("ended", _entity("series", "series"), _entity("game", "g"), end_s))
    return [{"sequenceNumber": i, "events": [e]} for i, e in enumerate(events, start=1)]


@pytest.fixture
def lol_events() -> Dict[str, List[Dict[str, Any]]]:
    """Two games. Cloud9 takes every first in s1; FlyQuest takes first blood and drake in s2."""
    return {
        "s1": lol_game("1", "4", dragon="1", tower="1", tower_s=840, end_s=1800, baron="1"),
        "s2": lol_game("4", "1", dragon="4", tower="1", tower_s=600, end_s=2400),
    }
