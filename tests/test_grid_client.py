import io
import json
import zipfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

from scouting.config import CacheConfig
from scouting.errors import NotFoundError, UpstreamError
from scouting.grid_client import (
    GridFileClient,
    GridGraphQLClient,
    parse_events_zip,
    query_across_endpoints,
)
from src.infrastructure.adapters.grid_data_adapter import GridMatchDataAdapter


class _Response:
    def __init__(self, status_code: int = 200, body: Any = None, content: bytes = b""):
        self.status_code = status_code
        self._body = body
        self.content = content

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no json")
        return self._body

    def raise_for_status(self) -> None:
        pass


class _Session:
    def __init__(self, responses: List[_Response]):
        self.responses = list(responses)
        self.calls: List[str] = []

    def post(self, url: str, json: Dict[str, Any], timeout: int) -> _Response:
        self.calls.append(url)
        return self.responses.pop(0)

    def get(self, url: str, timeout: int) -> _Response:
        self.calls.append(url)
        return self.responses.pop(0)


def _zip(members: Dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, text in members.items():
            zf.writestr(name, text)
    return buf.getvalue()


def _graphql(responses: List[_Response], tmp_path: Path = Path("."), cache: bool = False) -> GridGraphQLClient:
    client = GridGraphQLClient(api_key="k", cache=CacheConfig(enabled=cache, base_dir=tmp_path))
    client.session = _Session(responses)
    return client


def test_parse_events_zip_skips_bad_lines() -> None:
    data = _zip(
        {
            "events.jsonl": '{"type": "kill"}\n\nnot json\n{"type": "dragon"}\n[1, 2]\n',
            "readme.txt": '{"type": "ignored"}\n',
        }
    )
    assert parse_events_zip(data) == [{"type": "kill"}, {"type": "dragon"}]


def test_parse_events_zip_rejects_non_zip() -> None:
    with pytest.raises(UpstreamError):
        parse_events_zip(b"plain bytes")


def test_query_retries_on_server_errors() -> None:
    client = _graphql([_Response(503), _Response(200, {"data": {"ok": True}})])
    assert client.query("https://grid/a", "{ ok }", backoff_s=0) == {"ok": True}
    assert len(client.session.calls) == 2


def test_query_raises_on_graphql_errors() -> None:
    client = _graphql([_Response(200, {"errors": [{"message": "bad field"}]})])
    with pytest.raises(UpstreamError):
        client.query("https://grid/a", "{ bad }", backoff_s=0)


def test_query_uses_disk_cache(tmp_path) -> None:
    client = _graphql([_Response(200, {"data": {"n": 1}})], tmp_path, cache=True)
    assert client.query("https://grid/a", "{ n }") == {"n": 1}
    # second call is answered from disk; the session has no responses left
    assert client.query("https://grid/a", "{ n }") == {"n": 1}


def test_query_across_endpoints_falls_back(monkeypatch) -> None:
    monkeypatch.setattr("scouting.grid_client.time.sleep", lambda s: None)
    client = _graphql(
        [_Response(500), _Response(500), _Response(500), _Response(200, {"data": {"x": 1}})]
    )

    url, data = query_across_endpoints(client, ["https://one", "https://two"], "{ x }")
    assert url == "https://two"
    assert data == {"x": 1}


def test_download_events_picks_ready_events_file() -> None:
    files = GridFileClient(api_key="k", base_url="https://files")
    files.session = _Session(
        [
            _Response(
                200,
                {
                    "files": [
                        {"id": "state-grid", "status": "ready", "fullURL": "https://files/state"},
                        {"id": "events-grid", "status": "ready", "fullURL": "https://files/events"},
                    ]
                },
            ),
            _Response(200, content=_zip({"s1.jsonl": json.dumps({"seq": 1}) + "\n"})),
        ]
    )
    assert files.download_events("s1") == [{"seq": 1}]
    assert files.session.calls == ["https://files/list/s1", "https://files/events"]


def test_download_events_without_ready_file() -> None:
    files = GridFileClient(api_key="k", base_url="https://files")
    files.session = _Session([_Response(200, {"files": [{"id": "events-grid", "status": "processing"}]})])
    with pytest.raises(NotFoundError):
        files.download_events("s1")


def test_file_client_maps_http_failures() -> None:
    files = GridFileClient(api_key="k", base_url="https://files")
    files.session = _Session([_Response(404)])
    with pytest.raises(UpstreamError):
        files.list_files("s1")


class _FakeGraphQL:
    def __init__(self, answers: Dict[str, Dict[str, Any]]):
        self.answers = answers

    def query(self, url: str, gql: str, variables=None) -> Dict[str, Any]:
        key = (variables or {}).get("id") or (variables or {}).get("teamId")
        answer = self.answers.get(key)
        if answer is None:
            raise UpstreamError("no answer")
        return answer


def _node(series_id: str) -> Dict[str, Any]:
    return {
        "id": series_id,
        "teams": [{"baseInfo": {"id": "1", "name": "Cloud9"}}, {"baseInfo": {"id": "4", "name": "FlyQuest"}}],
    }


def test_adapter_resolves_team_and_states() -> None:
    client = _FakeGraphQL(
        {
            "1": {"allSeries": {"edges": [{"node": _node("s1")}, {"node": _node("s2")}]}},
            "s1": {"seriesState": {"id": "s1", "finished": True, "teams": [{"id": "1", "won": True}]}},
        }
    )
    adapter = GridMatchDataAdapter(api_key="k", client=client, files=GridFileClient(api_key="k"))

    team = adapter.get_team_by_id("1")
    assert (team.id, team.name) == ("1", "Cloud9")
    assert [s.id for s in adapter.get_series_for_team("1", 10)] == ["s1", "s2"]
    states = adapter.get_series_states(["s1", "s2"])
    assert list(states) == ["s1"]
    assert states["s1"].winner_id == "1"


def test_adapter_unknown_team() -> None:
    adapter = GridMatchDataAdapter(
        api_key="k", client=_FakeGraphQL({"9": {"allSeries": {"edges": []}}}), files=GridFileClient(api_key="k")
    )
    with pytest.raises(NotFoundError):
        adapter.get_team_by_id("9")


def test_adapter_requires_api_key(monkeypatch) -> None:
    monkeypatch.delenv("GRID_API_KEY", raising=False)
    with pytest.raises(UpstreamError):
        GridMatchDataAdapter()
