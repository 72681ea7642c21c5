import pytest
from fastapi.testclient import TestClient

from scouting.config import SynthesisConfig
from scouting.errors import UpstreamError
from src.api.dependencies import (
    get_analyzer,
    get_config,
    get_match_data,
    get_match_data_factory,
    get_repository,
)
from src.infrastructure.adapters.report_repository import InMemoryReportRepository
from src.infrastructure.adapters.series_state_analyzer import SeriesStateAnalyzer
from src.main import app


@pytest.fixture
def client(match_data):
    repo = InMemoryReportRepository()
    app.dependency_overrides[get_match_data] = lambda: match_data
    app.dependency_overrides[get_match_data_factory] = lambda: lambda: match_data
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_analyzer] = SeriesStateAnalyzer
    app.dependency_overrides[get_config] = lambda: SynthesisConfig(reports_backup_path=None)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client, monkeypatch) -> None:
    monkeypatch.setenv("GRID_API_KEY", "k")
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["api_key_configured"] is True


def test_synthesize_then_fetch(client, aggregates) -> None:
    resp = client.post("/api/reports/synthesize", json=aggregates)
    assert resp.status_code == 200
    report = resp.json()
    assert report["teamName"] == "Cloud9"
    assert report["executiveSummary"].endswith("Current form: hot.")
    assert report["howToWin"]["draftStrategy"]["priorityBans"][0]["text"] == (
        "Ban Lee Sin from Blaber - 80% win rate"
    )

    listing = client.get("/api/reports").json()
    assert [r["id"] for r in listing] == [report["id"]]
    assert listing[0]["matchesAnalyzed"] == 10

    fetched = client.get(f"/api/reports/{report['id']}").json()
    assert fetched == report

    text = client.get(f"/api/reports/{report['id']}/text")
    assert text.status_code == 200
    assert text.headers["content-type"].startswith("text/plain")
    assert "SCOUTING REPORT: Cloud9" in text.text


def test_synthesize_requires_team_analysis(client) -> None:
    resp = client.post("/api/reports/synthesize", json={"playerProfiles": []})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_REQUEST"


def test_unknown_report(client) -> None:
    resp = client.get("/api/reports/nope")
    assert resp.status_code == 404
    assert resp.json() == {
        "error": {"code": "NOT_FOUND", "message": "report nope not found", "details": {"reportId": "nope"}}
    }
    assert client.get("/api/reports/nope/text").status_code == 404


def test_generate_report(client) -> None:
    resp = client.post("/api/reports/generate", json={"teamId": "1", "matchCount": 5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["teamName"] == "Cloud9"
    assert body["matchesAnalyzed"] == 3
    assert client.get(f"/api/reports/{body['id']}").status_code == 200


def test_generate_report_missing_team_id(client) -> None:
    resp = client.post("/api/reports/generate", json={})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_REQUEST"


def test_generate_report_rejects_bad_match_count(client) -> None:
    resp = client.post("/api/reports/generate", json={"teamId": "1", "matchCount": 0})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_REQUEST"


def test_generate_report_error_codes(client) -> None:
    no_data = client.post("/api/reports/generate", json={"teamId": "7"})
    assert no_data.status_code == 404
    assert no_data.json()["error"]["code"] == "NO_DATA"

    unknown = client.post("/api/reports/generate", json={"teamId": "99"})
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "NOT_FOUND"


def test_generate_report_upstream_failure(client, match_data) -> None:
    match_data.fail_states = True
    resp = client.post("/api/reports/generate", json={"teamId": "1"})
    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "UPSTREAM_ERROR"


def test_matchup(client) -> None:
    resp = client.get("/api/matchup", params={"team1": "1", "team2": "4"})
    assert resp.status_code == 200
    body = resp.json()
    assert (body["team1Wins"], body["team2Wins"], body["totalMatches"]) == (2, 1, 3)
    assert body["recommendation"].startswith("Cloud9 has historically dominated")


def test_matchup_requires_both_teams(client) -> None:
    resp = client.get("/api/matchup", params={"team1": "1"})
    assert resp.status_code == 400


def test_websocket_progress_and_report(client) -> None:
    with client.websocket_connect("/ws/report") as ws:
        ws.send_json({"action": "generate", "teamId": "1"})
        messages = []
        while True:
            msg = ws.receive_json()
            messages.append(msg)
            if msg["status"] in ("completed", "error"):
                break

    assert messages[0]["status"] == "connecting"
    assert [m["progress"] for m in messages[1:-1]] == [10, 25, 40, 60, 75, 85, 95]
    assert messages[-1]["status"] == "completed"
    assert messages[-1]["report"]["teamName"] == "Cloud9"


def test_websocket_reports_errors(client) -> None:
    with client.websocket_connect("/ws/report") as ws:
        ws.send_json({"action": "delete"})
        assert ws.receive_json() == {"status": "error", "progress": 0, "message": "Unknown action: delete"}

    with client.websocket_connect("/ws/report") as ws:
        ws.send_json({"action": "generate", "teamId": "7"})
        messages = [ws.receive_json(), ws.receive_json(), ws.receive_json()]
        last = ws.receive_json()
        while last["status"] != "error":
            last = ws.receive_json()
    assert messages[0]["status"] == "connecting"
    assert last["message"].startswith("Error: no matches found")


def test_websocket_reports_adapter_setup_failure(client) -> None:
    def unconfigured():
        raise UpstreamError("GRID_API_KEY not configured")

    app.dependency_overrides[get_match_data_factory] = lambda: unconfigured
    with client.websocket_connect("/ws/report") as ws:
        ws.send_json({"action": "generate", "teamId": "1"})
        assert ws.receive_json()["status"] == "connecting"
        assert ws.receive_json() == {"status": "error", "progress": 0, "message": "GRID_API_KEY not configured"}
