import argparse
import json

import pytest

from scouting.cli import run
from scouting.errors import ValidationError


def _args(path, **overrides) -> argparse.Namespace:
    base = dict(input=str(path), matchup=False, output_format="json", output=None, debug=False)
    base.update(overrides)
    return argparse.Namespace(**base)


def test_json_report_to_file(tmp_path, aggregates) -> None:
    src = tmp_path / "aggregates.json"
    src.write_text(json.dumps(aggregates), encoding="utf-8")
    out = tmp_path / "report.json"

    run(_args(src, output=str(out)))

    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["teamName"] == "Cloud9"
    assert report["howToWin"]["inGameStrategy"][0]["strategy"] == "Draft early-game compositions and force tempo"


def test_text_report_to_stdout(tmp_path, aggregates, capsys) -> None:
    src = tmp_path / "aggregates.json"
    src.write_text(json.dumps(aggregates), encoding="utf-8")

    run(_args(src, output_format="text"))

    assert "SCOUTING REPORT: Cloud9" in capsys.readouterr().out


def test_pdf_report(tmp_path, aggregates) -> None:
    src = tmp_path / "aggregates.json"
    src.write_text(json.dumps(aggregates), encoding="utf-8")
    out = tmp_path / "report.pdf"

    run(_args(src, output_format="pdf", output=str(out)))

    assert out.read_bytes().startswith(b"%PDF")


def test_pdf_needs_output_path(tmp_path, aggregates) -> None:
    src = tmp_path / "aggregates.json"
    src.write_text(json.dumps(aggregates), encoding="utf-8")
    with pytest.raises(SystemExit):
        run(_args(src, output_format="pdf"))


def test_matchup_text(tmp_path, capsys) -> None:
    src = tmp_path / "matchup.json"
    src.write_text(
        json.dumps(
            {
                "team1": {"id": "1", "name": "Cloud9"},
                "team2": {"id": "4", "name": "FlyQuest"},
                "matches": [{"seriesId": "s1", "winnerId": "4"}, {"seriesId": "s2", "winnerId": "1"}],
            }
        ),
        encoding="utf-8",
    )

    run(_args(src, matchup=True, output_format="text"))

    out = capsys.readouterr().out
    assert "MATCHUP: Cloud9 vs FlyQuest" in out
    assert "This is an even matchup historically - preparation will be key" in out


def test_invalid_input_raises(tmp_path) -> None:
    src = tmp_path / "bad.json"
    src.write_text(json.dumps({"playerProfiles": []}), encoding="utf-8")
    with pytest.raises(ValidationError):
        run(_args(src))
