from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

from dotenv import load_dotenv

from .errors import ScoutingError
from .head_to_head import synthesize_head_to_head
from .normalize import load_matchup_input, load_synthesis_input
from .render import render_head_to_head_text, render_text
from .report import build_digestible_report
from .serialize import to_camel_dict

logger = logging.getLogger(__name__)


def _load_env() -> None:
    load_dotenv()


def _read_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scouting report synthesis from analyzer aggregates")
    parser.add_argument("--input", required=True, help="Path to aggregates JSON")
    parser.add_argument(
        "--matchup", action="store_true", help="Input is a matchup file; build a head-to-head report"
    )
    parser.add_argument(
        "--output-format", choices=["json", "text", "pdf"], default="json", help="Output format"
    )
    parser.add_argument("--output", default=None, help="Output path (stdout when omitted)")
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args()


def run(args: argparse.Namespace) -> None:
    data = _read_json(args.input)

    if args.matchup:
        matchup = load_matchup_input(data)
        report = synthesize_head_to_head(
            matchup.team1,
            matchup.team2,
            matchup.matches,
            matchup.title,
            matchup.team1_analysis,
            matchup.team2_analysis,
        )
        if args.output_format == "pdf":
            raise SystemExit("PDF output is only available for team reports.")
        output_text = (
            json.dumps(to_camel_dict(report), indent=2)
            if args.output_format == "json"
            else render_head_to_head_text(report)
        )
    else:
        inputs = load_synthesis_input(data)
        report = build_digestible_report(
            inputs.team, inputs.players, inputs.compositions, inputs.trends, inputs.counter
        )
        if args.output_format == "pdf":
            if not args.output:
                raise SystemExit("--output is required for PDF output.")
            from .report_pdf import build_report_pdf

            build_report_pdf(report, args.output)
            logger.info("Wrote PDF report to %s", args.output)
            return
        output_text = (
            json.dumps(to_camel_dict(report), indent=2)
            if args.output_format == "json"
            else render_text(report)
        )

    if args.output:
        _write_text(args.output, output_text)
        logger.info("Wrote %s report to %s", args.output_format, args.output)
    else:
        print(output_text)


def main() -> None:
    _load_env()
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except ScoutingError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
