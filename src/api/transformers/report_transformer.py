"""Transform report dataclasses to the frontend's camelCase JSON."""

from __future__ import annotations

from typing import Any, Dict

from scouting.models import DigestibleReport, HeadToHeadReport
from scouting.serialize import to_camel_dict


def transform_report_to_frontend(report: DigestibleReport) -> Dict[str, Any]:
    """Full report with camelCase keys."""
    return to_camel_dict(report)


def transform_report_summary(report: DigestibleReport) -> Dict[str, Any]:
    """Listing entry for ``GET /api/reports``."""
    return {
        "id": report.id,
        "teamName": report.team_name,
        "title": report.title,
        "generatedAt": report.generated_at,
        "matchesAnalyzed": report.matches_analyzed,
    }


def transform_matchup_to_frontend(report: HeadToHeadReport) -> Dict[str, Any]:
    return to_camel_dict(report)
