"""Scouting report synthesis package."""

__all__ = [
    "analysis",
    "cli",
    "compositions",
    "confidence",
    "config",
    "counter",
    "counter_plan",
    "errors",
    "grid_client",
    "grid_queries",
    "head_to_head",
    "models",
    "normalize",
    "render",
    "report",
    "report_pdf",
    "serialize",
    "strategies",
    "summary",
    "tendencies",
    "thresholds",
]
