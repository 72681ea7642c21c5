from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import ValidationError


CENTRAL_DATA_URLS: List[str] = [
    "https://api.grid.gg/central-data/graphql",
    "https://api-op.grid.gg/central-data/graphql",
]

SERIES_STATE_URLS: List[str] = [
    "https://api.grid.gg/live-data-feed/series-state/graphql",
    "https://api-op.grid.gg/live-data-feed/series-state/graphql",
]

FILE_DOWNLOAD_URL = "https://api.grid.gg/file-download"

LOL = "lol"
VALORANT = "valorant"

# GRID title ids
TITLE_IDS = {"3": LOL, "6": VALORANT}


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool
    base_dir: Path


def cache_config_from_env() -> CacheConfig:
    enabled = os.environ.get("GRID_CACHE", "0").lower() in {"1", "true", "yes"}
    base_dir = Path(os.environ.get("GRID_CACHE_DIR", ".cache/grid"))
    return CacheConfig(enabled=enabled, base_dir=base_dir)


@dataclass(frozen=True)
class SynthesisConfig:
    enrichment_series_cap: int = 5
    enrichment_workers: int = 4
    default_match_count: int = 10
    matchup_match_count: int = 20
    reports_backup_path: Optional[Path] = Path("data/reports_backup.json")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def synthesis_config_from_env() -> SynthesisConfig:
    backup = os.environ.get("SCOUTING_REPORTS_BACKUP", "data/reports_backup.json")
    return SynthesisConfig(
        enrichment_series_cap=_env_int("SCOUTING_ENRICHMENT_CAP", 5),
        enrichment_workers=_env_int("SCOUTING_ENRICHMENT_WORKERS", 4),
        default_match_count=_env_int("SCOUTING_MATCH_COUNT", 10),
        matchup_match_count=_env_int("SCOUTING_MATCHUP_MATCH_COUNT", 20),
        reports_backup_path=Path(backup) if backup else None,
    )


def resolve_title(title_id: Optional[str]) -> str:
    """Map a GRID title id or name to ``lol``/``valorant``; LoL is the default."""
    if not title_id:
        return LOL
    key = str(title_id).strip().lower()
    if key in TITLE_IDS:
        return TITLE_IDS[key]
    if key in (LOL, VALORANT):
        return key
    raise ValidationError(f"unknown title: {title_id}")
