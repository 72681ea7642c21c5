"""Report storage adapters."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from scouting.models import DigestibleReport
from scouting.serialize import report_from_dict

from ...application.ports.report_repository import ReportRepositoryPort

logger = logging.getLogger(__name__)


class InMemoryReportRepository(ReportRepositoryPort):
    """Thread-safe in-process store keyed by report id."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._reports: Dict[str, DigestibleReport] = {}

    def save(self, report: DigestibleReport) -> None:
        with self._lock:
            self._reports[report.id] = report

    def get(self, report_id: str) -> Optional[DigestibleReport]:
        with self._lock:
            return self._reports.get(report_id)

    def list_all(self) -> List[DigestibleReport]:
        with self._lock:
            reports = list(self._reports.values())
        return sorted(reports, key=lambda r: r.generated_at, reverse=True)


class JsonFileReportRepository(InMemoryReportRepository):
    """In-memory store mirrored to a JSON file.

    The file is read once on construction and rewritten on every save.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as f:
            items = json.load(f)
        for item in items:
            report = report_from_dict(item)
            self._reports[report.id] = report
        logger.info("Loaded %d reports from %s", len(self._reports), self._path)

    def save(self, report: DigestibleReport) -> None:
        with self._lock:
            super().save(report)
            items = [asdict(r) for r in self._reports.values()]
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump(items, f, indent=2)
        logger.debug("Saved %d reports to %s", len(items), self._path)
