"""Port (interface) for report storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from scouting.models import DigestibleReport


class ReportRepositoryPort(ABC):
    """Port for storing generated reports."""

    @abstractmethod
    def save(self, report: DigestibleReport) -> None:
        """Store a report, replacing any report with the same id."""
        ...

    @abstractmethod
    def get(self, report_id: str) -> Optional[DigestibleReport]:
        """Return the stored report, or None when the id is unknown."""
        ...

    @abstractmethod
    def list_all(self) -> List[DigestibleReport]:
        """Return every stored report, newest first."""
        ...
