"""Port (interface) for match data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from scouting.normalize import SeriesInfo, SeriesState, TeamRef


class MatchDataPort(ABC):
    """Port for fetching teams, series and per-series state from a data provider."""

    @abstractmethod
    def get_team_by_id(self, team_id: str) -> TeamRef:
        """Look up a team.

        Args:
            team_id: Provider team identifier

        Returns:
            Team reference with id and name

        Raises:
            NotFoundError: The provider has no series for this team
        """
        ...

    @abstractmethod
    def get_series_for_team(self, team_id: str, limit: int) -> List[SeriesInfo]:
        """List a team's most recent series, newest first.

        Args:
            team_id: Provider team identifier
            limit: Maximum number of series

        Returns:
            Series listing (may be empty)
        """
        ...

    @abstractmethod
    def get_series_states(self, series_ids: Sequence[str]) -> Dict[str, SeriesState]:
        """Fetch end-of-series state for several series.

        Series whose state cannot be fetched are logged and left out.

        Args:
            series_ids: Series identifiers

        Returns:
            Mapping of series id to parsed state
        """
        ...

    @abstractmethod
    def download_events(self, series_id: str) -> List[Dict[str, Any]]:
        """Download the raw event stream for one series.

        Args:
            series_id: Series identifier

        Returns:
            Decoded event lines
        """
        ...


class ProgressCallbackPort(ABC):
    """Port for reporting progress during long operations."""

    @abstractmethod
    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Report progress update.

        Args:
            progress: Progress percentage (0-100)
            message: Human-readable status message
            status: Status type (connecting, processing, completed, error)
        """
        ...
