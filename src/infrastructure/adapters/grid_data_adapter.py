"""Adapter serving match data from the GRID APIs."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from scouting.config import CENTRAL_DATA_URLS, SERIES_STATE_URLS
from scouting.errors import NotFoundError, UpstreamError
from scouting.grid_client import GridFileClient, GridGraphQLClient, query_across_endpoints
from scouting.grid_queries import (
    SERIES_FOR_TEAM_QUERY,
    SERIES_STATE_QUERY_BASIC,
    SERIES_STATE_QUERY_CHARACTER,
    TEAM_FROM_SERIES_QUERY,
)
from scouting.normalize import (
    SeriesInfo,
    SeriesState,
    TeamRef,
    parse_series_node,
    parse_series_state,
)

from ...application.ports.match_data import MatchDataPort

logger = logging.getLogger(__name__)


def _edges(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    conn = data.get("allSeries") or {}
    return [e.get("node") or {} for e in (conn.get("edges") or [])]


class GridMatchDataAdapter(MatchDataPort):
    """GRID central-data, series-state and file-download access."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        workers: int = 4,
        client: Optional[GridGraphQLClient] = None,
        files: Optional[GridFileClient] = None,
    ):
        """Initialize with API key.

        Args:
            api_key: GRID API key. If None, will try to get from environment.
            workers: Concurrent series-state fetches
            client: Prebuilt GraphQL client (tests)
            files: Prebuilt file-download client (tests)
        """
        key = api_key or os.environ.get("GRID_API_KEY", "")
        if not key and (client is None or files is None):
            raise UpstreamError("GRID_API_KEY not configured")
        self._client = client or GridGraphQLClient(api_key=key)
        self._files = files or GridFileClient(api_key=key)
        self._workers = workers

    def get_team_by_id(self, team_id: str) -> TeamRef:
        _, data = query_across_endpoints(
            self._client, CENTRAL_DATA_URLS, TEAM_FROM_SERIES_QUERY, {"teamId": team_id}
        )
        nodes = _edges(data)
        if not nodes:
            raise NotFoundError(f"team {team_id} not found")
        for team in parse_series_node(nodes[0]).teams:
            if team.id == team_id:
                return team
        raise NotFoundError(f"team {team_id} not found")

    def get_series_for_team(self, team_id: str, limit: int) -> List[SeriesInfo]:
        _, data = query_across_endpoints(
            self._client,
            CENTRAL_DATA_URLS,
            SERIES_FOR_TEAM_QUERY,
            {"teamId": team_id, "limit": limit},
        )
        series = [parse_series_node(n) for n in _edges(data)]
        logger.info("Found %d series for team %s", len(series), team_id)
        return series

    def _fetch_state(self, series_id: str) -> Optional[SeriesState]:
        try:
            _, data = query_across_endpoints(
                self._client, SERIES_STATE_URLS, SERIES_STATE_QUERY_CHARACTER, {"id": series_id}
            )
        except UpstreamError as exc:
            logger.debug("Character series state failed for %s, falling back: %s", series_id, exc)
            _, data = query_across_endpoints(
                self._client, SERIES_STATE_URLS, SERIES_STATE_QUERY_BASIC, {"id": series_id}
            )
        state = data.get("seriesState")
        if not state:
            return None
        return parse_series_state(series_id, state)

    def _fetch_state_logged(self, series_id: str) -> Optional[SeriesState]:
        try:
            return self._fetch_state(series_id)
        except UpstreamError as exc:
            logger.warning("Skipping series %s: %s", series_id, exc)
            return None

    def get_series_states(self, series_ids: Sequence[str]) -> Dict[str, SeriesState]:
        if not series_ids:
            return {}
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            results = list(pool.map(self._fetch_state_logged, series_ids))
        states = {sid: s for sid, s in zip(series_ids, results) if s is not None}
        logger.info("Fetched %d/%d series states", len(states), len(series_ids))
        return states

    def download_events(self, series_id: str) -> List[Dict[str, Any]]:
        return self._files.download_events(series_id)
