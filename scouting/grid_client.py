from __future__ import annotations

import hashlib
import io
import json
import logging
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import FILE_DOWNLOAD_URL, CacheConfig, cache_config_from_env
from .errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)
EVENT_FILE_IDS = ("events-grid", "events-grid-compressed")


def _session(api_key: str) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "x-api-key": api_key,
            "accept": "application/json",
        }
    )
    return session


@dataclass
class GridGraphQLClient:
    api_key: str
    timeout_s: int = 30
    cache: Optional[CacheConfig] = None

    def __post_init__(self) -> None:
        self.session = _session(self.api_key)
        self.session.headers["content-type"] = "application/json"
        if self.cache is None:
            self.cache = cache_config_from_env()

    def _cache_path(self, url: str, gql: str, variables: Optional[Dict[str, Any]]) -> Path:
        assert self.cache is not None
        key_src = json.dumps({"url": url, "gql": gql, "variables": variables or {}}, sort_keys=True)
        digest = hashlib.sha1(key_src.encode("utf-8")).hexdigest()
        return self.cache.base_dir / f"{digest}.json"

    def query(
        self,
        url: str,
        gql: str,
        variables: Optional[Dict[str, Any]] = None,
        retries: int = 3,
        backoff_s: float = 0.6,
    ) -> Dict[str, Any]:
        payload = {"query": gql, "variables": variables or {}}
        cache = self.cache
        if cache and cache.enabled:
            path = self._cache_path(url, gql, variables)
            if path.exists():
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)

        last_err: Optional[Exception] = None
        for attempt in range(retries):
            try:
                resp = self.session.post(url, json=payload, timeout=self.timeout_s)
                if resp.status_code in RETRY_STATUSES:
                    last_err = UpstreamError(f"HTTP {resp.status_code} from {url}")
                    time.sleep(backoff_s * (attempt + 1))
                    continue

                resp.raise_for_status()
                body = resp.json()
            except (requests.RequestException, ValueError) as exc:
                last_err = exc
                logger.debug("GRID request to %s failed (attempt %d): %s", url, attempt + 1, exc)
                time.sleep(backoff_s * (attempt + 1))
                continue

            if "errors" in body:
                errors = body["errors"]
                is_rate_limit = any(
                    e.get("extensions", {}).get("errorDetail") == "ENHANCE_YOUR_CALM"
                    or e.get("extensions", {}).get("errorType") == "UNAVAILABLE"
                    or "rate limit" in e.get("message", "").lower()
                    for e in errors
                )
                if is_rate_limit and attempt < retries - 1:
                    last_err = UpstreamError("GRID rate limit")
                    time.sleep(backoff_s * (attempt + 2))
                    continue
                raise UpstreamError("GraphQL errors: " + json.dumps(errors, indent=2))
            if "data" not in body:
                raise UpstreamError("Unexpected response shape: " + json.dumps(body, indent=2))

            data = body["data"]
            if cache and cache.enabled:
                path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("w", encoding="utf-8") as f:
                    json.dump(data, f)
            return data

        raise UpstreamError(f"Failed after {retries} attempts. Last error: {last_err}")


def query_across_endpoints(
    client: GridGraphQLClient,
    urls: List[str],
    gql: str,
    variables: Optional[Dict[str, Any]] = None,
) -> Tuple[str, Dict[str, Any]]:
    last_err: Optional[Exception] = None
    for url in urls:
        try:
            return url, client.query(url, gql, variables)
        except UpstreamError as exc:
            logger.debug("Endpoint %s failed: %s", url, exc)
            last_err = exc
    raise UpstreamError(f"All endpoints failed. Last error: {last_err}")


def parse_events_zip(data: bytes) -> List[Dict[str, Any]]:
    """Decode every ``.jsonl`` member of an events archive.

    Blank and malformed lines are skipped.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise UpstreamError(f"events archive is not a zip: {exc}") from exc

    events: List[Dict[str, Any]] = []
    skipped = 0
    with archive:
        for name in archive.namelist():
            if not name.endswith(".jsonl"):
                continue
            with archive.open(name) as fh:
                for raw in io.TextIOWrapper(fh, encoding="utf-8"):
                    line = raw.strip()
                    if not line:
                        continue
                    try:
                        event = json.loads(line)
                    except ValueError:
                        skipped += 1
                        continue
                    if isinstance(event, dict):
                        events.append(event)
    if skipped:
        logger.debug("Skipped %d malformed event lines", skipped)
    return events


@dataclass
class GridFileClient:
    """GRID file-download API: file listings and the per-series events archive."""

    api_key: str
    timeout_s: int = 60
    base_url: str = FILE_DOWNLOAD_URL

    def __post_init__(self) -> None:
        self.session = _session(self.api_key)

    def _get(self, url: str) -> requests.Response:
        try:
            resp = self.session.get(url, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise UpstreamError(f"GET {url} failed: {exc}") from exc
        if resp.status_code != 200:
            raise UpstreamError(f"GET {url} failed with status {resp.status_code}")
        return resp

    def list_files(self, series_id: str) -> List[Dict[str, Any]]:
        try:
            body = self._get(f"{self.base_url}/list/{series_id}").json()
        except ValueError as exc:
            raise UpstreamError(f"file list for series {series_id} is not JSON") from exc
        return [f for f in (body.get("files") or []) if isinstance(f, dict)]

    def download_events(self, series_id: str) -> List[Dict[str, Any]]:
        url = ""
        for f in self.list_files(series_id):
            if f.get("id") in EVENT_FILE_IDS and f.get("status") == "ready":
                url = f.get("fullURL") or ""
                break
        if not url:
            raise NotFoundError(f"events file not available for series {series_id}")
        events = parse_events_zip(self._get(url).content)
        logger.debug("Downloaded %d event lines for series %s", len(events), series_id)
        return events
