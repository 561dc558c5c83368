"""HTTP adapters for the Torre search and genome services."""

from __future__ import annotations

import json
from http import client as http_client
from dataclasses import dataclass
from typing import Any
from urllib import error, parse, request

import structlog

from ..errors import EnrichmentFetchFailure, SourceQueryError

DEFAULT_SEARCH_ENDPOINT = "https://search.torre.co/people/_search"
DEFAULT_GENOME_ENDPOINT = "https://torre.ai/api/genome/bios"


@dataclass
class SearchConfig:
    """Configuration for the people search endpoint."""

    endpoint: str = DEFAULT_SEARCH_ENDPOINT
    timeout: float = 30.0


@dataclass
class GenomeConfig:
    """Configuration for the genome (bio) endpoint."""

    endpoint: str = DEFAULT_GENOME_ENDPOINT
    timeout: float = 10.0


class TorreSearchAdapter:
    """POST a boolean people query and return its results."""

    def __init__(self, *, config: SearchConfig | None = None) -> None:
        self._config = config or SearchConfig()
        self._logger = structlog.get_logger(__name__)

    def search(self, query: dict[str, Any], *, size: int) -> list[Any]:
        url = f"{self._config.endpoint}?{parse.urlencode({'size': size, 'aggregate': 'false'})}"
        data = json.dumps(query).encode("utf-8")
        req = request.Request(
            url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        self._logger.debug("torre.search", url=url, query=query)
        try:
            with request.urlopen(req, timeout=self._config.timeout) as resp:
                body = resp.read()
        except error.HTTPError as exc:
            detail = _read_error_body(exc)
            self._logger.error("torre.search_failed", status=exc.code, body=detail)
            raise SourceQueryError(
                f"Torre API request failed with status {exc.code}: {detail}",
                status=exc.code,
            ) from exc
        except (error.URLError, OSError, http_client.HTTPException) as exc:
            self._logger.error("torre.search_unreachable", error=str(exc))
            raise SourceQueryError(f"Torre API request failed: {exc}") from exc

        try:
            payload = json.loads(body) if body else {}
        except ValueError as exc:
            raise SourceQueryError(f"Torre API returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise SourceQueryError("Torre API returned an unexpected payload")
        results = payload.get("results")
        return [] if results is None else results


class TorreGenomeAdapter:
    """GET the genome of a single person."""

    def __init__(self, *, config: GenomeConfig | None = None) -> None:
        self._config = config or GenomeConfig()

    def fetch_genome(self, username: str) -> dict[str, Any]:
        url = f"{self._config.endpoint.rstrip('/')}/{parse.quote(username, safe='')}"
        req = request.Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with request.urlopen(req, timeout=self._config.timeout) as resp:
                body = resp.read()
        except error.HTTPError as exc:
            raise EnrichmentFetchFailure(username, f"status {exc.code}") from exc
        except (error.URLError, OSError, http_client.HTTPException) as exc:
            raise EnrichmentFetchFailure(username, f"{type(exc).__name__}: {exc}") from exc

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise EnrichmentFetchFailure(username, "invalid JSON") from exc
        if not isinstance(payload, dict):
            raise EnrichmentFetchFailure(username, "genome payload is not an object")
        return payload


def _read_error_body(exc: error.HTTPError) -> str:
    try:
        return exc.read().decode("utf-8", errors="replace")
    except (OSError, http_client.HTTPException):
        return ""
