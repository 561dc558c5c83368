"""Per-candidate genome enrichment with bounded concurrent fan-out."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..adapters import GenomeAdapter
from ..errors import EnrichmentFetchFailure
from ..schemas import EnrichedCandidate, RawCandidate


@dataclass
class EnrichmentConfig:
    """Configuration for the genome fan-out."""

    max_workers: int = 16


class CandidateEnricher:
    """Fetch genome details for every candidate, falling back per candidate.

    Every candidate yields exactly one :class:`EnrichedCandidate`, in input
    order. A failed fetch leaves the candidate with no strengths.
    """

    def __init__(self, adapter: GenomeAdapter, *, config: EnrichmentConfig | None = None) -> None:
        self._adapter = adapter
        self._config = config or EnrichmentConfig()
        self._logger = structlog.get_logger(__name__)

    def enrich(
        self,
        candidates: Sequence[RawCandidate],
        *,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> list[EnrichedCandidate]:
        if not candidates:
            return []
        cancelled = is_cancelled or (lambda: False)
        workers = max(1, min(self._config.max_workers, len(candidates)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="genome") as executor:
            futures = [
                executor.submit(self._enrich_one, candidate, cancelled)
                for candidate in candidates
            ]
            enriched = [future.result() for future in futures]

        fallbacks = sum(1 for item in enriched if not item.strengths)
        self._logger.info(
            "enrichment.completed",
            candidates=len(enriched),
            without_strengths=fallbacks,
            workers=workers,
        )
        return enriched

    def _enrich_one(
        self,
        candidate: RawCandidate,
        is_cancelled: Callable[[], bool],
    ) -> EnrichedCandidate:
        if is_cancelled():
            return EnrichedCandidate.without_strengths(candidate)
        try:
            payload = self._adapter.fetch_genome(candidate.username)
            return self._merge(candidate, payload)
        except EnrichmentFetchFailure as exc:
            self._logger.warning(
                "enrichment.fallback",
                username=candidate.username,
                reason=exc.reason,
            )
            return EnrichedCandidate.without_strengths(candidate)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "enrichment.fallback",
                username=candidate.username,
                reason=f"{type(exc).__name__}: {exc}",
            )
            return EnrichedCandidate.without_strengths(candidate)

    @staticmethod
    def _merge(candidate: RawCandidate, payload: object) -> EnrichedCandidate:
        if not isinstance(payload, dict):
            raise EnrichmentFetchFailure(candidate.username, "genome payload is not an object")
        person = payload.get("person")
        strengths = payload.get("strengths")
        if person is not None and not isinstance(person, dict):
            raise EnrichmentFetchFailure(candidate.username, "'person' is not an object")
        if strengths is not None and not isinstance(strengths, list):
            raise EnrichmentFetchFailure(candidate.username, "'strengths' is not a list")
        try:
            return EnrichedCandidate.from_genome(candidate, person, strengths)
        except PydanticValidationError as exc:
            raise EnrichmentFetchFailure(
                candidate.username,
                f"invalid genome payload ({exc.error_count()} errors)",
            ) from exc
