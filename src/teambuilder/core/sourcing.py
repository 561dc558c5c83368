"""Candidate sourcing through the talent search service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..adapters import SearchAdapter
from ..errors import SourceQueryError
from ..schemas import RawCandidate

MINIMUM_PROFICIENCY = "proficient"

ELIGIBILITY_FILTERS: tuple[dict[str, Any], ...] = (
    {"opento": {"term": "full-time-employment"}},
    {"language": {"term": "English", "fluency": "fully-fluent"}},
)


@dataclass
class SourcingConfig:
    """Configuration for the search query."""

    result_limit: int = 100


def build_search_query(skills: Sequence[str]) -> dict[str, Any]:
    """Build the AND query: one clause per skill plus the eligibility filters."""
    clauses: list[dict[str, Any]] = [
        {"skill/role": {"text": skill.lower(), "proficiency": MINIMUM_PROFICIENCY}}
        for skill in skills
    ]
    clauses.extend(dict(item) for item in ELIGIBILITY_FILTERS)
    return {"and": clauses}


class CandidateSourcer:
    """Run one search and turn its results into :class:`RawCandidate` records."""

    def __init__(self, adapter: SearchAdapter, *, config: SourcingConfig | None = None) -> None:
        self._adapter = adapter
        self._config = config or SourcingConfig()
        self._logger = structlog.get_logger(__name__)

    @property
    def result_limit(self) -> int:
        return self._config.result_limit

    def source(self, skills: Sequence[str]) -> list[RawCandidate]:
        query = build_search_query(skills)
        self._logger.info(
            "sourcing.request",
            skills=list(skills),
            result_limit=self._config.result_limit,
        )
        results = self._adapter.search(query, size=self._config.result_limit)
        if not isinstance(results, list):
            raise SourceQueryError("Search response 'results' must be a list")

        candidates: list[RawCandidate] = []
        seen: set[str] = set()
        skipped = 0
        for position, record in enumerate(results):
            try:
                candidate = RawCandidate.model_validate(record)
            except PydanticValidationError as exc:
                skipped += 1
                self._logger.warning(
                    "sourcing.record_skipped",
                    position=position,
                    errors=exc.errors(include_url=False),
                )
                continue
            if candidate.username in seen:
                skipped += 1
                self._logger.warning(
                    "sourcing.duplicate_skipped",
                    position=position,
                    username=candidate.username,
                )
                continue
            seen.add(candidate.username)
            candidates.append(candidate)
        self._logger.info(
            "sourcing.completed",
            returned=len(results),
            accepted=len(candidates),
            skipped=skipped,
        )
        return candidates
