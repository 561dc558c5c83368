from __future__ import annotations

import threading
from typing import Any, Callable

import pytest

from teambuilder.core import (
    CandidateEnricher,
    CandidateSourcer,
    EnrichmentConfig,
    GreedyTeamAssembler,
)
from teambuilder.errors import EnrichmentFetchFailure
from teambuilder.pipeline import TeamBuildingPipeline


class FakeSearchAdapter:
    def __init__(self, results: list[Any] | None = None, error: Exception | None = None):
        self.results = results or []
        self.error = error
        self.calls: list[tuple[dict[str, Any], int]] = []

    def search(self, query: dict[str, Any], *, size: int) -> list[Any]:
        self.calls.append((query, size))
        if self.error is not None:
            raise self.error
        return list(self.results)


class FakeGenomeAdapter:
    """Serve canned genomes; unknown usernames fail like a 404."""

    def __init__(self, genomes: dict[str, Any] | None = None):
        self.genomes = genomes or {}
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch_genome(self, username: str) -> dict[str, Any]:
        with self._lock:
            self.calls.append(username)
        if username not in self.genomes:
            raise EnrichmentFetchFailure(username, "status 404")
        return self.genomes[username]


def person(username: str, **extra: Any) -> dict[str, Any]:
    record = {
        "username": username,
        "name": username.title(),
        "professionalHeadline": f"{username} headline",
        "imageUrl": f"https://img.example/{username}.png",
    }
    record.update(extra)
    return record


def genome(*strengths: tuple[str, str], **person_fields: Any) -> dict[str, Any]:
    return {
        "person": person_fields,
        "strengths": [{"name": name, "proficiency": level} for name, level in strengths],
    }


@pytest.fixture
def make_pipeline() -> Callable[..., tuple[TeamBuildingPipeline, FakeSearchAdapter, FakeGenomeAdapter]]:
    def factory(
        results: list[Any] | None = None,
        genomes: dict[str, Any] | None = None,
        *,
        search_error: Exception | None = None,
        max_workers: int = 4,
    ) -> tuple[TeamBuildingPipeline, FakeSearchAdapter, FakeGenomeAdapter]:
        search = FakeSearchAdapter(results, error=search_error)
        genome_adapter = FakeGenomeAdapter(genomes)
        pipeline = TeamBuildingPipeline(
            sourcer=CandidateSourcer(search),
            enricher=CandidateEnricher(
                genome_adapter, config=EnrichmentConfig(max_workers=max_workers)
            ),
            assembler=GreedyTeamAssembler(),
        )
        return pipeline, search, genome_adapter

    return factory
