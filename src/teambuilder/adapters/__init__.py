"""Remote talent-service adapters."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .torre import (
    GenomeConfig,
    SearchConfig,
    TorreGenomeAdapter,
    TorreSearchAdapter,
)


@runtime_checkable
class SearchAdapter(Protocol):
    """Talent search contract.

    Implementations send the query body and return the raw ``results`` list,
    raising :class:`~teambuilder.errors.SourceQueryError` on any failure.
    """

    def search(self, query: dict[str, Any], *, size: int) -> list[Any]:
        """Run the search and return result records in service order."""


@runtime_checkable
class GenomeAdapter(Protocol):
    """Per-person detail contract.

    Implementations raise :class:`~teambuilder.errors.EnrichmentFetchFailure`
    on any failure.
    """

    def fetch_genome(self, username: str) -> dict[str, Any]:
        """Return the decoded genome payload for ``username``."""


__all__ = [
    "SearchAdapter",
    "GenomeAdapter",
    "SearchConfig",
    "GenomeConfig",
    "TorreSearchAdapter",
    "TorreGenomeAdapter",
]
