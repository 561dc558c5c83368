"""Error taxonomy for the team-building pipeline."""

from __future__ import annotations


class TeamBuilderError(Exception):
    """Base class for team builder failures."""


class ValidationError(TeamBuilderError, ValueError):
    """Raised when a team request is unusable, before any remote call."""


class SourceQueryError(TeamBuilderError):
    """Raised when the talent search cannot be completed."""

    def __init__(self, message: str, *, status: int | None = None):
        super().__init__(message)
        self.status = status


class EnrichmentFetchFailure(TeamBuilderError):
    """Raised when a single candidate's detail fetch fails.

    Always recovered by the enricher; never reaches the consumer.
    """

    def __init__(self, username: str, reason: str):
        super().__init__(f"Genome fetch for {username!r} failed: {reason}")
        self.username = username
        self.reason = reason


class ConsumerDisconnected(TeamBuilderError):
    """Raised by an event sink whose consumer has gone away."""


__all__ = [
    "TeamBuilderError",
    "ValidationError",
    "SourceQueryError",
    "EnrichmentFetchFailure",
    "ConsumerDisconnected",
]
