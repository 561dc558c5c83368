"""Pydantic schema definitions for candidates, requests and configuration."""

from __future__ import annotations

from .candidate import EnrichedCandidate, RawCandidate, StrengthEntry
from .team import (
    DEFAULT_TEAM_SIZE,
    MAX_TEAM_SIZE,
    MIN_TEAM_SIZE,
    TeamRequest,
    coerce_team_size,
    normalize_skills,
    split_skills,
)

__all__ = [
    "RawCandidate",
    "EnrichedCandidate",
    "StrengthEntry",
    "TeamRequest",
    "DEFAULT_TEAM_SIZE",
    "MIN_TEAM_SIZE",
    "MAX_TEAM_SIZE",
    "coerce_team_size",
    "normalize_skills",
    "split_skills",
]
