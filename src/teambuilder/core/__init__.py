"""Core team-building components."""

from __future__ import annotations

from .assembly import AssemblyResult, AssemblyRound, GreedyTeamAssembler, marginal_score
from .enrichment import CandidateEnricher, EnrichmentConfig
from .proficiency import PROFICIENCY_WEIGHTS, proficiency_weight
from .sourcing import CandidateSourcer, SourcingConfig, build_search_query

__all__ = [
    "PROFICIENCY_WEIGHTS",
    "proficiency_weight",
    "CandidateSourcer",
    "SourcingConfig",
    "build_search_query",
    "CandidateEnricher",
    "EnrichmentConfig",
    "GreedyTeamAssembler",
    "AssemblyResult",
    "AssemblyRound",
    "marginal_score",
]
