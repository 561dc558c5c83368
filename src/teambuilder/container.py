"""Dependency injection container for the team builder."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import GenomeConfig, SearchConfig, TorreGenomeAdapter, TorreSearchAdapter
from .core import (
    CandidateEnricher,
    CandidateSourcer,
    EnrichmentConfig,
    GreedyTeamAssembler,
    SourcingConfig,
)
from .pipeline import TeamBuildingPipeline
from .schemas import DEFAULT_TEAM_SIZE


class TeamBuilderContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    search_adapter = providers.Singleton(TorreSearchAdapter)
    genome_adapter = providers.Singleton(TorreGenomeAdapter)

    sourcer = providers.Singleton(CandidateSourcer, adapter=search_adapter)
    enricher = providers.Singleton(CandidateEnricher, adapter=genome_adapter)
    assembler = providers.Singleton(GreedyTeamAssembler)

    pipeline = providers.Factory(
        TeamBuildingPipeline,
        sourcer=sourcer,
        enricher=enricher,
        assembler=assembler,
        default_team_size=config.team.default_size.as_int(),
    )


def create_container(*, settings: dict | None = None) -> TeamBuilderContainer:
    """Instantiate container with optional overrides."""

    container = TeamBuilderContainer()
    if not isinstance(settings, dict):
        settings = {}

    team_settings = settings.get("team", {})
    container.config.from_dict(
        {"team": {"default_size": team_settings.get("default_size", DEFAULT_TEAM_SIZE)}}
    )

    search_settings = dict(settings.get("search", {}))
    if search_settings:
        result_limit = search_settings.pop("result_limit", None)
        if search_settings:
            container.search_adapter.override(
                providers.Singleton(TorreSearchAdapter, config=SearchConfig(**search_settings))
            )
        if result_limit is not None:
            container.sourcer.override(
                providers.Singleton(
                    CandidateSourcer,
                    adapter=container.search_adapter,
                    config=SourcingConfig(result_limit=result_limit),
                )
            )

    if "genome" in settings:
        container.genome_adapter.override(
            providers.Singleton(TorreGenomeAdapter, config=GenomeConfig(**settings["genome"]))
        )

    if "enrichment" in settings:
        container.enricher.override(
            providers.Singleton(
                CandidateEnricher,
                adapter=container.genome_adapter,
                config=EnrichmentConfig(**settings["enrichment"]),
            )
        )

    return container
