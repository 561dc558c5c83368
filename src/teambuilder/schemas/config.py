"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchSection(BaseModel):
    endpoint: str | None = None
    result_limit: int | None = Field(default=None, ge=1)
    timeout: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class GenomeSection(BaseModel):
    endpoint: str | None = None
    timeout: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class EnrichmentSection(BaseModel):
    max_workers: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(extra="forbid")


class TeamSection(BaseModel):
    default_size: int | None = Field(default=None, ge=1, le=10)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    search: SearchSection = Field(default_factory=SearchSection)
    genome: GenomeSection = Field(default_factory=GenomeSection)
    enrichment: EnrichmentSection = Field(default_factory=EnrichmentSection)
    team: TeamSection = Field(default_factory=TeamSection)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("search", "genome", "enrichment", "team"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
