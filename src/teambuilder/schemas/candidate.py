"""Candidate records exchanged with the Torre services."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StrengthEntry(BaseModel):
    """A skill reported on a candidate's genome, with its proficiency label."""

    name: str
    proficiency: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def skill(self) -> str:
        return self.name.lower()


class RawCandidate(BaseModel):
    """Search result record.

    Only ``username`` is required; every other field reported by the search
    service is kept verbatim so it can be handed back to the consumer.
    """

    username: str = Field(min_length=1)
    name: str | None = None
    professional_headline: str | None = Field(default=None, alias="professionalHeadline")
    picture: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the record as the service shaped it."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class EnrichedCandidate(RawCandidate):
    """Search result merged with its genome details."""

    strengths: list[StrengthEntry] = Field(default_factory=list)

    @classmethod
    def from_genome(
        cls,
        raw: RawCandidate,
        person: dict[str, Any] | None,
        strengths: list[Any] | None,
    ) -> "EnrichedCandidate":
        merged = raw.to_payload()
        merged.update(person or {})
        merged["username"] = raw.username
        merged["strengths"] = strengths or []
        return cls.model_validate(merged)

    @classmethod
    def without_strengths(cls, raw: RawCandidate) -> "EnrichedCandidate":
        payload = raw.to_payload()
        payload["strengths"] = []
        return cls.model_validate(payload)

    def skill_names(self) -> list[str]:
        return [entry.skill for entry in self.strengths]
