"""Validated team-building request."""

from __future__ import annotations

import math
import re
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError

DEFAULT_TEAM_SIZE = 3
MIN_TEAM_SIZE = 1
MAX_TEAM_SIZE = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def normalize_skills(skills: Iterable[str]) -> tuple[str, ...]:
    """Strip, lower-case and deduplicate skill names, keeping first-seen order."""
    seen: dict[str, None] = {}
    for skill in skills:
        if not isinstance(skill, str):
            continue
        cleaned = skill.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


def split_skills(text: str | None) -> list[str]:
    """Split a comma-separated skills parameter."""
    if not text:
        return []
    return text.split(",")


def coerce_team_size(
    value: Any,
    *,
    default: int = DEFAULT_TEAM_SIZE,
    minimum: int = MIN_TEAM_SIZE,
    maximum: int = MAX_TEAM_SIZE,
) -> int:
    """Turn a loosely-typed size into a usable team size.

    Strings are read by their leading integer, so ``"5abc"`` and ``"5.5"`` are
    both 5. Unparseable values and zero fall back to ``default``; the result
    is then clamped into ``[minimum, maximum]``.
    """
    size: int | None
    if isinstance(value, bool):
        size = None
    elif isinstance(value, int):
        size = value
    elif isinstance(value, float):
        size = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        size = int(match.group(1)) if match else None
    else:
        size = None
    if not size:
        size = default
    return max(minimum, min(size, maximum))


class TeamRequest(BaseModel):
    """Skills to cover and the number of people to pick."""

    skills: tuple[str, ...] = Field(min_length=1)
    team_size: int = DEFAULT_TEAM_SIZE

    model_config = ConfigDict(frozen=True)

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = split_skills(value)
        if value is None:
            return ()
        return normalize_skills(value)

    @field_validator("team_size", mode="before")
    @classmethod
    def _coerce_size(cls, value: Any, info: ValidationInfo) -> int:
        default = (info.context or {}).get("default_size", DEFAULT_TEAM_SIZE)
        return coerce_team_size(value, default=default)

    @classmethod
    def from_input(
        cls,
        skills: Any,
        team_size: Any = None,
        *,
        default_size: int = DEFAULT_TEAM_SIZE,
    ) -> "TeamRequest":
        """Build a request, raising :class:`ValidationError` on unusable input."""
        try:
            return cls.model_validate(
                {"skills": skills, "team_size": team_size},
                context={"default_size": default_size},
            )
        except PydanticValidationError as exc:
            raise ValidationError("Skills parameter is required.") from exc
