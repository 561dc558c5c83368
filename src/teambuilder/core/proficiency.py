"""Proficiency scale used to weigh genome strengths."""

from __future__ import annotations

PROFICIENCY_WEIGHTS: dict[str, int] = {
    "master": 5,
    "expert": 4,
    "proficient": 3,
    "novice": 2,
    "no-experience-interested": 1,
}

UNKNOWN_PROFICIENCY_WEIGHT = 0


def proficiency_weight(label: str | None) -> int:
    """Return the weight for a proficiency label; unknown labels weigh 0."""
    if label is None:
        return UNKNOWN_PROFICIENCY_WEIGHT
    return PROFICIENCY_WEIGHTS.get(label, UNKNOWN_PROFICIENCY_WEIGHT)
