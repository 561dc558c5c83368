"""Greedy weighted skill-coverage team assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import structlog

from ..schemas import EnrichedCandidate
from .proficiency import proficiency_weight


@dataclass(slots=True)
class AssemblyRound:
    """Trace of one selection round."""

    index: int
    username: str
    score: int
    uncovered_before: frozenset[str]
    uncovered_after: frozenset[str]

    @property
    def covered(self) -> frozenset[str]:
        return self.uncovered_before - self.uncovered_after


@dataclass(slots=True)
class AssemblyResult:
    """Selected team plus the per-round trace."""

    team: list[EnrichedCandidate]
    uncovered: frozenset[str]
    rounds: list[AssemblyRound] = field(default_factory=list)

    @property
    def usernames(self) -> list[str]:
        return [member.username for member in self.team]


def marginal_score(candidate: EnrichedCandidate, uncovered: set[str] | frozenset[str]) -> int:
    """Sum the weights of the candidate's strengths that hit uncovered skills."""
    return sum(
        proficiency_weight(entry.proficiency)
        for entry in candidate.strengths
        if entry.skill in uncovered
    )


class GreedyTeamAssembler:
    """Pick team members one at a time by marginal coverage of the skills.

    Each round selects the first available candidate with the strictly highest
    marginal score, so ties go to the earliest candidate in sourcing order. A
    candidate is picked every round while any remain, even with a score of 0,
    which means the team always fills to ``min(team_size, len(candidates))``.

    Any strength whose name matches an uncovered skill marks that skill as
    covered once its owner is selected, whatever the proficiency label.
    """

    def __init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    def assemble(
        self,
        candidates: Sequence[EnrichedCandidate],
        skills: Iterable[str],
        team_size: int,
    ) -> AssemblyResult:
        available = list(candidates)
        uncovered = {skill.lower() for skill in skills}
        team: list[EnrichedCandidate] = []
        rounds: list[AssemblyRound] = []

        self._logger.debug("assembly.start", uncovered=sorted(uncovered), pool=len(available))

        for index in range(team_size):
            if not available:
                break

            best: EnrichedCandidate | None = None
            best_score = -1
            for candidate in available:
                score = marginal_score(candidate, uncovered)
                if score > best_score:
                    best, best_score = candidate, score

            if best is None:
                break

            before = frozenset(uncovered)
            team.append(best)
            available = [c for c in available if c.username != best.username]
            uncovered.difference_update(best.skill_names())

            trace = AssemblyRound(
                index=index,
                username=best.username,
                score=best_score,
                uncovered_before=before,
                uncovered_after=frozenset(uncovered),
            )
            rounds.append(trace)
            self._logger.debug(
                "assembly.round",
                round=index + 1,
                username=best.username,
                score=best_score,
                covered=sorted(trace.covered),
                remaining=sorted(uncovered),
            )

        self._logger.info(
            "assembly.completed",
            team=[member.username for member in team],
            uncovered=sorted(uncovered),
        )
        return AssemblyResult(team=team, uncovered=frozenset(uncovered), rounds=rounds)
