"""Team-building pipeline: sourcing, enrichment, assembly and progress events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

import pendulum
import structlog

from .core import CandidateEnricher, CandidateSourcer, GreedyTeamAssembler
from .errors import SourceQueryError
from .events import EventChannel, EventSink
from .schemas import DEFAULT_TEAM_SIZE, EnrichedCandidate, TeamRequest
from . import __version__

PipelineState = Literal[
    "sourcing",
    "no_candidates",
    "enriching",
    "assembling",
    "done",
    "cancelled",
    "error",
]

SEARCHING_MESSAGE = "Searching for up to {limit} candidates..."
NO_CANDIDATES_MESSAGE = (
    "No candidates were found with these skills. Please try a different search."
)
ENRICHING_MESSAGE = "Found {count} candidates. Fetching detailed profiles..."
ASSEMBLING_MESSAGE = "Analyzing profiles and selecting the optimal team of {size}..."


@dataclass(slots=True)
class PipelineOutcome:
    """What a single run did, for callers that need more than the events."""

    request: TeamRequest
    states: list[PipelineState] = field(default_factory=list)
    team: list[EnrichedCandidate] = field(default_factory=list)
    candidate_count: int = 0
    uncovered: frozenset[str] = frozenset()
    error: str | None = None
    started_at: str = ""
    elapsed_seconds: float = 0.0

    @property
    def state(self) -> PipelineState | None:
        return self.states[-1] if self.states else None


class TeamBuildingPipeline:
    """End-to-end team builder.

    Each call to :meth:`run` owns its working sets; the pipeline itself keeps
    no per-request state and can serve concurrent runs.
    """

    def __init__(
        self,
        *,
        sourcer: CandidateSourcer,
        enricher: CandidateEnricher,
        assembler: GreedyTeamAssembler,
        default_team_size: int = DEFAULT_TEAM_SIZE,
    ) -> None:
        self._sourcer = sourcer
        self._enricher = enricher
        self._assembler = assembler
        self._default_team_size = default_team_size
        self._logger = structlog.get_logger(__name__)

    def run(self, skills: Any, team_size: Any, sink: EventSink) -> PipelineOutcome:
        """Build a team and report progress to ``sink``.

        Raises :class:`~teambuilder.errors.ValidationError` before any event or
        remote call when no usable skill is given. Search failures end the run
        with a single ``error`` event.
        """
        request = TeamRequest.from_input(
            skills, team_size, default_size=self._default_team_size
        )
        channel = EventChannel(sink)
        started = pendulum.now()
        outcome = PipelineOutcome(request=request, started_at=started.to_iso8601_string())
        log = self._logger.bind(skills=list(request.skills), team_size=request.team_size)

        def transition(state: PipelineState) -> None:
            outcome.states.append(state)
            log.debug("pipeline.state", state=state)

        try:
            transition("sourcing")
            channel.status(SEARCHING_MESSAGE.format(limit=self._sourcer.result_limit))
            if channel.consumer_gone:
                transition("cancelled")
                return outcome

            candidates = self._sourcer.source(request.skills)
            outcome.candidate_count = len(candidates)
            for candidate in candidates:
                channel.candidate(candidate)

            if not candidates:
                transition("no_candidates")
                channel.status(NO_CANDIDATES_MESSAGE)
                channel.dream_team([])
                transition("done")
                return outcome

            if channel.consumer_gone:
                transition("cancelled")
                return outcome

            transition("enriching")
            channel.status(ENRICHING_MESSAGE.format(count=len(candidates)))
            if channel.consumer_gone:
                transition("cancelled")
                return outcome

            enriched = self._enricher.enrich(
                candidates,
                is_cancelled=lambda: channel.consumer_gone,
            )

            if channel.consumer_gone:
                transition("cancelled")
                return outcome

            transition("assembling")
            channel.status(ASSEMBLING_MESSAGE.format(size=request.team_size))
            result = self._assembler.assemble(enriched, request.skills, request.team_size)
            outcome.team = result.team
            outcome.uncovered = result.uncovered
            channel.dream_team(result.team)
            transition("done")
            return outcome
        except SourceQueryError as exc:
            transition("error")
            outcome.error = str(exc)
            log.error("pipeline.source_failed", error=str(exc))
            channel.error(str(exc))
            return outcome
        except Exception as exc:
            transition("error")
            outcome.error = str(exc)
            log.exception("pipeline.failed")
            channel.error(str(exc))
            raise
        finally:
            outcome.elapsed_seconds = (pendulum.now() - started).total_seconds()
            log.info(
                "pipeline.finished",
                state=outcome.state,
                candidates=outcome.candidate_count,
                team=[member.username for member in outcome.team],
                elapsed_seconds=outcome.elapsed_seconds,
                app_version=__version__,
            )
