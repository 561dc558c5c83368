"""Progress events and the sinks that deliver them to a single consumer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, Protocol, Sequence, TextIO, runtime_checkable

import structlog

from .errors import ConsumerDisconnected
from .schemas import RawCandidate

EventKind = Literal["status", "candidate", "dreamTeam", "error"]

STATUS: EventKind = "status"
CANDIDATE: EventKind = "candidate"
DREAM_TEAM: EventKind = "dreamTeam"
ERROR: EventKind = "error"

TERMINAL_EVENTS: frozenset[str] = frozenset({DREAM_TEAM, ERROR})


@runtime_checkable
class EventSink(Protocol):
    """Write-only consumer of pipeline events.

    A sink signals that its consumer is gone by raising
    :class:`~teambuilder.errors.ConsumerDisconnected`. Sinks may also expose a
    boolean ``connected`` attribute, which is polled between events.
    """

    def emit(self, kind: str, payload: Any) -> None:
        """Deliver one event."""


@dataclass(slots=True, frozen=True)
class Event:
    kind: str
    payload: Any


def format_sse(kind: str, payload: Any) -> str:
    """Render an event block; status text is sent as-is, the rest as JSON."""
    if kind == STATUS and isinstance(payload, str):
        data = payload
    else:
        data = json.dumps(payload, ensure_ascii=False)
    return f"event: {kind}\ndata: {data}\n\n"


class RecordingSink:
    """Collect events in memory."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self.connected = True

    def emit(self, kind: str, payload: Any) -> None:
        if not self.connected:
            raise ConsumerDisconnected("recording sink disconnected")
        self.events.append(Event(kind=kind, payload=payload))

    def disconnect(self) -> None:
        self.connected = False

    @property
    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]

    def payloads(self, kind: str) -> list[Any]:
        return [event.payload for event in self.events if event.kind == kind]


class StreamSink:
    """Write events to a text stream in server-sent-events format."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    @property
    def connected(self) -> bool:
        return not getattr(self._stream, "closed", False)

    def emit(self, kind: str, payload: Any) -> None:
        block = format_sse(kind, payload)
        try:
            self._stream.write(block)
            self._stream.flush()
        except (BrokenPipeError, ConnectionError, ValueError) as exc:
            # ValueError: write to a closed stream
            raise ConsumerDisconnected(str(exc)) from exc


class EventChannel:
    """Ordered guard around a sink.

    Nothing is forwarded after a terminal event, and once the consumer is gone
    further events are dropped instead of raising.
    """

    def __init__(self, sink: EventSink) -> None:
        self._sink = sink
        self._terminated = False
        self._consumer_gone = False
        self._logger = structlog.get_logger(__name__)

    @property
    def consumer_gone(self) -> bool:
        if not self._consumer_gone and getattr(self._sink, "connected", True) is False:
            self._consumer_gone = True
            self._logger.info("sink.consumer_gone", reason="sink reports disconnected")
        return self._consumer_gone

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def closed(self) -> bool:
        return self._terminated or self.consumer_gone

    def emit(self, kind: str, payload: Any) -> bool:
        """Forward an event; return False when it was suppressed."""
        if self.closed:
            return False
        if kind in TERMINAL_EVENTS:
            self._terminated = True
        try:
            self._sink.emit(kind, payload)
        except (ConsumerDisconnected, BrokenPipeError, ConnectionError) as exc:
            self._consumer_gone = True
            self._logger.info("sink.consumer_gone", kind=kind, reason=str(exc))
            return False
        return True

    def status(self, message: str) -> bool:
        return self.emit(STATUS, message)

    def candidate(self, candidate: RawCandidate) -> bool:
        return self.emit(CANDIDATE, candidate.to_payload())

    def dream_team(self, team: Sequence[RawCandidate]) -> bool:
        return self.emit(DREAM_TEAM, [member.to_payload() for member in team])

    def error(self, message: str) -> bool:
        return self.emit(ERROR, {"message": message})
