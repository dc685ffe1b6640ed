"""Tracking of messages as they move through the processing pipeline."""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

DONE_RETAIN_SECS = 300
"""How long finished (done or failed) entries are kept before pruning."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat()
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class StageName(str, Enum):
    """The stages a message passes through."""

    RECEIVED = "received"
    ENRICHING = "enriching"
    RUNNING_LLM = "running_llm"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ProcessingStage:
    """A stage together with the details that belong to it.

    ``turn``, ``max_turns`` and ``last_tools`` belong to ``RUNNING_LLM``,
    ``title`` to ``DONE`` and ``reason`` to ``FAILED``.
    """

    name: StageName
    turn: int = 0
    max_turns: int = 0
    last_tools: list[str] = field(default_factory=list)
    title: str = ""
    reason: str = ""

    @property
    def finished(self) -> bool:
        return self.name in (StageName.DONE, StageName.FAILED)

    def to_dict(self) -> dict[str, Any]:
        """Return the stage as a JSON-ready mapping tagged by ``stage``."""
        data: dict[str, Any] = {"stage": self.name.value}
        if self.name is StageName.RUNNING_LLM:
            data.update(
                turn=self.turn, max_turns=self.max_turns, last_tools=list(self.last_tools)
            )
        elif self.name is StageName.DONE:
            data["title"] = self.title
        elif self.name is StageName.FAILED:
            data["reason"] = self.reason
        return data


@dataclass
class InFlightEntry:
    """One message known to the tracker."""

    id: uuid.UUID
    source: str
    text_preview: str
    started_at: datetime
    updated_at: datetime
    stage: ProcessingStage

    def to_dict(self) -> dict[str, Any]:
        """Return the entry as a JSON-ready mapping with the stage flattened in."""
        return {
            "id": str(self.id),
            "source": self.source,
            "text_preview": self.text_preview,
            "started_at": _rfc3339(self.started_at),
            "updated_at": _rfc3339(self.updated_at),
            **self.stage.to_dict(),
        }


class ProcessingTracker:
    """Thread-safe registry of in-flight and recently finished messages."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[uuid.UUID, InFlightEntry] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def insert(self, id: uuid.UUID, source: str, text_preview: str) -> None:
        """Register a message in the ``RECEIVED`` stage."""
        if not source:
            raise ValueError("source must not be empty")
        now = self._clock()
        entry = InFlightEntry(
            id=id,
            source=source,
            text_preview=text_preview,
            started_at=now,
            updated_at=now,
            stage=ProcessingStage(StageName.RECEIVED),
        )
        with self._lock:
            self._entries[id] = entry

    def advance(self, id: uuid.UUID, stage: ProcessingStage) -> None:
        """Move a known message to ``stage``; unknown ids are ignored."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(id)
            if entry is not None:
                entry.stage = stage
                entry.updated_at = now

    def snapshot(self) -> list[InFlightEntry]:
        """Return copies of all entries, newest first, after pruning old finished ones."""
        cutoff = self._clock() - timedelta(seconds=DONE_RETAIN_SECS)
        with self._lock:
            self._entries = {
                key: entry
                for key, entry in self._entries.items()
                if not entry.stage.finished or entry.updated_at > cutoff
            }
            result = [replace(entry) for entry in self._entries.values()]
        result.sort(key=lambda e: e.started_at, reverse=True)
        return result


class NoopNotifier:
    """A status notifier that accepts every update without reporting it anywhere."""

    async def advance(self, stage: ProcessingStage) -> None:
        """Accept a stage change; anything that is not a stage is rejected."""
        if not isinstance(stage, ProcessingStage):
            raise TypeError(f"expected a ProcessingStage, got {type(stage).__name__}")