from __future__ import annotations

from typing import Any

from namegen.models.candidate import Candidate
from namegen.models.events import EventType, SSEEvent


def generation_started(category: str, **kwargs: Any) -> SSEEvent:
    return SSEEvent(event=EventType.GENERATION_STARTED, data={"category": category, **kwargs})


def candidate_ready(candidate: Candidate, round_name: str) -> SSEEvent:
    return SSEEvent(
        event=EventType.CANDIDATE_READY,
        data={"round": round_name, "candidate": candidate.to_record()},
    )


def fallback_started(primary_count: int) -> SSEEvent:
    return SSEEvent(event=EventType.FALLBACK_STARTED, data={"primary_count": primary_count})


def fallback_completed(count: int) -> SSEEvent:
    return SSEEvent(event=EventType.FALLBACK_COMPLETED, data={"count": count})


def fallback_failed(message: str) -> SSEEvent:
    return SSEEvent(event=EventType.FALLBACK_FAILED, data={"message": message})


def generation_complete(candidates: list[Candidate], runtime_ms: int) -> SSEEvent:
    return SSEEvent(
        event=EventType.GENERATION_COMPLETE,
        data={
            "count": len(candidates),
            "runtime_ms": runtime_ms,
            "candidates": [c.to_record() for c in candidates],
        },
    )


def error(message: str) -> SSEEvent:
    return SSEEvent(event=EventType.ERROR, data={"message": message})
