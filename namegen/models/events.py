from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    GENERATION_STARTED = "generation_started"
    CANDIDATE_READY = "candidate_ready"
    FALLBACK_STARTED = "fallback_started"
    FALLBACK_COMPLETED = "fallback_completed"
    FALLBACK_FAILED = "fallback_failed"
    GENERATION_COMPLETE = "generation_complete"
    ERROR = "error"


@dataclass
class SSEEvent:
    event: EventType
    data: dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> dict[str, str]:
        """Shape the event as the ``event``/``data`` mapping ``EventSourceResponse`` sends."""
        return {"event": self.event.value, "data": json.dumps(self.data)}
