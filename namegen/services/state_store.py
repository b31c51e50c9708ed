from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from namegen.config import settings
from namegen.errors import PersistedStateCorruptError
from namegen.models.state import AppState
from namegen.services.logger import log_state_operation


def migrate_record(record: dict[str, Any]) -> dict[str, Any]:
    """Upgrade a stored candidate record from the older single-status format.

    Safe to apply repeatedly: an already migrated record comes back equal.
    """
    migrated = dict(record)
    migrated["rating"] = migrated.get("rating") or 0
    migrated["ratingComment"] = migrated.get("ratingComment") or ""
    legacy_status = migrated.pop("domainStatus", None)
    if migrated.get("domains") is None:
        migrated["domains"] = {".com": legacy_status or "unknown"}
    if "createdAt" not in migrated and "timestamp" in migrated:
        migrated["createdAt"] = migrated.pop("timestamp")
    return migrated


def migrate_records(records: Any) -> list[dict[str, Any]]:
    if records is None:
        return []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise PersistedStateCorruptError("Stored candidate list is malformed")
    return [migrate_record(r) for r in records]


def decode_state(payload: Any) -> AppState:
    """Build an ``AppState`` from a decoded JSON payload.

    Raises ``PersistedStateCorruptError`` when the payload cannot be used.
    """
    if not isinstance(payload, dict):
        raise PersistedStateCorruptError("Stored state must be a JSON object")

    try:
        state = AppState.model_validate(
            {
                "generatedNames": migrate_records(payload.get("generatedNames")),
                "archivedNames": migrate_records(payload.get("archivedNames")),
                "darkMode": bool(payload.get("darkMode") or False),
            }
        )
    except ValidationError as exc:
        raise PersistedStateCorruptError("Stored state failed validation", original_error=exc) from exc

    ids = [n.id for n in state.generated_names + state.archived_names]
    if len(ids) != len(set(ids)):
        raise PersistedStateCorruptError("Stored state contains duplicate candidate ids")

    favorites = tuple(n.id for n in state.generated_names if n.is_favorite)
    return state.model_copy(update={"favorites": favorites})


class StateStore:
    """JSON file holding the caller's ``AppState``."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.state_path)
        self.lock = asyncio.Lock()

    def load(self) -> AppState:
        """Load the stored state; a missing or corrupt file yields an empty state."""
        if not self.path.exists():
            return AppState()

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            state = decode_state(payload)
        except (OSError, ValueError, PersistedStateCorruptError) as exc:
            log_state_operation("load", str(self.path), "discarded", error=str(exc))
            return AppState()

        log_state_operation(
            "load",
            str(self.path),
            "success",
            details=f"{len(state.generated_names)} active, {len(state.archived_names)} archived",
        )
        return state

    def save(self, state: AppState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(state.to_record(), ensure_ascii=True), encoding="utf-8")
        os.replace(tmp_path, self.path)
        log_state_operation("save", str(self.path), "success")
