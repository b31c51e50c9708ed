"""Tests for persisted state loading, saving and legacy migration."""
from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from namegen.errors import PersistedStateCorruptError
from namegen.models.candidate import Candidate, DomainStatus
from namegen.models.state import AppState
from namegen.services.state_store import StateStore, decode_state, migrate_record

NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


def _record(cid: str, **extra) -> dict:
    record = {
        "id": cid,
        "name": "CloudFlow",
        "category": "Technology",
        "createdAt": "2026-10-18T09:30:00+00:00",
        "isFavorite": False,
        "rating": 2,
        "ratingComment": "ok",
        "domains": {".com": "available"},
    }
    record.update(extra)
    return record


class TestMigration:
    def test_legacy_record_is_upgraded(self):
        migrated = migrate_record({"name": "CloudFlow", "domainStatus": "taken"})

        assert migrated == {
            "name": "CloudFlow",
            "rating": 0,
            "ratingComment": "",
            "domains": {".com": "taken"},
        }

    def test_migration_is_idempotent(self):
        once = migrate_record({"name": "CloudFlow", "domainStatus": "taken"})
        assert migrate_record(once) == once

    def test_missing_legacy_status_becomes_unknown(self):
        assert migrate_record({"name": "CloudFlow"})["domains"] == {".com": "unknown"}

    def test_empty_domain_map_is_kept(self):
        migrated = migrate_record({"name": "CloudFlow", "domains": {}})
        assert migrated["domains"] == {}

    def test_null_domain_map_falls_back_to_legacy_status(self):
        migrated = migrate_record({"name": "CloudFlow", "domains": None, "domainStatus": "available"})
        assert migrated["domains"] == {".com": "available"}

    def test_current_record_is_untouched(self):
        record = _record("a")
        assert migrate_record(record) == record

    def test_legacy_timestamp_is_renamed(self):
        migrated = migrate_record({"name": "CloudFlow", "timestamp": "2026-10-18T09:30:00Z"})
        assert migrated["createdAt"] == "2026-10-18T09:30:00Z"
        assert "timestamp" not in migrated


class TestDecode:
    def test_decode_parses_timestamps_and_rebuilds_favorites(self):
        payload = {
            "generatedNames": [_record("a", isFavorite=True), _record("b")],
            "favorites": ["stale-id"],
            "archivedNames": [_record("c")],
            "darkMode": True,
        }

        state = decode_state(payload)

        assert state.generated_names[0].created_at == NOW
        assert state.favorites == ("a",)
        assert state.archived_names[0].id == "c"
        assert state.dark_mode is True

    def test_decode_upgrades_legacy_candidates(self):
        legacy = {
            "id": "old",
            "name": "DataSync",
            "category": "Finance",
            "timestamp": "2025-01-01T00:00:00Z",
            "isFavorite": False,
            "domainStatus": "taken",
        }

        state = decode_state({"generatedNames": [legacy]})

        candidate = state.generated_names[0]
        assert candidate.rating == 0
        assert candidate.domains == {".com": DomainStatus.TAKEN}

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"generatedNames": "nope"},
            {"generatedNames": [{"name": "NoTimestamp"}]},
            {"generatedNames": [_record("a", rating=9)]},
            {"generatedNames": [_record("a")], "archivedNames": [_record("a")]},
            {"generatedNames": [_record("a", domains={".xyz": "available"})]},
        ],
    )
    def test_decode_rejects_malformed_payloads(self, payload):
        with pytest.raises(PersistedStateCorruptError):
            decode_state(payload)


class TestStateStore:
    def test_missing_file_loads_empty_state(self, tmp_path):
        assert StateStore(tmp_path / "state.json").load() == AppState()

    def test_corrupt_file_is_discarded(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")

        assert StateStore(path).load() == AppState()

    def test_invalid_content_is_discarded(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"generatedNames": [{"name": "x"}]}), encoding="utf-8")

        assert StateStore(path).load() == AppState()

    def test_save_then_load_round_trips(self, tmp_path):
        store = StateStore(tmp_path / "nested" / "state.json")
        candidate = Candidate(
            id="a",
            name="CloudFlow",
            category="Technology",
            created_at=NOW,
            is_favorite=True,
            domains={".com": DomainStatus.AVAILABLE, ".io": DomainStatus.TAKEN},
        )
        state = AppState(generated_names=(candidate,), favorites=("a",), dark_mode=True)

        store.save(state)
        stored = json.loads(store.path.read_text(encoding="utf-8"))

        assert set(stored) == {"generatedNames", "favorites", "archivedNames", "darkMode"}
        assert stored["generatedNames"][0]["createdAt"].startswith("2026-10-18T09:30:00")
        assert store.load().to_record() == state.to_record()
