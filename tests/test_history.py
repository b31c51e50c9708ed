"""Tests for the history merger and lifecycle transitions."""
from datetime import datetime, timezone

import pytest

from namegen.errors import CandidateNotFoundError, InvalidRatingError
from namegen.models.candidate import Candidate, DomainStatus
from namegen.models.state import AppState
from namegen.services import history
from namegen.tools.domain_prober import DomainProber, no_delay

NOW = datetime(2026, 10, 18, tzinfo=timezone.utc)


def _candidate(cid: str, name: str = "CloudFlow", **kwargs) -> Candidate:
    return Candidate(id=cid, name=name, category="Technology", created_at=NOW, **kwargs)


def _state(*active: Candidate, archived: tuple[Candidate, ...] = ()) -> AppState:
    return AppState(generated_names=active, archived_names=archived)


class TestMergeHistory:
    def test_batch_of_five_into_eighteen_keeps_twenty(self):
        existing = [_candidate(f"old-{i}") for i in range(18)]
        batch = [_candidate(f"new-{i}") for i in range(5)]

        merged = history.merge_history(existing, batch, limit=20)

        assert len(merged) == 20
        assert [c.id for c in merged[:5]] == [f"new-{i}" for i in range(5)]
        assert [c.id for c in merged[5:]] == [f"old-{i}" for i in range(15)]

    def test_default_limit_comes_from_settings(self, monkeypatch):
        monkeypatch.setattr(history.settings, "history_limit", 2)
        merged = history.merge_history([_candidate("a")], [_candidate("b"), _candidate("c")])
        assert [c.id for c in merged] == ["b", "c"]

    def test_merge_does_not_mutate_inputs(self):
        existing = [_candidate("a")]
        history.merge_history(existing, [_candidate("b")], limit=20)
        assert [c.id for c in existing] == ["a"]

    def test_merge_batch_updates_snapshot(self):
        state = _state(_candidate("a"))
        updated = history.merge_batch(state, [_candidate("b")], limit=20)
        assert [c.id for c in updated.generated_names] == ["b", "a"]
        assert [c.id for c in state.generated_names] == ["a"]


class TestFindName:
    def test_finds_active_and_archived(self):
        state = _state(_candidate("a"), archived=(_candidate("b", "DataSync"),))

        assert history.find_name(state, "a").id == "a"
        assert history.find_name(state, "b").name == "DataSync"

    def test_unknown_id_raises(self):
        with pytest.raises(CandidateNotFoundError):
            history.find_name(_state(_candidate("a")), "missing")

    def test_delete_unknown_id_raises(self):
        with pytest.raises(CandidateNotFoundError):
            history.delete_name(_state(_candidate("a")), "missing")


class TestFavoritesAndRatings:
    def test_toggle_favorite_recomputes_index(self):
        state = _state(_candidate("a"), _candidate("b"))

        state = history.toggle_favorite(state, "b")
        assert state.favorites == ("b",)
        assert state.generated_names[1].is_favorite is True

        state = history.toggle_favorite(state, "b")
        assert state.favorites == ()

    def test_toggle_favorite_unknown_id(self):
        with pytest.raises(CandidateNotFoundError):
            history.toggle_favorite(_state(_candidate("a")), "missing")

    def test_rate_name_applies_to_archived_too(self):
        state = _state(_candidate("a"), archived=(_candidate("b"),))

        state = history.rate_name(state, "b", 4, "solid")

        assert state.archived_names[0].rating == 4
        assert state.archived_names[0].rating_comment == "solid"
        assert state.generated_names[0].rating == 0

    @pytest.mark.parametrize("rating", [-1, 6])
    def test_rate_name_rejects_out_of_range(self, rating):
        with pytest.raises(InvalidRatingError):
            history.rate_name(_state(_candidate("a")), "a", rating)


class TestArchiveLifecycle:
    def test_archive_moves_to_end_of_archived(self):
        state = _state(_candidate("a"), _candidate("b"), archived=(_candidate("z"),))

        state = history.archive_name(state, "a")

        assert [c.id for c in state.generated_names] == ["b"]
        assert [c.id for c in state.archived_names] == ["z", "a"]

    def test_archived_favorite_leaves_favorites_index(self):
        state = history.toggle_favorite(_state(_candidate("a")), "a")
        state = history.archive_name(state, "a")
        assert state.favorites == ()

    def test_restore_moves_to_end_of_active(self):
        state = _state(_candidate("a"), archived=(_candidate("z"),))

        state = history.restore_name(state, "z")

        assert [c.id for c in state.generated_names] == ["a", "z"]
        assert state.archived_names == ()

    def test_restore_requires_archived_id(self):
        with pytest.raises(CandidateNotFoundError):
            history.restore_name(_state(_candidate("a")), "a")

    def test_delete_removes_from_either_collection(self):
        state = _state(_candidate("a"), archived=(_candidate("z"),))
        state = history.delete_name(history.delete_name(state, "a"), "z")
        assert state.generated_names == ()
        assert state.archived_names == ()

    def test_clear_history_keeps_dark_mode(self):
        state = history.toggle_dark_mode(_state(_candidate("a", is_favorite=True), archived=(_candidate("z"),)))

        cleared = history.clear_history(state)

        assert cleared.generated_names == ()
        assert cleared.archived_names == ()
        assert cleared.favorites == ()
        assert cleared.dark_mode is True

    def test_clear_archived_only_touches_archive(self):
        state = history.clear_archived(_state(_candidate("a"), archived=(_candidate("z"),)))
        assert [c.id for c in state.generated_names] == ["a"]
        assert state.archived_names == ()

    @pytest.mark.asyncio
    async def test_recheck_archived_replaces_domains(self):
        stale = _candidate("z", name="DataSync", domains={".com": DomainStatus.UNKNOWN})
        state = _state(archived=(stale,))

        state = await history.recheck_archived(state, DomainProber(delay=no_delay))

        assert len(state.archived_names[0].domains) == 10
        assert state.archived_names[0].domains[".com"] == DomainStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_recheck_failure_keeps_previous_domains(self):
        class BrokenProber:
            async def probe(self, name: str):
                raise RuntimeError("probe crashed")

        stale = _candidate("z", domains={".com": DomainStatus.TAKEN})
        state = await history.recheck_archived(_state(archived=(stale,)), BrokenProber())

        assert state.archived_names[0].domains == {".com": DomainStatus.TAKEN}


class TestFilters:
    def _sample_state(self) -> AppState:
        return _state(
            _candidate("s", name="Zapp", rating=5, domains={".com": DomainStatus.TAKEN}),
            _candidate("m", name="DataSync", rating=3, is_favorite=True, domains={".com": DomainStatus.AVAILABLE}),
            _candidate("l", name="CloudFlowMatic", rating=1),
            archived=(_candidate("z", name="Archived"),),
        )

    def test_view_modes(self):
        state = self._sample_state()
        assert [c.id for c in history.filter_names(state)] == ["s", "m", "l"]
        assert [c.id for c in history.filter_names(state, view="favorites")] == ["m"]
        assert [c.id for c in history.filter_names(state, view="archived")] == ["z"]

    def test_length_buckets(self):
        state = self._sample_state()
        assert [c.id for c in history.filter_names(state, length="short")] == ["s"]
        assert [c.id for c in history.filter_names(state, length="medium")] == ["m"]
        assert [c.id for c in history.filter_names(state, length="long")] == ["l"]

    def test_availability_uses_com_and_missing_is_unknown(self):
        state = self._sample_state()
        assert [c.id for c in history.filter_names(state, availability="available")] == ["m"]
        assert [c.id for c in history.filter_names(state, availability="taken")] == ["s"]
        assert [c.id for c in history.filter_names(state, availability="unknown")] == ["l"]

    def test_min_rating(self):
        state = self._sample_state()
        assert [c.id for c in history.filter_names(state, min_rating=3)] == ["s", "m"]

    def test_domain_counts(self):
        counts = history.domain_counts(self._sample_state())
        assert counts.available == 1
        assert counts.taken == 1
