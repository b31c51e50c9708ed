"""Pure transitions over the caller-owned ``AppState`` snapshot.

Every function takes a snapshot and returns a new one; nothing here mutates
its input or touches storage.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

from loguru import logger

from namegen.config import settings
from namegen.errors import CandidateNotFoundError, InvalidRatingError
from namegen.models.candidate import Candidate, DomainStatus
from namegen.models.state import AppState
from namegen.tools.domain_prober import DomainProber

ViewMode = Literal["active", "favorites", "archived"]
LengthFilter = Literal["all", "short", "medium", "long"]
AvailabilityFilter = Literal["all", "available", "taken", "unknown"]

SHORT_NAME_MAX = 6
MEDIUM_NAME_MAX = 10


def merge_history(
    history: Sequence[Candidate],
    batch: Sequence[Candidate],
    limit: int | None = None,
) -> tuple[Candidate, ...]:
    """Prepend ``batch`` to ``history`` and keep the first ``limit`` entries."""
    if limit is None:
        limit = settings.history_limit
    return (tuple(batch) + tuple(history))[: max(limit, 0)]


def _favorite_ids(names: Iterable[Candidate]) -> tuple[str, ...]:
    return tuple(name.id for name in names if name.is_favorite)


def _replace(state: AppState, **changes) -> AppState:
    """Apply ``changes`` and recompute the favorites index."""
    updated = state.model_copy(update=changes)
    return updated.model_copy(update={"favorites": _favorite_ids(updated.generated_names)})


def find_name(state: AppState, name_id: str) -> Candidate:
    """Look up an active or archived candidate by id."""
    for name in state.generated_names + state.archived_names:
        if name.id == name_id:
            return name
    raise CandidateNotFoundError("Candidate not found", context={"id": name_id})


def merge_batch(state: AppState, batch: Sequence[Candidate], limit: int | None = None) -> AppState:
    return _replace(state, generated_names=merge_history(state.generated_names, batch, limit))


def toggle_favorite(state: AppState, name_id: str) -> AppState:
    if not any(n.id == name_id for n in state.generated_names):
        raise CandidateNotFoundError("Active candidate not found", context={"id": name_id})
    names = tuple(
        n.model_copy(update={"is_favorite": not n.is_favorite}) if n.id == name_id else n
        for n in state.generated_names
    )
    return _replace(state, generated_names=names)


def rate_name(state: AppState, name_id: str, rating: int, comment: str = "") -> AppState:
    if not 0 <= rating <= 5:
        raise InvalidRatingError("Rating must be between 0 and 5", context={"rating": rating})
    find_name(state, name_id)

    def rate(names: tuple[Candidate, ...]) -> tuple[Candidate, ...]:
        return tuple(
            n.model_copy(update={"rating": rating, "rating_comment": comment}) if n.id == name_id else n
            for n in names
        )

    return _replace(
        state,
        generated_names=rate(state.generated_names),
        archived_names=rate(state.archived_names),
    )


def archive_name(state: AppState, name_id: str) -> AppState:
    target = next((n for n in state.generated_names if n.id == name_id), None)
    if target is None:
        raise CandidateNotFoundError("Active candidate not found", context={"id": name_id})
    return _replace(
        state,
        generated_names=tuple(n for n in state.generated_names if n.id != name_id),
        archived_names=state.archived_names + (target,),
    )


def restore_name(state: AppState, name_id: str) -> AppState:
    target = next((n for n in state.archived_names if n.id == name_id), None)
    if target is None:
        raise CandidateNotFoundError("Archived candidate not found", context={"id": name_id})
    return _replace(
        state,
        archived_names=tuple(n for n in state.archived_names if n.id != name_id),
        generated_names=state.generated_names + (target,),
    )


def delete_name(state: AppState, name_id: str) -> AppState:
    find_name(state, name_id)
    return _replace(
        state,
        generated_names=tuple(n for n in state.generated_names if n.id != name_id),
        archived_names=tuple(n for n in state.archived_names if n.id != name_id),
    )


def clear_history(state: AppState) -> AppState:
    return _replace(state, generated_names=(), archived_names=())


def clear_searches(state: AppState) -> AppState:
    # Same collections as clear_history; dark mode survives both.
    return clear_history(state)


def clear_archived(state: AppState) -> AppState:
    return _replace(state, archived_names=())


def toggle_dark_mode(state: AppState) -> AppState:
    return _replace(state, dark_mode=not state.dark_mode)


def replace_archived(state: AppState, archived: Sequence[Candidate]) -> AppState:
    return _replace(state, archived_names=tuple(archived))


async def recheck_archived(state: AppState, prober: DomainProber) -> AppState:
    """Re-probe every archived name; a failed recheck keeps the old domains."""
    updated: list[Candidate] = []
    for name in state.archived_names:
        try:
            domains = await prober.probe(name.name)
        except Exception as exc:
            logger.error(f"Error rechecking domains for {name.name}: {exc}")
            updated.append(name)
            continue
        updated.append(name.model_copy(update={"domains": domains}))
    return replace_archived(state, updated)


def _matches_length(name: Candidate, length: LengthFilter) -> bool:
    size = len(name.name)
    if length == "short":
        return size <= SHORT_NAME_MAX
    if length == "medium":
        return SHORT_NAME_MAX < size <= MEDIUM_NAME_MAX
    if length == "long":
        return size > MEDIUM_NAME_MAX
    return True


def filter_names(
    state: AppState,
    *,
    view: ViewMode = "active",
    length: LengthFilter = "all",
    availability: AvailabilityFilter = "all",
    min_rating: int = 0,
) -> list[Candidate]:
    if view == "archived":
        names = list(state.archived_names)
    elif view == "favorites":
        names = [n for n in state.generated_names if n.is_favorite]
    else:
        names = list(state.generated_names)

    if length != "all":
        names = [n for n in names if _matches_length(n, length)]
    if availability != "all":
        names = [n for n in names if n.domain_status(".com").value == availability]
    if min_rating > 0:
        names = [n for n in names if n.rating >= min_rating]
    return names


@dataclass
class DomainCounts:
    available: int
    taken: int


def domain_counts(state: AppState) -> DomainCounts:
    """Count active names whose ``.com`` is available or taken."""
    statuses = [n.domain_status(".com") for n in state.generated_names]
    return DomainCounts(
        available=sum(1 for s in statuses if s == DomainStatus.AVAILABLE),
        taken=sum(1 for s in statuses if s == DomainStatus.TAKEN),
    )
