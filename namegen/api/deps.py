from __future__ import annotations

from namegen.agents.orchestrator import NameGenerationPipeline
from namegen.models.candidate import CATEGORIES
from namegen.services.state_store import StateStore
from namegen.tools.domain_prober import DomainProber

_store: StateStore | None = None


class GenerationGuard:
    """Tracks whether a generation is in flight so overlapping runs can be refused."""

    def __init__(self):
        self.busy = False

    def acquire(self) -> bool:
        if self.busy:
            return False
        self.busy = True
        return True

    def release(self) -> None:
        self.busy = False


generation_guard = GenerationGuard()


def get_store() -> StateStore:
    global _store
    if _store is None:
        _store = StateStore()
    return _store


def get_pipeline() -> NameGenerationPipeline:
    return NameGenerationPipeline()


def get_prober() -> DomainProber:
    return DomainProber()


def get_guard() -> GenerationGuard:
    return generation_guard


def get_categories() -> list[dict[str, str]]:
    return [{"id": cid, "name": label} for cid, label in CATEGORIES.items()]
