from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from namegen.models.candidate import Candidate


class AppState(BaseModel):
    """Immutable snapshot of everything the caller owns.

    Transitions in ``namegen.services.history`` return a new snapshot; the
    ``favorites`` index is always recomputed from ``is_favorite`` flags.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generated_names: tuple[Candidate, ...] = Field(default=(), alias="generatedNames")
    favorites: tuple[str, ...] = ()
    archived_names: tuple[Candidate, ...] = Field(default=(), alias="archivedNames")
    dark_mode: bool = Field(default=False, alias="darkMode")

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
