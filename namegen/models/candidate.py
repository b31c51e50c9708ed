from __future__ import annotations

import random
from datetime import datetime, timezone
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DomainStatus(str, Enum):
    AVAILABLE = "available"
    TAKEN = "taken"
    UNKNOWN = "unknown"


# Probe order is part of the contract.
EXTENSIONS: tuple[str, ...] = (
    ".com",
    ".net",
    ".org",
    ".io",
    ".co",
    ".app",
    ".dev",
    ".tech",
    ".ai",
    ".me",
)

CATEGORIES: dict[str, str] = {
    "tech": "Technology",
    "finance": "Finance",
    "health": "Healthcare",
    "education": "Education",
    "marketing": "Marketing",
    "creative": "Creative",
    "productivity": "Productivity",
    "social": "Social",
}
DEFAULT_CATEGORY_LABEL = "Technology"

NameStyle = Literal["modern", "classic", "invented", "compound"]
NameLength = Literal["short", "medium", "long"]
NameTone = Literal["professional", "creative", "friendly", "tech"]
TargetAudience = Literal["startups", "enterprise", "small-business", "freelancers"]

STYLES: tuple[str, ...] = ("modern", "classic", "invented", "compound")
LENGTHS: tuple[str, ...] = ("short", "medium", "long")
TONES: tuple[str, ...] = ("professional", "creative", "friendly", "tech")
AUDIENCES: tuple[str, ...] = ("startups", "enterprise", "small-business", "freelancers")


def new_candidate_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def category_label(category_id: str) -> str:
    return CATEGORIES.get(category_id, DEFAULT_CATEGORY_LABEL)


class GenerationParams(BaseModel):
    """Caller-supplied knobs for one generation request."""

    category: str = "tech"
    style: NameStyle = "modern"
    length: NameLength = "medium"
    tone: NameTone = "professional"
    audience: TargetAudience = "startups"
    keyword: str = ""

    @property
    def category_label(self) -> str:
        return category_label(self.category)


def random_parameters(rng: random.Random | None = None) -> GenerationParams:
    """Pick every parameter at random, leaving the keyword empty."""
    rng = rng or random.Random()
    return GenerationParams(
        category=rng.choice(list(CATEGORIES)),
        style=rng.choice(STYLES),
        length=rng.choice(LENGTHS),
        tone=rng.choice(TONES),
        audience=rng.choice(AUDIENCES),
        keyword="",
    )


class Candidate(BaseModel):
    """A generated name with its domain map and user annotations.

    Serialized with camelCase keys so stored state stays compatible with
    the browser app's format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_candidate_id)
    name: str = Field(min_length=2, max_length=30)
    category: str
    created_at: datetime = Field(alias="createdAt")
    is_favorite: bool = Field(default=False, alias="isFavorite")
    rating: int = Field(default=0, ge=0, le=5)
    rating_comment: str = Field(default="", alias="ratingComment")
    domains: dict[str, DomainStatus] = Field(default_factory=dict)

    @field_validator("domains")
    @classmethod
    def _known_extensions_only(cls, value: dict[str, DomainStatus]) -> dict[str, DomainStatus]:
        unexpected = [ext for ext in value if ext not in EXTENSIONS]
        if unexpected:
            raise ValueError(f"Unsupported domain extensions: {unexpected}")
        return value

    def domain_status(self, extension: str) -> DomainStatus:
        return self.domains.get(extension, DomainStatus.UNKNOWN)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
