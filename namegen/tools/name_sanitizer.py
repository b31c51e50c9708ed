from __future__ import annotations

import re

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 30

# Meta words the model tends to emit instead of an actual name.
DENYLIST = frozenset(
    {"here", "suggest", "example", "name", "names", "business", "company", "saas", "startup"}
)

_LEADING_NON_LETTERS = re.compile(r"^[^a-zA-Z]*")
_TRAILING_JUNK = re.compile(r"[^a-zA-Z0-9\s-]*\Z")


def clean_line(raw: str) -> str:
    """Normalize one raw response line without judging it."""
    cleaned = _LEADING_NON_LETTERS.sub("", raw)
    cleaned = _TRAILING_JUNK.sub("", cleaned).strip()
    cleaned = cleaned.split("\n")[0]
    cleaned = cleaned.split(".")[0]
    return cleaned.strip()


def rejection_reason(cleaned: str) -> str | None:
    if len(cleaned) > MAX_NAME_LENGTH:
        return "too_long"
    if len(cleaned) < MIN_NAME_LENGTH:
        return "too_short"
    if cleaned.lower() in DENYLIST:
        return "denylisted"
    return None


def sanitize(raw: str) -> str | None:
    """Return the cleaned candidate name, or ``None`` if the line is rejected."""
    cleaned = clean_line(raw)
    if rejection_reason(cleaned) is not None:
        return None
    return cleaned


def split_response(text: str, limit: int = 5) -> list[str]:
    """Split a raw response into its first ``limit`` non-empty lines."""
    lines = [line for line in text.split("\n") if line.strip()]
    return lines[:limit]
