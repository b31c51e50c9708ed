"""Exceptions raised by the name generation pipeline and state layer."""
from __future__ import annotations

from typing import Any


class NameGenError(Exception):
    """Base exception carrying optional context and the wrapped cause."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        parts = [self.message]
        if self.context:
            parts.append("(" + ", ".join(f"{key}={value}" for key, value in self.context.items()) + ")")
        if self.original_error is not None:
            cause = self.original_error
            parts.append(f"[caused by: {type(cause).__name__}: {cause}]")
        return " ".join(parts)


class ServiceUnavailableError(NameGenError):
    """The text-generation service could not produce a usable response.

    Covers network failures, non-2xx statuses, payloads that are not a JSON
    object and a missing API key.
    """


class PersistedStateCorruptError(NameGenError):
    """Stored application state could not be decoded."""


class CandidateNotFoundError(NameGenError):
    """No active or archived candidate has the requested id."""


class InvalidRatingError(NameGenError):
    """Rating outside the 0-5 range."""


class EmptyExportError(NameGenError):
    """Export requested for an empty list of candidates."""
