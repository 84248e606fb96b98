from __future__ import annotations


class IChingError(Exception):
    """Base class for errors raised by the divination engine."""


class SourceUnavailable(IChingError):
    """A remote randomness draw failed, timed out or returned malformed data.

    Never handled by substituting local pseudorandomness: the caller sees it.
    """


class OutOfRange(IChingError, ValueError):
    """A hexagram number or identifier outside the 64-entry catalog."""

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"Invalid hexagram number: {value} (expected 1-64)")


class CatalogInvariantViolation(IChingError):
    """The static hexagram table is not a bijection over the 64 patterns."""
