"""Error reporting for option validation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ErrorSink(Protocol):
    """Receives human-readable validation failure messages."""

    def add_error(self, message: str) -> None:
        """Record an error message."""


class Report:
    """In-memory error sink used while loading options."""

    def __init__(self) -> None:
        """Initialize an empty report."""
        self._errors: list[str] = []

    def add_error(self, message: str) -> None:
        """Record an error message."""
        self._errors.append(message)

    def get_errors(self) -> list[str]:
        """Return recorded messages in the order they were added."""
        return list(self._errors)

    def has_errors(self) -> bool:
        """Return True if at least one error was recorded."""
        return bool(self._errors)
