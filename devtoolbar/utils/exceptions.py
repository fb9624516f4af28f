"""Exception hierarchy for devtoolbar.

Option validation itself never raises; problems are reported through an
error sink. These exceptions are raised by the loading layer around it.
"""

from __future__ import annotations

from typing import Any


class DevToolbarError(Exception):
    """Base exception for all devtoolbar errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize devtoolbar error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(DevToolbarError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration loading errors."""


class InvalidOptionError(ConfigurationError):
    """Invalid options reported while running in strict mode."""

    def __init__(self, errors: list[str]):
        """Initialize from the collected option error messages."""
        super().__init__(" ".join(errors), {"errors": list(errors)})
        self.errors = list(errors)

    def __str__(self) -> str:
        """Return the joined error messages."""
        return self.message
