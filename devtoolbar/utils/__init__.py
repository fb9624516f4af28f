"""Shared utilities: exceptions and logging setup."""

from __future__ import annotations

from devtoolbar.utils.exceptions import (
    ConfigurationError,
    DevToolbarError,
    InvalidOptionError,
    ValidationError,
)
from devtoolbar.utils.logging_config import get_logger, setup_logging

__all__ = [
    "ConfigurationError",
    "DevToolbarError",
    "InvalidOptionError",
    "ValidationError",
    "get_logger",
    "setup_logging",
]
