"""Configuration management.

This module handles configuration loading, environment overrides,
schema generation and validation.
"""

from __future__ import annotations

from devtoolbar.config.config import (
    ConfigManager,
    get_options,
    init_config,
    reset_config,
)
from devtoolbar.config.config_schema import ConfigSchema, ConfigValidator

__all__ = [
    "ConfigManager",
    "ConfigSchema",
    "ConfigValidator",
    "get_options",
    "init_config",
    "reset_config",
]
