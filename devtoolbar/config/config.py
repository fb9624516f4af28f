"""Configuration management for devtoolbar.

Builds an :class:`~devtoolbar.options.OptionsStore` from hierarchical
sources: defaults → config file → environment → explicit overrides.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import toml
from pydantic import ValidationError as PydanticValidationError

from devtoolbar.models import LoggingConfig
from devtoolbar.options import OptionsStore
from devtoolbar.report import Report
from devtoolbar.utils.exceptions import ConfigurationError, InvalidOptionError
from devtoolbar.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "devtoolbar.toml"

# Mapping of environment variables to config paths
ENV_MAPPINGS: dict[str, str] = {
    # Profiler
    "DEVTOOLBAR_PROFILER_ENABLED": "profiler.enabled",
    "DEVTOOLBAR_PROFILER_STRICT": "profiler.strict",
    "DEVTOOLBAR_PROFILER_FLUSH_EARLY": "profiler.flush_early",
    "DEVTOOLBAR_PROFILER_CACHE_DIR": "profiler.cache_dir",
    # Events
    "DEVTOOLBAR_EVENTS_ENABLED": "events.enabled",
    # Toolbar
    "DEVTOOLBAR_TOOLBAR_ENABLED": "toolbar.enabled",
    "DEVTOOLBAR_TOOLBAR_POSITION": "toolbar.position",
    "DEVTOOLBAR_TOOLBAR_VERSION_CHECK": "toolbar.version_check",
    # Logging
    "DEVTOOLBAR_LOG_LEVEL": "logging.level",
    "DEVTOOLBAR_LOG_FILE": "logging.file",
}

# Mapping options whose default entries are removed with a false value
REMOVABLE_ENTRIES: dict[str, tuple[str, ...]] = {
    "profiler": ("collectors",),
    "events": ("collectors", "identifiers"),
    "toolbar": ("entries",),
}

# Global configuration instance
_config_manager: ConfigManager | None = None


def merge_config(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries recursively."""
    result = dict(base)

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], Mapping)
            and isinstance(value, Mapping)
        ):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = value

    return result


def mark_removed_entries(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of exported options with removed defaults set to false.

    A missing default entry would come back when the export is loaded again,
    so each one is written out as the removal marker instead.
    """
    defaults = OptionsStore(None, Report()).to_dict()
    result = copy.deepcopy(dict(data))
    for section, fields in REMOVABLE_ENTRIES.items():
        if section not in result:
            continue
        for field in fields:
            current = result[section].get(field)
            if not isinstance(current, dict):
                continue
            for name in defaults[section][field]:
                current.setdefault(name, False)
    return result


class ConfigManager:
    """Loads, validates and exposes the toolbar options."""

    def __init__(
        self,
        config_file: str | Path | None = None,
        overrides: Mapping[str, Any] | None = None,
        configure_logging: bool = False,
    ):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for
                devtoolbar.toml in the standard locations.
            overrides: Options applied on top of the file and environment.
            configure_logging: Set up log handlers from the ``logging``
                section.

        Raises:
            ConfigurationError: The config file cannot be read or parsed.
            InvalidOptionError: Options were rejected while strict mode is on.

        """
        self.config_file = self._find_config_file(config_file)
        self.raw = self._load_raw(overrides)
        self.logging = self._load_logging_config()
        if configure_logging:
            setup_logging(self.logging)

        self.report = Report()
        self.options = OptionsStore(self.raw, self.report)
        self._check_report()

    def _find_config_file(self, config_file: str | Path | None) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        search_paths = [
            Path.cwd() / CONFIG_FILENAME,
            Path.home() / ".config" / "devtoolbar" / CONFIG_FILENAME,
            Path.home() / f".{CONFIG_FILENAME}",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    def _load_raw(self, overrides: Mapping[str, Any] | None) -> dict[str, Any]:
        """Collect raw option data from file, environment and overrides."""
        config_data: dict[str, Any] = {}

        if self.config_file is not None:
            if not self.config_file.exists():
                msg = f"Config file not found: {self.config_file}"
                raise ConfigurationError(msg)
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data = toml.load(f)
            except (OSError, toml.TomlDecodeError) as e:
                msg = f"Failed to load config file {self.config_file}: {e}"
                raise ConfigurationError(msg) from e
            logger.debug("Loaded configuration from %s", self.config_file)

        config_data = merge_config(config_data, self._get_env_config())
        if overrides:
            config_data = merge_config(config_data, overrides)
        return config_data

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables.

        Values stay strings; the options store coerces them.
        """
        env_config: dict[str, Any] = {}

        def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
            parts = path.split(".")
            cur = d
            for p in parts[:-1]:
                cur = cur.setdefault(p, {})
            cur[parts[-1]] = value

        for env_name, cfg_path in ENV_MAPPINGS.items():
            raw = os.getenv(env_name)
            if raw is None:
                continue
            _set_nested(env_config, cfg_path, raw)

        return env_config

    def _load_logging_config(self) -> LoggingConfig:
        section = self.raw.get("logging") or {}
        if isinstance(section, Mapping) and "level" in section:
            section = {**section, "level": str(section["level"]).upper()}
        try:
            return LoggingConfig.model_validate(section)
        except PydanticValidationError as e:
            msg = f"Invalid logging configuration: {e}"
            raise ConfigurationError(msg) from e

    def _check_report(self) -> None:
        """Raise in strict mode if any option was rejected, warn otherwise."""
        if not self.report.has_errors():
            return

        errors = self.report.get_errors()
        if self.options.is_strict():
            raise InvalidOptionError(errors)

        for error in errors:
            logger.warning("Ignored invalid option: %s", error)

    def export_data(self) -> dict[str, Any]:
        """Return the current options in a form that loads back unchanged."""
        return mark_removed_entries(self.options.to_dict())

    def export(self, fmt: str = "toml") -> str:
        """Export current options as a string in the given format.

        Args:
            fmt: one of "toml" or "json"

        """
        data = self.export_data()
        if fmt == "json":
            return json.dumps(data, indent=2)
        if fmt == "toml":
            return toml.dumps(data)
        msg = f"Unsupported format: {fmt}"
        raise ValueError(msg)

    def validate_detailed(self) -> tuple[bool, list[str]]:
        """Validate the loaded options.

        Returns:
            Tuple of (is_valid, list_of_errors)

        """
        errors = self.report.get_errors()
        return not errors, errors


def get_options() -> OptionsStore:
    """Get the global options store."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.options


def init_config(
    config_file: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    configure_logging: bool = True,
) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(
        config_file, overrides=overrides, configure_logging=configure_logging
    )
    return _config_manager


def reset_config() -> None:
    """Drop the global configuration manager."""
    global _config_manager
    _config_manager = None
