"""Pydantic models for devtoolbar.

Each option group is a model whose defaults come from plain factory
functions, so no mutable default is shared between instances.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

COLLECTOR_NAMESPACE = "devtoolbar.collectors"
TOOLBAR_TEMPLATE_PREFIX = "devtoolbar/toolbar"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ToolbarPosition(str, Enum):
    """Where the toolbar is docked on the page."""

    TOP = "top"
    BOTTOM = "bottom"


def default_profiler_collectors() -> dict[str, str]:
    """Return the collectors the profiler runs by default."""
    return {
        "db": f"{COLLECTOR_NAMESPACE}.DbCollector",
        "exception": f"{COLLECTOR_NAMESPACE}.ExceptionCollector",
        "request": f"{COLLECTOR_NAMESPACE}.RequestCollector",
        "memory": f"{COLLECTOR_NAMESPACE}.MemoryCollector",
        "time": f"{COLLECTOR_NAMESPACE}.TimeCollector",
    }


def default_event_collectors() -> dict[str, str]:
    """Return the collectors attached to individual events by default."""
    return {
        "memory": f"{COLLECTOR_NAMESPACE}.MemoryCollector",
        "time": f"{COLLECTOR_NAMESPACE}.TimeCollector",
    }


def default_event_identifiers() -> dict[str, str]:
    """Return the event identifiers listened to by default ('*' is all)."""
    return {"all": "*"}


def default_toolbar_entries() -> dict[str, str]:
    """Return the toolbar entry templates, keyed by collector name."""
    return {
        name: f"{TOOLBAR_TEMPLATE_PREFIX}/{name}"
        for name in ("request", "time", "memory", "config", "db")
    }


class ProfilerConfig(BaseModel):
    """Profiler configuration."""

    enabled: bool = Field(default=False, description="Enable the profiler")
    strict: bool = Field(
        default=True,
        description="Fail on invalid options and wait for all collectors before flushing",
    )
    flush_early: bool = Field(
        default=False,
        description="Flush the response before the collectors run",
    )
    cache_dir: str = Field(
        default="data/cache",
        description="Directory for the version cache and on-disk report storage",
    )
    matcher: Any = Field(
        default_factory=dict,
        description="Request matching rules deciding which requests are profiled",
    )
    collectors: dict[str, Any] = Field(
        default_factory=default_profiler_collectors,
        description="Collector name to collector identifier",
    )


class EventsConfig(BaseModel):
    """Event-level profiling configuration."""

    enabled: bool = Field(
        default=False,
        description="Collect statistics for each dispatched event",
    )
    collectors: dict[str, Any] = Field(
        default_factory=default_event_collectors,
        description="Collector name to collector identifier",
    )
    identifiers: dict[str, Any] = Field(
        default_factory=default_event_identifiers,
        description="Event identifiers to listen to",
    )


class ToolbarConfig(BaseModel):
    """On-page toolbar configuration."""

    enabled: bool = Field(default=False, description="Render the toolbar")
    auto_hide: bool = Field(
        default=False,
        description="Hide toolbar entries automatically (read-only)",
    )
    position: ToolbarPosition = Field(
        default=ToolbarPosition.BOTTOM,
        description="Toolbar position: top or bottom",
    )
    version_check: bool = Field(
        default=False,
        description="Check for a newer framework release",
    )
    entries: dict[str, Any] = Field(
        default_factory=default_toolbar_entries,
        description="Collector name to toolbar template",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    console: bool = Field(default=True, description="Log to the console")
    structured_logging: bool = Field(
        default=False,
        description="Write JSON lines to the log file",
    )
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s",
        description="Log format string for the log file",
    )


class Config(BaseModel):
    """Complete devtoolbar configuration document."""

    profiler: ProfilerConfig = Field(default_factory=ProfilerConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    toolbar: ToolbarConfig = Field(default_factory=ToolbarConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
