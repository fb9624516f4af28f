"""Options store for the profiler, event logging and toolbar.

The store starts from the defaults in :mod:`devtoolbar.models` and merges
overrides into them. Invalid values never raise: the offending field keeps
its previous value, a message goes to the error sink and every other field
in the same call is still applied.

Inside ``collectors``, ``identifiers`` and ``entries`` a value of ``False``
or ``None`` removes the entry instead of setting it.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from devtoolbar.models import (
    EventsConfig,
    ProfilerConfig,
    ToolbarConfig,
    ToolbarPosition,
)
from devtoolbar.report import ErrorSink

logger = logging.getLogger(__name__)

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def coerce_bool(value: Any) -> bool:
    """Coerce a configuration value to a boolean.

    Strings such as ``"0"``, ``"false"`` or ``"off"`` are false, which
    lets values read from the environment go through the same path.
    """
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _is_present(options: Mapping[str, Any], key: str) -> bool:
    return options.get(key) is not None


class OptionsStore:
    """Holds the profiler, events and toolbar option groups."""

    def __init__(
        self,
        options: Mapping[str, Any] | None,
        report: ErrorSink,
    ) -> None:
        """Initialize the store and apply ``options`` over the defaults.

        Args:
            options: Raw mapping with optional ``profiler``, ``events`` and
                ``toolbar`` sections. Other keys are ignored.
            report: Sink receiving validation error messages.

        """
        self.report = report
        self.profiler = ProfilerConfig()
        self.events = EventsConfig()
        self.toolbar = ToolbarConfig()

        if options:
            self.set_from_mapping(options)

    def set_from_mapping(self, options: Mapping[str, Any]) -> None:
        """Dispatch each known section to its setter."""
        setters = {
            "profiler": self.set_profiler,
            "events": self.set_events,
            "toolbar": self.set_toolbar,
        }
        for key, value in options.items():
            setter = setters.get(key)
            if setter is None:
                logger.debug("Ignoring unknown option section %r", key)
                continue
            if value is None:
                continue
            if not isinstance(value, Mapping):
                self._error(f"{key} must be an array, {type(value).__name__} given.")
                continue
            setter(value)

    def _error(self, message: str) -> None:
        logger.warning("Invalid option: %s", message)
        self.report.add_error(message)

    def _merge_entries(
        self,
        target: dict[str, Any],
        overrides: Any,
        path: str,
    ) -> None:
        """Merge ``overrides`` into ``target`` in place."""
        if not isinstance(overrides, Mapping):
            self._error(
                f"{path} must be an array, {type(overrides).__name__} given."
            )
            return

        for name, value in overrides.items():
            if value is False or value is None:
                target.pop(name, None)
            else:
                target[name] = value

    # Profiler ------------------------------------------------------------

    def set_profiler(self, options: Mapping[str, Any]) -> None:
        """Apply profiler overrides."""
        profiler = self.profiler
        if _is_present(options, "enabled"):
            profiler.enabled = coerce_bool(options["enabled"])
        if _is_present(options, "strict"):
            profiler.strict = coerce_bool(options["strict"])
        if _is_present(options, "flush_early"):
            profiler.flush_early = coerce_bool(options["flush_early"])
        if _is_present(options, "cache_dir"):
            profiler.cache_dir = str(options["cache_dir"])
        if _is_present(options, "matcher"):
            self._set_matcher(options["matcher"])
        if _is_present(options, "collectors"):
            self._merge_entries(
                profiler.collectors, options["collectors"], "profiler.collectors"
            )

    def _set_matcher(self, matcher: Any) -> None:
        if not isinstance(matcher, (Mapping, list, tuple)):
            self._error(
                f"profiler.matcher must be an array, {type(matcher).__name__} given."
            )
            return
        self.profiler.matcher = copy.deepcopy(matcher)

    def is_enabled(self) -> bool:
        """Is the profiler enabled?"""
        return self.profiler.enabled

    def is_strict(self) -> bool:
        """Is strict mode enabled?"""
        return self.profiler.strict

    def can_flush_early(self) -> bool:
        """Is it allowed to flush the page before the collectors run?

        Only possible when both strict mode and the toolbar are disabled,
        since each of them needs the complete response.
        """
        return (
            self.profiler.flush_early
            and not self.profiler.strict
            and not self.toolbar.enabled
        )

    def get_cache_dir(self) -> str:
        """Return the directory used for the version cache and report storage."""
        return self.profiler.cache_dir

    def get_matcher(self) -> Any:
        return copy.deepcopy(self.profiler.matcher)

    def get_collectors(self) -> dict[str, Any]:
        return dict(self.profiler.collectors)

    # Events --------------------------------------------------------------

    def set_events(self, options: Mapping[str, Any]) -> None:
        """Apply event-level profiling overrides."""
        if _is_present(options, "enabled"):
            self.events.enabled = coerce_bool(options["enabled"])
        if _is_present(options, "collectors"):
            self.set_event_collectors(options["collectors"])
        if _is_present(options, "identifiers"):
            self.set_event_identifiers(options["identifiers"])

    def set_event_collectors(self, options: Any) -> None:
        """Merge event-level collectors."""
        self._merge_entries(self.events.collectors, options, "events.collectors")

    def set_event_identifiers(self, options: Any) -> None:
        """Merge the event identifiers the event collectors listen to.

        The default ``{"all": "*"}`` attaches to every event.
        """
        self._merge_entries(self.events.identifiers, options, "events.identifiers")

    def event_collection_enabled(self) -> bool:
        """Is event-level statistics collection enabled?"""
        return self.events.enabled

    def get_event_collectors(self) -> dict[str, Any]:
        return dict(self.events.collectors)

    def get_event_identifiers(self) -> dict[str, Any]:
        return dict(self.events.identifiers)

    # Toolbar -------------------------------------------------------------

    def set_toolbar(self, options: Mapping[str, Any]) -> None:
        """Apply toolbar overrides.

        ``auto_hide`` is not settable here.
        """
        toolbar = self.toolbar
        if _is_present(options, "enabled"):
            toolbar.enabled = coerce_bool(options["enabled"])
        if _is_present(options, "version_check"):
            toolbar.version_check = coerce_bool(options["version_check"])
        if _is_present(options, "position"):
            position = options["position"]
            if position in (ToolbarPosition.TOP.value, ToolbarPosition.BOTTOM.value):
                toolbar.position = ToolbarPosition(position)
            else:
                self._error(
                    f'toolbar.position must be "top" or "bottom", {position} given.'
                )
        if _is_present(options, "entries"):
            self._merge_entries(toolbar.entries, options["entries"], "toolbar.entries")

    def is_toolbar_enabled(self) -> bool:
        return self.toolbar.enabled

    def is_version_check_enabled(self) -> bool:
        """Is the framework version check enabled?"""
        return self.toolbar.version_check

    def get_toolbar_auto_hide(self) -> bool:
        return self.toolbar.auto_hide

    def get_toolbar_position(self) -> str:
        return self.toolbar.position.value

    def get_toolbar_entries(self) -> dict[str, Any]:
        return dict(self.toolbar.entries)

    # Export --------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return a plain-data snapshot of all three option groups."""
        return {
            "profiler": self.profiler.model_dump(mode="json"),
            "events": self.events.model_dump(mode="json"),
            "toolbar": self.toolbar.model_dump(mode="json"),
        }
