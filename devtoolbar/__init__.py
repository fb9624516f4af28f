"""devtoolbar - options for a web profiling and debugging toolbar."""

from __future__ import annotations

__version__ = "0.1.0"

from devtoolbar.options import OptionsStore
from devtoolbar.report import ErrorSink, Report

__all__ = ["ErrorSink", "OptionsStore", "Report", "__version__"]
