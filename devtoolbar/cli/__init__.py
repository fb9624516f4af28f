"""Command-line interface for devtoolbar."""

from __future__ import annotations

from devtoolbar.cli.main import cli, main

__all__ = ["cli", "main"]
