"""devtoolbar command-line entry point."""

from __future__ import annotations

import logging

import click

from devtoolbar import __version__
from devtoolbar.cli.config_commands import config as config_group
from devtoolbar.models import LoggingConfig, LogLevel
from devtoolbar.utils.logging_config import setup_logging


@click.group()
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.version_option(__version__, prog_name="devtoolbar")
def cli(verbose: int) -> None:
    """Devtoolbar - inspect and validate toolbar options."""
    level = {0: LogLevel.WARNING, 1: LogLevel.INFO}.get(verbose, LogLevel.DEBUG)
    setup_logging(LoggingConfig(level=level))
    logging.getLogger(__name__).debug("Verbosity set to %s", level.value)


cli.add_command(config_group)


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
