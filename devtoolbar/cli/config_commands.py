"""Configuration CLI commands for devtoolbar.

Adds commands:
- config show
- config get
- config validate
- config schema
"""

from __future__ import annotations

import json
from typing import Any

import click
import toml

from devtoolbar.config.config import ConfigManager
from devtoolbar.config.config_schema import ConfigSchema, ConfigValidator
from devtoolbar.utils.exceptions import ConfigurationError


def _load_manager(config_file: str | None) -> ConfigManager:
    try:
        return ConfigManager(config_file)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def _lookup(data: dict[str, Any], key: str) -> Any:
    ref: Any = data
    for part in key.split("."):
        if not isinstance(ref, dict) or part not in ref:
            msg = f"Key not found: {key}"
            raise click.ClickException(msg)
        ref = ref[part]
    return ref


@click.group()
def config():
    """Configuration management commands."""


@config.command("show")
@click.option(
    "--format",
    "format_",
    type=click.Choice(["toml", "json"]),
    default="toml",
)
@click.option(
    "--section",
    type=click.Choice(["profiler", "events", "toolbar"]),
    default=None,
    help="Show a single section",
)
@click.option("--config", "config_file", type=click.Path(exists=True), default=None)
def show_config(format_: str, section: str | None, config_file: str | None):
    """Show the effective options in the desired format."""
    data = _load_manager(config_file).export_data()
    if section:
        data = {section: data[section]}
    if format_ == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(toml.dumps(data))


@config.command("get")
@click.argument("key")
@click.option("--config", "config_file", type=click.Path(exists=True), default=None)
def get_value(key: str, config_file: str | None):
    """Get a specific option value by dotted path (e.g. toolbar.position)."""
    data = _load_manager(config_file).options.to_dict()
    click.echo(json.dumps(_lookup(data, key), indent=2))


@config.command("validate")
@click.option("--config", "config_file", type=click.Path(exists=True), default=None)
def validate_config_cmd(config_file: str | None):
    """Validate configuration file and print result.

    Invalid options fail validation even when strict mode is off.
    """
    manager = _load_manager(config_file)
    is_valid, errors = ConfigValidator.validate_with_details(manager.raw)
    if not is_valid:
        for error in errors:
            click.echo(error, err=True)
        msg = f"{len(errors)} invalid option(s)"
        raise click.ClickException(msg)
    click.echo("VALID")


@config.command("schema")
@click.option(
    "--format",
    "format_",
    type=click.Choice(["json", "yaml"]),
    default="json",
)
@click.option(
    "--section",
    type=str,
    default=None,
    help="Only print the schema of one section",
)
def schema_cmd(format_: str, section: str | None):
    """Print the JSON Schema of the options document."""
    if section is None:
        try:
            click.echo(ConfigSchema.export_schema(format_))
        except ImportError as e:
            raise click.ClickException(str(e)) from e
        return

    section_schema = ConfigSchema.get_schema_for_section(section)
    if section_schema is None:
        msg = f"Section not found: {section}"
        raise click.ClickException(msg)
    click.echo(json.dumps(section_schema, indent=2))
