"""Configuration schema generation and validation for devtoolbar.

The JSON Schema describes the shape of the options document; validation
runs the data through an options store and returns what it reported.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from devtoolbar.models import (
    Config,
    EventsConfig,
    LoggingConfig,
    ProfilerConfig,
    ToolbarConfig,
)
from devtoolbar.options import OptionsStore
from devtoolbar.report import Report

SECTION_MODELS: dict[str, type[BaseModel]] = {
    "profiler": ProfilerConfig,
    "events": EventsConfig,
    "toolbar": ToolbarConfig,
}
SCHEMA_SECTIONS: dict[str, type[BaseModel]] = {
    **SECTION_MODELS,
    "logging": LoggingConfig,
}
READ_ONLY_OPTIONS = frozenset({"toolbar.auto_hide"})


class ConfigSchema:
    """JSON Schema of the options document."""

    @staticmethod
    def _mark_read_only(section: str, schema: dict[str, Any]) -> dict[str, Any]:
        properties = schema.get("properties", {})
        for key_path in READ_ONLY_OPTIONS:
            owner, option = key_path.split(".")
            if owner == section and option in properties:
                properties[option]["readOnly"] = True
        return schema

    @staticmethod
    def generate_full_schema() -> dict[str, Any]:
        """Generate the schema of the whole document, logging included."""
        schema = Config.model_json_schema()
        definitions = schema.get("$defs", {})
        for section, model in SECTION_MODELS.items():
            if model.__name__ in definitions:
                ConfigSchema._mark_read_only(section, definitions[model.__name__])
        return schema

    @staticmethod
    def get_schema_for_section(section_name: str) -> dict[str, Any] | None:
        """Get the schema of one section, or None for an unknown section."""
        model = SCHEMA_SECTIONS.get(section_name)
        if model is None:
            return None
        return ConfigSchema._mark_read_only(section_name, model.model_json_schema())

    @staticmethod
    def export_schema(format_type: str = "json") -> str:
        """Export the full schema as "json" or "yaml"."""
        schema = ConfigSchema.generate_full_schema()

        if format_type.lower() == "json":
            return json.dumps(schema, indent=2)
        if format_type.lower() == "yaml":
            try:
                import yaml
            except ImportError as e:  # pragma: no cover
                msg = "PyYAML is required for YAML export"
                raise ImportError(msg) from e
            return yaml.safe_dump(schema, sort_keys=False)

        msg = f"Unsupported format: {format_type}"
        raise ValueError(msg)


class ConfigValidator:
    """Option validation without building a configuration manager."""

    @staticmethod
    def validate_with_details(config_data: Mapping[str, Any]) -> tuple[bool, list[str]]:
        """Validate option data.

        Args:
            config_data: Raw options mapping

        Returns:
            Tuple of (is_valid, list_of_errors)

        """
        report = Report()
        OptionsStore(config_data, report)
        errors = report.get_errors()
        return not errors, errors

    @staticmethod
    def validate_option(key_path: str, value: Any) -> tuple[bool, str]:
        """Validate a single option given as ``section.option``.

        Returns:
            Tuple of (is_valid, error_message)

        """
        parts = key_path.split(".")
        if len(parts) != 2:
            return False, f"Invalid key path: {key_path}"

        section, option = parts
        model = SECTION_MODELS.get(section)
        if model is None:
            return False, f"Unknown section: {section}"
        if option not in model.model_fields:
            return False, f"Unknown option: {key_path}"
        if key_path in READ_ONLY_OPTIONS:
            return False, f"{key_path} is read-only"

        is_valid, errors = ConfigValidator.validate_with_details(
            {section: {option: value}}
        )
        return is_valid, "; ".join(errors)
