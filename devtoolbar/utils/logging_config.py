"""Logging configuration for devtoolbar.

Console output goes through a Rich handler; an optional rotating file
handler writes plain or structured (JSON) lines.
"""

from __future__ import annotations

import json
import logging
import logging.config
import re
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:  # pragma: no cover
    from devtoolbar.models import LoggingConfig

ROOT_LOGGER = "devtoolbar"

_RICH_MARKUP = re.compile(r"\[/?[^\]]+\]")


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a JSON object."""
        log_entry: dict[str, Any] = {
            "timestamp": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record without markup tags."""
        return _RICH_MARKUP.sub("", super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
) -> logging.Handler:
    """Create a RichHandler writing to stderr."""
    if console is None:
        console = Console(file=sys.stderr, markup=True)
    return RichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
    )


def setup_logging(config: LoggingConfig) -> None:
    """Set up logging for the ``devtoolbar`` logger hierarchy."""
    level = config.level.value
    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"()": StructuredFormatter},
            "simple": {
                "()": FileFormatter,
                "format": config.log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {},
        "loggers": {
            ROOT_LOGGER: {
                "level": level,
                "handlers": [],
                "propagate": False,
            },
        },
    }

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logging_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "structured" if config.structured_logging else "simple",
            "filename": str(log_path),
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
        }
        logging_config["loggers"][ROOT_LOGGER]["handlers"].append("file")

    logging.config.dictConfig(logging_config)

    if config.console:
        logging.getLogger(ROOT_LOGGER).addHandler(create_rich_handler(level=level))


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``devtoolbar``."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
