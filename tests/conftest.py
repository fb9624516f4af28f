"""Pytest configuration and shared fixtures for devtoolbar tests."""

from __future__ import annotations

import logging

import pytest

from devtoolbar.config import reset_config
from devtoolbar.config.config import ENV_MAPPINGS
from devtoolbar.options import OptionsStore
from devtoolbar.report import Report


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("config", "marks tests as configuration tests"),
        ("cli", "marks tests as CLI tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_config_sources(monkeypatch, tmp_path):
    """Keep user config files and DEVTOOLBAR_* variables out of tests."""
    for env_name in ENV_MAPPINGS:
        monkeypatch.delenv(env_name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    yield
    reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in ["devtoolbar", None]:
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
    # setup_logging() stops propagation, which would hide records from caplog
    package_logger = logging.getLogger("devtoolbar")
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def report() -> Report:
    return Report()


@pytest.fixture
def options(report: Report) -> OptionsStore:
    """Options store built from defaults only."""
    return OptionsStore({}, report)


@pytest.fixture
def write_config(tmp_path):
    """Write a devtoolbar.toml and return its path."""

    def _write(content: str, name: str = "devtoolbar.toml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
