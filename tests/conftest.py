"""Shared pytest fixtures for dtutil tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from dtutil.config.settings import DtSettings


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DTUTIL_* environment out of every test."""
    monkeypatch.delenv("DTUTIL_CONFIG", raising=False)
    monkeypatch.delenv("DTUTIL_DIFF__UNIT", raising=False)
    monkeypatch.delenv("DTUTIL_FORMAT__PATTERN", raising=False)
    monkeypatch.delenv("DTUTIL_PARSE__PATTERN", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    dt_logger = logging.getLogger("dtutil")
    dt_level = dt_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    dt_logger.setLevel(dt_level)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no dtutil.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> DtSettings:
    """Default settings with no config file."""
    return DtSettings.from_cli(start_dir=tmp_path)


@pytest.fixture
def sample() -> datetime:
    """Thursday 7 March 2024, 09:05:30.123456 (day 67 of a leap year)."""
    return datetime(2024, 3, 7, 9, 5, 30, 123456)
