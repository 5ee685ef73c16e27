"""Fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from installing handlers on CliRunner's streams."""
    monkeypatch.setattr("exifnamer.cli._configure_logging", lambda *args: None)


@pytest.fixture
def runner() -> CliRunner:
    """Return a Click test runner."""
    return CliRunner()
