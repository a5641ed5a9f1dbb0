"""CLI fixtures: every invocation runs against a throwaway SQLite file."""

from loguru import logger
import pytest
from typer.testing import CliRunner

from eimusic.config import settings
from eimusic.config.settings import MediaConfig
from eimusic.infrastructure.cli.app import app
from eimusic.infrastructure.cli.ui import console

# Shell sessions are exercised over the domain test records
from tests.domain.conftest import track_records

__all__ = ["track_records"]


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_environment(tmp_path, monkeypatch):
    """Point the database, log file and data directory at ``tmp_path``."""
    monkeypatch.setattr(
        settings.database, "url", f"sqlite+aiosqlite:///{tmp_path / 'eimusic.db'}"
    )
    monkeypatch.setattr(settings.logging, "log_file", tmp_path / "eimusic.log")
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    monkeypatch.setattr(settings, "media", MediaConfig())
    # Wide enough that table cells are never truncated
    monkeypatch.setattr(console, "width", 200)
    yield
    logger.remove()


@pytest.fixture
def invoke(runner):
    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(app, list(args), input=input)

    return _invoke


@pytest.fixture
def seeded(invoke):
    result = invoke("data", "seed")
    assert result.exit_code == 0, result.output
