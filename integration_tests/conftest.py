"""Pytest configuration for integration tests."""

import tempfile
from pathlib import Path

import pytest

from fittrack import config


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def cli_db(monkeypatch):
    """Point the CLI at a throwaway database file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "cli.db"
        monkeypatch.setattr(config, "DB_PATH", str(db_path))
        monkeypatch.setattr(config, "DEFAULT_USER_ID", 1)
        yield db_path
