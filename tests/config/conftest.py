"""Shared fixtures for config module tests."""

from pathlib import Path

import pytest


@pytest.fixture
def existing_file(config_dir: Path) -> Path:
    """A config file with known content."""
    path = config_dir / "config.json"
    path.write_bytes(b'{"version": "11"}')
    return path
