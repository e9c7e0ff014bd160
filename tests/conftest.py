"""Pytest configuration and fixtures for objconfig tests."""

import logging
from pathlib import Path

import orjson
import pytest

from objconfig.config import ConfigPaths, ConfigStore


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for objconfig loggers during tests.

    This lets pytest's caplog fixture see records from loggers created with
    propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("objconfig"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide an empty temporary configuration directory."""
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def config_paths(config_dir: Path) -> ConfigPaths:
    """ConfigPaths bound to the temporary configuration directory."""
    return ConfigPaths(config_dir)


@pytest.fixture
def store(config_paths: ConfigPaths) -> ConfigStore:
    """ConfigStore bound to the temporary configuration directory."""
    return ConfigStore(config_paths)


@pytest.fixture
def write_json():
    """Return a helper writing a document as JSON to a path."""

    def _write(path: Path, document: dict) -> None:
        path.write_bytes(orjson.dumps(document))

    return _write


@pytest.fixture
def read_json():
    """Return a helper reading a JSON document from a path."""

    def _read(path: Path) -> dict:
        return orjson.loads(path.read_bytes())

    return _read
