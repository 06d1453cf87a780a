"""Shared fixtures for statistics and job config files."""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo CLI logging setup, which binds to the runner's stderr."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def stats_file(tmp_path: Path):
    """Factory writing a statistics JSON file."""

    def _write(data: object, name: str = "stats.json") -> str:
        path = tmp_path / name
        path.write_bytes(orjson.dumps(data))
        return str(path)

    return _write


@pytest.fixture
def config_file(tmp_path: Path):
    """Factory writing a job config YAML file."""

    def _write(text: str, name: str = "job.yml") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return _write
