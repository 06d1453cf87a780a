"""JSON read/write for job statistics and gate results."""

from __future__ import annotations

from pathlib import Path

import orjson

from dirtygate.core.gate import GateResult
from dirtygate.errors import ConfigurationError
from dirtygate.models.stats import JobStatistics


def read_statistics(path: str | Path) -> JobStatistics:
    """Read a statistics snapshot from a JSON object file."""
    raw = Path(path).read_bytes()
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ConfigurationError(f"invalid statistics JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"statistics file {path} must contain a JSON object")
    return JobStatistics.from_dict(data)


def write_result(path: str | Path, result: GateResult) -> None:
    """Write a gate result as indented JSON."""
    data = orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2)
    Path(path).write_bytes(data)
