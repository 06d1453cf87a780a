"""Job statistics snapshot models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from dirtygate.errors import ConfigurationError

_COUNTER_KEYS = ("read_succeed_records", "read_failed_records", "write_failed_records")
_TOTAL_KEYS = ("total_read_records", "total_error_records")


class StatisticsSnapshot(Protocol):
    """Point-in-time, job-wide aggregated counters."""

    @property
    def total_read_records(self) -> int: ...

    @property
    def total_error_records(self) -> int: ...


def _as_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class JobStatistics:
    read_succeed_records: int = 0
    read_failed_records: int = 0  # dirty on the reader side
    write_failed_records: int = 0  # dirty on the writer side

    def __post_init__(self) -> None:
        for name in _COUNTER_KEYS:
            _as_count(name, getattr(self, name))

    @property
    def total_read_records(self) -> int:
        return self.read_succeed_records + self.read_failed_records

    @property
    def total_error_records(self) -> int:
        return self.read_failed_records + self.write_failed_records

    @classmethod
    def from_totals(cls, total_read: int, total_error: int) -> JobStatistics:
        """Build a snapshot that reports exactly the given totals.

        All errors are attributed to the writer side, so the read total is
        not inflated by the error count.
        """
        _as_count("total_read_records", total_read)
        _as_count("total_error_records", total_error)
        return cls(read_succeed_records=total_read, write_failed_records=total_error)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JobStatistics:
        """Parse either the record counters or the two totals, never a mix."""
        has_counters = any(k in data for k in _COUNTER_KEYS)
        if has_counters and any(k in data for k in _TOTAL_KEYS):
            raise ConfigurationError(
                "statistics must not mix record counters with "
                "total_read_records/total_error_records"
            )
        if has_counters:
            return cls(**{k: data.get(k, 0) for k in _COUNTER_KEYS})
        if all(k in data for k in _TOTAL_KEYS):
            return cls.from_totals(data["total_read_records"], data["total_error_records"])
        raise ConfigurationError(
            "statistics must contain record counters or both "
            "total_read_records and total_error_records"
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "read_succeed_records": self.read_succeed_records,
            "read_failed_records": self.read_failed_records,
            "write_failed_records": self.write_failed_records,
            "total_read_records": self.total_read_records,
            "total_error_records": self.total_error_records,
        }
