"""Exception hierarchy for dirty-record tolerance checks."""

from __future__ import annotations

from enum import Enum


class ToleranceError(Exception):
    """Base error for tolerance gate failures."""


class ConfigurationError(ToleranceError):
    """Error limit configuration or input is outside its valid domain."""


class LimitKind(str, Enum):
    RECORD_COUNT = "record_count"
    PERCENTAGE = "percentage"


class LimitExceededError(ToleranceError):
    """A job's dirty records violated the configured tolerance.

    ``limit`` and ``actual`` are ints for record-count failures and floats for
    percentage failures. The message is derived from them; callers that need
    the values should read the attributes, not parse the text.
    """

    def __init__(self, kind: LimitKind, limit: int | float, actual: int | float) -> None:
        self.kind = kind
        self.limit = limit
        self.actual = actual
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.kind is LimitKind.RECORD_COUNT:
            return (
                f"dirty record check failed: limit is {self.limit} records "
                f"but {self.actual} were captured"
            )
        return (
            f"dirty record check failed: limit is {self.limit:f} "
            f"but the observed ratio is {self.actual:f}"
        )

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind.value, "limit": self.limit, "actual": self.actual}
