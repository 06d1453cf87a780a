"""Dirty-record tolerance policy.

A job may cap dirty records either by absolute count (``record_limit``) or by
ratio of dirty records to records read (``percentage_limit``). The count limit
outranks the percentage limit: when both are configured, only the count is
enforced. With neither configured the policy always passes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

import structlog

from dirtygate.errors import ConfigurationError, LimitExceededError, LimitKind
from dirtygate.models.stats import StatisticsSnapshot

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorTolerancePolicy:
    record_limit: int | None = None
    percentage_limit: float | None = None

    def __post_init__(self) -> None:
        if self.percentage_limit is not None:
            pct = self.percentage_limit
            if isinstance(pct, bool) or not isinstance(pct, Real):
                raise ConfigurationError(f"percentage limit must be a number, got {pct!r}")
            if math.isnan(pct) or not 0.0 <= pct <= 1.0:
                raise ConfigurationError(f"percentage limit must be within [0.0, 1.0], got {pct}")
            object.__setattr__(self, "percentage_limit", float(pct))

        if self.record_limit is not None:
            rec = self.record_limit
            if isinstance(rec, bool) or not isinstance(rec, int):
                raise ConfigurationError(f"record limit must be an integer, got {rec!r}")
            if rec < 0:
                raise ConfigurationError(f"record limit must be non-negative, got {rec}")
            # Count limit outranks percentage limit.
            object.__setattr__(self, "percentage_limit", None)

        logger.debug(
            "error_limit.configured",
            record_limit=self.record_limit,
            percentage_limit=self.percentage_limit,
        )

    @property
    def is_noop(self) -> bool:
        return self.record_limit is None and self.percentage_limit is None

    @property
    def active_kind(self) -> LimitKind | None:
        if self.record_limit is not None:
            return LimitKind.RECORD_COUNT
        if self.percentage_limit is not None:
            return LimitKind.PERCENTAGE
        return None

    def check_record_limit(self, snapshot: StatisticsSnapshot) -> None:
        """Raise LimitExceededError if dirty records exceed the record limit.

        The limit is inclusive: exactly ``record_limit`` dirty records pass.
        """
        if self.record_limit is None:
            return

        error_count = snapshot.total_error_records
        logger.debug("error_limit.record_check", limit=self.record_limit, actual=error_count)
        if error_count > self.record_limit:
            raise LimitExceededError(LimitKind.RECORD_COUNT, self.record_limit, error_count)

    def check_percentage_limit(self, snapshot: StatisticsSnapshot) -> None:
        """Raise LimitExceededError if the dirty ratio exceeds the percentage limit.

        Passes unconditionally until at least one record has been read. Integer
        true division is correctly rounded, so a ratio that equals the limit
        exactly (``10/100`` against ``0.1``) rounds to the same float and passes.
        """
        if self.percentage_limit is None:
            return

        total = snapshot.total_read_records
        error_count = snapshot.total_error_records
        logger.debug(
            "error_limit.percentage_check",
            limit=self.percentage_limit,
            total=total,
            errors=error_count,
        )
        if total <= 0:
            return

        ratio = error_count / total
        if ratio > self.percentage_limit:
            raise LimitExceededError(LimitKind.PERCENTAGE, self.percentage_limit, ratio)

    def check(self, snapshot: StatisticsSnapshot) -> None:
        """Run both checks against the same snapshot."""
        self.check_record_limit(snapshot)
        self.check_percentage_limit(snapshot)
