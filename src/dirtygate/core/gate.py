"""Tolerance gating: config loading and structured evaluation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

import structlog

from dirtygate.errors import ConfigurationError, LimitExceededError, LimitKind
from dirtygate.models.policy import ErrorTolerancePolicy
from dirtygate.models.stats import StatisticsSnapshot

logger = structlog.get_logger(__name__)

ERROR_LIMIT_SECTION = "error-limit"
RECORD_KEY = "record"
PERCENTAGE_KEY = "percentage"


@dataclass(slots=True)
class CheckResult:
    name: str = ""
    kind: str = ""
    threshold: int | float | None = None
    observed: int | float = 0.0
    passed: bool = True
    active: bool = True
    message: str = ""

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(slots=True)
class GateResult:
    passed: bool = True
    checks: list[CheckResult] = field(default_factory=list)
    total_read_records: int = 0
    total_error_records: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "passed": self.passed,
            "total_read_records": self.total_read_records,
            "total_error_records": self.total_error_records,
            "checks": [c.to_dict() for c in self.checks],
        }


def _failed(name: str, exc: LimitExceededError) -> CheckResult:
    logger.warning("error_limit.exceeded", check=name, limit=exc.limit, actual=exc.actual)
    return CheckResult(
        name=name,
        kind=exc.kind.value,
        threshold=exc.limit,
        observed=exc.actual,
        passed=False,
        message=str(exc),
    )


def evaluate_policy(policy: ErrorTolerancePolicy, snapshot: StatisticsSnapshot) -> GateResult:
    """Evaluate a statistics snapshot against a policy. Returns structured gate result."""
    total = snapshot.total_read_records
    errors = snapshot.total_error_records
    result = GateResult(total_read_records=total, total_error_records=errors)

    # record limit
    try:
        policy.check_record_limit(snapshot)
    except LimitExceededError as exc:
        result.checks.append(_failed("record_limit", exc))
    else:
        result.checks.append(
            CheckResult(
                name="record_limit",
                kind=LimitKind.RECORD_COUNT.value,
                threshold=policy.record_limit,
                observed=errors,
                active=policy.record_limit is not None,
            )
        )

    # percentage limit
    try:
        policy.check_percentage_limit(snapshot)
    except LimitExceededError as exc:
        result.checks.append(_failed("percentage_limit", exc))
    else:
        result.checks.append(
            CheckResult(
                name="percentage_limit",
                kind=LimitKind.PERCENTAGE.value,
                threshold=policy.percentage_limit,
                observed=errors / total if total > 0 else 0.0,
                active=policy.percentage_limit is not None,
            )
        )

    result.passed = all(c.passed for c in result.checks)
    return result


def _parse_limit(key: str, value: Any, cast: type) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return cast(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from None
    if cast is int and isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _error_limit_section(config: Mapping[str, Any]) -> Mapping[str, Any]:
    section = config.get(ERROR_LIMIT_SECTION)
    if section is None:
        job = config.get("job")
        setting = job.get("setting") if isinstance(job, Mapping) else None
        if isinstance(setting, Mapping):
            section = setting.get(ERROR_LIMIT_SECTION)

    if section is None:
        # Flat dotted keys, e.g. "error-limit.record: 10"
        prefix = f"{ERROR_LIMIT_SECTION}."
        section = {
            k[len(prefix) :]: v
            for k, v in config.items()
            if isinstance(k, str) and k.startswith(prefix)
        }

    if not isinstance(section, Mapping):
        raise ConfigurationError(f"'{ERROR_LIMIT_SECTION}' must be a mapping")
    return section


def policy_from_config(config: Mapping[str, Any]) -> ErrorTolerancePolicy:
    """Build a policy from a job configuration mapping."""
    section = _error_limit_section(config)
    record = _parse_limit(
        f"{ERROR_LIMIT_SECTION}.{RECORD_KEY}", section.get(RECORD_KEY), int
    )
    percentage = _parse_limit(
        f"{ERROR_LIMIT_SECTION}.{PERCENTAGE_KEY}", section.get(PERCENTAGE_KEY), float
    )
    return ErrorTolerancePolicy(record_limit=record, percentage_limit=percentage)


def load_policy(path: str) -> ErrorTolerancePolicy:
    """Load an ErrorTolerancePolicy from a YAML job config file."""
    import yaml  # type: ignore[import-untyped]

    with open(path, "rb") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc

    if data is None:
        return ErrorTolerancePolicy()
    if not isinstance(data, dict):
        raise ConfigurationError(f"job config {path} must be a mapping")

    return policy_from_config(data)
