from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from check_graphite.core.errors import EXIT_CRITICAL, EXIT_OK, EXIT_UNKNOWN, EXIT_WARNING


class Verdict(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES: dict[Verdict, int] = {
    Verdict.OK: EXIT_OK,
    Verdict.WARNING: EXIT_WARNING,
    Verdict.CRITICAL: EXIT_CRITICAL,
    Verdict.UNKNOWN: EXIT_UNKNOWN,
}


class ThresholdDirection(str, Enum):
    """Which side of the bounds is unhealthy."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


def infer_direction(warning: float, critical: float) -> ThresholdDirection:
    """High values are bad when the critical bound sits above the warning bound."""
    if critical > warning:
        return ThresholdDirection.ASCENDING
    return ThresholdDirection.DESCENDING


def evaluate(total: float, warning: float | None, critical: float | None) -> Verdict:
    if warning is None or critical is None:
        raise ValueError("Both warning and critical thresholds must be set before evaluation.")

    if infer_direction(warning, critical) is ThresholdDirection.ASCENDING:
        if total >= critical:
            return Verdict.CRITICAL
        if total >= warning:
            return Verdict.WARNING
        return Verdict.OK

    if total <= critical:
        return Verdict.CRITICAL
    if total <= warning:
        return Verdict.WARNING
    return Verdict.OK


def format_status(name: str, verdict: Verdict, total: float) -> str:
    return f"{name} {verdict.value}: {total:.2f}"


@dataclass(slots=True, frozen=True)
class CheckResult:
    """Outcome of one check run."""

    name: str
    verdict: Verdict
    total: float

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code

    @property
    def status_line(self) -> str:
        return format_status(self.name, self.verdict, self.total)
