"""Check result aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.check_stats import CheckStats
from modelcheck.domain.model.enums import Severity
from modelcheck.domain.model.skipped import SkippedClass
from modelcheck.domain.model.violation import Violation


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of one analysis run.

    Immutable aggregate used by ReporterProtocol.report(). `violations`
    already contains one malformed-input meta-violation per skipped class,
    in deterministic output order.

    Attributes:
        violations: All violations, ordered by location then rule id
        skipped: Classes skipped as malformed input
        stats: Analysis statistics
    """

    violations: tuple[Violation, ...]
    skipped: tuple[SkippedClass, ...]
    stats: CheckStats

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        keys = [violation.sort_key for violation in self.violations]
        if keys != sorted(keys):
            raise ValueError("violations must be in deterministic output order")

    @property
    def passed(self) -> bool:
        """Check if analysis passed (no violations)."""
        return len(self.violations) == 0

    @property
    def violation_count(self) -> int:
        """Number of violations."""
        return len(self.violations)

    @property
    def error_count(self) -> int:
        """Number of ERROR severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Number of WARNING severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.WARNING)

    def by_rule(self, rule_id: str) -> tuple[Violation, ...]:
        """Violations of one rule, output order."""
        return tuple(v for v in self.violations if v.rule_id == rule_id)

    @classmethod
    def empty(cls) -> CheckResult:
        """Create empty check result (passed, no violations)."""
        return cls(violations=(), skipped=(), stats=CheckStats.empty())
