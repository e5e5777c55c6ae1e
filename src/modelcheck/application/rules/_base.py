"""Base rule class for object-model rules.

Provides default implementation of RuleProtocol.
Concrete rules inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Self

from modelcheck.domain.model.violation import Violation

if TYPE_CHECKING:
    from modelcheck.domain.model.class_analysis import ClassAnalysis
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.enums import Remediation, Severity
    from modelcheck.domain.model.rule_context import RuleContext


class BaseRule(ABC):
    """Base class for rules implementing RuleProtocol.

    Concrete rules must:
    1. Set `rule_id` and `default_severity` class attributes
    2. Implement `evaluate()`
    3. Optionally override `from_config()` to read thresholds

    Example:
        class NoGodClassRule(BaseRule):
            rule_id = "no-god-class"
            default_severity = Severity.WARNING

            def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
                return tuple(
                    self.violation(analysis, f"{analysis.subject} is huge")
                    for analysis in context.iter_analyses()
                    if analysis.method_count > 50
                )
    """

    rule_id: ClassVar[str]
    """Stable identifier used in configuration and output."""

    default_severity: ClassVar[Severity]
    """Severity used when the configuration has no override."""

    description: ClassVar[str] = ""
    """One-line description of what the rule detects."""

    def __init__(self, *, severity: Severity | None = None) -> None:
        """Initialize rule.

        Args:
            severity: Severity override (default: class default)
        """
        self.severity = severity if severity is not None else self.default_severity

    @abstractmethod
    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Evaluate the rule and return violations.

        Args:
            context: Snapshot, graph and analyzer outputs (read-only)

        Returns:
            Tuple of violations found (empty if none)
        """

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> Self | None:
        """Create rule from config.

        Default: enabled unless deselected, severity from overrides.
        Override in subclass to read rule-specific thresholds.

        Args:
            config: Run configuration

        Returns:
            Rule instance if enabled, None if disabled
        """
        if not config.is_rule_enabled(cls.rule_id):
            return None
        return cls(severity=config.severity_for(cls.rule_id, cls.default_severity))

    def violation(
        self,
        analysis: ClassAnalysis,
        message: str,
        *,
        method: str | None = None,
        line: int | None = None,
        remediation: Remediation | None = None,
    ) -> Violation:
        """Build a violation of this rule located in `analysis`'s file.

        Args:
            analysis: Unit the violation is about
            message: Human-readable explanation
            method: Primary method, if any
            line: Offending line; the unit's own line when None
            remediation: Suggested remediation category

        Returns:
            Violation with this rule's id and severity
        """
        location = analysis.location if line is None else analysis.location.at_line(line)
        return Violation(
            rule_id=self.rule_id,
            severity=self.severity,
            class_name=analysis.subject,
            message=message,
            location=location,
            method=method,
            line=line,
            remediation=remediation,
        )
