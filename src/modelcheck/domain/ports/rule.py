"""Rule protocol for object-model rules.

Users extend modelcheck by implementing this Protocol.
Rules are pure: they read a RuleContext and return violations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.enums import Severity
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.violation import Violation


class RuleProtocol(Protocol):
    """Contract for rules.

    Key pattern: from_config() returns None if the rule is disabled.

    Example:
        class NoGodClassRule:
            rule_id = "no-god-class"

            def __init__(self, severity: Severity) -> None:
                self.severity = severity

            def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
                violations: list[Violation] = []
                # ... inspect context.analyses ...
                return tuple(violations)

            @classmethod
            def from_config(cls, config: AnalysisConfig) -> Self | None:
                if not config.is_rule_enabled(cls.rule_id):
                    return None
                return cls(config.severity_for(cls.rule_id, Severity.WARNING))
    """

    rule_id: str
    """Stable identifier used in configuration and output."""

    severity: Severity
    """Severity attached to every violation of this rule."""

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Evaluate the rule.

        Must not mutate anything reachable from context.

        Args:
            context: Snapshot, graph and analyzer outputs

        Returns:
            Tuple of violations found (empty if none)
        """
        ...

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> Self | None:
        """Create rule from config, None if disabled.

        Args:
            config: Run configuration

        Returns:
            Rule instance if enabled, None if disabled
        """
        ...
