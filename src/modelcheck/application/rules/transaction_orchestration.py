"""Transaction orchestration rule.

Flags methods that persist several models inside one explicit
transaction block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from modelcheck.application.rules._base import BaseRule
from modelcheck.domain.model.enums import Remediation, Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.violation import Violation


class TransactionOrchestrationRule(BaseRule):
    """Cross-model transaction orchestration.

    One violation per transaction scope whose counted classes reach
    `min_classes`. Statement order inside the block is irrelevant.

    Violation severity: WARNING.
    """

    rule_id = "transaction-orchestration"
    default_severity = Severity.WARNING
    description = "one transaction persists several models"

    def __init__(self, *, severity: Severity | None = None, min_classes: int = 2) -> None:
        """Initialize rule.

        Args:
            severity: Severity override (default: WARNING)
            min_classes: Distinct mutated classes needed to flag a scope
        """
        super().__init__(severity=severity)
        if min_classes < 1:
            raise ValueError(f"min_classes must be >= 1, got {min_classes}")
        self._min_classes = min_classes

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> Self | None:
        """Create rule with the configured class threshold."""
        if not config.is_rule_enabled(cls.rule_id):
            return None
        return cls(
            severity=config.severity_for(cls.rule_id, cls.default_severity),
            min_classes=config.min_transaction_classes,
        )

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag transaction scopes touching too many classes."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            for scope in analysis.transactions:
                if len(scope.counted_classes) < self._min_classes:
                    continue
                violations.append(
                    self.violation(
                        analysis,
                        f"one transaction persists {', '.join(scope.counted_classes)}; "
                        "let the associations save together or move the "
                        "orchestration into a dedicated collaborator",
                        method=scope.method,
                        line=scope.line,
                        remediation=Remediation.EXTRACTED_COLLABORATOR,
                    )
                )
        return tuple(violations)
