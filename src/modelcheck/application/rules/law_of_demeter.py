"""Law-of-Demeter rule.

Flags receiver chains that reach through an intermediate object instead
of talking to an immediate neighbor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from modelcheck.application.rules._base import BaseRule
from modelcheck.domain.model.enums import Remediation, Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.access_chain import AccessChain
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.violation import Violation


class LawOfDemeterRule(BaseRule):
    """Law-of-Demeter rule.

    One violation per distinct chain whose depth reaches the threshold.
    Hops already collapsed by a delegation method do not count, so a
    chain written through a delegation is not flagged.

    Remediation: DELEGATION when the chain ends on an attribute,
    WRAPPER_METHOD when it ends on a method call.
    """

    rule_id = "law-of-demeter"
    default_severity = Severity.WARNING
    description = "receiver chain reaches through an intermediate object"

    def __init__(self, *, severity: Severity | None = None, min_depth: int = 2) -> None:
        """Initialize rule.

        Args:
            severity: Severity override (default: WARNING)
            min_depth: Minimum number of hops to flag
        """
        super().__init__(severity=severity)
        if min_depth < 1:
            raise ValueError(f"min_depth must be >= 1, got {min_depth}")
        self._min_depth = min_depth

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> Self | None:
        """Create rule with the configured depth threshold."""
        if not config.is_rule_enabled(cls.rule_id):
            return None
        return cls(
            severity=config.severity_for(cls.rule_id, cls.default_severity),
            min_depth=config.min_demeter_depth,
        )

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag every chain of depth >= min_depth."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            for chain in analysis.chains:
                if chain.depth < self._min_depth:
                    continue
                remediation = (
                    Remediation.WRAPPER_METHOD
                    if chain.terminal_is_method
                    else Remediation.DELEGATION
                )
                violations.append(
                    self.violation(
                        analysis,
                        _message(chain),
                        method=chain.method,
                        line=chain.call_site.line,
                        remediation=remediation,
                    )
                )
        return tuple(violations)


def _message(chain: AccessChain) -> str:
    """Explain which classes the chain reaches through."""
    intermediate = chain.path[1]
    return (
        f"'{chain.call_site.expression}' reaches through {' -> '.join(chain.path)} "
        f"(depth {chain.depth}); ask {intermediate} for what is needed instead"
    )
