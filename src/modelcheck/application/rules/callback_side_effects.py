"""Callback side-effects rule.

Lifecycle callbacks that persist other models hide cross-model work
behind an innocent save.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.application.rules._base import BaseRule
from modelcheck.domain.model.enums import Remediation, Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.violation import Violation


class CallbackSideEffectsRule(BaseRule):
    """Callback mutating another class.

    One violation per (callback method, mutated class), at the first
    mutating call. Mutations of the declaring class are ignored.

    Violation severity: WARNING.
    """

    rule_id = "callback-side-effects"
    default_severity = Severity.WARNING
    description = "lifecycle callback persists another model"

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag callbacks whose mutations target other classes."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            seen: set[tuple[str, str]] = set()
            for mutation in analysis.mutations:
                if mutation.is_own:
                    continue
                method = context.methods.get(analysis.subject, mutation.method)
                if method is None or not method.is_callback:
                    continue
                key = (mutation.method, mutation.target_class)
                if key in seen:
                    continue
                seen.add(key)
                violations.append(
                    self.violation(
                        analysis,
                        f"callback calls {mutation.operation} on {mutation.target_class} "
                        f"in '{mutation.call_site.expression}'; "
                        "make the side effect an explicit call",
                        method=mutation.method,
                        line=mutation.call_site.line,
                        remediation=Remediation.CALLBACK_REMOVAL,
                    )
                )
        return tuple(violations)
