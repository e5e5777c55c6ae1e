"""Query placement rules.

Query construction belongs in the model that owns the collection, as a
named scope. Two rules:

- query-outside-model: views and controllers build queries
- neighbor-query: a model builds a query on another model's collection
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.application.rules._base import BaseRule
from modelcheck.domain.model.enums import Layer, Remediation, Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.tagged_call import TaggedCall
    from modelcheck.domain.model.violation import Violation


_PRESENTATION_LAYERS = frozenset({Layer.VIEW, Layer.CONTROLLER})


def _operations(call: TaggedCall) -> str:
    return ", ".join(call.query_operations)


class QueryOutsideModelRule(BaseRule):
    """Query construction in view or controller code.

    Violation severity: ERROR.
    """

    rule_id = "query-outside-model"
    default_severity = Severity.ERROR
    description = "query built outside the model layer"

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag query-constructing calls tagged VIEW or CONTROLLER."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            for call in analysis.tagged_calls:
                if not call.is_query or call.layer not in _PRESENTATION_LAYERS:
                    continue
                owner = call.query_target or "the model"
                violations.append(
                    self.violation(
                        analysis,
                        f"{call.layer.value} code builds a query ({_operations(call)}) "
                        f"in '{call.call_site.expression}'; "
                        f"move it into a named scope on {owner}",
                        method=call.method,
                        line=call.call_site.line,
                        remediation=Remediation.SCOPE_RELOCATION,
                    )
                )
        return tuple(violations)


class NeighborQueryRule(BaseRule):
    """Model code building a query against another model's collection.

    Only flagged when the queried class is known and differs from the
    declaring class.

    Violation severity: WARNING.
    """

    rule_id = "neighbor-query"
    default_severity = Severity.WARNING
    description = "model builds a query on another model's collection"

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag model-layer queries whose target is another class."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            for call in analysis.tagged_calls:
                if call.layer is not Layer.MODEL or not call.is_query:
                    continue
                target = call.query_target
                if target is None or target == call.subject:
                    continue
                violations.append(
                    self.violation(
                        analysis,
                        f"builds a query ({_operations(call)}) on {target}'s collection "
                        f"in '{call.call_site.expression}'; {target} should own it as a scope",
                        method=call.method,
                        line=call.call_site.line,
                        remediation=Remediation.SCOPE_RELOCATION,
                    )
                )
        return tuple(violations)
