"""Fat model rule: several unrelated responsibility clusters in one class."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from modelcheck.application.rules._base import BaseRule
from modelcheck.domain.model.cluster import non_trivial_clusters
from modelcheck.domain.model.enums import Remediation, Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.class_analysis import ClassAnalysis
    from modelcheck.domain.model.cluster import ResponsibilityCluster
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.rule_context import RuleContext
    from modelcheck.domain.model.violation import Violation


class FatModelRule(BaseRule):
    """Fat model rule.

    One violation per class whose non-trivial clusters span at least
    `min_categories` distinct categories. Methods mixed in from included
    modules count like the class's own.

    Violation severity: WARNING.
    """

    rule_id = "fat-model"
    default_severity = Severity.WARNING
    description = "class carries several unrelated responsibilities"

    def __init__(self, *, severity: Severity | None = None, min_categories: int = 2) -> None:
        """Initialize rule.

        Args:
            severity: Severity override (default: WARNING)
            min_categories: Distinct categories needed to flag a class
        """
        super().__init__(severity=severity)
        if min_categories < 2:
            raise ValueError(f"min_categories must be >= 2, got {min_categories}")
        self._min_categories = min_categories

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> Self | None:
        """Create rule with the configured category threshold."""
        if not config.is_rule_enabled(cls.rule_id):
            return None
        return cls(
            severity=config.severity_for(cls.rule_id, cls.default_severity),
            min_categories=config.min_responsibility_categories,
        )

    def evaluate(self, context: RuleContext) -> tuple[Violation, ...]:
        """Flag classes with too many responsibility categories."""
        violations: list[Violation] = []
        for analysis in context.iter_analyses():
            if analysis.is_template:
                continue
            clusters = non_trivial_clusters(analysis.clusters)
            categories = {c.category for c in clusters}
            if len(categories) < self._min_categories:
                continue
            violations.append(
                self.violation(
                    analysis,
                    _message(analysis, clusters, context),
                    remediation=Remediation.EXTRACTED_COLLABORATOR,
                )
            )
        return tuple(violations)


def _message(
    analysis: ClassAnalysis,
    clusters: tuple[ResponsibilityCluster, ...],
    context: RuleContext,
) -> str:
    categories = dict.fromkeys(c.category for c in clusters)
    groups = "; ".join(f"{c.category} [{', '.join(c.methods)}]" for c in clusters)
    message = f"mixes {len(categories)} unrelated responsibilities: {groups}"

    included: set[str] = set()
    for cluster in clusters:
        for name in cluster.methods:
            method = context.methods.get(analysis.subject, name)
            if method is not None and method.included_from is not None:
                included.add(method.included_from)
    if included:
        message += f" (including methods from {', '.join(sorted(included))})"
    return message
