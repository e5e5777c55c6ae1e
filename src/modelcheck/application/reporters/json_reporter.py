"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from modelcheck.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from modelcheck.domain.model.check_result import CheckResult
    from modelcheck.domain.model.skipped import SkippedClass
    from modelcheck.domain.model.violation import Violation


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs check results as JSON for CI/CD integration or parsing by
    other tools. Timing is left out, so two runs over the same snapshot
    produce byte-identical output.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, result: CheckResult) -> None:
        """Report check results as JSON.

        Args:
            result: Complete check result
        """
        data = self.result_to_dict(result)
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def result_to_dict(self, result: CheckResult) -> dict[str, object]:
        """Convert CheckResult to JSON-serializable dict.

        Args:
            result: Check result to convert

        Returns:
            Dictionary suitable for json.dump()
        """
        return {
            "passed": result.passed,
            "summary": {
                "violation_count": result.violation_count,
                "error_count": result.error_count,
                "warning_count": result.warning_count,
                "skipped_count": len(result.skipped),
            },
            "violations": [violation_to_dict(v) for v in result.violations],
            "skipped": [_skipped_to_dict(s) for s in result.skipped],
            "stats": {
                "classes_analyzed": result.stats.classes_analyzed,
                "classes_skipped": result.stats.classes_skipped,
                "templates_analyzed": result.stats.templates_analyzed,
                "methods_analyzed": result.stats.methods_analyzed,
                "call_sites_analyzed": result.stats.call_sites_analyzed,
                "association_edges": result.stats.association_edges,
                "unresolved_edges": result.stats.unresolved_edges,
                "rules_run": result.stats.rules_run,
            },
        }


def violation_to_dict(violation: Violation) -> dict[str, object]:
    """Convert Violation to its output record.

    Optional fields are present with null values, so every record has
    the same keys.

    Args:
        violation: Violation to convert

    Returns:
        Dictionary suitable for json.dump()
    """
    remediation = violation.remediation
    return {
        "rule_id": violation.rule_id,
        "severity": violation.severity.name.lower(),
        "class": violation.class_name,
        "method": violation.method,
        "line": violation.line,
        "message": violation.message,
        "remediation_category": remediation.value if remediation is not None else None,
    }


def _skipped_to_dict(skipped: SkippedClass) -> dict[str, object]:
    return {
        "class": skipped.class_name,
        "reason": skipped.reason,
        "file": str(skipped.location.file),
        "line": skipped.location.line,
    }
