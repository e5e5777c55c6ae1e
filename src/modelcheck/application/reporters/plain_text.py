"""Plain text reporter using print().

Stdlib-only reporter for simple text output.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from modelcheck.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from modelcheck.domain.model.check_result import CheckResult
    from modelcheck.domain.model.skipped import SkippedClass
    from modelcheck.domain.model.violation import Violation


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Stdlib-only implementation for simple text output.
    Outputs to stdout by default, can be configured for any TextIO.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    def report(self, result: CheckResult) -> None:
        """Report check results as plain text.

        Args:
            result: Complete check result
        """
        self._report_header()
        self._report_summary(result)

        if result.violations:
            self._report_violations(result.violations)

        if result.skipped:
            self._report_skipped(result.skipped)

        self._report_footer(result)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_header(self) -> None:
        """Print report header."""
        self._write("=" * 70)
        self._write("Object Model Check Results")
        self._write("=" * 70)

    def _report_summary(self, result: CheckResult) -> None:
        """Print summary section."""
        stats = result.stats
        self._write()
        self._write("Summary:")
        self._write(f"  Classes: {stats.classes_analyzed} analyzed, {stats.classes_skipped} skipped")
        self._write(f"  Templates: {stats.templates_analyzed}")
        self._write(f"  Violations: {result.violation_count}")
        self._write(f"    Errors: {result.error_count}")
        self._write(f"    Warnings: {result.warning_count}")
        self._write(f"  Status: {'PASS' if result.passed else 'FAIL'}")

    def _report_violations(self, violations: tuple[Violation, ...]) -> None:
        """Print violations section."""
        self._write()
        self._write("-" * 70)
        self._write(f"Violations ({len(violations)}):")
        self._write("-" * 70)

        for i, violation in enumerate(violations, start=1):
            subject = violation.class_name
            if violation.method is not None:
                subject = f"{subject}#{violation.method}"
            self._write()
            self._write(f"{i}. [{violation.severity.name}] {violation.rule_id}")
            self._write(f"   {violation.message}")
            self._write(f"   At: {subject} ({violation.location})")
            if violation.remediation is not None:
                self._write(f"   Remediation: {violation.remediation.value}")

    def _report_skipped(self, skipped: tuple[SkippedClass, ...]) -> None:
        """Print skipped classes section."""
        self._write()
        self._write("-" * 70)
        self._write(f"Skipped ({len(skipped)}):")
        self._write("-" * 70)

        for entry in skipped:
            self._write(f"  {entry.class_name}: {entry.reason}")

    def _report_footer(self, result: CheckResult) -> None:
        """Print report footer."""
        self._write()
        self._write("=" * 70)
        status = "PASSED" if result.passed else "FAILED"
        self._write(f"Result: {status}")
        self._write("=" * 70)
