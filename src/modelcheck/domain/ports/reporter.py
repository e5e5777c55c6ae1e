"""Reporter protocol for output formatting.

Users extend modelcheck by implementing this Protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from modelcheck.domain.model.check_result import CheckResult


class ReporterProtocol(Protocol):
    """Contract for reporters.

    modelcheck provides PlainTextReporter, JSONReporter and
    ConsoleReporter. Users can implement SARIF, HTML, etc.
    """

    def report(self, result: CheckResult) -> None:
        """Report check results.

        Implementation decides output format and destination.

        Args:
            result: Complete check result with violations, skips, stats
        """
        ...
