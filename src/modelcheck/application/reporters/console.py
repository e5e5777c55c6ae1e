"""Console reporter: CheckResult → rich formatted table."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modelcheck.application.reporters._base import BaseReporter
from modelcheck.domain.model.enums import Severity

if TYPE_CHECKING:
    from modelcheck.domain.model.check_result import CheckResult
    from modelcheck.domain.model.violation import Violation


_SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        show_stats: Show the statistics section.
        show_remediation: Show the remediation column.
        max_violations: Max violations to display. None = unlimited.
        include_rules: Rule ids to display. None = all rules.
        width: Console width in characters.
    """

    show_stats: bool = True
    show_remediation: bool = True
    max_violations: int | None = None
    include_rules: frozenset[str] | None = None
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_violations is not None and self.max_violations < 0:
            raise ValueError(f"max_violations must be >= 0, got {self.max_violations}")
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Console reporter: outputs rich formatted text.

    render() returns the text; report() writes it to the output stream.
    Shows ALL violations unless the config explicitly limits them.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        config: ConsoleConfig | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            config: Reporter configuration. Uses defaults if None.
        """
        self._output = output if output is not None else sys.stdout
        self._config = config or ConsoleConfig()

    def report(self, result: CheckResult) -> None:
        """Write the formatted result to the output stream."""
        self._output.write(self.render(result))

    def render(self, result: CheckResult) -> str:
        """Format check result as rich formatted string.

        Args:
            result: Check result to format.

        Returns:
            Formatted string with colors and tables.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        violations = self._filter_violations(result.violations)

        self._render_header(console, result)
        if violations:
            self._render_violations(console, violations)
        if result.skipped:
            self._render_skipped(console, result)
        if self._config.show_stats:
            self._render_stats(console, result)

        return output.getvalue()

    def _filter_violations(self, violations: tuple[Violation, ...]) -> tuple[Violation, ...]:
        """Filter violations by config. Only explicit config filters applied."""
        filtered: list[Violation] = []

        for violation in violations:
            limit = self._config.max_violations
            if limit is not None and len(filtered) >= limit:
                break
            if self._config.include_rules and violation.rule_id not in self._config.include_rules:
                continue
            filtered.append(violation)

        return tuple(filtered)

    def _render_header(self, console: Console, result: CheckResult) -> None:
        """Render header with summary."""
        console.print()
        console.rule("[bold]OBJECT MODEL CHECK[/bold]")
        console.print()

        status = "[bold green]PASS[/bold green]" if result.passed else "[bold red]FAIL[/bold red]"
        console.print(
            f"{status}  [bold]Violations:[/bold] {result.violation_count} "
            f"(errors: {result.error_count}, warnings: {result.warning_count})"
        )
        console.print()

    def _render_violations(self, console: Console, violations: tuple[Violation, ...]) -> None:
        """Render violations as a table, output order."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Location", style="dim")
        table.add_column("Rule")
        table.add_column("Severity")
        table.add_column("Class")
        table.add_column("Method")
        table.add_column("Message")
        if self._config.show_remediation:
            table.add_column("Remediation")

        for violation in violations:
            style = _SEVERITY_STYLES[violation.severity]
            row = [
                escape(str(violation.location)),
                escape(violation.rule_id),
                f"[{style}]{violation.severity.name.lower()}[/{style}]",
                escape(violation.class_name),
                escape(violation.method or ""),
                escape(violation.message),
            ]
            if self._config.show_remediation:
                remediation = violation.remediation
                row.append(remediation.value if remediation is not None else "")
            table.add_row(*row)

        console.print(table)
        console.print()

    def _render_skipped(self, console: Console, result: CheckResult) -> None:
        """Render classes skipped as malformed input."""
        console.print(f"[bold red]SKIPPED[/bold red] ({len(result.skipped)})")
        console.print()

        for entry in result.skipped:
            name = escape(entry.class_name)
            console.print(f"  [yellow]{name}[/yellow] {escape(entry.reason)}")

        console.print()

    def _render_stats(self, console: Console, result: CheckResult) -> None:
        """Render statistics section."""
        stats = result.stats
        console.print("[bold]STATS[/bold]")
        console.print(
            f"  classes: {stats.classes_analyzed}, templates: {stats.templates_analyzed}, "
            f"methods: {stats.methods_analyzed}, call sites: {stats.call_sites_analyzed}"
        )
        console.print(
            f"  edges: {stats.association_edges} ({stats.unresolved_edges} unresolved), "
            f"rules: {stats.rules_run}, time: {stats.analysis_time_ms:.1f} ms"
        )
        console.print()
