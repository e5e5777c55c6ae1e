"""Rule violation entity."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.enums import Remediation, Severity
from modelcheck.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class Violation:
    """Object-model rule violation.

    Attributes:
        rule_id: Id of the violated rule
        severity: ERROR/WARNING/INFO
        class_name: Primary class (or template) the violation is about
        message: Human-readable explanation
        location: Source location (call site line when known)
        method: Primary method, if the violation is method-scoped
        line: Line of the offending call site, if any
        remediation: Suggested remediation category
    """

    rule_id: str
    severity: Severity
    class_name: str
    message: str
    location: Location
    method: str | None = None
    line: int | None = None
    remediation: Remediation | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")
        if self.line is not None and self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def sort_key(self) -> tuple[str, int, int, str, str, str, str]:
        """Deterministic output order: source location, then rule id."""
        return (
            str(self.location.file),
            self.location.line,
            self.location.column,
            self.rule_id,
            self.class_name,
            self.method or "",
            self.message,
        )

    def __str__(self) -> str:
        """Format violation for display."""
        where = self.class_name if self.method is None else f"{self.class_name}#{self.method}"
        lines = [
            f"[{self.severity.name}] {self.rule_id}: {self.message}",
            f"  at {self.location} ({where})",
        ]
        if self.remediation:
            lines.append(f"  remediation: {self.remediation.value}")
        return "\n".join(lines)
