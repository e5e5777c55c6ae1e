"""Skipped-with-reason entry for units that could not be analyzed."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.enums import Severity
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.violation import Violation

MALFORMED_INPUT_RULE_ID = "malformed-input"


@dataclass(frozen=True, slots=True)
class SkippedClass:
    """Class excluded from analysis because its snapshot is malformed.

    Attributes:
        class_name: Qualified name of the skipped class
        reason: Broken invariant(s), human-readable
        location: Source location of the class
    """

    class_name: str
    reason: str
    location: Location

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.reason:
            raise ValueError("reason must not be empty")

    def to_violation(self) -> Violation:
        """Meta-violation that keeps the skip visible in the report."""
        return Violation(
            rule_id=MALFORMED_INPUT_RULE_ID,
            severity=Severity.ERROR,
            class_name=self.class_name,
            message=f"not analyzed: {self.reason}",
            location=self.location,
        )
