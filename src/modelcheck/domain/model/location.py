"""Source code location value object."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True, order=True)
class Location:
    """Exact position in source code.

    Ordered by (file, line, column) so locations sort the way a reader
    scans a codebase.

    Attributes:
        file: Path to source file
        line: Line number (1-based, must be > 0)
        column: Column number (0-based, must be >= 0)
    """

    file: Path
    line: int
    column: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file is None:
            raise TypeError("file must not be None")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")

    def at_line(self, line: int) -> Location:
        """Same file, different line (column reset)."""
        return Location(file=self.file, line=line, column=0)

    def __str__(self) -> str:
        """Format as file:line:column."""
        return f"{self.file}:{self.line}:{self.column}"
