"""Association edge value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from modelcheck.domain.model.enums import AssociationKind


@dataclass(frozen=True, slots=True)
class AssociationEdge:
    """Declared structural relationship between two classes.

    Directed: source declares the accessor, target is the class the
    accessor yields. Bidirectional associations are two separate edges.

    Attributes:
        source: Qualified name of the declaring class
        target: Qualified name of the associated class, as declared
        kind: OWNS_ONE/OWNS_MANY/BELONGS_TO/COMPOSED_OF
        accessor: Accessor name declared on source (e.g. "customer")
        resolved: True if target is a class of the analyzed snapshot
        note: Diagnostic note attached by the graph builder
    """

    source: str
    target: str
    kind: AssociationKind
    accessor: str
    resolved: bool = True
    note: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.source:
            raise ValueError("source must not be empty")
        if not self.target:
            raise ValueError("target must not be empty")
        if not self.accessor:
            raise ValueError("accessor must not be empty")
        if self.resolved and self.note is not None:
            raise ValueError("note is reserved for unresolved edges")

    @property
    def is_self_reference(self) -> bool:
        """True if the edge stays within one class (e.g. Employee.manager)."""
        return self.source == self.target

    def as_unresolved(self, note: str) -> AssociationEdge:
        """Copy of this edge marked unresolved with a diagnostic note."""
        return replace(self, resolved=False, note=note)

    def __str__(self) -> str:
        """Format as Source.accessor -[kind]-> Target."""
        return f"{self.source}.{self.accessor} -[{self.kind.value}]-> {self.target}"
