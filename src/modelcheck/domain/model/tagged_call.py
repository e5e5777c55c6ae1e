"""Layer-tagged call site."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.call_site import CallSite
from modelcheck.domain.model.enums import Layer


@dataclass(frozen=True, slots=True)
class TaggedCall:
    """Call site tagged with the layer of the code it originates from.

    Attributes:
        subject: Class (or template) name
        method: Originating method, None inside templates
        layer: Layer of the originating code
        call_site: Original call site
        query_operations: Query-construction names found in the chain
        query_target: Class whose collection the query runs against, if known
    """

    subject: str
    method: str | None
    layer: Layer
    call_site: CallSite
    query_operations: tuple[str, ...] = ()
    query_target: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.subject:
            raise ValueError("subject must not be empty")
        if self.query_target is not None and not self.query_operations:
            raise ValueError("query_target requires at least one query operation")

    @property
    def is_query(self) -> bool:
        """True if the call site constructs a query."""
        return bool(self.query_operations)
