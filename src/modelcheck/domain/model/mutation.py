"""Mutation and transaction scope value objects."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.call_site import CallSite


@dataclass(frozen=True, slots=True)
class MutationCall:
    """Persistence-mutating call (create/update/save-style).

    Attributes:
        subject: Declaring class
        method: Method issuing the call
        operation: Mutating operation name
        target_class: Class whose persisted state is mutated
        call_site: Original call site
    """

    subject: str
    method: str
    operation: str
    target_class: str
    call_site: CallSite

    @property
    def is_own(self) -> bool:
        """True if the declaring class mutates itself."""
        return self.target_class == self.subject


@dataclass(frozen=True, slots=True)
class TransactionScope:
    """Transactional method and the classes it mutates.

    Attributes:
        subject: Declaring class
        method: Method flagged wraps-transaction
        line: Method definition line
        mutations: Mutating calls in body order
        counted_classes: Distinct mutated classes counted against the
            threshold, sorted
    """

    subject: str
    method: str
    line: int
    mutations: tuple[MutationCall, ...]
    counted_classes: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if list(self.counted_classes) != sorted(set(self.counted_classes)):
            raise ValueError("counted_classes must be sorted and unique")
