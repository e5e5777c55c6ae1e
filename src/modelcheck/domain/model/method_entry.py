"""Method entity."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.call_site import CallSite


@dataclass(frozen=True, slots=True)
class DelegationTarget:
    """Where a delegation (forwarding) method forwards to.

    `delegate :street, to: :address` on Customer becomes
    DelegationTarget(association="address", member="street").

    Attributes:
        association: Accessor of the association on the owning class
        member: Member forwarded to on the associated class
    """

    association: str
    member: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.association:
            raise ValueError("association must not be empty")
        if not self.member:
            raise ValueError("member must not be empty")


@dataclass(frozen=True, slots=True)
class MethodEntry:
    """Method definition as handed over by the external parser.

    `owner` is optional on purpose: a method without owning class is a
    malformed snapshot and must be reported per class, not rejected while
    the snapshot is being built.

    Attributes:
        name: Method name
        owner: Qualified name of the owning class
        call_sites: Receiver chains in body order
        line: Definition line (1-based)
        is_class_level: Class-level method (scope, finder)
        is_callback: Lifecycle callback (before_save, after_create, ...)
        wraps_transaction: Body is demarcated as one transaction
        delegates_to: Forwarding target for wrapper/delegation methods
        included_from: Module the method was mixed in from, if any
        invoked_methods: Sibling methods this method calls
    """

    name: str
    owner: str | None
    call_sites: tuple[CallSite, ...] = ()
    line: int = 1
    is_class_level: bool = False
    is_callback: bool = False
    wraps_transaction: bool = False
    delegates_to: DelegationTarget | None = None
    included_from: str | None = None
    invoked_methods: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("method name must not be empty")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def is_delegation(self) -> bool:
        """True if the method only forwards to an associated class."""
        return self.delegates_to is not None

    @property
    def fqn(self) -> str:
        """Owner.method, or just the name when the owner is missing."""
        if self.owner is None:
            return self.name
        return f"{self.owner}.{self.name}"
