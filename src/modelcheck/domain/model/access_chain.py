"""Access chain value objects produced by the call-chain analyzer."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.association import AssociationEdge
from modelcheck.domain.model.call_site import CallSite


@dataclass(frozen=True, slots=True)
class ChainHop:
    """One association edge traversed by a call chain.

    Attributes:
        edge: Traversed association
        to_node: Node reached (EXTERNAL_NODE for unresolved edges)
        counted: False for same-class hops (self references)
    """

    edge: AssociationEdge
    to_node: str
    counted: bool


@dataclass(frozen=True, slots=True)
class AccessChain:
    """Measured receiver chain.

    Attributes:
        subject: Class (or template) the chain occurs in
        method: Method the chain occurs in, None inside templates
        call_site: Original call site
        start_class: Class the receiver root resolves to
        hops: Traversed edges in order
        delegations: Delegation methods that ended counting ("Class.method")
        terminal_is_method: True if the last walked name is a method
    """

    subject: str
    method: str | None
    call_site: CallSite
    start_class: str
    hops: tuple[ChainHop, ...]
    delegations: tuple[str, ...] = ()
    terminal_is_method: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.subject:
            raise ValueError("subject must not be empty")
        if not self.start_class:
            raise ValueError("start_class must not be empty")

    @property
    def depth(self) -> int:
        """Number of distinct-class hops."""
        return sum(1 for hop in self.hops if hop.counted)

    @property
    def path(self) -> tuple[str, ...]:
        """Classes visited, starting class first."""
        return (self.start_class, *(hop.to_node for hop in self.hops))

    @property
    def accessors(self) -> tuple[str, ...]:
        """Association accessors traversed, in order."""
        return tuple(hop.edge.accessor for hop in self.hops)

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity of a distinct chain: same method, same expression."""
        return (self.subject, self.method or "", self.call_site.expression)
