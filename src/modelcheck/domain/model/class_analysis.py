"""Per-unit analyzer output bundle."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.access_chain import AccessChain
from modelcheck.domain.model.cluster import ResponsibilityCluster
from modelcheck.domain.model.enums import Layer
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.mutation import MutationCall, TransactionScope
from modelcheck.domain.model.tagged_call import TaggedCall


@dataclass(frozen=True, slots=True)
class ClassAnalysis:
    """Everything the analyzers computed for one class or template.

    Immutable: rules only read it, so any subset of rules sees exactly the
    same input.

    Attributes:
        subject: Class qualified name or template name
        layer: Layer of the unit (templates are always VIEW)
        location: Source location of the unit
        is_template: True for free-standing template code
        chains: Measured receiver chains
        tagged_calls: Layer-tagged call sites
        clusters: Responsibility clusters (empty for templates)
        mutations: Mutating calls (empty for templates)
        transactions: Transaction scopes (empty for templates)
        method_count: Methods analyzed
        call_site_count: Call sites analyzed
    """

    subject: str
    layer: Layer
    location: Location
    is_template: bool = False
    chains: tuple[AccessChain, ...] = ()
    tagged_calls: tuple[TaggedCall, ...] = ()
    clusters: tuple[ResponsibilityCluster, ...] = ()
    mutations: tuple[MutationCall, ...] = ()
    transactions: tuple[TransactionScope, ...] = ()
    method_count: int = 0
    call_site_count: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.subject:
            raise ValueError("subject must not be empty")
        if self.is_template and self.layer is not Layer.VIEW:
            raise ValueError(f"templates are VIEW code, got {self.layer.name}")
        if self.method_count < 0:
            raise ValueError(f"method_count must be >= 0, got {self.method_count}")
        if self.call_site_count < 0:
            raise ValueError(f"call_site_count must be >= 0, got {self.call_site_count}")
