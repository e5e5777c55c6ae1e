"""Class entity and free-standing template entity."""

from __future__ import annotations

from dataclasses import dataclass

from modelcheck.domain.model.association import AssociationEdge
from modelcheck.domain.model.call_site import CallSite
from modelcheck.domain.model.enums import Layer
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.method_entry import MethodEntry


@dataclass(frozen=True, slots=True)
class ClassEntry:
    """Class definition with its declared associations and methods.

    Immutable for the duration of one analysis pass. Cross-entity
    invariants (method owners, association sources) are NOT enforced here:
    a snapshot may be malformed for one class without invalidating the
    others, see application.analyzers.integrity.

    Attributes:
        qualified_name: Class identity (e.g. "Billing::Invoice")
        associations: Declared association edges, source = this class
        methods: Methods in declaration order
        layer: MODEL/CONTROLLER/VIEW/OTHER
        location: Source location of the class definition
        included_modules: Names of mixed-in modules
    """

    qualified_name: str
    associations: tuple[AssociationEdge, ...]
    methods: tuple[MethodEntry, ...]
    layer: Layer
    location: Location
    included_modules: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.qualified_name:
            raise ValueError("qualified_name must not be empty")

    @property
    def name(self) -> str:
        """Short class name (last segment of the qualified name)."""
        for separator in ("::", "."):
            if separator in self.qualified_name:
                return self.qualified_name.rsplit(separator, 1)[1]
        return self.qualified_name

    @property
    def method_names(self) -> tuple[str, ...]:
        """Method names in declaration order."""
        return tuple(method.name for method in self.methods)

    def method(self, name: str) -> MethodEntry | None:
        """First method declared with this name, None if absent."""
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def association(self, accessor: str) -> AssociationEdge | None:
        """First association declared with this accessor, None if absent."""
        for edge in self.associations:
            if edge.accessor == accessor:
                return edge
        return None


@dataclass(frozen=True, slots=True)
class TemplateEntry:
    """Free-standing view/template code outside any class body.

    Call sites found here are always tagged with the VIEW layer.

    Attributes:
        name: Template identity (e.g. "invoices/show")
        location: Source location of the template
        call_sites: Receiver chains in source order
    """

    name: str
    location: Location
    call_sites: tuple[CallSite, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("template name must not be empty")
