"""Layer classifier: tags call sites with their originating layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.application.analyzers._resolution import operation_calls
from modelcheck.domain.model.enums import Layer
from modelcheck.domain.model.tagged_call import TaggedCall

if TYPE_CHECKING:
    from collections.abc import Collection

    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.call_site import CallSite
    from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
    from modelcheck.domain.model.method_index import MethodIndex


class LayerClassifier:
    """Tags every call site with the layer of the code it originates in.

    Class methods take the layer declared on their ClassEntry; template
    code outside any class body is always VIEW. Query-construction names
    in the chain are recorded together with the class whose collection
    the query runs against.
    """

    def __init__(
        self,
        graph: AssociationGraph,
        methods: MethodIndex,
        query_operations: Collection[str],
    ) -> None:
        """Initialize classifier.

        Args:
            graph: Fully built association graph
            methods: Per-class method index
            query_operations: Names that construct a query
        """
        self._graph = graph
        self._methods = methods
        self._query_operations = frozenset(query_operations)

    def classify_class(self, entry: ClassEntry) -> tuple[TaggedCall, ...]:
        """Tag all call sites of a class, in method then body order."""
        return tuple(
            self.tag(
                call_site,
                subject=entry.qualified_name,
                method=method.name,
                layer=entry.layer,
                owner=entry.qualified_name,
            )
            for method in entry.methods
            for call_site in method.call_sites
        )

    def classify_template(self, template: TemplateEntry) -> tuple[TaggedCall, ...]:
        """Tag all call sites of a template as VIEW."""
        return tuple(
            self.tag(call_site, subject=template.name, method=None, layer=Layer.VIEW, owner=None)
            for call_site in template.call_sites
        )

    def tag(
        self,
        call_site: CallSite,
        *,
        subject: str,
        method: str | None,
        layer: Layer,
        owner: str | None,
    ) -> TaggedCall:
        """Tag one call site.

        Args:
            call_site: Call site to tag
            subject: Class or template the call site occurs in
            method: Enclosing method, None in templates
            layer: Layer of the enclosing code
            owner: Class `self` refers to, None in templates

        Returns:
            TaggedCall with query operations and query target (if any)
        """
        calls = operation_calls(
            self._graph, self._methods, call_site, owner, self._query_operations
        )
        if not calls:
            return TaggedCall(subject=subject, method=method, layer=layer, call_site=call_site)

        return TaggedCall(
            subject=subject,
            method=method,
            layer=layer,
            call_site=call_site,
            query_operations=tuple(call_site.chain[index] for index, _ in calls),
            query_target=calls[0][1],
        )
