"""Per-unit analysis: runs every analyzer over one class or template."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.application.analyzers.call_chain import CallChainAnalyzer
from modelcheck.application.analyzers.integrity import (
    ensure_template_well_formed,
    ensure_well_formed,
)
from modelcheck.application.analyzers.layer_classifier import LayerClassifier
from modelcheck.application.analyzers.responsibility import ResponsibilityClusterer
from modelcheck.application.analyzers.transaction_scope import TransactionScopeDetector
from modelcheck.domain.model.class_analysis import ClassAnalysis
from modelcheck.domain.model.enums import Layer

if TYPE_CHECKING:
    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
    from modelcheck.domain.model.configuration import AnalysisConfig
    from modelcheck.domain.model.method_index import MethodIndex


class UnitAnalyzer:
    """Runs the four analyzers over one unit of work.

    A unit only reads the shared, already-built graph and index plus its
    own entry, so units can be analyzed in any order or in parallel.
    """

    def __init__(
        self,
        graph: AssociationGraph,
        methods: MethodIndex,
        config: AnalysisConfig,
    ) -> None:
        """Initialize analyzers for one run.

        Args:
            graph: Fully built association graph (read-only)
            methods: Per-class method index (read-only)
            config: Run configuration
        """
        self._chains = CallChainAnalyzer(graph, methods)
        self._layers = LayerClassifier(graph, methods, config.query_operations)
        self._clusters = ResponsibilityClusterer(
            graph, config.taxonomy, config.callback_category
        )
        self._transactions = TransactionScopeDetector(
            graph,
            methods,
            config.mutation_operations,
            counts_own_class=config.transaction_counts_own_class,
        )

    def analyze_class(self, entry: ClassEntry, *, duplicate: bool = False) -> ClassAnalysis:
        """Analyze one class.

        Args:
            entry: Class to analyze
            duplicate: True if an earlier class has the same name

        Returns:
            ClassAnalysis with every analyzer output

        Raises:
            MalformedInputError: If the entry violates snapshot invariants
        """
        ensure_well_formed(entry, duplicate=duplicate)

        mutations = self._transactions.mutations(entry)
        return ClassAnalysis(
            subject=entry.qualified_name,
            layer=entry.layer,
            location=entry.location,
            chains=self._chains.analyze_class(entry),
            tagged_calls=self._layers.classify_class(entry),
            clusters=self._clusters.cluster(entry),
            mutations=mutations,
            transactions=self._transactions.scopes(entry, mutations),
            method_count=len(entry.methods),
            call_site_count=sum(len(m.call_sites) for m in entry.methods),
        )

    def analyze_template(
        self, template: TemplateEntry, *, duplicate: bool = False
    ) -> ClassAnalysis:
        """Analyze one template (VIEW code outside any class body).

        Raises:
            MalformedInputError: If the template is declared twice
        """
        ensure_template_well_formed(template, duplicate=duplicate)

        return ClassAnalysis(
            subject=template.name,
            layer=Layer.VIEW,
            location=template.location,
            is_template=True,
            chains=self._chains.analyze_template(template),
            tagged_calls=self._layers.classify_template(template),
            call_site_count=len(template.call_sites),
        )
