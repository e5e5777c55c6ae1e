"""Read-only input shared by every rule of one run."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from modelcheck.domain.model.association_graph import AssociationGraph
from modelcheck.domain.model.class_analysis import ClassAnalysis
from modelcheck.domain.model.configuration import AnalysisConfig
from modelcheck.domain.model.method_index import MethodIndex
from modelcheck.domain.model.structural_model import StructuralModel


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Snapshot, graph and analyzer outputs handed to each rule.

    Every field is immutable, so rules cannot influence each other.

    Attributes:
        model: Structural model snapshot
        graph: Association graph of the snapshot
        methods: Per-class method index
        analyses: Unit name -> analyzer outputs (skipped classes absent)
        config: Run configuration
    """

    model: StructuralModel
    graph: AssociationGraph
    methods: MethodIndex
    analyses: Mapping[str, ClassAnalysis]
    config: AnalysisConfig

    def iter_analyses(self) -> Iterator[ClassAnalysis]:
        """Analyses sorted by unit name."""
        for name in sorted(self.analyses):
            yield self.analyses[name]
