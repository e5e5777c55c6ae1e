"""Association graph builder from a structural model snapshot."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from modelcheck.domain.model.association_graph import AssociationGraph
from modelcheck.domain.model.method_index import MethodIndex

if TYPE_CHECKING:
    from modelcheck.domain.model.association import AssociationEdge
    from modelcheck.domain.model.structural_model import StructuralModel

logger = logging.getLogger(__name__)


class AssociationGraphBuilder:
    """Builds AssociationGraph and MethodIndex from a StructuralModel.

    Each declared association becomes one edge. Targets outside the
    analyzed set are kept as unresolved edges to the external sentinel,
    with a diagnostic note, never dropped and never raised.

    Stateless - no state between build() calls.
    """

    def build(self, model: StructuralModel) -> AssociationGraph:
        """Build the association graph.

        Only the first class declared under a name contributes edges, and
        only edges whose source is that class: anything else makes the
        class malformed and is reported by the integrity check.

        Args:
            model: Structural model snapshot

        Returns:
            AssociationGraph over every declared class

        Raises:
            TypeError: If model is None (FAIL-FIRST)
        """
        if model is None:
            raise TypeError("model must not be None")

        class_names = model.class_names
        seen: set[str] = set()
        edges: list[AssociationEdge] = []

        for entry in model.classes:
            if entry.qualified_name in seen:
                continue
            seen.add(entry.qualified_name)

            for edge in entry.associations:
                if edge.source != entry.qualified_name:
                    continue
                edges.append(self._resolve(edge, class_names))

        graph = AssociationGraph.from_edges(tuple(edges), class_names)
        logger.debug(
            "association graph: %d classes, %d edges (%d unresolved)",
            len(class_names),
            graph.edge_count,
            len(graph.unresolved_edges),
        )
        return graph

    def build_index(self, model: StructuralModel) -> MethodIndex:
        """Build the per-class method index.

        Args:
            model: Structural model snapshot

        Returns:
            MethodIndex keyed by class name
        """
        if model is None:
            raise TypeError("model must not be None")
        return MethodIndex.from_model(model)

    def _resolve(self, edge: AssociationEdge, class_names: frozenset[str]) -> AssociationEdge:
        """Mark an edge unresolved if its target is not analyzed.

        Args:
            edge: Declared edge
            class_names: Names of all analyzed classes

        Returns:
            The edge itself, or an unresolved copy with a diagnostic note
        """
        if edge.target in class_names:
            return edge if edge.resolved else replace(edge, resolved=True, note=None)

        logger.debug("unresolved association %s", edge)
        return edge.as_unresolved(
            f"target {edge.target!r} is not part of the analyzed model"
        )
