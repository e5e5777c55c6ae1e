"""Association graph construction."""

from modelcheck.application.graph.builder import AssociationGraphBuilder

__all__ = [
    "AssociationGraphBuilder",
]
