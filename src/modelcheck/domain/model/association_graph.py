"""Immutable association multigraph with O(1) accessor lookups."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from modelcheck.domain.model.association import AssociationEdge

EXTERNAL_NODE = "<external>"
"""Sentinel node standing in for every class outside the analyzed set."""


@dataclass(frozen=True, slots=True)
class AssociationGraph:
    """Directed multigraph of declared associations, keyed by class identity.

    Every declared association is one edge; associations declared on both
    ends are separate edges. Unresolved edges point at EXTERNAL_NODE.

    Invariants (FAIL-FIRST):
    - every edge source is a node
    - resolved edges target a node, unresolved edges target EXTERNAL_NODE
    - outgoing/by_accessor only index edges of `edges`

    Attributes:
        nodes: Class names plus EXTERNAL_NODE
        edges: All edges in declaration order
        outgoing: Class -> edges declared on it
        incoming: Node -> edges pointing at it
        by_accessor: (class, accessor) -> first edge declared with it
    """

    nodes: frozenset[str]
    edges: tuple[AssociationEdge, ...]
    outgoing: Mapping[str, tuple[AssociationEdge, ...]]
    incoming: Mapping[str, tuple[AssociationEdge, ...]]
    by_accessor: Mapping[tuple[str, str], AssociationEdge]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if EXTERNAL_NODE not in self.nodes:
            raise ValueError(f"nodes must contain {EXTERNAL_NODE!r}")

        for edge in self.edges:
            if edge.source not in self.nodes:
                raise ValueError(f"edge source {edge.source!r} not in nodes")
            if edge.resolved and edge.target not in self.nodes:
                raise ValueError(f"resolved edge target {edge.target!r} not in nodes")

        known = set(self.edges)
        for node, declared in self.outgoing.items():
            for edge in declared:
                if edge not in known or edge.source != node:
                    raise ValueError(f"outgoing[{node!r}] contains foreign edge {edge}")
        for (source, accessor), edge in self.by_accessor.items():
            if edge not in known or edge.source != source or edge.accessor != accessor:
                raise ValueError(f"by_accessor[{source!r}, {accessor!r}] inconsistent")

    def target_node(self, edge: AssociationEdge) -> str:
        """Node an edge points at (EXTERNAL_NODE for unresolved edges)."""
        return edge.target if edge.resolved else EXTERNAL_NODE

    def edge(self, source: str, accessor: str) -> AssociationEdge | None:
        """Association declared on `source` under `accessor`. O(1)."""
        return self.by_accessor.get((source, accessor))

    def edges_from(self, source: str) -> tuple[AssociationEdge, ...]:
        """Edges declared on a class, declaration order."""
        return self.outgoing.get(source, ())

    def edges_to(self, node: str) -> tuple[AssociationEdge, ...]:
        """Edges pointing at a node."""
        return self.incoming.get(node, ())

    def has_class(self, name: str) -> bool:
        """True if `name` is an analyzed class (not the sentinel)."""
        return name != EXTERNAL_NODE and name in self.nodes

    @property
    def unresolved_edges(self) -> tuple[AssociationEdge, ...]:
        """Edges whose target is outside the analyzed set."""
        return tuple(edge for edge in self.edges if not edge.resolved)

    @property
    def edge_count(self) -> int:
        """Total number of edges."""
        return len(self.edges)

    @classmethod
    def from_edges(
        cls,
        edges: tuple[AssociationEdge, ...],
        class_names: frozenset[str],
    ) -> AssociationGraph:
        """Index already-resolved edges.

        Args:
            edges: Edges with `resolved` already decided
            class_names: Names of all analyzed classes

        Returns:
            AssociationGraph over class_names + EXTERNAL_NODE

        Time: O(E)
        """
        outgoing: dict[str, list[AssociationEdge]] = {}
        incoming: dict[str, list[AssociationEdge]] = {}
        by_accessor: dict[tuple[str, str], AssociationEdge] = {}
        nodes = set(class_names)
        nodes.add(EXTERNAL_NODE)

        for edge in edges:
            nodes.add(edge.source)
            outgoing.setdefault(edge.source, []).append(edge)
            target = edge.target if edge.resolved else EXTERNAL_NODE
            incoming.setdefault(target, []).append(edge)
            by_accessor.setdefault((edge.source, edge.accessor), edge)

        return cls(
            nodes=frozenset(nodes),
            edges=tuple(edges),
            outgoing=MappingProxyType({k: tuple(v) for k, v in outgoing.items()}),
            incoming=MappingProxyType({k: tuple(v) for k, v in incoming.items()}),
            by_accessor=MappingProxyType(by_accessor),
        )

    @classmethod
    def empty(cls) -> AssociationGraph:
        """Create graph with only the sentinel node."""
        return cls.from_edges((), frozenset())
