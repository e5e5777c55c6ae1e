"""Responsibility clusterer: connected components of method affinity."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from modelcheck.domain.model.cluster import ResponsibilityCluster
from modelcheck.domain.model.enums import ReceiverOrigin

if TYPE_CHECKING:
    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.class_entry import ClassEntry
    from modelcheck.domain.model.method_entry import MethodEntry
    from modelcheck.domain.model.taxonomy import ResponsibilityTaxonomy


class _DisjointSet:
    """Union-find over method names with path halving."""

    def __init__(self, items: tuple[str, ...]) -> None:
        self._parent = {item: item for item in items}

    def find(self, item: str) -> str:
        parent = self._parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: str, b: str) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a != root_b:
            self._parent[root_b] = root_a


class ResponsibilityClusterer:
    """Groups one class's methods into responsibility clusters.

    Two methods are linked when they:
    (a) share at least one call target (a class other than the owner,
        reached through an association, a typed parameter, an external
        receiver or a parser-resolved target),
    (b) fall into the same taxonomy category, or
    (c) are both invoked from a common third method.

    Clusters are the connected components of that graph. Methods mixed in
    from modules are members like any other method.
    """

    def __init__(
        self,
        graph: AssociationGraph,
        taxonomy: ResponsibilityTaxonomy,
        callback_category: str | None = None,
    ) -> None:
        """Initialize clusterer.

        Args:
            graph: Fully built association graph
            taxonomy: Method-name patterns -> category
            callback_category: Category forced onto is-callback methods
        """
        self._graph = graph
        self._taxonomy = taxonomy
        self._callback_category = callback_category

    def cluster(self, entry: ClassEntry) -> tuple[ResponsibilityCluster, ...]:
        """Compute clusters of a class.

        Args:
            entry: Class to cluster

        Returns:
            Clusters ordered by their first member's declaration position
        """
        methods = _unique_methods(entry)
        if not methods:
            return ()

        names = tuple(method.name for method in methods)
        position = {name: index for index, name in enumerate(names)}
        categories = {method.name: self.category_of(method) for method in methods}
        links = _DisjointSet(names)

        # (a) shared call targets
        by_target: dict[str, list[str]] = {}
        for method in methods:
            for target in sorted(self._call_targets(entry.qualified_name, method)):
                by_target.setdefault(target, []).append(method.name)
        for members in by_target.values():
            _link_all(links, members)

        # (b) shared category
        by_category: dict[str, list[str]] = {}
        for name in names:
            category = categories[name]
            if category is not None:
                by_category.setdefault(category, []).append(name)
        for members in by_category.values():
            _link_all(links, members)

        # (c) co-invoked from a common third method
        sibling_names = frozenset(names)
        for method in methods:
            invoked = [n for n in _invoked(method, sibling_names) if n != method.name]
            _link_all(links, invoked)

        components: dict[str, list[str]] = {}
        for name in names:
            components.setdefault(links.find(name), []).append(name)

        clusters = [
            self._make_cluster(entry.qualified_name, members, categories)
            for members in components.values()
        ]
        return tuple(sorted(clusters, key=lambda c: position[c.methods[0]]))

    def category_of(self, method: MethodEntry) -> str | None:
        """Category of a method: callback flag first, then its name."""
        if method.is_callback and self._callback_category is not None:
            return self._callback_category
        return self._taxonomy.category_of(method.name)

    def _call_targets(self, owner: str, method: MethodEntry) -> frozenset[str]:
        """Classes other than the owner that a method's call sites reach."""
        targets: set[str] = set()
        for call_site in method.call_sites:
            if call_site.target_class is not None:
                targets.add(call_site.target_class)
            match call_site.origin:
                case ReceiverOrigin.SELF:
                    edge = self._graph.edge(owner, call_site.chain[0])
                    if edge is not None:
                        targets.add(edge.target)
                case ReceiverOrigin.PARAMETER:
                    if call_site.root_class is not None:
                        targets.add(call_site.root_class)
                case ReceiverOrigin.EXTERNAL:
                    targets.add(call_site.root_class or call_site.root)
        targets.discard(owner)
        return frozenset(targets)

    def _make_cluster(
        self,
        subject: str,
        members: list[str],
        categories: dict[str, str | None],
    ) -> ResponsibilityCluster:
        """Build a cluster; dominant category by count, ties by taxonomy order."""
        counts = Counter(c for c in (categories[m] for m in members) if c is not None)
        dominant = None
        if counts:
            order = self._taxonomy.names
            dominant = min(
                counts,
                key=lambda c: (-counts[c], order.index(c) if c in order else len(order), c),
            )
        return ResponsibilityCluster(
            subject=subject,
            methods=tuple(members),
            category=dominant,
            categories=frozenset(counts),
        )


def _unique_methods(entry: ClassEntry) -> tuple[MethodEntry, ...]:
    """Methods of a class, first declaration of each name."""
    seen: set[str] = set()
    result: list[MethodEntry] = []
    for method in entry.methods:
        if method.name in seen:
            continue
        seen.add(method.name)
        result.append(method)
    return tuple(result)


def _invoked(method: MethodEntry, siblings: frozenset[str]) -> list[str]:
    """Sibling methods a method invokes, first-seen order."""
    invoked: list[str] = []
    candidates = list(method.invoked_methods)
    candidates.extend(
        call_site.chain[0]
        for call_site in method.call_sites
        if call_site.origin is ReceiverOrigin.SELF
    )
    for name in candidates:
        if name in siblings and name not in invoked:
            invoked.append(name)
    return invoked


def _link_all(links: _DisjointSet, members: list[str]) -> None:
    """Link every member to the first one."""
    for other in members[1:]:
        links.union(members[0], other)
