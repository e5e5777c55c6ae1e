"""Responsibility cluster value object."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResponsibilityCluster:
    """Connected component of a class's method-affinity graph.

    Attributes:
        subject: Class the methods belong to
        methods: Member method names, declaration order
        category: Dominant configured category, None if no member matches
        categories: Every category matched by at least one member
    """

    subject: str
    methods: tuple[str, ...]
    category: str | None
    categories: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.methods:
            raise ValueError("cluster must contain at least one method")
        if self.category is not None and self.category not in self.categories:
            raise ValueError(f"category {self.category!r} not among {sorted(self.categories)}")
        if self.category is None and self.categories:
            raise ValueError("categorized members require a dominant category")

    @property
    def size(self) -> int:
        """Number of member methods."""
        return len(self.methods)


def non_trivial_clusters(
    clusters: Sequence[ResponsibilityCluster],
) -> tuple[ResponsibilityCluster, ...]:
    """Clusters that count towards the multiple-responsibility rule.

    A cluster is non-trivial when it has a category and either holds at
    least two methods, or is a singleton whose category differs from the
    category of every other cluster. Uncategorized clusters never count.

    Args:
        clusters: All clusters of one class

    Returns:
        Non-trivial clusters in input order
    """
    result: list[ResponsibilityCluster] = []
    for index, cluster in enumerate(clusters):
        if cluster.category is None:
            continue
        if cluster.size >= 2:
            result.append(cluster)
            continue
        others = (other for pos, other in enumerate(clusters) if pos != index)
        if all(other.category != cluster.category for other in others):
            result.append(cluster)
    return tuple(result)
