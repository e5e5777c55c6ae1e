"""Responsibility taxonomy: method-name patterns to categories."""

from __future__ import annotations

import fnmatch
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from modelcheck.domain.exceptions import ConfigurationError

DEFAULT_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("finder", ("find*", "search*", "lookup*", "by_*", "*_by_*", "where_*", "scope_*")),
    ("conversion", ("to_*", "as_*", "serialize*", "format_*", "export_*", "*_as_json")),
    ("callback", ("before_*", "after_*", "around_*")),
    ("validation", ("validate*", "valid_*", "*_valid", "check_*", "ensure_*")),
)


@dataclass(frozen=True, slots=True)
class ResponsibilityTaxonomy:
    """Ordered mapping of category -> glob patterns over method names.

    Categories are tried in order; the first matching pattern wins, so a
    name always maps to at most one category.

    Attributes:
        categories: (category, patterns) pairs in priority order
    """

    categories: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_CATEGORIES

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        seen: set[str] = set()
        for category, patterns in self.categories:
            key = f"taxonomy.{category}"
            if not isinstance(category, str) or not category:
                raise ConfigurationError(key="taxonomy", reason="category name must be non-empty")
            if category in seen:
                raise ConfigurationError(key=key, reason="category declared twice")
            seen.add(category)
            if isinstance(patterns, str) or not patterns:
                raise ConfigurationError(key=key, reason="expected a non-empty list of patterns")
            for pattern in patterns:
                if not isinstance(pattern, str) or not pattern:
                    raise ConfigurationError(key=key, reason=f"invalid pattern {pattern!r}")

    @property
    def names(self) -> tuple[str, ...]:
        """Category names in priority order."""
        return tuple(category for category, _ in self.categories)

    def has(self, category: str) -> bool:
        """True if the category is configured."""
        return category in self.names

    def category_of(self, method_name: str) -> str | None:
        """Category a method name falls into, None if no pattern matches."""
        for category, patterns in self.categories:
            if any(fnmatch.fnmatchcase(method_name, pattern) for pattern in patterns):
                return category
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Sequence[str]]) -> ResponsibilityTaxonomy:
        """Build from {category: [patterns]}, keeping mapping order.

        Raises:
            ConfigurationError: On empty categories or malformed patterns
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(key="taxonomy", reason="expected a table of categories")
        if not data:
            raise ConfigurationError(key="taxonomy", reason="at least one category is required")
        categories: list[tuple[str, tuple[str, ...]]] = []
        for category, patterns in data.items():
            if isinstance(patterns, str) or not isinstance(patterns, Sequence):
                raise ConfigurationError(
                    key=f"taxonomy.{category}", reason="expected a list of patterns"
                )
            categories.append((category, tuple(patterns)))
        return cls(categories=tuple(categories))
