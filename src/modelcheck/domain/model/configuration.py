"""Analysis configuration.

User-provided configuration that toggles rules and tunes thresholds.
None = default behaviour, value = override. Validated FAIL-FIRST: an invalid
entry raises ConfigurationError before any analysis starts.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from modelcheck.domain.exceptions import ConfigurationError
from modelcheck.domain.model.enums import Severity
from modelcheck.domain.model.taxonomy import ResponsibilityTaxonomy

DEFAULT_QUERY_OPERATIONS: frozenset[str] = frozenset(
    {
        "where",
        "order",
        "order_by",
        "reorder",
        "filter",
        "filter_by",
        "exclude",
        "limit",
        "offset",
        "group",
        "group_by",
        "having",
        "joins",
        "includes",
        "distinct",
    }
)

DEFAULT_MUTATION_OPERATIONS: frozenset[str] = frozenset(
    {
        "create",
        "create!",
        "save",
        "save!",
        "update",
        "update!",
        "update_all",
        "update_attribute",
        "update_attributes",
        "update_column",
        "destroy",
        "destroy!",
        "destroy_all",
        "delete",
        "delete_all",
        "insert",
        "insert_all",
        "upsert",
        "persist",
        "increment!",
        "decrement!",
        "toggle!",
        "touch",
    }
)

_KNOWN_KEYS: tuple[str, ...] = (
    "enabled_rules",
    "disabled_rules",
    "min_demeter_depth",
    "taxonomy",
    "min_responsibility_categories",
    "callback_category",
    "severity",
    "query_operations",
    "mutation_operations",
    "transaction_counts_own_class",
    "min_transaction_classes",
    "max_workers",
)


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Configuration DTO for one analysis run.

    Attributes:
        enabled_rules: Rule ids to run. None = every registered rule.
        disabled_rules: Rule ids removed from the enabled set.
        min_demeter_depth: Cross-class hops from which a chain is flagged.
        taxonomy: Method-name patterns -> responsibility category.
        min_responsibility_categories: Distinct categories of non-trivial
            clusters from which a class is flagged.
        callback_category: Category assigned to methods flagged is-callback.
            None = callbacks are categorized by name only.
        severity_overrides: Rule id -> severity replacing the rule default.
        query_operations: Names that construct a query (order, where, ...).
        mutation_operations: Names that mutate persisted state.
        transaction_counts_own_class: Count the declaring class among the
            classes a transaction mutates.
        min_transaction_classes: Distinct mutated classes from which a
            transactional method is flagged.
        max_workers: Worker threads for per-class analysis. None = executor
            default, 1 = sequential.
    """

    enabled_rules: frozenset[str] | None = None
    disabled_rules: frozenset[str] = frozenset()
    min_demeter_depth: int = 2
    taxonomy: ResponsibilityTaxonomy = field(default_factory=ResponsibilityTaxonomy)
    min_responsibility_categories: int = 2
    callback_category: str | None = "callback"
    severity_overrides: Mapping[str, Severity] = field(
        default_factory=lambda: MappingProxyType({})
    )
    query_operations: frozenset[str] = DEFAULT_QUERY_OPERATIONS
    mutation_operations: frozenset[str] = DEFAULT_MUTATION_OPERATIONS
    transaction_counts_own_class: bool = False
    min_transaction_classes: int = 2
    max_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.min_demeter_depth < 1:
            raise ConfigurationError(
                key="min_demeter_depth", reason=f"must be >= 1, got {self.min_demeter_depth}"
            )

        if self.min_responsibility_categories < 2:
            raise ConfigurationError(
                key="min_responsibility_categories",
                reason=f"must be >= 2, got {self.min_responsibility_categories}",
            )

        if self.min_transaction_classes < 1:
            raise ConfigurationError(
                key="min_transaction_classes",
                reason=f"must be >= 1, got {self.min_transaction_classes}",
            )

        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError(
                key="max_workers", reason=f"must be >= 1, got {self.max_workers}"
            )

        if self.callback_category is not None and not self.taxonomy.has(self.callback_category):
            raise ConfigurationError(
                key="callback_category",
                reason=f"{self.callback_category!r} is not a taxonomy category",
            )

        for rule_id, severity in self.severity_overrides.items():
            if not isinstance(severity, Severity):
                raise ConfigurationError(
                    key=f"severity.{rule_id}", reason=f"expected Severity, got {severity!r}"
                )

        if not self.query_operations:
            raise ConfigurationError(key="query_operations", reason="must not be empty")
        if not self.mutation_operations:
            raise ConfigurationError(key="mutation_operations", reason="must not be empty")

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Check if a rule id survives enabled/disabled selection."""
        if rule_id in self.disabled_rules:
            return False
        return self.enabled_rules is None or rule_id in self.enabled_rules

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        """Severity override for a rule, or its default."""
        return self.severity_overrides.get(rule_id, default)

    def referenced_rule_ids(self) -> tuple[tuple[str, str], ...]:
        """(config key, rule id) for every rule id the config mentions."""
        refs: list[tuple[str, str]] = []
        for rule_id in sorted(self.enabled_rules or ()):
            refs.append(("enabled_rules", rule_id))
        for rule_id in sorted(self.disabled_rules):
            refs.append(("disabled_rules", rule_id))
        for rule_id in sorted(self.severity_overrides):
            refs.append((f"severity.{rule_id}", rule_id))
        return tuple(refs)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> AnalysisConfig:
        """Build config from a plain mapping (e.g. a parsed TOML table).

        Keys mirror the field names, except `severity` which maps rule ids
        to "error" / "warning" / "info".

        Args:
            data: Already-parsed configuration

        Returns:
            Validated AnalysisConfig

        Raises:
            ConfigurationError: Unknown key or malformed value
        """
        for key in data:
            if key not in _KNOWN_KEYS:
                raise ConfigurationError(key=str(key), reason="unknown configuration key")

        kwargs: dict[str, object] = {}

        if "enabled_rules" in data:
            kwargs["enabled_rules"] = _names(data, "enabled_rules")
        if "disabled_rules" in data:
            kwargs["disabled_rules"] = _names(data, "disabled_rules")
        if "query_operations" in data:
            kwargs["query_operations"] = _names(data, "query_operations")
        if "mutation_operations" in data:
            kwargs["mutation_operations"] = _names(data, "mutation_operations")

        for key in ("min_demeter_depth", "min_responsibility_categories", "min_transaction_classes"):
            if key in data:
                kwargs[key] = _integer(data, key)
        if "max_workers" in data:
            kwargs["max_workers"] = None if data["max_workers"] is None else _integer(data, "max_workers")

        if "transaction_counts_own_class" in data:
            value = data["transaction_counts_own_class"]
            if not isinstance(value, bool):
                raise ConfigurationError(
                    key="transaction_counts_own_class", reason=f"expected a boolean, got {value!r}"
                )
            kwargs["transaction_counts_own_class"] = value

        if "callback_category" in data:
            value = data["callback_category"]
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    key="callback_category", reason=f"expected a string, got {value!r}"
                )
            kwargs["callback_category"] = value

        if "taxonomy" in data:
            taxonomy = data["taxonomy"]
            if not isinstance(taxonomy, Mapping):
                raise ConfigurationError(key="taxonomy", reason="expected a table of categories")
            kwargs["taxonomy"] = ResponsibilityTaxonomy.from_mapping(taxonomy)

        if "severity" in data:
            kwargs["severity_overrides"] = _severities(data["severity"])

        return cls(**kwargs)  # type: ignore[arg-type]


def _names(data: Mapping[str, object], key: str) -> frozenset[str]:
    """Read a list of non-empty strings."""
    value = data[key]
    if isinstance(value, str) or not isinstance(value, (Sequence, frozenset, set)):
        raise ConfigurationError(key=key, reason=f"expected a list of names, got {value!r}")
    for item in value:
        if not isinstance(item, str) or not item:
            raise ConfigurationError(key=key, reason=f"invalid name {item!r}")
    return frozenset(value)


def _integer(data: Mapping[str, object], key: str) -> int:
    """Read an integer (booleans rejected)."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(key=key, reason=f"expected an integer, got {value!r}")
    return value


def _severities(value: object) -> Mapping[str, Severity]:
    """Read rule id -> severity name."""
    if not isinstance(value, Mapping):
        raise ConfigurationError(key="severity", reason="expected a table of rule ids")
    overrides: dict[str, Severity] = {}
    for rule_id, name in value.items():
        key = f"severity.{rule_id}"
        if not isinstance(name, str):
            raise ConfigurationError(key=key, reason=f"expected a severity name, got {name!r}")
        try:
            overrides[rule_id] = Severity[name.upper()]
        except KeyError:
            choices = ", ".join(s.name.lower() for s in Severity)
            raise ConfigurationError(
                key=key, reason=f"unknown severity {name!r} (expected one of: {choices})"
            ) from None
    return MappingProxyType(overrides)
