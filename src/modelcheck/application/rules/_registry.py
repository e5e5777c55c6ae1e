"""Rule registry.

Central registry of all rules with factory functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.application.rules._base import BaseRule
from modelcheck.application.rules.callback_side_effects import CallbackSideEffectsRule
from modelcheck.application.rules.fat_model import FatModelRule
from modelcheck.application.rules.law_of_demeter import LawOfDemeterRule
from modelcheck.application.rules.query_placement import NeighborQueryRule, QueryOutsideModelRule
from modelcheck.application.rules.transaction_orchestration import TransactionOrchestrationRule
from modelcheck.domain.exceptions import UnknownRuleError
from modelcheck.domain.ports.rule import RuleProtocol

if TYPE_CHECKING:
    from modelcheck.domain.model.configuration import AnalysisConfig


# Registry - tuple for immutability
# Order matters: rules are evaluated in this order
_ALL_RULES: tuple[type[BaseRule], ...] = (
    LawOfDemeterRule,
    QueryOutsideModelRule,
    NeighborQueryRule,
    FatModelRule,
    TransactionOrchestrationRule,
    CallbackSideEffectsRule,
)


def rule_ids() -> tuple[str, ...]:
    """Identifiers of every registered rule, in evaluation order."""
    return tuple(rule_cls.rule_id for rule_cls in _ALL_RULES)


def check_rule_ids(config: AnalysisConfig) -> None:
    """Reject configuration that names rules which do not exist.

    Args:
        config: User configuration

    Raises:
        UnknownRuleError: For the first unknown rule id, naming its key
    """
    known = rule_ids()
    for key, rule_id in config.referenced_rule_ids():
        if rule_id not in known:
            raise UnknownRuleError(key=key, rule_id=rule_id, known=known)


def default_rules() -> tuple[RuleProtocol, ...]:
    """Instantiate every rule with default thresholds and severities."""
    return tuple(rule_cls() for rule_cls in _ALL_RULES)


def rules_from_config(config: AnalysisConfig) -> tuple[RuleProtocol, ...]:
    """Instantiate rules based on config.

    Rules are created using their from_config() factory method.
    If from_config() returns None, the rule is disabled.

    Args:
        config: User configuration

    Returns:
        Tuple of enabled rules

    Raises:
        UnknownRuleError: If config references an unregistered rule
    """
    check_rule_ids(config)

    rules: list[RuleProtocol] = []
    for rule_cls in _ALL_RULES:
        rule = rule_cls.from_config(config)
        if rule is not None:
            rules.append(rule)

    return tuple(rules)
