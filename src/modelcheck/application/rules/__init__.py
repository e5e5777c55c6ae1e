"""Object-model rules.

Each rule reads the immutable analyzer outputs and emits violations.
"""

from modelcheck.application.rules._base import BaseRule
from modelcheck.application.rules._registry import (
    check_rule_ids,
    default_rules,
    rule_ids,
    rules_from_config,
)
from modelcheck.application.rules.callback_side_effects import CallbackSideEffectsRule
from modelcheck.application.rules.fat_model import FatModelRule
from modelcheck.application.rules.law_of_demeter import LawOfDemeterRule
from modelcheck.application.rules.query_placement import NeighborQueryRule, QueryOutsideModelRule
from modelcheck.application.rules.transaction_orchestration import TransactionOrchestrationRule

__all__ = [
    "BaseRule",
    "CallbackSideEffectsRule",
    "FatModelRule",
    "LawOfDemeterRule",
    "NeighborQueryRule",
    "QueryOutsideModelRule",
    "TransactionOrchestrationRule",
    "check_rule_ids",
    "default_rules",
    "rule_ids",
    "rules_from_config",
]
