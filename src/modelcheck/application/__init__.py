"""Application layer for object-model analysis.

Components:
- graph: Association graph and method index construction
- analyzers: Per-unit analysis (chains, layers, clusters, transactions)
- rules: Object-model rules (Law of Demeter, query placement, fat model, ...)
- reporters: Output formatting (PlainText, JSON, Console)
- services: Main facade (ModelChecker)
"""

from modelcheck.application.analyzers import UnitAnalyzer
from modelcheck.application.graph import AssociationGraphBuilder
from modelcheck.application.reporters import (
    BaseReporter,
    ConsoleReporter,
    JSONReporter,
    PlainTextReporter,
)
from modelcheck.application.rules import (
    BaseRule,
    default_rules,
    rule_ids,
    rules_from_config,
)
from modelcheck.application.services import ModelChecker

__all__ = [
    # Graph
    "AssociationGraphBuilder",
    # Analyzers
    "UnitAnalyzer",
    # Rules
    "BaseRule",
    "default_rules",
    "rule_ids",
    "rules_from_config",
    # Reporters
    "BaseReporter",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
    # Services
    "ModelChecker",
]
