"""Analyzers over the association graph.

- CallChainAnalyzer: traversal depth of receiver chains
- LayerClassifier: originating layer and query construction of call sites
- ResponsibilityClusterer: method-affinity clusters per class
- TransactionScopeDetector: mutations inside transactional methods
- UnitAnalyzer: runs all of the above over one class or template
"""

from modelcheck.application.analyzers.call_chain import CallChainAnalyzer
from modelcheck.application.analyzers.integrity import class_defects, template_defects
from modelcheck.application.analyzers.layer_classifier import LayerClassifier
from modelcheck.application.analyzers.responsibility import ResponsibilityClusterer
from modelcheck.application.analyzers.transaction_scope import TransactionScopeDetector
from modelcheck.application.analyzers.unit_analyzer import UnitAnalyzer

__all__ = [
    "CallChainAnalyzer",
    "LayerClassifier",
    "ResponsibilityClusterer",
    "TransactionScopeDetector",
    "UnitAnalyzer",
    "class_defects",
    "template_defects",
]
