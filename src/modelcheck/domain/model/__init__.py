"""Domain model entities."""

from modelcheck.domain.model.access_chain import AccessChain, ChainHop
from modelcheck.domain.model.association import AssociationEdge
from modelcheck.domain.model.association_graph import EXTERNAL_NODE, AssociationGraph
from modelcheck.domain.model.call_site import CallSite
from modelcheck.domain.model.check_result import CheckResult
from modelcheck.domain.model.check_stats import CheckStats
from modelcheck.domain.model.class_analysis import ClassAnalysis
from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
from modelcheck.domain.model.cluster import ResponsibilityCluster, non_trivial_clusters
from modelcheck.domain.model.configuration import (
    DEFAULT_MUTATION_OPERATIONS,
    DEFAULT_QUERY_OPERATIONS,
    AnalysisConfig,
)
from modelcheck.domain.model.enums import (
    AssociationKind,
    Layer,
    ReceiverOrigin,
    Remediation,
    Severity,
)
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.method_entry import DelegationTarget, MethodEntry
from modelcheck.domain.model.method_index import MethodIndex
from modelcheck.domain.model.mutation import MutationCall, TransactionScope
from modelcheck.domain.model.rule_context import RuleContext
from modelcheck.domain.model.skipped import MALFORMED_INPUT_RULE_ID, SkippedClass
from modelcheck.domain.model.structural_model import StructuralModel
from modelcheck.domain.model.tagged_call import TaggedCall
from modelcheck.domain.model.taxonomy import DEFAULT_CATEGORIES, ResponsibilityTaxonomy
from modelcheck.domain.model.violation import Violation

__all__ = [
    # Enums
    "AssociationKind",
    "Layer",
    "ReceiverOrigin",
    "Remediation",
    "Severity",
    # Structural model
    "AssociationEdge",
    "CallSite",
    "ClassEntry",
    "DelegationTarget",
    "Location",
    "MethodEntry",
    "StructuralModel",
    "TemplateEntry",
    # Graph and index
    "EXTERNAL_NODE",
    "AssociationGraph",
    "MethodIndex",
    # Analyzer outputs
    "AccessChain",
    "ChainHop",
    "ClassAnalysis",
    "MutationCall",
    "ResponsibilityCluster",
    "TaggedCall",
    "TransactionScope",
    "non_trivial_clusters",
    # Configuration
    "DEFAULT_CATEGORIES",
    "DEFAULT_MUTATION_OPERATIONS",
    "DEFAULT_QUERY_OPERATIONS",
    "AnalysisConfig",
    "ResponsibilityTaxonomy",
    # Results
    "MALFORMED_INPUT_RULE_ID",
    "CheckResult",
    "CheckStats",
    "RuleContext",
    "SkippedClass",
    "Violation",
]
