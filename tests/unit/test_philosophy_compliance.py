"""Philosophy compliance tests.

Tests verifying the two axioms every value object follows:
- FAIL-FIRST Validation: invalid state raises at construction
- Immutability: frozen dataclasses, tuples instead of lists
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, fields, is_dataclass
from pathlib import Path

import pytest

from modelcheck.domain.exceptions import (
    AnalysisCancelled,
    ConfigurationError,
    MalformedInputError,
    ModelCheckError,
    ModelCheckSignal,
    UnknownRuleError,
)
from modelcheck.domain.model.association import AssociationEdge
from modelcheck.domain.model.call_site import CallSite
from modelcheck.domain.model.configuration import AnalysisConfig
from modelcheck.domain.model.enums import AssociationKind, ReceiverOrigin, Severity
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.skipped import SkippedClass
from modelcheck.domain.model.violation import Violation
from tests.factories import invoice_model, make_class, make_location, make_method, self_call

# =============================================================================
# FAIL-FIRST Validation
# =============================================================================


class TestFailFirstValidation:
    """Invalid value objects never exist."""

    def test_call_site_empty_chain_raises(self) -> None:
        """CallSite without names raises ValueError."""
        with pytest.raises(ValueError, match="chain"):
            CallSite(origin=ReceiverOrigin.SELF, root="self", chain=(), line=1)

    def test_association_empty_accessor_raises(self) -> None:
        """AssociationEdge without accessor raises ValueError."""
        with pytest.raises(ValueError, match="accessor"):
            AssociationEdge(
                source="Invoice", target="Customer", kind=AssociationKind.BELONGS_TO, accessor=""
            )

    def test_resolved_edge_with_note_raises(self) -> None:
        """Notes are reserved for unresolved edges."""
        with pytest.raises(ValueError, match="note"):
            AssociationEdge(
                source="Invoice",
                target="Customer",
                kind=AssociationKind.BELONGS_TO,
                accessor="customer",
                note="unexpected",
            )

    def test_violation_empty_message_raises(self) -> None:
        """Violation without message raises ValueError."""
        with pytest.raises(ValueError, match="message"):
            Violation(
                rule_id="fat-model",
                severity=Severity.WARNING,
                class_name="Invoice",
                message="",
                location=make_location(),
            )

    def test_skipped_empty_reason_raises(self) -> None:
        """SkippedClass without reason raises ValueError."""
        with pytest.raises(ValueError, match="reason"):
            SkippedClass(class_name="Invoice", reason="", location=make_location())

    def test_config_error_is_value_error(self) -> None:
        """Configuration errors surface before analysis as ValueError."""
        with pytest.raises(ValueError, match="min_demeter_depth"):
            AnalysisConfig(min_demeter_depth=0)


# =============================================================================
# Immutability
# =============================================================================


def _value_objects() -> list[object]:
    model = invoice_model()
    return [
        model,
        model.classes[0],
        model.classes[0].methods[0],
        model.classes[0].associations[0],
        self_call("customer", line=3),
        Location(file=Path("a.rb"), line=1),
        AnalysisConfig(),
    ]


class TestImmutability:
    """Value objects are frozen and hold tuples, not lists."""

    @pytest.mark.parametrize("obj", _value_objects(), ids=lambda o: type(o).__name__)
    def test_frozen(self, obj: object) -> None:
        """Assigning a field raises."""
        assert is_dataclass(obj)
        first = fields(obj)[0].name
        with pytest.raises((FrozenInstanceError, AttributeError)):
            setattr(obj, first, None)

    @pytest.mark.parametrize("obj", _value_objects(), ids=lambda o: type(o).__name__)
    def test_no_list_fields(self, obj: object) -> None:
        """Collections are stored as tuples or frozensets."""
        for field in fields(obj):
            assert not isinstance(getattr(obj, field.name), (list, dict, set))

    def test_class_methods_are_tuple(self) -> None:
        """make_class keeps declaration order in a tuple."""
        entry = make_class("Invoice", methods=(make_method("Invoice", "total"),))

        assert isinstance(entry.methods, tuple)


# =============================================================================
# Exception hierarchy
# =============================================================================


class TestExceptionHierarchy:
    """Errors and signals are separate families."""

    @pytest.mark.parametrize("exc", [ConfigurationError, UnknownRuleError, MalformedInputError])
    def test_errors_share_base(self, exc: type[Exception]) -> None:
        """except ModelCheckError catches every library error."""
        assert issubclass(exc, ModelCheckError)

    def test_cancellation_is_signal(self) -> None:
        """Cancellation is flow control, not an error."""
        assert issubclass(AnalysisCancelled, ModelCheckSignal)
        assert not issubclass(AnalysisCancelled, ModelCheckError)
