"""Tests for graph/builder.py."""

import pytest

from modelcheck.application.graph import AssociationGraphBuilder
from modelcheck.domain.model.association_graph import EXTERNAL_NODE
from modelcheck.domain.model.class_entry import ClassEntry
from modelcheck.domain.model.enums import Layer
from tests.factories import (
    invoice_model,
    make_association,
    make_class,
    make_location,
    make_method,
    make_model,
)


class TestAssociationGraphBuilderBuild:
    """Tests for AssociationGraphBuilder.build."""

    def test_none_model_raises(self) -> None:
        """FAIL-FIRST on None."""
        with pytest.raises(TypeError, match="must not be None"):
            AssociationGraphBuilder().build(None)  # type: ignore[arg-type]

    def test_edges_for_declared_associations(self) -> None:
        """Each declared association becomes one resolved edge."""
        graph = AssociationGraphBuilder().build(invoice_model())

        assert graph.edge_count == 2
        assert graph.edge("Invoice", "customer").target == "Customer"
        assert graph.edge("Customer", "address").target == "Address"
        assert graph.unresolved_edges == ()

    def test_unknown_target_is_unresolved_not_dropped(self) -> None:
        """Targets outside the snapshot become annotated sentinel edges."""
        model = make_model(make_class("Invoice", associations={"gateway": "Stripe::Charge"}))

        graph = AssociationGraphBuilder().build(model)

        edge = graph.edge("Invoice", "gateway")
        assert edge is not None
        assert not edge.resolved
        assert "Stripe::Charge" in edge.note
        assert graph.target_node(edge) == EXTERNAL_NODE

    def test_duplicate_class_contributes_first_edges_only(self) -> None:
        """Only the first declaration of a class name contributes edges."""
        model = make_model(
            make_class("Invoice", associations={"customer": "Customer"}),
            make_class("Invoice", associations={"account": "Customer"}),
            make_class("Customer"),
        )

        graph = AssociationGraphBuilder().build(model)

        assert graph.edge("Invoice", "customer") is not None
        assert graph.edge("Invoice", "account") is None

    def test_foreign_source_edge_skipped(self) -> None:
        """Edges whose source is another class are left to the integrity check."""
        entry = ClassEntry(
            qualified_name="Invoice",
            associations=(make_association("Order", "customer", "Customer"),),
            methods=(),
            layer=Layer.MODEL,
            location=make_location(),
        )

        graph = AssociationGraphBuilder().build(make_model(entry, make_class("Customer")))

        assert graph.edge_count == 0


class TestAssociationGraphBuilderIndex:
    """Tests for AssociationGraphBuilder.build_index."""

    def test_index_by_class_and_method(self) -> None:
        """Methods are found by owner and name."""
        methods = AssociationGraphBuilder().build_index(invoice_model(with_delegation=True))

        street = methods.get("Customer", "street")
        assert street is not None
        assert street.is_delegation
        assert methods.delegation("Customer", "street") is street
        assert methods.names("Invoice") == frozenset({"shipping_label"})

    def test_first_method_declaration_wins(self) -> None:
        """Repeated method names keep the first entry."""
        first = make_method("User", "name", line=2)
        model = make_model(make_class("User", methods=(first, make_method("User", "name", line=9))))

        methods = AssociationGraphBuilder().build_index(model)

        assert methods.get("User", "name") is first
