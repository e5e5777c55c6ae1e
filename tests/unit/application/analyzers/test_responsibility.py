"""Tests for analyzers/responsibility.py."""

from modelcheck.application.analyzers import ResponsibilityClusterer
from modelcheck.application.graph import AssociationGraphBuilder
from modelcheck.domain.model.class_entry import ClassEntry
from modelcheck.domain.model.cluster import ResponsibilityCluster
from modelcheck.domain.model.taxonomy import ResponsibilityTaxonomy
from tests.factories import external_call, make_class, make_method, make_model, self_call


def _cluster(entry: ClassEntry, *others: ClassEntry) -> tuple[ResponsibilityCluster, ...]:
    graph = AssociationGraphBuilder().build(make_model(entry, *others))
    return ResponsibilityClusterer(graph, ResponsibilityTaxonomy(), "callback").cluster(entry)


class TestResponsibilityClusterer:
    """Tests for ResponsibilityClusterer.cluster."""

    def test_empty_class(self) -> None:
        """A class without methods has no clusters."""
        assert _cluster(make_class("User")) == ()

    def test_disjoint_categories_form_separate_clusters(self) -> None:
        """Unrelated finder and conversion methods stay apart."""
        user = make_class(
            "User",
            methods=(
                make_method("User", "find_by_email"),
                make_method("User", "to_json"),
                make_method("User", "find_active"),
                make_method("User", "to_csv"),
            ),
        )

        clusters = _cluster(user)

        assert [(c.methods, c.category) for c in clusters] == [
            (("find_by_email", "find_active"), "finder"),
            (("to_json", "to_csv"), "conversion"),
        ]

    def test_shared_call_target_links_categories(self) -> None:
        """Methods reaching the same class join one cluster."""
        user = make_class(
            "User",
            associations={"account": "Account"},
            methods=(
                make_method("User", "find_account", self_call("account", "id")),
                make_method("User", "to_json", self_call("account", "name")),
            ),
        )

        clusters = _cluster(user, make_class("Account"))

        assert len(clusters) == 1
        assert clusters[0].categories == frozenset({"finder", "conversion"})
        # tie broken by taxonomy order
        assert clusters[0].category == "finder"

    def test_owner_is_not_a_shared_target(self) -> None:
        """Calls back into the own class do not link methods."""
        user = make_class(
            "User",
            methods=(
                make_method("User", "find_admins", external_call("User", "where")),
                make_method("User", "to_json", external_call("User", "select")),
            ),
        )

        assert len(_cluster(user)) == 2

    def test_co_invoked_methods_are_linked(self) -> None:
        """Two methods called from a common third method share a cluster."""
        order = make_class(
            "Order",
            methods=(
                make_method("Order", "summary", invoked_methods=("subtotal", "tax")),
                make_method("Order", "subtotal"),
                make_method("Order", "tax"),
            ),
        )

        clusters = _cluster(order)

        assert [c.methods for c in clusters] == [("summary",), ("subtotal", "tax")]
        assert all(c.category is None for c in clusters)

    def test_callback_flag_overrides_name(self) -> None:
        """is-callback methods fall into the callback category."""
        order = make_class("Order", methods=(make_method("Order", "notify", is_callback=True),))

        clusters = _cluster(order)

        assert clusters[0].category == "callback"

    def test_included_methods_are_members(self) -> None:
        """Methods mixed in from modules cluster like own methods."""
        user = make_class(
            "User",
            included_modules=("Exportable",),
            methods=(
                make_method("User", "to_xml", included_from="Exportable"),
                make_method("User", "to_json"),
            ),
        )

        clusters = _cluster(user)

        assert clusters[0].methods == ("to_xml", "to_json")
