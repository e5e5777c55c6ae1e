"""Tests for analyzers/layer_classifier.py."""

from modelcheck.application.analyzers import LayerClassifier
from modelcheck.application.graph import AssociationGraphBuilder
from modelcheck.domain.model.class_entry import ClassEntry
from modelcheck.domain.model.configuration import DEFAULT_QUERY_OPERATIONS
from modelcheck.domain.model.enums import AssociationKind, Layer
from modelcheck.domain.model.method_entry import MethodEntry
from modelcheck.domain.model.structural_model import StructuralModel
from tests.factories import (
    external_call,
    make_association,
    make_class,
    make_location,
    make_method,
    make_model,
    make_template,
    param_call,
    self_call,
)


def _classifier(model: StructuralModel) -> LayerClassifier:
    builder = AssociationGraphBuilder()
    return LayerClassifier(
        builder.build(model), builder.build_index(model), DEFAULT_QUERY_OPERATIONS
    )


def _blog_model(*classes: ClassEntry) -> StructuralModel:
    post = make_class(
        "Post",
        associations={"comments": "Comment"},
        methods=(
            make_method("Post", "published", is_class_level=True),
            make_method("Post", "recent", external_call("Post", "where", "order", line=5)),
            make_method("Post", "top_comments", self_call("comments", "where", line=9)),
        ),
    )
    return make_model(post, make_class("Comment"), *classes)


class TestLayerClassifierClass:
    """Tests for LayerClassifier.classify_class."""

    def test_calls_take_class_layer(self) -> None:
        """Every call site is tagged with its class's layer."""
        controller = make_class(
            "PostsController",
            layer=Layer.CONTROLLER,
            methods=(make_method("PostsController", "index", external_call("Post", "all")),),
        )
        model = _blog_model(controller)

        tagged = _classifier(model).classify_class(controller)

        assert len(tagged) == 1
        assert tagged[0].layer is Layer.CONTROLLER
        assert not tagged[0].is_query

    def test_query_in_controller_targets_model(self) -> None:
        """Post.where(...).order(...) in a controller queries Post."""
        controller = make_class(
            "PostsController",
            layer=Layer.CONTROLLER,
            methods=(
                make_method(
                    "PostsController", "index", external_call("Post", "where", "order", line=4)
                ),
            ),
        )
        model = _blog_model(controller)

        tagged = _classifier(model).classify_class(controller)

        assert tagged[0].query_operations == ("where", "order")
        assert tagged[0].query_target == "Post"

    def test_own_scope_targets_own_class(self) -> None:
        """A model querying its own table targets itself."""
        model = _blog_model()

        tagged = _classifier(model).classify_class(model.get_class("Post"))

        recent = next(t for t in tagged if t.method == "recent")
        assert recent.query_target == "Post"

    def test_association_query_targets_neighbor(self) -> None:
        """self.comments.where targets Comment."""
        model = _blog_model()

        tagged = _classifier(model).classify_class(model.get_class("Post"))

        top = next(t for t in tagged if t.method == "top_comments")
        assert top.query_target == "Comment"

    def test_class_level_method_keeps_class(self) -> None:
        """Post.published.where still queries Post."""
        controller = make_class(
            "PostsController",
            layer=Layer.CONTROLLER,
            methods=(
                make_method(
                    "PostsController", "index", external_call("Post", "published", "where")
                ),
            ),
        )
        model = _blog_model(controller)

        tagged = _classifier(model).classify_class(controller)

        assert tagged[0].query_target == "Post"


class TestLayerClassifierTemplate:
    """Tests for LayerClassifier.classify_template."""

    def test_templates_are_view(self) -> None:
        """Template code is always VIEW."""
        template = make_template(
            "posts/index", param_call("post", "Post", "comments", "where", "limit")
        )
        model = _blog_model()

        tagged = _classifier(model).classify_template(template)

        assert tagged[0].layer is Layer.VIEW
        assert tagged[0].method is None
        assert tagged[0].query_operations == ("where", "limit")
        assert tagged[0].query_target == "Comment"


class TestLayerClassifierNaming:
    """Names that collide with query operations."""

    def _shop(self, *methods: MethodEntry) -> tuple[LayerClassifier, ClassEntry]:
        controller = make_class("PaymentsController", layer=Layer.CONTROLLER, methods=methods)
        payment = make_class(
            "Payment",
            associations={"order": "Order"},
            methods=(make_method("Payment", "group", line=3),),
        )
        model = make_model(payment, make_class("Order"), controller)
        return _classifier(model), controller

    def test_association_accessor_is_not_query(self) -> None:
        """An association called `order` is read, not queried."""
        classifier, controller = self._shop(
            make_method(
                "PaymentsController", "show", param_call("payment", "Payment", "order", "number")
            ),
        )

        tagged = classifier.classify_class(controller)

        assert not tagged[0].is_query
        assert tagged[0].query_operations == ()

    def test_instance_method_is_not_query(self) -> None:
        """A declared instance method called `group` is not a query."""
        classifier, controller = self._shop(
            make_method("PaymentsController", "show", param_call("payment", "Payment", "group")),
        )

        assert not classifier.classify_class(controller)[0].is_query

    def test_order_on_relation_is_query(self) -> None:
        """After `where` the receiver is a relation: `order` is the query method."""
        classifier, controller = self._shop(
            make_method(
                "PaymentsController",
                "index",
                external_call("Payment", "where", "order", "limit"),
            ),
        )

        tagged = classifier.classify_class(controller)

        assert tagged[0].query_operations == ("where", "order", "limit")
        assert tagged[0].query_target == "Payment"

    def test_owns_many_accessor_yields_relation(self) -> None:
        """Post.comments.order sorts the comments even if Comment has `order`."""
        post = ClassEntry(
            qualified_name="Post",
            associations=(
                make_association("Post", "comments", "Comment", AssociationKind.OWNS_MANY),
            ),
            methods=(make_method("Post", "sorted", self_call("comments", "order", line=4)),),
            layer=Layer.MODEL,
            location=make_location(),
        )
        comment = make_class("Comment", associations={"order": "Order"})
        model = make_model(post, comment, make_class("Order"))

        tagged = _classifier(model).classify_class(post)

        assert tagged[0].query_operations == ("order",)
        assert tagged[0].query_target == "Comment"
