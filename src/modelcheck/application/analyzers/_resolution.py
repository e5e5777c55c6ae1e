"""Receiver resolution helpers shared by the analyzers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.domain.model.enums import AssociationKind, ReceiverOrigin

if TYPE_CHECKING:
    from collections.abc import Collection

    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.call_site import CallSite
    from modelcheck.domain.model.method_index import MethodIndex


def receiver_class(call_site: CallSite, owner: str | None) -> str | None:
    """Class the root of a call site stands for.

    SELF resolves to the owning class, PARAMETER to its static class,
    EXTERNAL to its declared class or, failing that, the root identifier
    itself (`Post.where` is rooted at class Post).

    Args:
        call_site: Call site to resolve
        owner: Owning class, None inside templates

    Returns:
        Class name, None if unknown
    """
    match call_site.origin:
        case ReceiverOrigin.SELF:
            return owner
        case ReceiverOrigin.PARAMETER:
            return call_site.root_class
        case ReceiverOrigin.EXTERNAL:
            return call_site.root_class or call_site.root


def operation_calls(
    graph: AssociationGraph,
    methods: MethodIndex,
    call_site: CallSite,
    owner: str | None,
    operations: Collection[str],
) -> tuple[tuple[int, str | None], ...]:
    """Chain positions used as operations, with the class each acts upon.

    The chain is walked over the association graph from the receiver's
    class. On a single record a name counts as an operation only when it
    is neither an association nor an instance method of the class reached
    so far: `payment.order.number` reads the `order` association. After an
    owns-many association or an operation the receiver is a relation, on
    which only class-level methods (scopes, finders) shadow operations.
    Scopes and operations keep the current class, so
    `Post.published.where(...).order(...)` acts on Post throughout.
    Once the walk loses track of the class, the parser-resolved target
    class stands in.

    Args:
        graph: Association graph
        methods: Per-class method index
        call_site: Call site to inspect
        owner: Owning class, None inside templates
        operations: Operation names (query or mutation)

    Returns:
        (chain index, target class or None) per operation, chain order
    """
    found: list[tuple[int, str | None]] = []
    current = receiver_class(call_site, owner)
    relation = False
    for index, name in enumerate(call_site.chain):
        if current is not None:
            edge = None if relation else graph.edge(current, name)
            if edge is not None:
                current = edge.target
                relation = edge.kind is AssociationKind.OWNS_MANY
                continue
            method = methods.get(current, name)
            if method is not None and method.is_class_level:
                continue
            if method is not None and not relation:
                current = None
                continue
        if name in operations:
            found.append((index, current if current is not None else call_site.target_class))
            relation = True
            continue
        current = None
    return tuple(found)
