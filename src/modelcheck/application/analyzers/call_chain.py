"""Call-chain analyzer: traversal depth of receiver chains."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.domain.model.access_chain import AccessChain, ChainHop
from modelcheck.domain.model.association_graph import EXTERNAL_NODE
from modelcheck.domain.model.enums import ReceiverOrigin

if TYPE_CHECKING:
    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.call_site import CallSite
    from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
    from modelcheck.domain.model.method_entry import MethodEntry
    from modelcheck.domain.model.method_index import MethodIndex


class CallChainAnalyzer:
    """Measures how many distinct-class hops a receiver chain makes.

    Walk rules, applied name by name from the receiver's class:
    - association on the current class: one hop; counted unless it stays
      within the same class; unresolved hops count and end the walk
    - delegation method on the current class: no hop; the walk continues
      from the class the delegation yields, so accesses past the
      delegation boundary still count
    - any other method: the chain ends on a method call
    - anything else: the chain ends on a plain attribute

    Only chains of at least two names rooted at `self` or at a receiver
    with a known, analyzed class are measured.
    """

    def __init__(self, graph: AssociationGraph, methods: MethodIndex) -> None:
        """Initialize with the run's graph and method index.

        Args:
            graph: Fully built association graph
            methods: Per-class method index
        """
        self._graph = graph
        self._methods = methods

    def analyze_class(self, entry: ClassEntry) -> tuple[AccessChain, ...]:
        """Measure every chain in a class, one result per distinct chain.

        Args:
            entry: Class to analyze

        Returns:
            Chains with at least one hop, first occurrence of each
        """
        chains: list[AccessChain] = []
        for method in entry.methods:
            chains.extend(self._analyze_method(entry.qualified_name, method))
        return _distinct(chains)

    def analyze_template(self, template: TemplateEntry) -> tuple[AccessChain, ...]:
        """Measure chains rooted at template locals with a known class.

        Args:
            template: Template to analyze

        Returns:
            Chains with at least one hop, first occurrence of each
        """
        chains: list[AccessChain] = []
        for call_site in template.call_sites:
            chain = self.measure(call_site, subject=template.name, method=None, owner=None)
            if chain is not None:
                chains.append(chain)
        return _distinct(chains)

    def measure(
        self,
        call_site: CallSite,
        *,
        subject: str,
        method: str | None,
        owner: str | None,
    ) -> AccessChain | None:
        """Measure one call site.

        Args:
            call_site: Call site to measure
            subject: Class or template the call site occurs in
            method: Enclosing method, None in templates
            owner: Class `self` refers to, None in templates

        Returns:
            AccessChain if the chain traverses at least one association,
            None if it is not measurable or stays on the receiver
        """
        if call_site.length < 2:
            return None

        start = self._start_class(call_site, owner)
        if start is None:
            return None

        current = start
        hops: list[ChainHop] = []
        delegations: list[str] = []
        terminal_is_method = False

        for name in call_site.chain:
            edge = self._graph.edge(current, name)
            if edge is not None:
                to_node = self._graph.target_node(edge)
                hops.append(
                    ChainHop(edge=edge, to_node=to_node, counted=not edge.is_self_reference)
                )
                if to_node == EXTERNAL_NODE:
                    break
                current = to_node
                continue

            delegation = self._methods.delegation(current, name)
            if delegation is not None:
                delegations.append(f"{current}.{name}")
                forwarded = self._delegation_result(current, delegation)
                if forwarded is None:
                    break
                current = forwarded
                continue

            terminal_is_method = self._methods.get(current, name) is not None
            break

        if not hops:
            return None

        return AccessChain(
            subject=subject,
            method=method,
            call_site=call_site,
            start_class=start,
            hops=tuple(hops),
            delegations=tuple(delegations),
            terminal_is_method=terminal_is_method,
        )

    def _analyze_method(self, owner: str, method: MethodEntry) -> list[AccessChain]:
        """Measure all call sites of one method."""
        chains: list[AccessChain] = []
        for call_site in method.call_sites:
            chain = self.measure(call_site, subject=owner, method=method.name, owner=owner)
            if chain is not None:
                chains.append(chain)
        return chains

    def _start_class(self, call_site: CallSite, owner: str | None) -> str | None:
        """Analyzed class the receiver root refers to, None if unknown."""
        match call_site.origin:
            case ReceiverOrigin.SELF:
                start = owner
            case ReceiverOrigin.PARAMETER:
                start = call_site.root_class
            case _:
                return None
        if start is None or not self._graph.has_class(start):
            return None
        return start

    def _delegation_result(self, current: str, method: MethodEntry) -> str | None:
        """Class yielded by a delegation method, None if not a class.

        `delegate :city, to: :address` yields City when `city` is itself
        an association of Address; a plain attribute yields no class.
        """
        target = method.delegates_to
        if target is None:
            return None
        via = self._graph.edge(current, target.association)
        if via is None or not via.resolved:
            return None
        member = self._graph.edge(via.target, target.member)
        if member is None or not member.resolved:
            return None
        return member.target


def _distinct(chains: list[AccessChain]) -> tuple[AccessChain, ...]:
    """Keep the first occurrence of each distinct chain (by line order)."""
    seen: set[tuple[str, str, str]] = set()
    result: list[AccessChain] = []
    for chain in sorted(chains, key=lambda c: (c.call_site.line, c.method or "")):
        if chain.key in seen:
            continue
        seen.add(chain.key)
        result.append(chain)
    return tuple(result)
