"""Transaction scope detector: cross-model persistence inside one unit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modelcheck.application.analyzers._resolution import operation_calls
from modelcheck.domain.model.mutation import MutationCall, TransactionScope

if TYPE_CHECKING:
    from collections.abc import Collection

    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.class_entry import ClassEntry
    from modelcheck.domain.model.method_index import MethodIndex

logger = logging.getLogger(__name__)


class TransactionScopeDetector:
    """Finds mutating calls and the transaction scopes that contain them.

    A mutating call is a call site whose chain contains a configured
    mutation operation (create, update, save, ...). Its target is the
    class reached by the chain prefix before the operation. Mutations
    whose target cannot be determined are not counted.
    """

    def __init__(
        self,
        graph: AssociationGraph,
        methods: MethodIndex,
        mutation_operations: Collection[str],
        *,
        counts_own_class: bool = False,
    ) -> None:
        """Initialize detector.

        Args:
            graph: Fully built association graph
            methods: Per-class method index
            mutation_operations: Names that mutate persisted state
            counts_own_class: Count the declaring class among mutated classes
        """
        self._graph = graph
        self._methods = methods
        self._mutation_operations = frozenset(mutation_operations)
        self._counts_own_class = counts_own_class

    def mutations(self, entry: ClassEntry) -> tuple[MutationCall, ...]:
        """All mutating calls of a class, method then body order."""
        owner = entry.qualified_name
        found: list[MutationCall] = []
        for method in entry.methods:
            for call_site in method.call_sites:
                calls = operation_calls(
                    self._graph, self._methods, call_site, owner, self._mutation_operations
                )
                if not calls:
                    continue
                index, target = calls[0]
                if target is None:
                    logger.debug("unresolved mutation target %s in %s", call_site, method.fqn)
                    continue
                found.append(
                    MutationCall(
                        subject=owner,
                        method=method.name,
                        operation=call_site.chain[index],
                        target_class=target,
                        call_site=call_site,
                    )
                )
        return tuple(found)

    def scopes(
        self,
        entry: ClassEntry,
        mutations: tuple[MutationCall, ...],
    ) -> tuple[TransactionScope, ...]:
        """Transaction scope of every wraps-transaction method.

        Statement order inside the block does not matter: counted classes
        are a sorted set.

        Args:
            entry: Class to inspect
            mutations: Result of mutations(entry)

        Returns:
            One TransactionScope per transactional method
        """
        scopes: list[TransactionScope] = []
        seen: set[str] = set()
        for method in entry.methods:
            if not method.wraps_transaction or method.name in seen:
                continue
            seen.add(method.name)
            own = tuple(m for m in mutations if m.method == method.name)
            counted = {
                m.target_class for m in own if self._counts_own_class or not m.is_own
            }
            scopes.append(
                TransactionScope(
                    subject=entry.qualified_name,
                    method=method.name,
                    line=method.line,
                    mutations=own,
                    counted_classes=tuple(sorted(counted)),
                )
            )
        return tuple(scopes)
