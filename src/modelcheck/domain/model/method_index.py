"""Per-class method index."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from modelcheck.domain.model.method_entry import MethodEntry
from modelcheck.domain.model.structural_model import StructuralModel


@dataclass(frozen=True, slots=True)
class MethodIndex:
    """Class -> method name -> MethodEntry, built once per run.

    First declaration wins for duplicated class or method names, the same
    rule StructuralModel.get_class and ClassEntry.method follow.

    Attributes:
        methods: Class name -> (method name -> entry)
    """

    methods: Mapping[str, Mapping[str, MethodEntry]]

    def get(self, class_name: str, method_name: str) -> MethodEntry | None:
        """Method declared on a class, None if either is unknown. O(1)."""
        return self.methods.get(class_name, MappingProxyType({})).get(method_name)

    def names(self, class_name: str) -> frozenset[str]:
        """All method names declared on a class."""
        return frozenset(self.methods.get(class_name, ()))

    def delegation(self, class_name: str, method_name: str) -> MethodEntry | None:
        """Method if it is a delegation method, else None."""
        method = self.get(class_name, method_name)
        if method is None or not method.is_delegation:
            return None
        return method

    @classmethod
    def from_model(cls, model: StructuralModel) -> MethodIndex:
        """Index every class of a snapshot.

        Args:
            model: Structural model snapshot

        Returns:
            MethodIndex keyed by qualified class name
        """
        index: dict[str, dict[str, MethodEntry]] = {}
        for entry in model.classes:
            if entry.qualified_name in index:
                continue
            per_class: dict[str, MethodEntry] = {}
            for method in entry.methods:
                per_class.setdefault(method.name, method)
            index[entry.qualified_name] = per_class

        return cls(methods=MappingProxyType({k: MappingProxyType(v) for k, v in index.items()}))
