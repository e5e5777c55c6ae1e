"""Structural model snapshot aggregate."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
from modelcheck.domain.model.method_entry import MethodEntry
from modelcheck.domain.model.skipped import SkippedClass


@dataclass(frozen=True, slots=True)
class StructuralModel:
    """Immutable snapshot of the analyzed codebase.

    Produced by the external parser, consumed read-only by one analysis
    run. Nothing here is validated beyond per-entity FAIL-FIRST checks:
    class-level defects are detected during the run and reported as
    skipped entries.

    Attributes:
        classes: Class entries in parser order
        templates: Free-standing template entries
        rejected: Entries the loader could not build, reported as skipped
    """

    classes: tuple[ClassEntry, ...] = ()
    templates: tuple[TemplateEntry, ...] = ()
    rejected: tuple[SkippedClass, ...] = ()

    @property
    def class_count(self) -> int:
        """Number of class entries (duplicates included)."""
        return len(self.classes)

    @property
    def class_names(self) -> frozenset[str]:
        """Qualified names of all declared classes."""
        return frozenset(entry.qualified_name for entry in self.classes)

    def get_class(self, qualified_name: str) -> ClassEntry | None:
        """First class declared with this name, None if absent."""
        for entry in self.classes:
            if entry.qualified_name == qualified_name:
                return entry
        return None

    def iter_methods(self) -> Iterator[MethodEntry]:
        """Iterate all methods of all classes."""
        for entry in self.classes:
            yield from entry.methods

    @classmethod
    def empty(cls) -> StructuralModel:
        """Create empty snapshot."""
        return cls(classes=(), templates=())
