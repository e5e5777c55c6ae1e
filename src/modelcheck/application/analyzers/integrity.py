"""Structural integrity checks: detect malformed snapshot entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modelcheck.domain.exceptions import MalformedInputError

if TYPE_CHECKING:
    from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry


def class_defects(entry: ClassEntry, *, duplicate: bool = False) -> tuple[str, ...]:
    """Broken invariants of one class entry.

    Args:
        entry: Class to check
        duplicate: True if an earlier class was declared under the same name

    Returns:
        Human-readable defects, empty if the entry is well formed
    """
    name = entry.qualified_name
    defects: list[str] = []

    if duplicate:
        defects.append(f"class {name!r} is declared more than once")

    accessors: set[str] = set()
    for edge in entry.associations:
        if edge.source != name:
            defects.append(
                f"association {edge.accessor!r} declares source {edge.source!r}, not {name!r}"
            )
        if edge.accessor in accessors:
            defects.append(f"association accessor {edge.accessor!r} is declared more than once")
        accessors.add(edge.accessor)

    for method in entry.methods:
        if method.owner is None:
            defects.append(f"method {method.name!r} has no owning class")
        elif method.owner != name:
            defects.append(f"method {method.name!r} is owned by {method.owner!r}, not {name!r}")

        target = method.delegates_to
        if target is not None and target.association not in accessors:
            defects.append(
                f"delegation {method.name!r} forwards through undeclared association "
                f"{target.association!r}"
            )

    return tuple(defects)


def template_defects(template: TemplateEntry, *, duplicate: bool = False) -> tuple[str, ...]:
    """Broken invariants of one template entry."""
    if duplicate:
        return (f"template {template.name!r} is declared more than once",)
    return ()


def ensure_well_formed(entry: ClassEntry, *, duplicate: bool = False) -> None:
    """Raise if a class entry is malformed.

    Raises:
        MalformedInputError: With every defect found, joined by "; "
    """
    defects = class_defects(entry, duplicate=duplicate)
    if defects:
        raise MalformedInputError(subject=entry.qualified_name, reason="; ".join(defects))


def ensure_template_well_formed(template: TemplateEntry, *, duplicate: bool = False) -> None:
    """Raise if a template entry is malformed.

    Raises:
        MalformedInputError: With every defect found, joined by "; "
    """
    defects = template_defects(template, duplicate=duplicate)
    if defects:
        raise MalformedInputError(subject=template.name, reason="; ".join(defects))
