"""Snapshot loader adapter.

Builds a StructuralModel from the plain JSON-compatible mapping an
external source parser emits. The loader checks shape only: types,
required fields, enum values. A class or template with a shape defect is
rejected on its own and reported as skipped. Cross-entry invariants
(owners, duplicate names, delegation targets) are left to the per-class
integrity check, so one bad class never aborts the run.

Snapshot layout:

    {
      "classes": [
        {
          "name": "billing.Invoice",
          "layer": "model",
          "file": "app/models/invoice.rb",
          "line": 1,
          "included_modules": ["Exportable"],
          "associations": [
            {"accessor": "customer", "target": "billing.Customer", "kind": "belongs-to"}
          ],
          "methods": [
            {
              "name": "shipping_street",
              "line": 12,
              "class_level": false,
              "callback": false,
              "transaction": false,
              "delegates_to": {"association": "customer", "member": "street"},
              "included_from": null,
              "invokes": [],
              "call_sites": [
                {"origin": "self", "root": "self",
                 "chain": ["customer", "address", "street"], "line": 13}
              ]
            }
          ]
        }
      ],
      "templates": [
        {"name": "invoices/show", "file": "...", "line": 1, "call_sites": [...]}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TypeVar

from modelcheck.domain.exceptions import MalformedInputError
from modelcheck.domain.model.association import AssociationEdge
from modelcheck.domain.model.call_site import CallSite
from modelcheck.domain.model.class_entry import ClassEntry, TemplateEntry
from modelcheck.domain.model.enums import AssociationKind, Layer, ReceiverOrigin
from modelcheck.domain.model.location import Location
from modelcheck.domain.model.method_entry import DelegationTarget, MethodEntry
from modelcheck.domain.model.skipped import SkippedClass
from modelcheck.domain.model.structural_model import StructuralModel

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", Layer, AssociationKind)

_MISSING = object()
_UNKNOWN_FILE = "<snapshot>"


class SnapshotLoader:
    """Loads Structural Model snapshots.

    Stateless. Shape defects are reported as MalformedInputError naming
    the offending path (e.g. "classes[2].methods[0].call_sites[1].origin"):
    raised for the snapshot as a whole, recorded per entry otherwise.
    """

    def load(self, data: Mapping[str, object]) -> StructuralModel:
        """Build a snapshot from a parsed mapping.

        A class or template with a shape defect is rejected on its own and
        carried in `StructuralModel.rejected`; the other entries load.

        Args:
            data: JSON-compatible mapping

        Returns:
            StructuralModel in declaration order

        Raises:
            MalformedInputError: If the snapshot itself has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise MalformedInputError(subject="snapshot", reason="expected an object")

        rejected: list[SkippedClass] = []
        classes = _entries(data, "classes", self._class, rejected)
        templates = _entries(data, "templates", self._template, rejected)
        logger.debug(
            "loaded snapshot: %d classes, %d templates, %d rejected",
            len(classes),
            len(templates),
            len(rejected),
        )
        return StructuralModel(classes=classes, templates=templates, rejected=tuple(rejected))

    def load_path(self, path: Path) -> StructuralModel:
        """Read and load a JSON snapshot file.

        Raises:
            MalformedInputError: If the file cannot be read or parsed
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise MalformedInputError(subject=str(path), reason="file not found") from e
        except OSError as e:
            raise MalformedInputError(subject=str(path), reason=f"cannot read file: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedInputError(subject=str(path), reason=f"not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise MalformedInputError(subject=str(path), reason=f"invalid JSON: {e}") from e
        return self.load(data)

    def _class(self, raw: object, path: str) -> ClassEntry:
        data = _mapping(raw, path)
        name = _string(data, "name", path)
        associations = tuple(
            self._association(item, name, f"{path}.associations[{i}]")
            for i, item in enumerate(_sequence(data, "associations", path, default=()))
        )
        methods = tuple(
            self._method(item, name, f"{path}.methods[{i}]")
            for i, item in enumerate(_sequence(data, "methods", path, default=()))
        )
        return _build(
            path,
            ClassEntry,
            qualified_name=name,
            associations=associations,
            methods=methods,
            layer=_enum_value(Layer, data, "layer", path),
            location=_location(data, path),
            included_modules=_names(data, "included_modules", path),
        )

    def _association(self, raw: object, owner: str, path: str) -> AssociationEdge:
        data = _mapping(raw, path)
        return _build(
            path,
            AssociationEdge,
            source=_string(data, "source", path, default=owner),
            target=_string(data, "target", path),
            kind=_enum_value(AssociationKind, data, "kind", path),
            accessor=_string(data, "accessor", path),
        )

    def _method(self, raw: object, owner: str, path: str) -> MethodEntry:
        data = _mapping(raw, path)
        delegation = data.get("delegates_to")
        delegates_to = None
        if delegation is not None:
            target = _mapping(delegation, f"{path}.delegates_to")
            delegates_to = _build(
                f"{path}.delegates_to",
                DelegationTarget,
                association=_string(target, "association", f"{path}.delegates_to"),
                member=_string(target, "member", f"{path}.delegates_to"),
            )
        return _build(
            path,
            MethodEntry,
            name=_string(data, "name", path),
            owner=_optional_string(data, "owner", path, default=owner),
            call_sites=_call_sites(data, path),
            line=_integer(data, "line", path, default=1),
            is_class_level=_flag(data, "class_level", path),
            is_callback=_flag(data, "callback", path),
            wraps_transaction=_flag(data, "transaction", path),
            delegates_to=delegates_to,
            included_from=_optional_string(data, "included_from", path),
            invoked_methods=_names(data, "invokes", path),
        )

    def _template(self, raw: object, path: str) -> TemplateEntry:
        data = _mapping(raw, path)
        return _build(
            path,
            TemplateEntry,
            name=_string(data, "name", path),
            location=_location(data, path),
            call_sites=_call_sites(data, path),
        )


def load_snapshot(data: Mapping[str, object]) -> StructuralModel:
    """Build a snapshot from a parsed mapping. See SnapshotLoader.load."""
    return SnapshotLoader().load(data)


def _entries(
    data: Mapping[str, object],
    key: str,
    build: Callable[[object, str], T],
    rejected: list[SkippedClass],
) -> tuple[T, ...]:
    """Build every entry under `key`, collecting rejects instead of failing."""
    entries: list[T] = []
    for i, raw in enumerate(_sequence(data, key, "snapshot", default=())):
        path = f"{key}[{i}]"
        try:
            entries.append(build(raw, path))
        except MalformedInputError as e:
            logger.warning("rejected %s: %s", path, e)
            rejected.append(_rejected(raw, path, str(e)))
    return tuple(entries)


def _rejected(raw: object, path: str, reason: str) -> SkippedClass:
    """Skip entry for a rejected class or template, named as well as it can be."""
    name = path
    file = Path(_UNKNOWN_FILE)
    line = 1
    if isinstance(raw, Mapping):
        if isinstance(raw.get("name"), str) and raw["name"]:
            name = raw["name"]
        if isinstance(raw.get("file"), str) and raw["file"]:
            file = Path(raw["file"])
        value = raw.get("line")
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            line = value
    return SkippedClass(class_name=name, reason=reason, location=Location(file=file, line=line))


def _build(path: str, factory: type[T], **fields: object) -> T:
    """Construct a value object, reporting invariant failures by path."""
    try:
        return factory(**fields)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(subject=path, reason=str(e)) from e


def _call_sites(data: Mapping[str, object], path: str) -> tuple[CallSite, ...]:
    sites: list[CallSite] = []
    for i, raw in enumerate(_sequence(data, "call_sites", path, default=())):
        site_path = f"{path}.call_sites[{i}]"
        site = _mapping(raw, site_path)
        origin = _string(site, "origin", site_path)
        try:
            receiver = ReceiverOrigin[origin.upper()]
        except KeyError as e:
            known = ", ".join(o.name.lower() for o in ReceiverOrigin)
            raise MalformedInputError(
                subject=f"{site_path}.origin",
                reason=f"unknown origin {origin!r} (expected one of: {known})",
            ) from e
        sites.append(
            _build(
                site_path,
                CallSite,
                origin=receiver,
                root=_string(site, "root", site_path, default="self"),
                chain=_names(site, "chain", site_path),
                line=_integer(site, "line", site_path),
                root_class=_optional_string(site, "root_class", site_path),
                target_class=_optional_string(site, "target_class", site_path),
            )
        )
    return tuple(sites)


def _location(data: Mapping[str, object], path: str) -> Location:
    return _build(
        path,
        Location,
        file=Path(_string(data, "file", path)),
        line=_integer(data, "line", path, default=1),
        column=_integer(data, "column", path, default=0),
    )


def _mapping(raw: object, path: str) -> Mapping[str, object]:
    if not isinstance(raw, Mapping):
        raise MalformedInputError(subject=path, reason=f"expected an object, got {type(raw).__name__}")
    return raw


def _field(data: Mapping[str, object], key: str, path: str, default: object) -> object:
    value = data.get(key, default)
    if value is _MISSING:
        raise MalformedInputError(subject=f"{path}.{key}", reason="required field is missing")
    return value


def _string(
    data: Mapping[str, object], key: str, path: str, *, default: object = _MISSING
) -> str:
    value = _field(data, key, path, default)
    if not isinstance(value, str):
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"expected a string, got {type(value).__name__}"
        )
    return value


def _optional_string(
    data: Mapping[str, object], key: str, path: str, *, default: str | None = None
) -> str | None:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"expected a string or null, got {type(value).__name__}"
        )
    return value


def _integer(
    data: Mapping[str, object], key: str, path: str, *, default: object = _MISSING
) -> int:
    value = _field(data, key, path, default)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"expected an integer, got {type(value).__name__}"
        )
    return value


def _flag(data: Mapping[str, object], key: str, path: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"expected a boolean, got {type(value).__name__}"
        )
    return value


def _sequence(
    data: Mapping[str, object], key: str, path: str, *, default: object = _MISSING
) -> Sequence[object]:
    value = _field(data, key, path, default)
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"expected a list, got {type(value).__name__}"
        )
    return value


def _names(data: Mapping[str, object], key: str, path: str) -> tuple[str, ...]:
    items = _sequence(data, key, path, default=())
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise MalformedInputError(
                subject=f"{path}.{key}[{i}]", reason=f"expected a string, got {type(item).__name__}"
            )
    return tuple(items)  # type: ignore[arg-type]


def _enum_value(
    enum_cls: type[E], data: Mapping[str, object], key: str, path: str
) -> E:
    value = _string(data, key, path)
    try:
        return enum_cls(value)
    except ValueError as e:
        known = ", ".join(member.value for member in enum_cls)
        raise MalformedInputError(
            subject=f"{path}.{key}", reason=f"unknown value {value!r} (expected one of: {known})"
        ) from e
