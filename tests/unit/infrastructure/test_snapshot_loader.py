"""Tests for infrastructure/adapters/snapshot_loader.py."""

import json
from pathlib import Path

import pytest

from modelcheck.application.services import ModelChecker
from modelcheck.domain.exceptions import MalformedInputError
from modelcheck.domain.model.enums import AssociationKind, Layer, ReceiverOrigin, Severity
from modelcheck.domain.model.skipped import MALFORMED_INPUT_RULE_ID
from modelcheck.infrastructure.adapters import SnapshotLoader, load_snapshot


def _snapshot() -> dict[str, object]:
    return {
        "classes": [
            {
                "name": "Invoice",
                "layer": "model",
                "file": "app/models/invoice.rb",
                "line": 1,
                "associations": [
                    {"accessor": "customer", "target": "Customer", "kind": "belongs-to"}
                ],
                "methods": [
                    {
                        "name": "shipping_label",
                        "line": 11,
                        "call_sites": [
                            {
                                "origin": "self",
                                "root": "self",
                                "chain": ["customer", "address", "street"],
                                "line": 12,
                            }
                        ],
                    }
                ],
            },
            {
                "name": "Customer",
                "layer": "model",
                "file": "app/models/customer.rb",
                "methods": [
                    {
                        "name": "street",
                        "delegates_to": {"association": "address", "member": "street"},
                    }
                ],
            },
        ],
        "templates": [
            {
                "name": "invoices/show",
                "file": "app/views/invoices/show.erb",
                "call_sites": [
                    {
                        "origin": "parameter",
                        "root": "invoice",
                        "root_class": "Invoice",
                        "chain": ["total"],
                        "line": 3,
                    }
                ],
            }
        ],
    }


class TestSnapshotLoaderLoad:
    """Tests for SnapshotLoader.load."""

    def test_loads_classes_and_templates(self) -> None:
        """Every entry is converted with defaults applied."""
        model = load_snapshot(_snapshot())

        invoice = model.get_class("Invoice")
        assert invoice is not None
        assert invoice.layer is Layer.MODEL
        assert invoice.associations[0].source == "Invoice"
        assert invoice.associations[0].kind is AssociationKind.BELONGS_TO
        method = invoice.methods[0]
        assert method.owner == "Invoice"
        assert method.call_sites[0].origin is ReceiverOrigin.SELF
        assert method.call_sites[0].chain == ("customer", "address", "street")

        customer = model.get_class("Customer")
        assert customer is not None
        assert customer.location.line == 1
        assert customer.methods[0].delegates_to.association == "address"

        template = model.templates[0]
        assert template.call_sites[0].root_class == "Invoice"

    def test_explicit_null_owner_kept(self) -> None:
        """An explicit null owner survives loading for the integrity check."""
        data = _snapshot()
        data["classes"][0]["methods"][0]["owner"] = None  # type: ignore[index]

        model = load_snapshot(data)

        assert model.classes[0].methods[0].owner is None

    def test_empty_snapshot(self) -> None:
        """Missing sections mean empty."""
        assert load_snapshot({}).class_count == 0

    def test_not_an_object_raises(self) -> None:
        """A snapshot that is not a mapping is rejected as a whole."""
        with pytest.raises(MalformedInputError) as exc_info:
            load_snapshot([])  # type: ignore[arg-type]

        assert exc_info.value.subject == "snapshot"

    def test_classes_not_a_list_raises(self) -> None:
        """Snapshot-level shape defects are fatal."""
        with pytest.raises(MalformedInputError) as exc_info:
            load_snapshot({"classes": "Invoice"})

        assert exc_info.value.subject == "snapshot.classes"


class TestSnapshotLoaderRejects:
    """A defective entry is rejected on its own."""

    def test_other_classes_still_load(self) -> None:
        """An unknown layer rejects only that class."""
        data = _snapshot()
        data["classes"][1]["layer"] = "service"  # type: ignore[index]

        model = load_snapshot(data)

        assert model.class_names == frozenset({"Invoice"})
        assert len(model.templates) == 1
        rejected = model.rejected[0]
        assert rejected.class_name == "Customer"
        assert rejected.location.file == Path("app/models/customer.rb")
        assert rejected.reason.startswith("classes[1].layer: ")
        assert "'service'" in rejected.reason

    def test_unknown_origin_names_path(self) -> None:
        """Unknown receiver origins name the call site."""
        data = _snapshot()
        data["classes"][0]["methods"][0]["call_sites"][0]["origin"] = "global"  # type: ignore[index]

        model = load_snapshot(data)

        assert model.get_class("Invoice") is None
        assert model.rejected[0].reason.startswith(
            "classes[0].methods[0].call_sites[0].origin: unknown origin"
        )

    def test_missing_required_field(self) -> None:
        """Required fields are reported when missing."""
        data = _snapshot()
        del data["classes"][0]["file"]  # type: ignore[attr-defined]

        model = load_snapshot(data)

        rejected = model.rejected[0]
        assert rejected.reason == "classes[0].file: required field is missing"
        assert rejected.location.file == Path("<snapshot>")

    def test_invariant_failure_names_path(self) -> None:
        """Value object invariants are reported by path."""
        data = _snapshot()
        data["classes"][0]["methods"][0]["call_sites"][0]["chain"] = []  # type: ignore[index]

        model = load_snapshot(data)

        assert model.rejected[0].reason.startswith("classes[0].methods[0].call_sites[0]: ")
        assert "at least one name" in model.rejected[0].reason

    def test_nameless_entry_named_by_path(self) -> None:
        """Entries that are not objects are named by their position."""
        model = load_snapshot({"classes": [], "templates": [42]})

        assert model.rejected[0].class_name == "templates[0]"

    def test_rejected_reported_by_checker(self) -> None:
        """Rejected classes become malformed-input violations and count as skipped."""
        data = _snapshot()
        data["classes"][1]["layer"] = "service"  # type: ignore[index]

        result = ModelChecker.with_defaults().check(load_snapshot(data))

        assert result.stats.classes_skipped == 1
        assert result.stats.classes_analyzed == 1
        meta = result.by_rule(MALFORMED_INPUT_RULE_ID)
        assert [v.class_name for v in meta] == ["Customer"]
        assert meta[0].severity is Severity.ERROR


class TestSnapshotLoaderLoadPath:
    """Tests for SnapshotLoader.load_path."""

    def test_reads_json_file(self, tmp_path: Path) -> None:
        """A JSON file is read and loaded."""
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(_snapshot()), encoding="utf-8")

        model = SnapshotLoader().load_path(path)

        assert model.class_names == frozenset({"Invoice", "Customer"})

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise MalformedInputError naming the path."""
        path = tmp_path / "missing.json"

        with pytest.raises(MalformedInputError) as exc_info:
            SnapshotLoader().load_path(path)

        assert exc_info.value.subject == str(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Unparseable files are malformed input."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(MalformedInputError, match="invalid JSON"):
            SnapshotLoader().load_path(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        """Undecodable bytes are malformed input."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"classes": [\xff]}')

        with pytest.raises(MalformedInputError, match="not UTF-8") as exc_info:
            SnapshotLoader().load_path(path)

        assert exc_info.value.subject == str(path)

    def test_directory(self, tmp_path: Path) -> None:
        """Paths that cannot be read as files are malformed input."""
        with pytest.raises(MalformedInputError, match="cannot read file"):
            SnapshotLoader().load_path(tmp_path)
