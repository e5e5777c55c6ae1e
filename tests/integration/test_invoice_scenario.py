"""End-to-end scenarios over loaded snapshots."""

import json
from io import StringIO

import pytest

from modelcheck import AnalysisConfig, ModelChecker, load_snapshot
from modelcheck.application.reporters import JSONReporter
from modelcheck.domain.exceptions import ConfigurationError
from modelcheck.domain.model.structural_model import StructuralModel


def _invoice_snapshot(*, with_delegation: bool) -> StructuralModel:
    chain = ["customer", "street"] if with_delegation else ["customer", "address", "street"]
    customer_methods = (
        [{"name": "street", "delegates_to": {"association": "address", "member": "street"}}]
        if with_delegation
        else []
    )
    return load_snapshot(
        {
            "classes": [
                {
                    "name": "Invoice",
                    "layer": "model",
                    "file": "app/models/invoice.rb",
                    "associations": [
                        {"accessor": "customer", "target": "Customer", "kind": "belongs-to"}
                    ],
                    "methods": [
                        {
                            "name": "shipping_label",
                            "line": 11,
                            "call_sites": [
                                {"origin": "self", "chain": chain, "line": 12},
                            ],
                        }
                    ],
                },
                {
                    "name": "Customer",
                    "layer": "model",
                    "file": "app/models/customer.rb",
                    "associations": [
                        {"accessor": "address", "target": "Address", "kind": "owns-one"}
                    ],
                    "methods": customer_methods,
                },
                {"name": "Address", "layer": "model", "file": "app/models/address.rb"},
                {
                    "name": "InvoicesController",
                    "layer": "controller",
                    "file": "app/controllers/invoices_controller.rb",
                    "methods": [
                        {
                            "name": "index",
                            "line": 4,
                            "call_sites": [
                                {
                                    "origin": "external",
                                    "root": "Invoice",
                                    "chain": ["where", "order"],
                                    "line": 5,
                                }
                            ],
                        }
                    ],
                },
            ]
        }
    )


def _json(model: StructuralModel, config: AnalysisConfig | None = None) -> str:
    output = StringIO()
    ModelChecker(config, reporter=JSONReporter(output)).check(model)
    return output.getvalue()


class TestInvoiceScenario:
    """Invoice -> Customer -> Address."""

    def test_deep_chain_yields_one_violation(self) -> None:
        """customer.address.street on Invoice: one depth-2 violation."""
        result = ModelChecker.with_defaults().check(_invoice_snapshot(with_delegation=False))

        demeter = result.by_rule("law-of-demeter")
        assert len(demeter) == 1
        assert demeter[0].class_name == "Invoice"
        assert "Invoice -> Customer -> Address" in demeter[0].message
        assert "depth 2" in demeter[0].message

    def test_delegation_removes_violation(self) -> None:
        """A street delegation on Customer removes the violation."""
        result = ModelChecker.with_defaults().check(_invoice_snapshot(with_delegation=True))

        assert result.by_rule("law-of-demeter") == ()

    def test_controller_query_reported(self) -> None:
        """Invoice.where(...).order(...) in the controller is flagged."""
        result = ModelChecker.with_defaults().check(_invoice_snapshot(with_delegation=False))

        queries = result.by_rule("query-outside-model")
        assert len(queries) == 1
        assert queries[0].class_name == "InvoicesController"

    def test_output_ordered_by_location(self) -> None:
        """Violations come out ordered by file, line and rule."""
        result = ModelChecker.with_defaults().check(_invoice_snapshot(with_delegation=False))

        assert [str(v.location.file) for v in result.violations] == [
            "app/controllers/invoices_controller.rb",
            "app/models/invoice.rb",
        ]


class TestDeterminism:
    """Identical input gives identical output."""

    def test_two_runs_byte_identical(self) -> None:
        """JSON output does not change between runs."""
        model = _invoice_snapshot(with_delegation=False)

        assert _json(model) == _json(model)

    def test_parallel_matches_sequential(self) -> None:
        """Worker count never changes the output."""
        model = _invoice_snapshot(with_delegation=False)

        assert _json(model, AnalysisConfig(max_workers=1)) == _json(
            model, AnalysisConfig(max_workers=8)
        )


class TestRuleIndependence:
    """Disabling rules never changes the remaining rules' output."""

    def test_subset_is_filter_of_full_run(self) -> None:
        """Each single-rule run equals the full run filtered to that rule."""
        model = _invoice_snapshot(with_delegation=False)
        full = json.loads(_json(model))["violations"]

        for rule_id in ("law-of-demeter", "query-outside-model"):
            config = AnalysisConfig(enabled_rules=frozenset({rule_id}))
            single = json.loads(_json(model, config))["violations"]

            assert single == [v for v in full if v["rule_id"] == rule_id]


class TestConfigurationErrors:
    """Configuration errors are fatal before analysis."""

    @pytest.mark.parametrize(
        ("data", "key"),
        [
            ({"enabled_rules": ["god-class"]}, "enabled_rules"),
            ({"taxonomy": {"finder": []}}, "taxonomy.finder"),
            ({"severity": {"fat-model": "loud"}}, "severity.fat-model"),
        ],
    )
    def test_error_carries_key(self, data: dict[str, object], key: str) -> None:
        """The offending key is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            ModelChecker.from_mapping(data)

        assert exc_info.value.key == key
