"""Tests for reporters/console.py."""

import re
from io import StringIO

import pytest

from modelcheck.application.reporters import ConsoleConfig, ConsoleReporter
from modelcheck.application.services import ModelChecker
from modelcheck.domain.model.check_result import CheckResult
from modelcheck.domain.model.check_stats import CheckStats
from modelcheck.domain.model.enums import Severity
from modelcheck.domain.model.skipped import SkippedClass
from modelcheck.domain.model.violation import Violation
from tests.factories import invoice_model, make_location


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_negative_limit_raises(self) -> None:
        """max_violations must be >= 0."""
        with pytest.raises(ValueError, match="max_violations"):
            ConsoleConfig(max_violations=-1)


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_render_returns_string(self) -> None:
        """render() returns text with header and table contents."""
        result = ModelChecker.with_defaults().check(invoice_model())

        text = ConsoleReporter(config=ConsoleConfig(width=300)).render(result)

        assert "OBJECT MODEL CHECK" in text
        assert "law-of-demeter" in text
        assert "Invoice" in text
        assert "STATS" in text

    def test_report_writes_to_output(self) -> None:
        """report() writes the rendered text."""
        output = StringIO()

        ConsoleReporter(output).report(CheckResult.empty())

        assert "PASS" in output.getvalue()

    def test_include_rules_filters(self) -> None:
        """Only selected rules are shown."""
        result = ModelChecker.with_defaults().check(invoice_model())
        reporter = ConsoleReporter(config=ConsoleConfig(include_rules=frozenset({"fat-model"})))

        text = reporter.render(result)

        assert "law-of-demeter" not in text

    def test_stats_can_be_hidden(self) -> None:
        """show_stats=False drops the stats section."""
        text = ConsoleReporter(config=ConsoleConfig(show_stats=False)).render(CheckResult.empty())

        assert "STATS" not in text


def _plain(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class TestConsoleReporterMarkup:
    """User-derived text is printed literally."""

    def test_bracketed_method_lists_kept(self) -> None:
        """Fat-model method lists survive rendering."""
        violation = Violation(
            rule_id="fat-model",
            severity=Severity.WARNING,
            class_name="User",
            message="mixes 2 unrelated responsibilities: finder [find_by_email, find_active]; "
            "conversion [to_json, to_csv]",
            location=make_location(),
        )
        result = CheckResult(violations=(violation,), skipped=(), stats=CheckStats.empty())

        text = _plain(ConsoleReporter(config=ConsoleConfig(width=300)).render(result))

        assert "[find_by_email, find_active]" in text
        assert "[to_json, to_csv]" in text

    def test_closing_tag_in_names_does_not_raise(self) -> None:
        """A stray closing tag in a class name or skip reason is plain text."""
        skipped = SkippedClass(
            class_name="Legacy[/x]", reason="owner is [/bold] missing", location=make_location()
        )
        result = CheckResult(
            violations=(skipped.to_violation(),), skipped=(skipped,), stats=CheckStats.empty()
        )

        text = _plain(ConsoleReporter(config=ConsoleConfig(width=300)).render(result))

        assert "Legacy[/x]" in text
        assert "owner is [/bold] missing" in text
