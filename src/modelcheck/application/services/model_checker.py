"""Main facade for object-model checking.

ModelChecker is the primary entry point for running the analysis.
Composition-based: accepts config, rules and reporter.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from operator import attrgetter
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from modelcheck.application.analyzers import UnitAnalyzer
from modelcheck.application.graph import AssociationGraphBuilder
from modelcheck.application.rules import check_rule_ids, rules_from_config
from modelcheck.domain.exceptions import AnalysisCancelled, MalformedInputError
from modelcheck.domain.model.check_result import CheckResult
from modelcheck.domain.model.check_stats import CheckStats
from modelcheck.domain.model.configuration import AnalysisConfig
from modelcheck.domain.model.rule_context import RuleContext
from modelcheck.domain.model.skipped import SkippedClass

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping

    from modelcheck.domain.model.association_graph import AssociationGraph
    from modelcheck.domain.model.class_analysis import ClassAnalysis
    from modelcheck.domain.model.location import Location
    from modelcheck.domain.model.structural_model import StructuralModel
    from modelcheck.domain.model.violation import Violation
    from modelcheck.domain.ports.reporter import ReporterProtocol
    from modelcheck.domain.ports.rule import RuleProtocol

logger = logging.getLogger(__name__)


class _Unit:
    """One schedulable piece of work: a class or a template."""

    __slots__ = ("analyze", "is_template", "location", "name")

    def __init__(
        self,
        name: str,
        location: Location,
        analyze: Callable[[], ClassAnalysis],
        *,
        is_template: bool,
    ) -> None:
        self.name = name
        self.location = location
        self.analyze = analyze
        self.is_template = is_template


class ModelChecker:
    """Main facade for object-model checking.

    Composition-based: accepts config, rules and reporter as dependencies.
    Each check builds the association graph, runs the per-unit analyzers,
    then evaluates the enabled rules over the frozen analyzer outputs.

    Factory methods:
    - with_defaults(): Every rule, default thresholds
    - from_config(): Rules based on AnalysisConfig
    - from_mapping(): Rules based on a plain configuration mapping

    Example:
        model = load_snapshot(json.loads(path.read_text()))
        checker = ModelChecker.with_defaults()
        result = checker.check(model)
        if not result.passed:
            print(f"Violations: {result.violation_count}")
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        *,
        rules: Sequence[RuleProtocol] | None = None,
        reporter: ReporterProtocol | None = None,
    ) -> None:
        """Initialize checker with dependencies.

        Configuration errors surface here, before any analysis runs.

        Args:
            config: Run configuration (default: AnalysisConfig())
            rules: Rules to run (default: enabled rules from config)
            reporter: Optional reporter for output

        Raises:
            ConfigurationError: If config references an unknown rule
        """
        self._config = config if config is not None else AnalysisConfig()
        if rules is None:
            self._rules = rules_from_config(self._config)
        else:
            check_rule_ids(self._config)
            self._rules = tuple(rules)
        self._reporter = reporter
        self._builder = AssociationGraphBuilder()

    @classmethod
    def with_defaults(cls, *, reporter: ReporterProtocol | None = None) -> Self:
        """Create checker with every rule and default thresholds."""
        return cls(AnalysisConfig(), reporter=reporter)

    @classmethod
    def from_config(
        cls,
        config: AnalysisConfig,
        *,
        reporter: ReporterProtocol | None = None,
    ) -> Self:
        """Create checker with rules based on config.

        Args:
            config: Run configuration
            reporter: Optional reporter

        Returns:
            ModelChecker with config-based rules

        Raises:
            ConfigurationError: If config references an unknown rule
        """
        return cls(config, reporter=reporter)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        *,
        reporter: ReporterProtocol | None = None,
    ) -> Self:
        """Create checker from a plain configuration mapping.

        Raises:
            ConfigurationError: If the mapping is invalid
        """
        return cls(AnalysisConfig.from_mapping(data), reporter=reporter)

    @property
    def config(self) -> AnalysisConfig:
        """Run configuration."""
        return self._config

    @property
    def rule_count(self) -> int:
        """Number of enabled rules."""
        return len(self._rules)

    @property
    def rule_ids(self) -> tuple[str, ...]:
        """Identifiers of enabled rules, evaluation order."""
        return tuple(rule.rule_id for rule in self._rules)

    def check(
        self,
        model: StructuralModel,
        *,
        cancel: threading.Event | None = None,
    ) -> CheckResult:
        """Run the analysis and return the result.

        Reports result if reporter is configured.

        Args:
            model: Structural model snapshot
            cancel: Optional event checked after each unit completes

        Returns:
            CheckResult with ordered violations, skipped classes and stats

        Raises:
            AnalysisCancelled: If cancel was set during the run
        """
        start_time = time.perf_counter()

        # Barrier: graph and index are complete before any unit starts
        graph = self._builder.build(model)
        methods = self._builder.build_index(model)
        analyzer = UnitAnalyzer(graph, methods, self._config)

        units = self._schedule(model, analyzer)
        analyses, unit_skips = self._analyze(units, cancel)
        skipped = model.rejected + unit_skips

        context = RuleContext(
            model=model,
            graph=graph,
            methods=methods,
            analyses=MappingProxyType(analyses),
            config=self._config,
        )
        violations = self._run_rules(context)
        violations.extend(entry.to_violation() for entry in skipped)

        end_time = time.perf_counter()
        stats = self._build_stats(
            graph, units, analyses, skipped, (end_time - start_time) * 1000
        )
        result = CheckResult(
            violations=tuple(sorted(violations, key=attrgetter("sort_key"))),
            skipped=skipped,
            stats=stats,
        )

        logger.info(
            "checked %d classes and %d templates: %d violations, %d skipped",
            stats.classes_analyzed,
            stats.templates_analyzed,
            result.violation_count,
            stats.classes_skipped,
        )

        if self._reporter is not None:
            self._reporter.report(result)

        return result

    def _schedule(self, model: StructuralModel, analyzer: UnitAnalyzer) -> tuple[_Unit, ...]:
        """Turn every class and template into a unit, declaration order.

        A name declared a second time (class or template) is still
        scheduled so that it fails as malformed input.
        """
        units: list[_Unit] = []
        seen: set[str] = set()
        for entry in model.classes:
            duplicate = entry.qualified_name in seen
            seen.add(entry.qualified_name)
            units.append(
                _Unit(
                    entry.qualified_name,
                    entry.location,
                    lambda e=entry, d=duplicate: analyzer.analyze_class(e, duplicate=d),
                    is_template=False,
                )
            )
        for template in model.templates:
            duplicate = template.name in seen
            seen.add(template.name)
            units.append(
                _Unit(
                    template.name,
                    template.location,
                    lambda t=template, d=duplicate: analyzer.analyze_template(t, duplicate=d),
                    is_template=True,
                )
            )
        return tuple(units)

    def _analyze(
        self,
        units: tuple[_Unit, ...],
        cancel: threading.Event | None,
    ) -> tuple[dict[str, ClassAnalysis], tuple[SkippedClass, ...]]:
        """Run every unit, sequentially or on a thread pool.

        Results are merged after workers complete, keyed by unit name, so
        completion order never leaks into the output.

        Raises:
            AnalysisCancelled: If cancel is set at a checkpoint
        """
        outcomes: dict[int, ClassAnalysis | SkippedClass] = {}

        if self._config.max_workers == 1 or len(units) <= 1:
            for position, unit in enumerate(units):
                outcomes[position] = _run_unit(unit)
                _checkpoint(cancel, len(outcomes), len(units))
        else:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
                futures: dict[Future[ClassAnalysis | SkippedClass], int] = {
                    executor.submit(_run_unit, unit): position
                    for position, unit in enumerate(units)
                }
                for future in as_completed(futures):
                    outcomes[futures[future]] = future.result()
                    try:
                        _checkpoint(cancel, len(outcomes), len(units))
                    except AnalysisCancelled:
                        executor.shutdown(wait=True, cancel_futures=True)
                        raise

        analyses: dict[str, ClassAnalysis] = {}
        skipped: list[SkippedClass] = []
        for position in range(len(units)):
            outcome = outcomes[position]
            if isinstance(outcome, SkippedClass):
                skipped.append(outcome)
            else:
                analyses[outcome.subject] = outcome
        return analyses, tuple(skipped)

    def _run_rules(self, context: RuleContext) -> list[Violation]:
        """Run all rules and collect violations.

        Args:
            context: Frozen analyzer outputs shared by every rule

        Returns:
            List of all violations from all rules, unordered
        """
        all_violations: list[Violation] = []

        for rule in self._rules:
            violations = rule.evaluate(context)
            logger.debug("rule %s: %d violations", rule.rule_id, len(violations))
            all_violations.extend(violations)

        return all_violations

    def _build_stats(
        self,
        graph: AssociationGraph,
        units: tuple[_Unit, ...],
        analyses: Mapping[str, ClassAnalysis],
        skipped: tuple[SkippedClass, ...],
        analysis_time_ms: float,
    ) -> CheckStats:
        """Build check statistics.

        Args:
            graph: Association graph of the run
            units: Scheduled units
            analyses: Successful unit analyses
            skipped: Skipped units
            analysis_time_ms: Wall-clock time in milliseconds

        Returns:
            CheckStats with analysis metrics
        """
        return CheckStats(
            classes_analyzed=sum(1 for a in analyses.values() if not a.is_template),
            classes_skipped=len(skipped),
            templates_analyzed=sum(1 for a in analyses.values() if a.is_template),
            methods_analyzed=sum(a.method_count for a in analyses.values()),
            call_sites_analyzed=sum(a.call_site_count for a in analyses.values()),
            association_edges=graph.edge_count,
            unresolved_edges=len(graph.unresolved_edges),
            rules_run=len(self._rules),
            analysis_time_ms=analysis_time_ms,
        )


def _run_unit(unit: _Unit) -> ClassAnalysis | SkippedClass:
    """Analyze one unit, converting malformed input into a skip entry."""
    try:
        analysis = unit.analyze()
    except MalformedInputError as e:
        logger.warning("skipping %s: %s", unit.name, e.reason)
        return SkippedClass(class_name=unit.name, reason=e.reason, location=unit.location)
    logger.debug("analyzed %s", unit.name)
    return analysis


def _checkpoint(cancel: threading.Event | None, completed: int, total: int) -> None:
    """Cooperative cancellation point between units."""
    if cancel is not None and cancel.is_set():
        logger.warning("analysis cancelled after %d of %d units", completed, total)
        raise AnalysisCancelled(completed=completed, total=total)
