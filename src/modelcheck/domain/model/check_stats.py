"""Check statistics for analysis results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CheckStats:
    """Statistics from one analysis run.

    Immutable value object tracking analysis metrics.

    Attributes:
        classes_analyzed: Classes that went through the analyzers
        classes_skipped: Classes skipped as malformed input
        templates_analyzed: Templates that went through the analyzers
        methods_analyzed: Methods of analyzed classes
        call_sites_analyzed: Call sites of analyzed classes and templates
        association_edges: Edges in the association graph
        unresolved_edges: Edges pointing outside the analyzed set
        rules_run: Number of enabled rules evaluated
        analysis_time_ms: Wall-clock time of the run in milliseconds
    """

    classes_analyzed: int
    classes_skipped: int
    templates_analyzed: int
    methods_analyzed: int
    call_sites_analyzed: int
    association_edges: int
    unresolved_edges: int
    rules_run: int
    analysis_time_ms: float

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name in (
            "classes_analyzed",
            "classes_skipped",
            "templates_analyzed",
            "methods_analyzed",
            "call_sites_analyzed",
            "association_edges",
            "unresolved_edges",
            "rules_run",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.unresolved_edges > self.association_edges:
            raise ValueError("unresolved_edges cannot exceed association_edges")
        if self.analysis_time_ms < 0:
            raise ValueError(f"analysis_time_ms must be >= 0, got {self.analysis_time_ms}")

    @classmethod
    def empty(cls) -> CheckStats:
        """Create empty check stats."""
        return cls(
            classes_analyzed=0,
            classes_skipped=0,
            templates_analyzed=0,
            methods_analyzed=0,
            call_sites_analyzed=0,
            association_edges=0,
            unresolved_edges=0,
            rules_run=0,
            analysis_time_ms=0.0,
        )
