"""Domain exceptions: all public errors of modelcheck.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Infrastructure use these, not define their own public exceptions.

Unresolved references are NOT exceptions: they are recorded as annotations on
the association graph and analysis continues with degraded precision.
"""


class ModelCheckError(Exception):
    """Base for all modelcheck error exceptions.

    Allows: except ModelCheckError to catch all library errors.
    """


# N818: Signals are NOT errors, no "Error" suffix per PEP 8.
class ModelCheckSignal(Exception):  # noqa: N818
    """Base for all modelcheck signal exceptions (flow control, not errors)."""


class ConfigurationError(ModelCheckError, ValueError):
    """Invalid analysis configuration.

    Fatal before any analysis starts. Carries the offending key so the
    caller can point at the exact configuration entry.

    Attributes:
        key: Dotted path of the offending configuration entry.
        reason: Why the entry is invalid.
    """

    def __init__(self, *, key: str, reason: str) -> None:
        """Initialize with offending key and reason."""
        self.key = key
        self.reason = reason
        super().__init__(f"invalid configuration at {key!r}: {reason}")


class UnknownRuleError(ConfigurationError):
    """Configuration names a rule id that is not registered.

    Attributes:
        rule_id: The unknown rule id.
    """

    def __init__(self, *, key: str, rule_id: str, known: tuple[str, ...]) -> None:
        """Initialize with key, unknown id and known ids."""
        self.rule_id = rule_id
        super().__init__(
            key=key,
            reason=f"unknown rule id {rule_id!r} (known: {', '.join(known)})",
        )


class MalformedInputError(ModelCheckError, ValueError):
    """Structural model violates its own invariants.

    Fatal for the affected class only: the class is skipped and reported as
    a skipped-with-reason entry, the rest of the run proceeds.

    Attributes:
        subject: Class (or template / snapshot path) that is malformed.
        reason: Description of the broken invariant.
    """

    def __init__(self, *, subject: str, reason: str) -> None:
        """Initialize with subject and reason."""
        self.subject = subject
        self.reason = reason
        super().__init__(f"{subject}: {reason}")


class AnalysisCancelled(ModelCheckSignal):
    """Signal raised when a run is cancelled at a class checkpoint.

    Partial results are discarded. NOT an error: flow control requested
    by the caller.

    Attributes:
        completed: Number of units analyzed before cancellation.
        total: Number of units scheduled.
    """

    def __init__(self, *, completed: int, total: int) -> None:
        """Initialize with progress counters."""
        self.completed = completed
        self.total = total
        super().__init__(f"analysis cancelled after {completed} of {total} units")
