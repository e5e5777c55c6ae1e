"""Domain ports (interfaces/protocols)."""

from modelcheck.domain.ports.reporter import ReporterProtocol
from modelcheck.domain.ports.rule import RuleProtocol

__all__ = [
    "ReporterProtocol",
    "RuleProtocol",
]
