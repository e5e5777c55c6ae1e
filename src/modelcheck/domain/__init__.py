"""modelcheck domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, pathlib, fnmatch, collections.abc
"""

from modelcheck.domain.exceptions import (
    AnalysisCancelled,
    ConfigurationError,
    MalformedInputError,
    ModelCheckError,
    ModelCheckSignal,
    UnknownRuleError,
)

__all__ = [
    "AnalysisCancelled",
    "ConfigurationError",
    "MalformedInputError",
    "ModelCheckError",
    "ModelCheckSignal",
    "UnknownRuleError",
]
