"""Reporters for object-model check results.

PlainTextReporter and JSONReporter use stdlib only.
ConsoleReporter renders rich tables.
"""

from modelcheck.application.reporters._base import BaseReporter
from modelcheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from modelcheck.application.reporters.json_reporter import JSONReporter, violation_to_dict
from modelcheck.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
    "violation_to_dict",
]
