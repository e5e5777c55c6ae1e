"""modelcheck - static analysis of object-model design anti-patterns."""

__version__ = "0.1.0"

from modelcheck.application.services import ModelChecker
from modelcheck.domain.model.configuration import AnalysisConfig
from modelcheck.infrastructure.adapters import load_snapshot

__all__ = ["AnalysisConfig", "ModelChecker", "__version__", "load_snapshot"]
