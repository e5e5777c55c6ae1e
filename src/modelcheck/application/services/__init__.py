"""Application services."""

from modelcheck.application.services.model_checker import ModelChecker

__all__ = ["ModelChecker"]
