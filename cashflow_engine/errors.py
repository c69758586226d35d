from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a profile, cash flow or convention is set up inconsistently."""


class InvalidDateRange(ConfigurationError):
    """Raised when a cash flow value date predates its posting date."""


class ConvergenceError(RuntimeError):
    """Raised when the root finder fails to converge on a finite root."""
