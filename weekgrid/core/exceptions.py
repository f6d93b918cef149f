"""
Custom exceptions for the engine.
"""

from typing import Any, Optional


class WeekGridError(Exception):
    """Base exception for weekgrid."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(WeekGridError):
    """Engine was wired up without a usable collaborator."""

    pass


class ValidationError(WeekGridError):
    """Validation error."""

    pass


class StateImportError(WeekGridError):
    """Imported state could not be coerced to the store model."""

    pass
