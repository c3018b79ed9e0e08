"""Custom exception hierarchy for the lsf_transitions SDK.

Core computations (classification, interpolation, validation) never
raise; these exceptions belong to the edges: configuration loading,
dict decoding, and strict planning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context_validator import ValidationResult


class LSFTransitionError(Exception):
    """Base exception for all lsf_transitions errors."""


class RuleTableError(LSFTransitionError):
    """Raised when a rule table or discourse configuration cannot be loaded."""


class ExpressionFormatError(LSFTransitionError):
    """Raised when a dict cannot be decoded into an expression or context."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        location = f" (at {path})" if path else ""
        super().__init__(f"{message}{location}")


class TransitionValidationError(LSFTransitionError):
    """Raised by a strict planner when a sequence fails discourse validation."""

    def __init__(self, message: str, result: ValidationResult) -> None:
        self.result = result
        super().__init__(message)
