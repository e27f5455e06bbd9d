"""Custom exception types for wizard integration errors.

Field-level validation failures are never raised; they are returned to the
caller as a ``ValidationErrorMap``. The exceptions below signal misuse of the
wizard by the integrating code and are expected to surface as hard failures.
"""

from __future__ import annotations


class WizardError(Exception):
    """Base exception for requirement wizard integration issues."""


class SchemaLookupError(WizardError):
    """Raised when the registry is asked for an unknown category or step."""

    def __init__(self, category: object, message: str | None = None) -> None:
        self.category = category
        super().__init__(message or f"Unknown requirement category: {category!r}")


class StateError(WizardError):
    """Raised when a wizard operation is invoked in the wrong state."""

    def __init__(self, step: int, message: str | None = None) -> None:
        self.step = step
        super().__init__(message or f"Operation not allowed at step {step}")
