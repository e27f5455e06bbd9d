"""Core package for requirement wizard errors and shared validators."""

from .errors import SchemaLookupError, StateError, WizardError

__all__ = ["SchemaLookupError", "StateError", "WizardError"]
