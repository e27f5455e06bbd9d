"""Pydantic models for requirement drafts and wizard results."""

from .requirement import (
    Category,
    FinalizedRequirement,
    StepResult,
    ValidationErrorMap,
    WizardSnapshot,
)

__all__ = [
    "Category",
    "FinalizedRequirement",
    "StepResult",
    "ValidationErrorMap",
    "WizardSnapshot",
]
