"""Pydantic models exchanged between the wizard core and its callers."""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.errors import SchemaLookupError

ValidationErrorMap = Dict[str, str]


class Category(StrEnum):
    """Closed set of requirement categories chosen on the first step."""

    EXPERT = "expert"
    PRODUCT = "product"
    SERVICE = "service"
    LOGISTICS = "logistics"

    @classmethod
    def parse(cls, value: Category | str) -> Category:
        """Return the matching member or raise :class:`SchemaLookupError`."""

        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise SchemaLookupError(value)


class StepResult(BaseModel):
    """Outcome of a step gate check."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    errors: ValidationErrorMap = Field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.ok


class WizardSnapshot(BaseModel):
    """Read-only view of a wizard session for the rendering layer."""

    model_config = ConfigDict(frozen=True)

    category: Category
    step: int
    step_key: str
    values: Dict[str, Any] = Field(default_factory=dict)
    errors: ValidationErrorMap = Field(default_factory=dict)


class FinalizedRequirement(BaseModel):
    """Immutable requirement record produced by a successful submit."""

    model_config = ConfigDict(frozen=True)

    category: Category
    values: Dict[str, Any] = Field(default_factory=dict)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("values", mode="before")
    @classmethod
    def _detach_values(cls, value: object) -> object:
        """Store a private copy so later form edits cannot leak into the record."""

        if isinstance(value, dict):
            return deepcopy(value)
        return value

    def active_fields(self) -> dict[str, Any]:
        """Return only the values that belong to this record's category schema."""

        from wizard.schema_registry import DEFAULT_REGISTRY

        known = DEFAULT_REGISTRY.known_fields(self.category)
        return {key: deepcopy(value) for key, value in self.values.items() if key in known}


__all__ = [
    "Category",
    "FinalizedRequirement",
    "StepResult",
    "ValidationErrorMap",
    "WizardSnapshot",
]
