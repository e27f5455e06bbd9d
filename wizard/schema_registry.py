"""Registry for requirement wizard steps, field rules, and canonical order.

Each category owns an independently authored ``details`` step. The
``category``, ``review`` and ``confirm`` steps are shared by all categories.
Common validators live in :mod:`core.validators` and are referenced, never
copied, by the category schemas below.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from constants.keys import FieldKeys
from constants.options import (
    CERTIFICATION_OPTIONS,
    EQUIPMENT_TYPES,
    EXPERT_SPECIALIZATIONS,
    QUALITY_REQUIREMENTS,
)
from core.errors import SchemaLookupError
from core.validators import (
    REQUIRED_MESSAGE,
    FieldValidator,
    accepted,
    date_after,
    enum_membership,
    is_value_present,
    positive_number,
    required_string,
    subset_of,
    valid_date,
)
from models.requirement import Category


@dataclass(frozen=True)
class FieldRule:
    """A single field key plus the validator applied to its value."""

    key: str
    validator: FieldValidator | None = None
    required: bool = True

    def check(self, values: Mapping[str, object]) -> str | None:
        """Return an error message for ``values`` or ``None`` when the field passes.

        Optional fields are only validated once the user has entered a value.
        """

        value = values.get(self.key)
        if not is_value_present(value):
            return REQUIRED_MESSAGE if self.required else None
        if self.validator is None:
            return None
        return self.validator(value, values)


@dataclass(frozen=True)
class StepDefinition:
    """Metadata + validation contract for an individual wizard step."""

    key: str
    label: str
    required_fields: tuple[FieldRule, ...] = ()
    optional_fields: tuple[FieldRule, ...] = ()
    recheck_previous: bool = False

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        return self.required_fields + self.optional_fields

    @property
    def field_keys(self) -> tuple[str, ...]:
        return tuple(rule.key for rule in self.rules)


def _optional(key: str, validator: FieldValidator | None = None) -> FieldRule:
    return FieldRule(key=key, validator=validator, required=False)


_expert_specialization: Final[FieldValidator] = enum_membership(EXPERT_SPECIALIZATIONS)
_equipment_type: Final[FieldValidator] = enum_membership(EQUIPMENT_TYPES)
_quality_level: Final[FieldValidator] = enum_membership(QUALITY_REQUIREMENTS)
_certifications: Final[FieldValidator] = subset_of(CERTIFICATION_OPTIONS)


CATEGORY_STEP: Final[StepDefinition] = StepDefinition(
    key="category",
    label="Category",
    required_fields=(FieldRule(FieldKeys.TITLE, required_string),),
)

REVIEW_STEP: Final[StepDefinition] = StepDefinition(
    key="review",
    label="Review",
    required_fields=(FieldRule(FieldKeys.TERMS_ACCEPTED, accepted),),
    recheck_previous=True,
)

CONFIRM_STEP: Final[StepDefinition] = StepDefinition(key="confirm", label="Confirm")


EXPERT_DETAILS_STEP: Final[StepDefinition] = StepDefinition(
    key="details",
    label="Expert details",
    required_fields=(
        FieldRule(FieldKeys.SPECIALIZATION, _expert_specialization),
        FieldRule(FieldKeys.DESCRIPTION, required_string),
    ),
    optional_fields=(
        _optional(FieldKeys.CERTIFICATIONS, _certifications),
        _optional(FieldKeys.BUDGET, positive_number),
        _optional(FieldKeys.DURATION, positive_number),
        _optional(FieldKeys.START_DATE, valid_date),
        _optional(FieldKeys.END_DATE, date_after(FieldKeys.START_DATE)),
    ),
)

PRODUCT_DETAILS_STEP: Final[StepDefinition] = StepDefinition(
    key="details",
    label="Product details",
    required_fields=(
        FieldRule(FieldKeys.PRODUCT_SPECIFICATIONS, required_string),
        FieldRule(FieldKeys.QUANTITY, positive_number),
    ),
    optional_fields=(
        _optional(FieldKeys.BUDGET, positive_number),
        _optional(FieldKeys.DELIVERY_DATE, valid_date),
        _optional(FieldKeys.QUALITY_REQUIREMENTS, _quality_level),
    ),
)

SERVICE_DETAILS_STEP: Final[StepDefinition] = StepDefinition(
    key="details",
    label="Service details",
    required_fields=(
        FieldRule(FieldKeys.SERVICE_DESCRIPTION, required_string),
        FieldRule(FieldKeys.SCOPE_OF_WORK, required_string),
        FieldRule(FieldKeys.LOCATION, required_string),
    ),
    optional_fields=(
        _optional(FieldKeys.SERVICE_START_DATE, valid_date),
        _optional(FieldKeys.SERVICE_END_DATE, date_after(FieldKeys.SERVICE_START_DATE)),
        _optional(FieldKeys.SERVICE_BUDGET, positive_number),
    ),
)

LOGISTICS_DETAILS_STEP: Final[StepDefinition] = StepDefinition(
    key="details",
    label="Logistics details",
    required_fields=(
        FieldRule(FieldKeys.EQUIPMENT_TYPE, _equipment_type),
        FieldRule(FieldKeys.PICKUP_LOCATION, required_string),
        FieldRule(FieldKeys.DELIVERY_LOCATION, required_string),
    ),
    optional_fields=(
        _optional(FieldKeys.WEIGHT, positive_number),
        _optional(FieldKeys.DIMENSIONS),
        _optional(FieldKeys.PICKUP_DATE, valid_date),
        _optional(FieldKeys.DELIVERY_DATE, date_after(FieldKeys.PICKUP_DATE)),
        _optional(FieldKeys.SPECIAL_HANDLING),
    ),
)


CATEGORY_SCHEMAS: Final[Mapping[Category, tuple[StepDefinition, ...]]] = MappingProxyType(
    {
        Category.EXPERT: (CATEGORY_STEP, EXPERT_DETAILS_STEP, REVIEW_STEP, CONFIRM_STEP),
        Category.PRODUCT: (CATEGORY_STEP, PRODUCT_DETAILS_STEP, REVIEW_STEP, CONFIRM_STEP),
        Category.SERVICE: (CATEGORY_STEP, SERVICE_DETAILS_STEP, REVIEW_STEP, CONFIRM_STEP),
        Category.LOGISTICS: (CATEGORY_STEP, LOGISTICS_DETAILS_STEP, REVIEW_STEP, CONFIRM_STEP),
    }
)


def _dedupe_rules(rules: Sequence[FieldRule]) -> list[FieldRule]:
    seen: set[str] = set()
    unique: list[FieldRule] = []
    for rule in rules:
        if rule.key in seen:
            continue
        seen.add(rule.key)
        unique.append(rule)
    return unique


class SchemaRegistry:
    """Resolve step definitions and field rules for a (category, step) pair."""

    def __init__(self, schemas: Mapping[Category, Sequence[StepDefinition]] | None = None) -> None:
        source = schemas if schemas is not None else CATEGORY_SCHEMAS
        self._schemas: dict[Category, tuple[StepDefinition, ...]] = {
            Category.parse(category): tuple(steps) for category, steps in source.items()
        }

    def _steps(self, category: Category | str) -> tuple[StepDefinition, ...]:
        resolved = Category.parse(category)
        try:
            return self._schemas[resolved]
        except KeyError:
            raise SchemaLookupError(category) from None

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._schemas)

    def get_step_count(self, category: Category | str) -> int:
        """Return the number of steps configured for ``category``."""

        return len(self._steps(category))

    def get_step(self, category: Category | str, step_index: int) -> StepDefinition:
        """Lookup the step definition at ``step_index`` for ``category``."""

        steps = self._steps(category)
        if not 0 <= step_index < len(steps):
            raise SchemaLookupError(
                category,
                f"Step index {step_index} is out of range for category {category!s}",
            )
        return steps[step_index]

    def step_keys(self, category: Category | str) -> tuple[str, ...]:
        """Return step keys for ``category`` in canonical order."""

        return tuple(step.key for step in self._steps(category))

    def terminal_index(self, category: Category | str) -> int:
        return self.get_step_count(category) - 1

    def _gate_rules(self, category: Category | str, step_index: int) -> list[FieldRule]:
        step = self.get_step(category, step_index)
        if not step.recheck_previous:
            return list(step.rules)
        inherited: list[FieldRule] = []
        for earlier in self._steps(category)[:step_index]:
            inherited.extend(earlier.rules)
        return _dedupe_rules([*inherited, *step.rules])

    def get_required_fields(self, category: Category | str, step_index: int) -> list[FieldRule]:
        """Return the ordered required rules that gate ``step_index``."""

        return [rule for rule in self._gate_rules(category, step_index) if rule.required]

    def get_field_rules(self, category: Category | str, step_index: int) -> list[FieldRule]:
        """Return every rule (required and optional) checked when leaving ``step_index``."""

        return self._gate_rules(category, step_index)

    def known_fields(self, category: Category | str) -> frozenset[str]:
        """Return every field key mentioned by the schema of ``category``."""

        return frozenset(key for step in self._steps(category) for key in step.field_keys)


DEFAULT_REGISTRY: Final[SchemaRegistry] = SchemaRegistry()


__all__ = [
    "CATEGORY_SCHEMAS",
    "DEFAULT_REGISTRY",
    "FieldRule",
    "SchemaRegistry",
    "StepDefinition",
]
