"""Step state machine that gates wizard navigation on per-step validation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from opentelemetry import trace

from config import Settings, load_settings
from core.errors import StateError
from models.requirement import (
    Category,
    FinalizedRequirement,
    StepResult,
    ValidationErrorMap,
    WizardSnapshot,
)
from utils.logging_context import log_context
from wizard.events import WizardEventBus, WizardEventName, WizardListener
from wizard.form_state import FormStateStore
from wizard.schema_registry import DEFAULT_REGISTRY, SchemaRegistry

logger = logging.getLogger(__name__)

WIZARD_TRACER = trace.get_tracer(__name__)


class StepController:
    """Manage the step index and active category of one wizard session.

    Gate failures on :meth:`next` are returned as data. Misuse such as an
    unknown category or an early :meth:`submit` raises.
    """

    def __init__(
        self,
        category: Category | str,
        *,
        store: FormStateStore | None = None,
        registry: SchemaRegistry | None = None,
        settings: Settings | None = None,
        events: WizardEventBus | None = None,
    ) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._settings = settings or load_settings()
        self._initial_category = self._resolve_category(category)
        self._category = self._initial_category
        self._store = store or FormStateStore(wizard_id=self._settings.default_wizard_id)
        self._events = events or WizardEventBus()
        self._current_step = 0
        self._validated_values: dict[str, Any] | None = None

    def _resolve_category(self, category: Category | str) -> Category:
        resolved = Category.parse(category)
        # Raises ``SchemaLookupError`` for categories the registry does not carry.
        self._registry.get_step_count(resolved)
        return resolved

    @property
    def category(self) -> Category:
        return self._category

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def current_step_key(self) -> str:
        return self._registry.get_step(self._category, self._current_step).key

    @property
    def step_count(self) -> int:
        return self._registry.get_step_count(self._category)

    @property
    def is_terminal(self) -> bool:
        return self._current_step >= self._registry.terminal_index(self._category)

    @property
    def store(self) -> FormStateStore:
        return self._store

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def subscribe(self, listener: WizardListener) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _emit(self, name: WizardEventName, **payload: Any) -> None:
        self._events.emit(name, category=self._category, step=self._current_step, payload=payload)

    def set_field(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` without touching any other field."""

        self._store.set(key, value)
        self._emit(WizardEventName.FIELD_CHANGED, key=key)

    def get_field(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def validate_current_step(self) -> ValidationErrorMap:
        """Return one error per failing field of the current step.

        Every rule is evaluated so the caller sees all failures at once.
        """

        values = self._store.view()
        errors: ValidationErrorMap = {}
        for rule in self._registry.get_field_rules(self._category, self._current_step):
            message = rule.check(values)
            if message is not None:
                errors[rule.key] = message
        return errors

    def next(self) -> StepResult:
        """Advance one step when the current step's rules pass."""

        step_key = self.current_step_key
        with (
            WIZARD_TRACER.start_as_current_span("wizard.next") as span,
            log_context(wizard_step=step_key, category=self._category.value),
        ):
            span.set_attribute("wizard.category", self._category.value)
            span.set_attribute("wizard.step", step_key)
            if self.is_terminal:
                logger.debug("next() called on terminal step '%s'; nothing to do", step_key)
                return StepResult(ok=True)

            errors = self.validate_current_step()
            self._store.set_errors(errors)
            if errors:
                span.set_attribute("wizard.validation_errors", len(errors))
                logger.info(
                    "Step '%s' blocked by %d invalid field(s): %s",
                    step_key,
                    len(errors),
                    ", ".join(errors),
                )
                self._emit(WizardEventName.VALIDATION_FAILED, errors=dict(errors))
                return StepResult(ok=False, errors=errors)

            self._validated_values = self._store.values()
            self._current_step += 1
            logger.info("Advanced from step '%s' to '%s'", step_key, self.current_step_key)
            self._emit(WizardEventName.STEP_ADVANCED, previous=step_key, current=self.current_step_key)
            return StepResult(ok=True)

    def previous(self) -> None:
        """Go back one step without validating; stays on the first step.

        The error map is cleared on every call, including on the first step.
        """

        self._store.clear_errors()
        if self._current_step == 0:
            return
        left = self.current_step_key
        self._current_step -= 1
        logger.debug("Returned from step '%s' to '%s'", left, self.current_step_key)
        self._emit(WizardEventName.STEP_RETURNED, previous=left, current=self.current_step_key)

    def change_category(self, new_category: Category | str) -> None:
        """Rebind the category-specific schema; collected values are kept.

        A controller sitting on the terminal step is moved back one step so the
        new category is gated again before anything can be submitted.
        """

        resolved = self._resolve_category(new_category)
        if resolved is self._category:
            return
        previous = self._category
        self._category = resolved
        self._validated_values = None
        self._store.clear_errors()
        if self.is_terminal and self._current_step > 0:
            self._current_step -= 1
        logger.info("Requirement category changed from '%s' to '%s'", previous.value, resolved.value)
        self._emit(WizardEventName.CATEGORY_CHANGED, previous=previous.value, current=resolved.value)

    def snapshot(self) -> WizardSnapshot:
        return WizardSnapshot(
            category=self._category,
            step=self._current_step,
            step_key=self.current_step_key,
            values=self._store.values(),
            errors=self._store.get_errors(),
        )

    def submit(self) -> FinalizedRequirement:
        """Freeze the last validated values into a :class:`FinalizedRequirement`.

        Raises:
            StateError: If the controller is not on the terminal step.
        """

        step_key = self.current_step_key
        with (
            WIZARD_TRACER.start_as_current_span("wizard.submit") as span,
            log_context(wizard_step=step_key, category=self._category.value),
        ):
            span.set_attribute("wizard.category", self._category.value)
            span.set_attribute("wizard.step", step_key)
            if not self.is_terminal or self._validated_values is None:
                raise StateError(
                    self._current_step,
                    f"submit() is only allowed on the terminal step; current step is '{step_key}'",
                )
            values = self._validated_values
            if values != self._store.view():
                logger.warning("Fields changed after the final gate check; submitting the validated values")
            record = FinalizedRequirement(category=self._category, values=values)
            logger.info("Submitted %s requirement with %d field(s)", self._category.value, len(record.values))
            self._emit(WizardEventName.SUBMITTED, field_count=len(record.values))
            if self._settings.reset_on_submit:
                self.reset()
            return record

    def reset(self) -> None:
        """Return to the initial category and first step with an empty draft."""

        self._store.reset()
        self._category = self._initial_category
        self._current_step = 0
        self._validated_values = None
        self._emit(WizardEventName.RESET)


__all__ = ["StepController"]
