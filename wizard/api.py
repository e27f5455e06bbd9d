"""Handle-based surface consumed by the rendering layer.

A category-selection screen calls :func:`init`; the field-rendering layer
drives the returned handle through :func:`set_field`, :func:`next_step` and
:func:`previous_step` and finally hands the result of :func:`submit` to a
submission transport.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from config import Settings, load_settings
from models.requirement import Category, FinalizedRequirement, StepResult, WizardSnapshot
from utils.logging_context import log_context
from wizard.events import WizardListener
from wizard.form_state import FormStateStore
from wizard.schema_registry import SchemaRegistry
from wizard.step_controller import StepController


@dataclass(frozen=True)
class WizardHandle:
    """Opaque reference to one wizard session owned by the caller."""

    controller: StepController
    session_id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def wizard_id(self) -> str:
        return self.controller.store.wizard_id

    @property
    def category(self) -> Category:
        return self.controller.category


def init(
    category: Category | str,
    *,
    wizard_id: str | None = None,
    session_state: MutableMapping[str, object] | None = None,
    registry: SchemaRegistry | None = None,
    settings: Settings | None = None,
) -> WizardHandle:
    """Mount a new wizard for ``category`` with an empty draft.

    Raises:
        SchemaLookupError: If ``category`` is not a known requirement category.
    """

    resolved_settings = settings or load_settings()
    store = FormStateStore(
        wizard_id=wizard_id or resolved_settings.default_wizard_id,
        session_state=session_state,
    )
    controller = StepController(category, store=store, registry=registry, settings=resolved_settings)
    # Values left behind by an abandoned session under the same id are dropped.
    store.reset()
    return WizardHandle(controller=controller)


def set_field(handle: WizardHandle, key: str, value: Any) -> None:
    with log_context(session_id=handle.session_id):
        handle.controller.set_field(key, value)


def next_step(handle: WizardHandle) -> StepResult:
    with log_context(session_id=handle.session_id):
        return handle.controller.next()


def previous_step(handle: WizardHandle) -> None:
    with log_context(session_id=handle.session_id):
        handle.controller.previous()


def change_category(handle: WizardHandle, new_category: Category | str) -> None:
    with log_context(session_id=handle.session_id):
        handle.controller.change_category(new_category)


def get_snapshot(handle: WizardHandle) -> WizardSnapshot:
    return handle.controller.snapshot()


def submit(handle: WizardHandle) -> FinalizedRequirement:
    with log_context(session_id=handle.session_id):
        return handle.controller.submit()


def subscribe(handle: WizardHandle, listener: WizardListener) -> Callable[[], None]:
    """Register ``listener`` for lifecycle events; returns an unsubscribe callable."""

    return handle.controller.subscribe(listener)


__all__ = [
    "WizardHandle",
    "change_category",
    "get_snapshot",
    "init",
    "next_step",
    "previous_step",
    "set_field",
    "submit",
    "subscribe",
]
