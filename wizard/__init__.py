"""Requirement wizard core: schema registry, form state and step controller."""

from __future__ import annotations

from .api import (
    WizardHandle,
    change_category,
    get_snapshot,
    init,
    next_step,
    previous_step,
    set_field,
    submit,
    subscribe,
)
from .events import WizardEvent, WizardEventName
from .form_state import FormStateStore
from .schema_registry import DEFAULT_REGISTRY, FieldRule, SchemaRegistry, StepDefinition
from .step_controller import StepController

__all__ = [
    "DEFAULT_REGISTRY",
    "FieldRule",
    "FormStateStore",
    "SchemaRegistry",
    "StepController",
    "StepDefinition",
    "WizardEvent",
    "WizardEventName",
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
