"""Lifecycle events emitted by the wizard core for an external UI layer.

The core never renders notifications itself. A rendering layer subscribes to
these events and decides whether to show a toast, a banner, or nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from models.requirement import Category

logger = logging.getLogger(__name__)


class WizardEventName(StrEnum):
    FIELD_CHANGED = "fieldChanged"
    VALIDATION_FAILED = "validationFailed"
    STEP_ADVANCED = "stepAdvanced"
    STEP_RETURNED = "stepReturned"
    CATEGORY_CHANGED = "categoryChanged"
    SUBMITTED = "submitted"
    RESET = "reset"


@dataclass(frozen=True)
class WizardEvent:
    """A single lifecycle notification."""

    name: WizardEventName
    category: Category
    step: int
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


WizardListener = Callable[[WizardEvent], None]


class WizardEventBus:
    """Dispatch :class:`WizardEvent` records to registered listeners in order."""

    def __init__(self) -> None:
        self._listeners: list[WizardListener] = []

    def subscribe(self, listener: WizardListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it again."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: WizardListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(
        self,
        name: WizardEventName,
        *,
        category: Category,
        step: int,
        payload: Mapping[str, Any] | None = None,
    ) -> WizardEvent:
        """Build and deliver an event; listener failures are logged, not raised."""

        event = WizardEvent(
            name=name,
            category=category,
            step=step,
            payload=MappingProxyType(dict(payload or {})),
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Wizard listener %r failed while handling %s", listener, name.value)
        return event


__all__ = [
    "WizardEvent",
    "WizardEventBus",
    "WizardEventName",
    "WizardListener",
]
