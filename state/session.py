"""Helpers for mounting requirement wizards in Streamlit session state."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, cast

import streamlit as st

from config import load_settings
from constants.keys import StateKeys
from models.requirement import Category, FinalizedRequirement
from wizard import api
from wizard.api import WizardHandle
from wizard.session_keys import WizardSessionKeys

logger = logging.getLogger(__name__)


def _resolve_state(session_state: MutableMapping[str, Any] | None) -> MutableMapping[str, Any]:
    if session_state is not None:
        return session_state
    return cast(MutableMapping[str, Any], st.session_state)


def _handle_key(wizard_id: str) -> str:
    return f"{StateKeys.WIZARD_HANDLE}:{wizard_id}"


def ensure_wizard(
    category: Category | str,
    *,
    wizard_id: str | None = None,
    session_state: MutableMapping[str, Any] | None = None,
) -> WizardHandle:
    """Return the session's wizard handle, mounting a new one when missing.

    Streamlit reruns the page script on every interaction, so the handle is
    kept in ``st.session_state``. When an existing handle was mounted for a
    different category the category is switched instead of starting over.
    """

    state = _resolve_state(session_state)
    resolved_id = wizard_id or load_settings().default_wizard_id
    key = _handle_key(resolved_id)
    existing = state.get(key)
    if isinstance(existing, WizardHandle):
        resolved = Category.parse(category)
        if existing.category is not resolved:
            api.change_category(existing, resolved)
        return existing
    handle = api.init(category, wizard_id=resolved_id, session_state=state)
    state[key] = handle
    logger.debug("Mounted requirement wizard '%s' for category '%s'", resolved_id, handle.category.value)
    return handle


def store_submission(
    record: FinalizedRequirement,
    *,
    session_state: MutableMapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Keep a JSON-safe copy of ``record`` for the submission transport."""

    state = _resolve_state(session_state)
    payload = record.model_dump(mode="json")
    state[StateKeys.LAST_SUBMISSION] = payload
    return payload


def discard_wizard(
    wizard_id: str | None = None,
    *,
    session_state: MutableMapping[str, Any] | None = None,
) -> None:
    """Drop the handle and draft of an abandoned wizard."""

    state = _resolve_state(session_state)
    resolved_id = wizard_id or load_settings().default_wizard_id
    keys = WizardSessionKeys(wizard_id=resolved_id)
    for key in (_handle_key(resolved_id), keys.values, keys.errors):
        state.pop(key, None)


__all__ = ["discard_wizard", "ensure_wizard", "store_submission"]
