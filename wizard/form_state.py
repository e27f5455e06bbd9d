"""Field value and validation-error storage for a single wizard session."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from copy import deepcopy
from typing import Any

from models.requirement import ValidationErrorMap
from wizard.session_keys import WizardSessionKeys


class FormStateStore:
    """Hold the requirement draft's field bag and the current error map.

    The store writes into any mutable mapping so a Streamlit page can hand in
    ``st.session_state`` and keep values across reruns. Keys are namespaced by
    ``wizard_id`` to allow several wizards in one session.

    Values and errors are independent: writing a value never clears or
    recomputes errors. Errors change only through :meth:`set_errors`.
    """

    def __init__(
        self,
        *,
        wizard_id: str = "default",
        session_state: MutableMapping[str, object] | None = None,
    ) -> None:
        self._storage: MutableMapping[str, object] = session_state if session_state is not None else {}
        self._keys = WizardSessionKeys(wizard_id=wizard_id)

    @property
    def wizard_id(self) -> str:
        return self._keys.wizard_id

    def _bucket(self, key: str) -> dict[str, Any]:
        raw = self._storage.get(key)
        if isinstance(raw, dict):
            return raw
        bucket: dict[str, Any] = dict(raw) if isinstance(raw, Mapping) else {}
        self._storage[key] = bucket
        return bucket

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default``."""

        return self._bucket(self._keys.values).get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Merge a single ``key`` into the field bag."""

        if not isinstance(key, str) or not key:
            raise ValueError("Field keys must be non-empty strings")
        self._bucket(self._keys.values)[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._bucket(self._keys.values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._bucket(self._keys.values)))

    def view(self) -> Mapping[str, Any]:
        """Return the live field bag for read-only use by validators."""

        return self._bucket(self._keys.values)

    def values(self) -> dict[str, Any]:
        """Return a detached copy of every stored value."""

        return deepcopy(self._bucket(self._keys.values))

    def get_errors(self) -> ValidationErrorMap:
        return dict(self._bucket(self._keys.errors))

    def set_errors(self, errors: Mapping[str, str]) -> None:
        """Replace the whole error map with ``errors``."""

        self._storage[self._keys.errors] = dict(errors)

    def clear_errors(self) -> None:
        self._storage[self._keys.errors] = {}

    def reset(self) -> None:
        """Drop every stored value and error."""

        self._storage[self._keys.values] = {}
        self._storage[self._keys.errors] = {}


__all__ = ["FormStateStore"]
