from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WizardSessionKeys:
    """Namespaced session-state keys for requirement wizard storage."""

    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"wiz:{self.wizard_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def values(self) -> str:
        return self.namespace("values")

    @property
    def errors(self) -> str:
        return self.namespace("errors")
