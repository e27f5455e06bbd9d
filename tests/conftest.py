from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import Settings


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture(autouse=True)
def _isolate_wizard_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` overrides out of the test-suite."""

    for name in ("WIZARD_RESET_ON_SUBMIT", "WIZARD_LOG_LEVEL", "WIZARD_DEFAULT_ID"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def keep_state_settings() -> Settings:
    """Settings that leave the controller on the terminal step after submit."""

    return Settings(reset_on_submit=False)
