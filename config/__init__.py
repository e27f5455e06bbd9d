"""Central configuration for the requirement wizard.

Settings are read from environment variables (optionally seeded from a local
``.env`` file through ``python-dotenv``):

``WIZARD_RESET_ON_SUBMIT``
    Reset the controller to its initial state after a successful submit.
    Defaults to ``true``.
``WIZARD_LOG_LEVEL``
    Level used by :func:`utils.logging_context.configure_logging`.
``WIZARD_DEFAULT_ID``
    Namespace used for session-state keys when the caller passes none.
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_FALSY_ENV_VALUES: tuple[str, ...] = ("0", "false", "no", "off")
_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime configuration values.

    Attributes:
        reset_on_submit: Reset wizard state once ``submit()`` succeeds.
        log_level: Logging level name for the wizard loggers.
        default_wizard_id: Session-state namespace for wizards without an id.
    """

    reset_on_submit: bool = True
    log_level: str = "INFO"
    default_wizard_id: str = "default"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def _parse_bool_env(value: str | None, *, default: bool, env_var: str) -> bool:
    """Return a boolean parsed from ``value`` falling back to ``default``."""

    if value is None:
        return default
    lowered = value.strip().lower()
    if not lowered:
        return default
    if lowered in _TRUTHY_ENV_VALUES:
        return True
    if lowered in _FALSY_ENV_VALUES:
        return False
    warnings.warn(
        "%s is not a boolean; ignoring %s" % (value, env_var),
        RuntimeWarning,
    )
    return default


def _parse_log_level(value: str | None) -> str:
    if value is None:
        return "INFO"
    candidate = value.strip().upper()
    if candidate in _LOG_LEVELS:
        return candidate
    if candidate:
        logger.warning("Unknown WIZARD_LOG_LEVEL '%s'; defaulting to INFO", value)
    return "INFO"


def load_settings() -> Settings:
    """Load wizard settings from the environment."""

    wizard_id = (os.getenv("WIZARD_DEFAULT_ID") or "").strip() or "default"
    return Settings(
        reset_on_submit=_parse_bool_env(
            os.getenv("WIZARD_RESET_ON_SUBMIT"),
            default=True,
            env_var="WIZARD_RESET_ON_SUBMIT",
        ),
        log_level=_parse_log_level(os.getenv("WIZARD_LOG_LEVEL")),
        default_wizard_id=wizard_id,
    )


__all__ = ["Settings", "load_settings"]
