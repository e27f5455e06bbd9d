from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [session=%(session_id)s step=%(wizard_step)s "
    "category=%(category)s] %(name)s: %(message)s"
)

_session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("session_id", default="-")
_wizard_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("wizard_step", default="-")
_category_var: contextvars.ContextVar[str] = contextvars.ContextVar("category", default="-")
_DEFAULT_RECORD_FACTORY = logging.getLogRecordFactory()
_RECORD_FACTORY_INSTALLED = False


def _apply_context(record: logging.LogRecord) -> None:
    record.session_id = _session_id_var.get("-")
    record.wizard_step = _wizard_step_var.get("-")
    record.category = _category_var.get("-")


class _ContextFilter(logging.Filter):
    """Inject contextual fields into log records for consistent formatting."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _apply_context(record)
        return True


def _coerce(value: str | None) -> str:
    if value is None:
        return "-"
    stripped = str(value).strip()
    return stripped or "-"


def configure_logging(*, level: int = logging.INFO) -> None:
    """Ensure the root logger formats records with contextual metadata."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_LOG_FORMAT)
        root = logging.getLogger()
    for handler in root.handlers:
        formatter = handler.formatter or logging.Formatter(_DEFAULT_LOG_FORMAT)
        handler.setFormatter(formatter)
    has_filter = any(isinstance(flt, _ContextFilter) for flt in root.filters)
    if not has_filter:
        root.addFilter(_ContextFilter())
    global _RECORD_FACTORY_INSTALLED
    if not _RECORD_FACTORY_INSTALLED:
        default_factory = _DEFAULT_RECORD_FACTORY

        def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
            record = default_factory(*args, **kwargs)
            _apply_context(record)
            return record

        logging.setLogRecordFactory(_record_factory)
        _RECORD_FACTORY_INSTALLED = True


@contextmanager
def log_context(
    *,
    session_id: str | None = None,
    wizard_step: str | None = None,
    category: str | None = None,
) -> Iterator[None]:
    """Temporarily override logging context variables."""

    tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []
    if session_id is not None:
        tokens.append((_session_id_var, _session_id_var.set(_coerce(session_id))))
    if wizard_step is not None:
        tokens.append((_wizard_step_var, _wizard_step_var.set(_coerce(wizard_step))))
    if category is not None:
        tokens.append((_category_var, _category_var.set(_coerce(category))))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
