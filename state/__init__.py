"""Session state utilities."""

from .session import discard_wizard, ensure_wizard, store_submission

__all__ = ["discard_wizard", "ensure_wizard", "store_submission"]
