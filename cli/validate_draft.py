"""CLI for running a requirement draft through the wizard gates locally."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence


def _load_draft(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Draft is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise SystemExit("Draft must be a JSON object with 'category' and 'values'.")
    return payload


def describe_schema(category: str) -> list[dict[str, Any]]:
    """Return the step layout of ``category`` as plain data."""

    from wizard.schema_registry import DEFAULT_REGISTRY

    steps: list[dict[str, Any]] = []
    for index, step_key in enumerate(DEFAULT_REGISTRY.step_keys(category)):
        step = DEFAULT_REGISTRY.get_step(category, index)
        steps.append(
            {
                "key": step_key,
                "label": step.label,
                "required": [rule.key for rule in step.required_fields],
                "optional": [rule.key for rule in step.optional_fields],
            }
        )
    return steps


def main(argv: Sequence[str] | None = None) -> int:
    """Walk every step with the draft's values and print the outcome as JSON.

    Example::

        python -m cli.validate_draft --file draft.json
        python -m cli.validate_draft --describe logistics
    """

    parser = argparse.ArgumentParser(description="Requirement wizard draft validator")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--file", help="Path to a JSON draft with 'category' and 'values'")
    group.add_argument("--describe", metavar="CATEGORY", help="Print the step schema for a category")
    args = parser.parse_args(argv)

    from config import load_settings
    from core.errors import WizardError
    from utils.logging_context import configure_logging
    from wizard import api

    configure_logging(level=load_settings().log_level_value)

    if args.describe:
        try:
            print(json.dumps(describe_schema(args.describe), indent=2))
        except WizardError as exc:
            raise SystemExit(str(exc)) from exc
        return 0

    file_path = Path(args.file)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    draft = _load_draft(file_path)

    try:
        handle = api.init(draft.get("category", ""))
    except WizardError as exc:
        raise SystemExit(str(exc)) from exc
    values = draft.get("values") or {}
    if not isinstance(values, dict):
        raise SystemExit("Draft 'values' must be a JSON object mapping field keys to values.")
    for key, value in values.items():
        api.set_field(handle, key, value)

    while not handle.controller.is_terminal:
        result = api.next_step(handle)
        if not result.ok:
            snapshot = api.get_snapshot(handle)
            print(json.dumps({"ok": False, "step": snapshot.step_key, "errors": result.errors}, indent=2))
            return 1

    record = api.submit(handle)
    print(json.dumps({"ok": True, "requirement": record.model_dump(mode="json")}, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
