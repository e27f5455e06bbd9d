"""Gate, navigation and submit behaviour of ``wizard.step_controller``."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from config import Settings
from core.errors import SchemaLookupError, StateError
from models.requirement import Category, FinalizedRequirement
from tests.helpers import OPTIONAL_DETAILS, VALID_DETAILS, advance_to_confirm, advance_to_details, fill
from wizard.step_controller import StepController


def _controller(category: Category | str, settings: Settings | None = None) -> StepController:
    return StepController(category, settings=settings or Settings())


@pytest.mark.parametrize("category", list(Category))
def test_details_passes_with_required_fields(category: Category) -> None:
    controller = _controller(category)
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[category])

    result = controller.next()

    assert result.ok
    assert result.errors == {}
    assert controller.current_step_key == "review"


@pytest.mark.parametrize("category", list(Category))
def test_details_passes_with_optional_fields(category: Category) -> None:
    controller = _controller(category)
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[category])
    fill(controller, OPTIONAL_DETAILS[category])

    assert controller.next().ok


@pytest.mark.parametrize(
    ("category", "missing"),
    [(category, key) for category in Category for key in VALID_DETAILS[category]],
)
def test_details_reports_each_missing_required_field(category: Category, missing: str) -> None:
    controller = _controller(category)
    advance_to_details(controller)
    fill(controller, {key: value for key, value in VALID_DETAILS[category].items() if key != missing})

    result = controller.next()

    assert not result.ok
    assert missing in result.errors
    assert controller.current_step_key == "details"


def test_logistics_without_optional_weight_advances() -> None:
    controller = _controller("logistics")
    advance_to_details(controller)
    fill(controller, {"equipmentType": "Crane", "pickupLocation": "Site A", "deliveryLocation": "Site B"})

    result = controller.next()

    assert result.ok
    assert "weight" not in controller.store


def test_logistics_missing_pickup_location() -> None:
    controller = _controller("logistics")
    advance_to_details(controller)
    fill(controller, {"equipmentType": "Crane", "deliveryLocation": "Site B"})

    result = controller.next()

    assert not result.ok
    assert result.errors == {"pickupLocation": "required"}
    assert controller.store.get_errors() == {"pickupLocation": "required"}


def test_expert_reports_all_failures_in_one_call() -> None:
    controller = _controller("expert")
    advance_to_details(controller)

    result = controller.next()

    assert not result.ok
    assert result.errors == {"specialization": "required", "description": "required"}


def test_cross_field_validators_run_on_optional_values() -> None:
    controller = _controller(Category.SERVICE)
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[Category.SERVICE])
    fill(controller, {"serviceStartDate": date(2025, 6, 3), "serviceEndDate": date(2025, 6, 1), "serviceBudget": -5})

    result = controller.next()

    assert result.errors == {
        "serviceEndDate": "must be on or after serviceStartDate",
        "serviceBudget": "must be a positive number",
    }


def test_error_map_is_recomputed_not_merged() -> None:
    controller = _controller("expert")
    advance_to_details(controller)
    controller.next()
    controller.set_field("specialization", "Safety Engineer")
    # Errors are only recomputed on the gate check.
    assert set(controller.store.get_errors()) == {"specialization", "description"}

    result = controller.next()

    assert result.errors == {"description": "required"}
    assert controller.store.get_errors() == {"description": "required"}


def test_successful_gate_clears_errors() -> None:
    controller = _controller("product")
    advance_to_details(controller)
    controller.next()
    fill(controller, VALID_DETAILS[Category.PRODUCT])

    assert controller.next().ok
    assert controller.store.get_errors() == {}


def test_category_step_requires_title() -> None:
    controller = _controller("service")
    result = controller.next()
    assert result.errors == {"title": "required"}
    assert controller.current_step == 0


def test_previous_never_fails_and_keeps_values() -> None:
    controller = _controller("logistics")
    controller.previous()
    assert controller.current_step == 0

    advance_to_details(controller)
    fill(controller, VALID_DETAILS[Category.LOGISTICS])
    before = controller.store.values()
    controller.previous()
    controller.previous()

    assert controller.current_step == 0
    assert controller.store.values() == before


@pytest.mark.parametrize("steps_forward", [0, 1])
def test_previous_clears_errors_on_every_step(steps_forward: int) -> None:
    controller = _controller("logistics")
    for _ in range(steps_forward):
        fill(controller, {"title": "Crane hire"})
        assert controller.next().ok
    assert not controller.next().ok
    assert controller.store.get_errors()

    controller.previous()

    assert controller.store.get_errors() == {}
    assert controller.current_step == max(steps_forward - 1, 0)


@pytest.mark.parametrize("quantity", [float("nan"), "nan", float("inf"), "-inf"])
def test_product_details_rejects_non_finite_quantity(quantity: object) -> None:
    controller = _controller(Category.PRODUCT)
    advance_to_details(controller)
    fill(controller, {**VALID_DETAILS[Category.PRODUCT], "quantity": quantity})

    result = controller.next()

    assert not result.ok
    assert result.errors == {"quantity": "must be a positive number"}
    assert controller.current_step_key == "details"


def test_values_survive_forward_and_backward_navigation() -> None:
    controller = _controller(Category.PRODUCT)
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[Category.PRODUCT])
    assert controller.next().ok
    before = controller.store.values()

    controller.previous()
    assert controller.next().ok

    assert controller.store.values() == before
    assert controller.current_step_key == "review"


def test_set_field_touches_only_its_key() -> None:
    controller = _controller("expert")
    fill(controller, {"title": "Audit", "description": "Safety audit", "budget": 100})
    before = controller.store.values()

    controller.set_field("budget", 250)

    after = controller.store.values()
    assert after.pop("budget") == 250
    before.pop("budget")
    assert after == before


def test_change_category_retains_previous_fields() -> None:
    controller = _controller("expert")
    advance_to_details(controller)
    expert_values = {**VALID_DETAILS[Category.EXPERT], "certifications": ["ASME"]}
    fill(controller, expert_values)

    controller.change_category("logistics")
    assert controller.category is Category.LOGISTICS
    controller.change_category("expert")

    for key, value in expert_values.items():
        assert controller.get_field(key) == value


def test_change_category_rebinds_details_schema() -> None:
    controller = _controller("expert")
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[Category.EXPERT])

    controller.change_category(Category.LOGISTICS)
    result = controller.next()

    assert set(result.errors) == {"equipmentType", "pickupLocation", "deliveryLocation"}


def test_change_category_rejects_unknown_category() -> None:
    controller = _controller("expert")
    with pytest.raises(SchemaLookupError):
        controller.change_category("catering")
    assert controller.category is Category.EXPERT


def test_unknown_initial_category_raises() -> None:
    with pytest.raises(SchemaLookupError):
        _controller("catering")


def test_review_requires_terms_and_rechecks_details() -> None:
    controller = _controller("service")
    advance_to_details(controller)
    fill(controller, VALID_DETAILS[Category.SERVICE])
    assert controller.next().ok

    controller.set_field("location", "")
    result = controller.next()

    assert result.errors == {"location": "required", "termsAccepted": "required"}
    assert controller.current_step_key == "review"


@pytest.mark.parametrize("step_key", ["category", "details", "review"])
def test_submit_before_terminal_step_raises(step_key: str) -> None:
    controller = _controller("logistics")
    if step_key != "category":
        advance_to_details(controller)
        fill(controller, VALID_DETAILS[Category.LOGISTICS])
    if step_key == "review":
        assert controller.next().ok
    assert controller.current_step_key == step_key

    with pytest.raises(StateError) as excinfo:
        controller.submit()
    assert excinfo.value.step == controller.current_step


def test_submit_returns_last_validated_snapshot(keep_state_settings: Settings) -> None:
    controller = _controller("logistics", keep_state_settings)
    advance_to_confirm(controller)
    validated = controller.snapshot().values

    record = controller.submit()

    assert isinstance(record, FinalizedRequirement)
    assert record.category is Category.LOGISTICS
    assert record.values == validated
    assert controller.is_terminal


def test_submit_ignores_edits_made_after_final_gate(
    keep_state_settings: Settings, caplog: pytest.LogCaptureFixture
) -> None:
    controller = _controller("product", keep_state_settings)
    advance_to_confirm(controller)
    validated = controller.store.values()
    controller.set_field("quantity", -1)

    with caplog.at_level(logging.WARNING, logger="wizard.step_controller"):
        record = controller.submit()

    assert record.values == validated
    assert "Fields changed after the final gate check" in caplog.text


def test_submit_resets_controller_by_default() -> None:
    controller = _controller("expert")
    advance_to_confirm(controller)

    record = controller.submit()

    assert record.values["title"] == "Spring shutdown"
    assert controller.current_step == 0
    assert controller.category is Category.EXPERT
    assert controller.store.values() == {}


def test_reset_restores_initial_category() -> None:
    controller = _controller("expert")
    advance_to_details(controller)
    controller.change_category("product")
    controller.reset()
    assert controller.category is Category.EXPERT
    assert controller.current_step == 0


def test_change_category_on_terminal_step_requires_new_gate(keep_state_settings: Settings) -> None:
    controller = _controller("service", keep_state_settings)
    advance_to_confirm(controller)

    controller.change_category("product")

    assert controller.current_step_key == "review"
    with pytest.raises(StateError):
        controller.submit()
    result = controller.next()
    assert set(result.errors) == {"productSpecifications", "quantity"}


def test_next_on_terminal_step_is_noop(keep_state_settings: Settings) -> None:
    controller = _controller("expert", keep_state_settings)
    advance_to_confirm(controller)
    assert controller.next().ok
    assert controller.current_step_key == "confirm"


def test_snapshot_reflects_state() -> None:
    controller = _controller("logistics")
    advance_to_details(controller)
    controller.next()

    snapshot = controller.snapshot()

    assert snapshot.category is Category.LOGISTICS
    assert snapshot.step == 1
    assert snapshot.step_key == "details"
    assert snapshot.values == {"title": "Spring shutdown"}
    assert set(snapshot.errors) == {"equipmentType", "pickupLocation", "deliveryLocation"}
