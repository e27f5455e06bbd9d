"""Typed helpers for the test-suite."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from models.requirement import Category
from wizard.step_controller import StepController

VALID_DETAILS: Mapping[Category, dict[str, Any]] = {
    Category.EXPERT: {
        "specialization": "Process Engineer",
        "description": "Commission a new filling line",
    },
    Category.PRODUCT: {
        "productSpecifications": "Stainless steel valves, DN50",
        "quantity": 40,
    },
    Category.SERVICE: {
        "serviceDescription": "Annual boiler inspection",
        "scopeOfWork": "Inspect, clean and certify two boilers",
        "location": "Plant 3",
    },
    Category.LOGISTICS: {
        "equipmentType": "Crane",
        "pickupLocation": "Site A",
        "deliveryLocation": "Site B",
    },
}

OPTIONAL_DETAILS: Mapping[Category, dict[str, Any]] = {
    Category.EXPERT: {
        "certifications": ["ISO 9001", "PMP"],
        "budget": 12000.0,
        "duration": 30,
        "startDate": date(2025, 3, 1),
        "endDate": date(2025, 3, 31),
    },
    Category.PRODUCT: {
        "budget": 5400,
        "deliveryDate": "2025-05-15",
        "qualityRequirements": "ISO 9001",
    },
    Category.SERVICE: {
        "serviceStartDate": "2025-06-01",
        "serviceEndDate": "2025-06-03",
        "serviceBudget": 900,
    },
    Category.LOGISTICS: {
        "weight": 1250.5,
        "dimensions": "4 x 2 x 2",
        "pickupDate": date(2025, 7, 1),
        "deliveryDate": date(2025, 7, 2),
        "specialHandling": "Keep upright",
    },
}


def fill(controller: StepController, values: Mapping[str, Any]) -> None:
    for key, value in values.items():
        controller.set_field(key, value)


def advance_to_details(controller: StepController, title: str = "Spring shutdown") -> None:
    """Fill the category step and move onto the details step."""

    controller.set_field("title", title)
    result = controller.next()
    assert result.ok, result.errors
    assert controller.current_step_key == "details"


def advance_to_confirm(controller: StepController) -> None:
    """Walk a controller with a valid draft from its current step to ``confirm``."""

    category = controller.category
    if controller.current_step_key == "category":
        advance_to_details(controller)
    fill(controller, VALID_DETAILS[category])
    assert controller.next().ok
    controller.set_field("termsAccepted", True)
    result = controller.next()
    assert result.ok, result.errors
    assert controller.current_step_key == "confirm"
