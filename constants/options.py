"""Option catalogues offered by the requirement detail selectors."""

from __future__ import annotations

from typing import Final

EXPERT_SPECIALIZATIONS: Final[tuple[str, ...]] = (
    "Automation Engineer",
    "Electrical Engineer",
    "Mechanical Engineer",
    "Process Engineer",
    "Quality Control Engineer",
    "Safety Engineer",
    "Environmental Engineer",
)

EQUIPMENT_TYPES: Final[tuple[str, ...]] = (
    "Crane",
    "Forklift",
    "Loader",
    "Excavator",
    "Trailer",
    "Truck",
    "Container",
    "Specialized Equipment",
)

QUALITY_REQUIREMENTS: Final[tuple[str, ...]] = (
    "ISO 9001",
    "Industry Standard",
    "Premium Quality",
    "Standard Quality",
    "Economy",
)

CERTIFICATION_OPTIONS: Final[tuple[str, ...]] = (
    "ISO 9001",
    "ISO 14001",
    "OHSAS 18001",
    "API",
    "ASME",
    "Six Sigma",
    "PMP",
    "Professional Engineer",
)
