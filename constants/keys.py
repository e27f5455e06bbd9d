class StateKeys:
    """Keys for wizard data stored in ``st.session_state``."""

    WIZARD_HANDLE = "requirement_wizard.handle"
    LAST_SUBMISSION = "requirement_wizard.last_submission"


class FieldKeys:
    """Canonical field keys collected by the requirement wizard."""

    # Category step
    TITLE = "title"

    # Expert details
    SPECIALIZATION = "specialization"
    DESCRIPTION = "description"
    CERTIFICATIONS = "certifications"
    BUDGET = "budget"
    DURATION = "duration"
    START_DATE = "startDate"
    END_DATE = "endDate"

    # Product details
    PRODUCT_SPECIFICATIONS = "productSpecifications"
    QUANTITY = "quantity"
    DELIVERY_DATE = "deliveryDate"
    QUALITY_REQUIREMENTS = "qualityRequirements"

    # Service details
    SERVICE_DESCRIPTION = "serviceDescription"
    SCOPE_OF_WORK = "scopeOfWork"
    SERVICE_START_DATE = "serviceStartDate"
    SERVICE_END_DATE = "serviceEndDate"
    SERVICE_BUDGET = "serviceBudget"
    LOCATION = "location"

    # Logistics details
    EQUIPMENT_TYPE = "equipmentType"
    WEIGHT = "weight"
    DIMENSIONS = "dimensions"
    PICKUP_LOCATION = "pickupLocation"
    DELIVERY_LOCATION = "deliveryLocation"
    PICKUP_DATE = "pickupDate"
    SPECIAL_HANDLING = "specialHandling"

    # Review step
    TERMS_ACCEPTED = "termsAccepted"
