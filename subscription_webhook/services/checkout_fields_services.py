import logging
from typing import List, Optional
from subscription_webhook.models.stripe_webhook_models import CheckoutSession, CustomField, SubscriptionMetadata
from subscription_webhook.custom_error import MissingSubscriptionError

logger = logging.getLogger(__name__)

# keys chosen for the custom fields when the checkout was configured in the Stripe dashboard
BUILDING_NAME_KEY = "buildingname"
ROOM_NUMBER_KEY = "roomnumber"
PICKUP_TIME_KEY = "pickuptime"

NOT_AVAILABLE = "N/A"


def _display_string(value) -> str:
    # Stripe metadata values are strings, anything else counts as absent
    if isinstance(value, str) and value:
        return value
    return NOT_AVAILABLE


def find_custom_field(custom_fields: List[CustomField], key: str) -> Optional[CustomField]:
    """Return the first custom field with the given key, or None"""
    for field in custom_fields:
        if field.key == key:
            return field
    return None


def resolve_dropdown_label(field: Optional[CustomField]) -> str:
    """Look up the label of the selected dropdown option.

    Missing or malformed dropdown data never raises, it degrades to "N/A".
    """
    if field is None or field.dropdown is None:
        return NOT_AVAILABLE

    selected_value = field.dropdown.value
    options = field.dropdown.options
    if not selected_value or not options:
        return NOT_AVAILABLE

    for option in options:
        if option.value == selected_value:
            return _display_string(option.label)

    return NOT_AVAILABLE


def resolve_text_value(field: Optional[CustomField]) -> str:
    """Return the submitted text, or "N/A" if the field or its value is absent"""
    if field is None or field.text is None:
        return NOT_AVAILABLE
    return _display_string(field.text.value)


def extract_subscription_metadata(checkout_session: CheckoutSession) -> SubscriptionMetadata:
    custom_fields = checkout_session.custom_fields
    logger.debug(f"Custom fields: {[field.model_dump(exclude_none=True) for field in custom_fields]}")

    return SubscriptionMetadata(
        building_name=resolve_dropdown_label(find_custom_field(custom_fields, BUILDING_NAME_KEY)),
        room_number=resolve_text_value(find_custom_field(custom_fields, ROOM_NUMBER_KEY)),
        pickup_time=resolve_dropdown_label(find_custom_field(custom_fields, PICKUP_TIME_KEY)),
    )


def require_subscription_id(checkout_session: CheckoutSession) -> str:
    """A checkout without a subscription has nothing to tag"""
    if not checkout_session.subscription:
        logger.error(f"❌ No subscription ID in checkout session {checkout_session.id}")
        raise MissingSubscriptionError()
    return checkout_session.subscription


def build_idempotency_key(checkout_session_id: str) -> str:
    # a redelivered event carries the same session id, so Stripe replays the first update instead of applying it twice
    return f"subscription_{checkout_session_id}"
