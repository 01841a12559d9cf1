import logging
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

# Stripe adds fields to its objects over time, so every inbound model ignores keys it does not declare.
# Custom field data is free-form from the checkout form: values are typed Any and entries that cannot be
# read at all are dropped, so a malformed field only ever falls back to the placeholder.


class StripeEventData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object: Dict[str, Any]


class StripeWebhookEvent(BaseModel):
    """Envelope of a verified Stripe event"""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    data: StripeEventData


class DropdownOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Any = None
    label: Any = None


class DropdownField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Any = None  # the selected option value
    options: Optional[List[DropdownOption]] = None

    @field_validator("options", mode="before")
    @classmethod
    def keep_object_options(cls, value):
        if not isinstance(value, list):
            return None
        return [option for option in value if isinstance(option, dict)]


class TextField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: Any = None


class CustomField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: Any = None
    type: Any = None  # "dropdown" | "text" | "numeric"
    dropdown: Optional[DropdownField] = None
    text: Optional[TextField] = None


class CheckoutSession(BaseModel):
    """The data.object of a checkout.session.completed event"""

    model_config = ConfigDict(extra="ignore")

    id: str
    subscription: Optional[str] = None
    custom_fields: List[CustomField] = []

    @field_validator("custom_fields", mode="before")
    @classmethod
    def drop_unreadable_custom_fields(cls, value):
        if not isinstance(value, list):
            return []

        custom_fields = []
        for entry in value:
            try:
                custom_fields.append(CustomField.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"⚠️ Skipping unreadable custom field {entry!r}: {e.error_count()} validation error(s)")
        return custom_fields


class SubscriptionMetadata(BaseModel):
    building_name: str
    room_number: str
    pickup_time: str

    def as_stripe_metadata(self) -> Dict[str, str]:
        # Room Number is kept before Pickup Time so the dashboard reads in form order
        return {
            "Building Name": self.building_name,
            "Room Number": self.room_number,
            "Pickup Time": self.pickup_time,
        }


class WebhookAcknowledgement(BaseModel):
    """Response model for an acknowledged webhook"""

    received: bool = True
    event_type: Optional[str] = None
    processed: bool = False
