import stripe
import logging
from typing import Optional
from subscription_webhook.models.stripe_webhook_models import StripeWebhookEvent
from subscription_webhook.custom_error import WebhookAuthenticationError

logger = logging.getLogger(__name__)


def verify_stripe_event(payload: bytes, sig_header: Optional[str], secret: str, tolerance: int) -> StripeWebhookEvent:
    """Verify the stripe-signature header against the raw body and return the parsed event.

    The signature is computed by Stripe over the exact bytes it sent, so `payload` must be the
    unmodified request body. The body is only parsed after the signature has been accepted.
    """

    if not sig_header:
        raise WebhookAuthenticationError("Missing stripe-signature header")

    try:
        raw_body = payload.decode("utf-8")
    except UnicodeDecodeError:
        raise WebhookAuthenticationError("Invalid payload")

    try:
        stripe.WebhookSignature.verify_header(raw_body, sig_header, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        logger.error(f"❌ Webhook signature verification failed: {e.user_message or str(e)}")
        raise WebhookAuthenticationError(e.user_message or str(e))

    try:
        # pydantic ValidationError is a ValueError, as is a JSON decode failure
        event = StripeWebhookEvent.model_validate_json(raw_body)
    except ValueError:
        raise WebhookAuthenticationError("Invalid payload")

    logger.info(f"🔔 Event verified, type: {event.type}")
    return event
