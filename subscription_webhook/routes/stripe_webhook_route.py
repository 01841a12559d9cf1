from fastapi import APIRouter, Request, Depends, HTTPException
import stripe
import logging
from subscription_webhook.utils.stripe_client_handlers import get_stripe_client
from subscription_webhook.services.subscription_services import SubscriptionService
from subscription_webhook.services.webhook_verification_services import verify_stripe_event
from subscription_webhook.services.checkout_fields_services import (
    build_idempotency_key,
    extract_subscription_metadata,
    require_subscription_id,
)
from subscription_webhook.models.stripe_webhook_models import CheckoutSession, WebhookAcknowledgement
from subscription_webhook.configs.app_settings import settings
from subscription_webhook.custom_error import WebhookProcessingError

stripe_webhook_router = APIRouter(tags=["Webhooks"])
logger = logging.getLogger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


async def get_subscription_service() -> SubscriptionService:
    """Dependency to get SubscriptionService instance"""
    # resolved before the handler's try block, so a missing client is reported here the same way
    try:
        stripe_client: stripe.StripeClient = await get_stripe_client()
    except RuntimeError as e:
        logger.exception(f"❌ Unexpected error in webhook handler: {str(e)}")
        raise WebhookProcessingError(str(e))
    return SubscriptionService(stripe_client)


# ################################################################################################################################


@stripe_webhook_router.post(settings.WEBHOOK_PATH, response_model=WebhookAcknowledgement)
async def stripe_webhook_handler(request: Request, subscription_service: SubscriptionService = Depends(get_subscription_service)):
    """Handle Stripe webhook events"""
    try:
        # the raw body, signature is computed over these exact bytes
        payload = await request.body()
        sig_header = request.headers.get("stripe-signature")
        logger.info(f"Webhook request received, signature header {'present' if sig_header else 'missing'}")

        event = verify_stripe_event(payload, sig_header, settings.STRIPE_WEBHOOK_SECRET, settings.WEBHOOK_TOLERANCE_SECONDS)

        if event.type == CHECKOUT_SESSION_COMPLETED:
            await _handle_checkout_session_completed(CheckoutSession.model_validate(event.data.object), subscription_service)
            return WebhookAcknowledgement(event_type=event.type, processed=True)

        # every other event type is acknowledged so Stripe stops redelivering it
        logger.info(f"⚠️ Received event type: {event.type} - not handling")
        return WebhookAcknowledgement(event_type=event.type, processed=False)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"❌ Unexpected error in webhook handler: {str(e)}")
        raise WebhookProcessingError(str(e))


#################################################################################################################################
# helper functions for handling specific event types


async def _handle_checkout_session_completed(checkout_session: CheckoutSession, subscription_service: SubscriptionService):
    """Copy the checkout's custom fields onto the subscription it created"""
    logger.info(f"Processing {CHECKOUT_SESSION_COMPLETED} event for session {checkout_session.id}")

    subscription_id = require_subscription_id(checkout_session)
    logger.info(f"Subscription ID: {subscription_id}")

    metadata = extract_subscription_metadata(checkout_session)
    await subscription_service.update_metadata(
        subscription_id,
        metadata.as_stripe_metadata(),
        idempotency_key=build_idempotency_key(checkout_session.id),
    )
