import stripe
import logging
from typing import Dict
from subscription_webhook.custom_error import SubscriptionUpdateError

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, stripe_client: stripe.StripeClient):
        self.stripe_client = stripe_client

    async def update_metadata(self, subscription_id: str, metadata: Dict[str, str], idempotency_key: str) -> None:
        """Set the subscription's metadata in a single idempotent update call"""

        try:
            logger.info(f"Updating subscription {subscription_id} metadata...")
            await self.stripe_client.subscriptions.update_async(
                subscription_id,
                params={"metadata": metadata},
                options={"idempotency_key": idempotency_key},
            )
            logger.info(f"✅ Updated subscription {subscription_id} with metadata: {metadata}")

        except stripe.StripeError as e:
            # network errors reach here only after the client's own retries are exhausted
            reason = e.user_message or str(e)
            logger.error(f"❌ Error updating metadata for subscription {subscription_id}: {reason}")
            raise SubscriptionUpdateError(reason)
