import stripe
from typing import Optional
from subscription_webhook.configs.app_settings import settings
from subscription_webhook.configs.stripe_config import build_http_client, build_stripe_client

# logics explain:
# 1. During app startup, the lifespan block runs create_stripe_client()
# 2. create_stripe_client() builds the client once and keeps it in the module level _stripe_client
# 3. Route dependencies call get_stripe_client() and receive that same instance
# 4. On shutdown close_stripe_client() closes the HTTPX session and drops both references


_stripe_client: Optional[stripe.StripeClient] = None
_http_client: Optional[stripe.HTTPXClient] = None


def create_stripe_client() -> stripe.StripeClient:
    """Create the Stripe client - only called once during startup"""

    global _stripe_client, _http_client
    if _stripe_client is None:
        _http_client = build_http_client(settings)
        _stripe_client = build_stripe_client(settings, _http_client)
    return _stripe_client


async def get_stripe_client() -> stripe.StripeClient:
    """Dependency function to get the Stripe client"""
    if _stripe_client is None:
        raise RuntimeError("Stripe client not initialized. Call create_stripe_client() during startup.")
    return _stripe_client


async def close_stripe_client():
    """Clean up the Stripe client during shutdown"""
    global _stripe_client, _http_client
    if _http_client is not None:
        await _http_client.close_async()
    _stripe_client = None
    _http_client = None
