import stripe
from subscription_webhook.configs.app_settings import Settings


def build_http_client(app_settings: Settings) -> stripe.HTTPXClient:
    """HTTPX transport for the *_async service methods"""
    # this timeout is the only bound on how long a webhook request waits on Stripe
    return stripe.HTTPXClient(timeout=app_settings.STRIPE_TIMEOUT_SECONDS)


def build_stripe_client(app_settings: Settings, http_client: stripe.HTTPXClient) -> stripe.StripeClient:
    """Build a StripeClient with the pinned API version and retry count"""
    return stripe.StripeClient(
        app_settings.STRIPE_API_KEY,
        stripe_version=app_settings.STRIPE_API_VERSION,
        max_network_retries=app_settings.STRIPE_MAX_NETWORK_RETRIES,
        http_client=http_client,
    )
