import asyncio
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
from subscription_webhook.utils.stripe_client_handlers import create_stripe_client, close_stripe_client
from subscription_webhook.utils.logging_config import configure_logging
from subscription_webhook.routes.stripe_webhook_route import stripe_webhook_router
from subscription_webhook.configs.app_settings import settings

logger = logging.getLogger(__name__)


def _log_unhandled_async_exception(loop: asyncio.AbstractEventLoop, context: dict):
    """Loop exception handler: failures in background tasks are logged, the process keeps running"""
    exception = context.get("exception")
    logger.error(f"❌ Unhandled async exception: {context.get('message')}", exc_info=exception)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # before yield = code to run during startup
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"STRIPE_API_KEY: {'Set' if settings.STRIPE_API_KEY else 'Not set'}")
    logger.info(f"STRIPE_WEBHOOK_SECRET: {'Set' if settings.STRIPE_WEBHOOK_SECRET else 'Not set'}")

    loop = asyncio.get_running_loop()
    previous_exception_handler = loop.get_exception_handler()
    loop.set_exception_handler(_log_unhandled_async_exception)

    create_stripe_client()
    logger.info("✅ Stripe client initialized")

    yield
    # after yield = code to run during shutdown
    await close_stripe_client()
    loop.set_exception_handler(previous_exception_handler)
    logger.info("✅ Stripe client closed")


app = FastAPI(title="Subscription Metadata Webhook", version="1.0.0", lifespan=lifespan)

app.include_router(stripe_webhook_router)


@app.get("/")
async def root():
    return {"message": "Subscription metadata webhook is running"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
