"""Pytest configuration and fixtures for the subscription metadata webhook tests.

Provides:
- Stripe credentials in the environment before the settings module is imported
- A TestClient with the subscription service swapped for an in-memory fake
- A helper that signs payloads the way Stripe does
"""

import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Generator, List, Optional

import pytest

# === Environment Setup ===

# settings are read when subscription_webhook.configs.app_settings is first imported
os.environ.setdefault("STRIPE_API_KEY", "sk_test_abc123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret_for_testing")

from fastapi.testclient import TestClient  # noqa: E402

from subscription_webhook.custom_error import SubscriptionUpdateError  # noqa: E402
from subscription_webhook.main import app  # noqa: E402
from subscription_webhook.routes.stripe_webhook_route import get_subscription_service  # noqa: E402

TEST_WEBHOOK_SECRET = os.environ["STRIPE_WEBHOOK_SECRET"]
TEST_SESSION_ID = "cs_test_session_abc"
TEST_SUBSCRIPTION_ID = "sub_123"


# === Helper Functions ===


def sign_payload(payload: bytes, secret: str = TEST_WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Create a Stripe signature header: t={timestamp},v1={hmac_sha256(secret, "{timestamp}.{payload}")}"""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed_payload = f"{timestamp}.{payload.decode('utf-8')}"
    signature = hmac.new(secret.encode("utf-8"), signed_payload.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def build_event(event_type: str, data_object: Dict[str, Any], event_id: str = "evt_test_123") -> bytes:
    return json.dumps({"id": event_id, "object": "event", "type": event_type, "data": {"object": data_object}}).encode("utf-8")


def dropdown_field(key: str, value: Optional[str], options: List[Dict[str, str]]) -> Dict[str, Any]:
    return {"key": key, "type": "dropdown", "dropdown": {"value": value, "options": options}, "optional": False}


def text_field(key: str, value: Optional[str]) -> Dict[str, Any]:
    return {"key": key, "type": "text", "text": {"value": value, "maximum_length": None, "minimum_length": None}, "optional": False}


# === Fakes ===


class FakeSubscriptionService:
    """Records update calls instead of reaching Stripe"""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.error: Optional[str] = None

    async def update_metadata(self, subscription_id: str, metadata: Dict[str, str], idempotency_key: str) -> None:
        self.calls.append({"subscription_id": subscription_id, "metadata": metadata, "idempotency_key": idempotency_key})
        if self.error is not None:
            raise SubscriptionUpdateError(self.error)


# === Fixtures ===


@pytest.fixture
def sample_checkout_session() -> Dict[str, Any]:
    """checkout.session.completed data.object with all three custom fields"""
    return {
        "id": TEST_SESSION_ID,
        "object": "checkout.session",
        "mode": "subscription",
        "subscription": TEST_SUBSCRIPTION_ID,
        "custom_fields": [
            dropdown_field(
                "buildingname",
                "westhall",
                [{"label": "East Hall", "value": "easthall"}, {"label": "West Hall", "value": "westhall"}],
            ),
            text_field("roomnumber", "204"),
            dropdown_field("pickuptime", "midnight", [{"label": "Morning (8-10am)", "value": "morning"}]),
        ],
    }


@pytest.fixture
def fake_subscription_service() -> FakeSubscriptionService:
    return FakeSubscriptionService()


@pytest.fixture
def client(fake_subscription_service: FakeSubscriptionService) -> Generator[TestClient, None, None]:
    """TestClient running the app lifespan with the subscription service overridden"""
    app.dependency_overrides[get_subscription_service] = lambda: fake_subscription_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def post_event(client: TestClient):
    """Post a payload to the webhook with a valid signature unless one is given"""

    def _post(payload: bytes, signature: Optional[str] = None, include_signature: bool = True):
        headers = {"Content-Type": "application/json"}
        if include_signature:
            headers["stripe-signature"] = signature if signature is not None else sign_payload(payload)
        return client.post("/webhook", content=payload, headers=headers)

    return _post
