"""Pytest configuration and fixtures for the failed payments monitor tests.

Provides:
- Environment setup so app settings load without a .env file
- Stripe signature helper producing real t=...,v1=... headers
- Sample charge.failed events
- An application built with a mocked Resend transport and customer lookup
"""

import hashlib
import hmac
import json
import os
import time
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

# === Environment Setup ===

# settings are read when app.configs.app_settings is first imported
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_monitor")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret_for_testing")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("NOTIFICATION_EMAIL", "alerts@example.com")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")

import resend  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.configs.app_settings import settings  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.activity_log_services import ActivityLogService  # noqa: E402

TEST_WEBHOOK_SECRET = settings.STRIPE_WEBHOOK_SECRET
TEST_CHARGE_ID = "ch_3PqFailed123"


# === Helper Functions ===


def create_stripe_signature(payload: bytes, secret: str = TEST_WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Create a Stripe webhook signature header: t={timestamp},v1={hmac-sha256}"""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed_payload = f"{timestamp}.{payload.decode('utf-8')}"
    signature = hmac.new(secret.encode("utf-8"), signed_payload.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def create_charge_failed_event(
    charge_id: str = TEST_CHARGE_ID,
    amount: int = 2999,
    currency: str = "usd",
    **charge_fields: Any,
) -> dict[str, Any]:
    charge = {
        "id": charge_id,
        "object": "charge",
        "amount": amount,
        "currency": currency,
        "created": 1704067200,  # 2024-01-01 00:00:00 UTC
        "failure_message": "Your card was declined.",
        "failure_code": "card_declined",
        "customer": None,
        "billing_details": {"email": "payer@example.com"},
        "payment_method_details": {
            "card": {"last4": "0002", "brand": "visa", "decline_code": "insufficient_funds"},
        },
        "outcome": {"seller_message": "The bank returned the decline code `insufficient_funds`."},
    }
    charge.update(charge_fields)
    return {
        "id": "evt_1FailedCharge",
        "object": "event",
        "type": "charge.failed",
        "created": 1704067200,
        "data": {"object": charge},
    }


def encode_event(event: dict[str, Any]) -> bytes:
    return json.dumps(event).encode("utf-8")


# === Fixtures ===


@pytest.fixture
def activity_log() -> ActivityLogService:
    return ActivityLogService()


@pytest.fixture
def mock_resend_send() -> Generator[MagicMock, None, None]:
    """Replace the Resend transport; no email leaves the test run"""
    with patch.object(resend.Emails, "send", return_value={"id": "email_test_123"}) as mock_send:
        yield mock_send


@pytest.fixture
def customer_lookup() -> MagicMock:
    return MagicMock(return_value=None)


@pytest.fixture
def client(activity_log, mock_resend_send, customer_lookup) -> Generator[TestClient, None, None]:
    app = create_app(activity_log=activity_log, customer_lookup=customer_lookup)
    with TestClient(app) as test_client:
        yield test_client
