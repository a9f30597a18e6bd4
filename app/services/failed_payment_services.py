import asyncio
import stripe
import logging
import time
from typing import Any, Callable, Dict, Optional
from app.models.stripe_webhook_models import WebhookEvent
from app.models.notification_models import PaymentFailureRecord, CustomerInfo
from app.services.activity_log_services import ActivityLogService
from app.services.email_services import EmailService
from app.services.notification_formatter import build_failed_payment_notification, format_currency

logger = logging.getLogger(__name__)

CustomerLookup = Callable[[str], Optional[CustomerInfo]]


class FailedPaymentService:
    """Handles charge.failed events: resolves the customer, renders the alert and emails it"""

    def __init__(
        self,
        activity_log: ActivityLogService,
        email_service: EmailService,
        customer_lookup: CustomerLookup,
        notification_email: str,
        display_timezone: str = "UTC",
    ):
        self.activity_log = activity_log
        self.email_service = email_service
        self.customer_lookup = customer_lookup
        self.notification_email = notification_email
        self.display_timezone = display_timezone

    # --------------------------------------------------------------------------------------------------------------------

    async def handle_charge_failed(self, event: WebhookEvent):
        """Handle charge.failed webhook event"""

        record = PaymentFailureRecord.from_charge(event.data_object)
        self.activity_log.add(f"Processing failed charge: {record.id} for {format_currency(record.amount, record.currency)}")
        await self.send_failed_payment_notification(record)

    # --------------------------------------------------------------------------------------------------------------------

    async def send_failed_payment_notification(self, record: PaymentFailureRecord) -> bool:
        """Send one alert for the failed charge. Delivery errors are logged and re-raised, never retried."""

        amount = format_currency(record.amount, record.currency)

        try:
            customer = await self._resolve_customer(record.customer)
            notification = build_failed_payment_notification(record, customer, self.display_timezone)
            await self.email_service.send_email(self.notification_email, notification.subject, notification.html)
        except Exception as e:
            self.activity_log.add(f"Error sending failed payment notification: {str(e)}")
            raise

        self.activity_log.add(f"Failed payment notification sent for charge {record.id} - {amount}")
        return True

    async def _resolve_customer(self, customer_id: Optional[str]) -> Optional[CustomerInfo]:
        """Look up the charge's customer; no reference means no lookup, a failed lookup means defaults"""

        if not customer_id:
            return None

        try:
            return await asyncio.to_thread(self.customer_lookup, customer_id)
        except stripe.StripeError as e:
            logger.warning(f"⚠️ Customer lookup failed for {customer_id}: {str(e)}")
            self.activity_log.add(f"Customer lookup failed for {customer_id}: {str(e)}")
            return None


def build_test_charge() -> Dict[str, Any]:
    """Synthetic charge.failed data.object used by the manual test endpoint, shaped like Stripe's payload"""

    now = time.time()
    return {
        "id": f"ch_test_{int(now * 1000)}",
        "amount": 2999,
        "currency": "usd",
        "created": int(now),
        "failure_message": "Your card was declined.",
        "failure_code": "card_declined",
        "customer": None,
        "billing_details": {"email": "test@example.com"},
        "payment_method_details": {
            "card": {"last4": "4242", "brand": "visa", "decline_code": "generic_decline"},
        },
        "outcome": {"seller_message": "The bank declined the payment."},
    }
