import json
import stripe
import logging
from typing import Awaitable, Callable, Dict, List, Optional
from app.models.stripe_webhook_models import WebhookEvent
from app.services.activity_log_services import ActivityLogService
from app.custom_error import SignatureVerificationError

logger = logging.getLogger(__name__)

EventHandler = Callable[[WebhookEvent], Awaitable[None]]


class WebhookVerifier:
    """Turns a raw webhook request into a trusted WebhookEvent, or refuses it"""

    def __init__(self, activity_log: ActivityLogService, webhook_secret: Optional[str], tolerance: int = 300):
        self.activity_log = activity_log
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    def verify(self, payload: bytes, sig_header: Optional[str]) -> WebhookEvent:
        """Verify the Stripe-Signature header against the raw body, then parse the event.
        Every call leaves exactly one "received" or "verification failed" entry in the activity log."""

        try:
            event = self._construct_event(payload, sig_header)
        except SignatureVerificationError as e:
            self.activity_log.add(f"Webhook signature verification failed: {str(e)}")
            raise

        self.activity_log.add(f"Received Stripe webhook: {event.type}")
        return event

    def _construct_event(self, payload: bytes, sig_header: Optional[str]) -> WebhookEvent:
        if not self.webhook_secret:
            raise SignatureVerificationError("Webhook secret is not configured")

        if not sig_header:
            raise SignatureVerificationError("Missing stripe-signature header")

        try:
            payload_text = payload.decode("utf-8")
        except UnicodeDecodeError:
            raise SignatureVerificationError("Invalid payload")

        # t=<timestamp>,v1=<hmac-sha256 of "<timestamp>.<body>">, timestamp must be within the tolerance window
        try:
            stripe.WebhookSignature.verify_header(payload_text, sig_header, self.webhook_secret, self.tolerance)
        except stripe.SignatureVerificationError as e:
            raise SignatureVerificationError(str(e))

        # signature is good, only now is the body looked at
        try:
            return WebhookEvent.model_validate(json.loads(payload_text))
        except ValueError:
            raise SignatureVerificationError("Invalid payload")


class EventRouter:
    """Registry of event type -> handler. Unregistered types are only logged."""

    def __init__(self, activity_log: ActivityLogService):
        self.activity_log = activity_log
        self._handlers: Dict[str, EventHandler] = {}

    def register(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type] = handler

    @property
    def monitored_events(self) -> List[str]:
        return list(self._handlers)

    async def dispatch(self, event: WebhookEvent) -> bool:
        """Run the handler for the event type and return True, or log it as unhandled and return False.
        Handler errors propagate to the caller."""

        handler = self._handlers.get(event.type)

        if handler is None:
            logger.info(f"⚠️ Unhandled webhook event type: {event.type}")
            self.activity_log.add(f"Unhandled event type: {event.type}")
            return False

        await handler(event)
        return True
