from fastapi import APIRouter, Request, Depends
import logging
from app.utils.app_state_handlers import get_activity_log, get_webhook_verifier, get_event_router
from app.services.activity_log_services import ActivityLogService
from app.services.stripe_webhook_services import WebhookVerifier, EventRouter
from app.models.stripe_webhook_models import StripeWebhookEventResponse
from app.custom_error import SignatureVerificationError, WebhookError, ServerError

stripe_webhook_router = APIRouter(tags=["Webhooks"])
logger = logging.getLogger(__name__)


# ################################################################################################################################


@stripe_webhook_router.post("/webhook", response_model=StripeWebhookEventResponse)
@stripe_webhook_router.post("/stripe/webhook", response_model=StripeWebhookEventResponse)
async def stripe_webhook_handler(
    request: Request,
    verifier: WebhookVerifier = Depends(get_webhook_verifier),
    event_router: EventRouter = Depends(get_event_router),
    activity_log: ActivityLogService = Depends(get_activity_log),
):
    """Handle Stripe webhook events"""

    # Get the raw body and signature
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")

    try:
        event = verifier.verify(payload, sig_header)
    except SignatureVerificationError as e:
        logger.error(f"❌ Webhook error: {str(e)}")
        raise WebhookError(f"Webhook Error: {str(e)}")

    logger.info(f"🔔 Received Stripe webhook: {event.type}")

    # the notification is sent before we answer, so a failure here makes Stripe retry the delivery
    try:
        await event_router.dispatch(event)
    except Exception as e:
        logger.error(f"❌ Unexpected webhook error: {str(e)}")
        activity_log.add(f"Error processing webhook: {str(e)}")
        raise ServerError("Failed to process webhook")

    return StripeWebhookEventResponse(received=True)
