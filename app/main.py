from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
import logging
import uvicorn
from app.configs.app_settings import settings
from app.configs.stripe_config import StripeConfig, StripeEventTypes
from app.services.activity_log_services import ActivityLogService
from app.services.email_services import EmailService
from app.services.stripe_webhook_services import WebhookVerifier, EventRouter
from app.services.failed_payment_services import FailedPaymentService, CustomerLookup
from app.routes.stripe_webhook_route import stripe_webhook_router
from app.routes.monitor_routes import monitor_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # before yield = code to run during startup
    app.state.activity_log.add(f"{settings.SERVICE_NAME} started on port {settings.PORT}")
    logger.info("✅ Failed payments monitor ready")

    yield
    # after yield = code to run during shutdown
    app.state.activity_log.clear()
    logger.info("✅ Activity log cleared")


def create_app(
    activity_log: Optional[ActivityLogService] = None,
    email_service: Optional[EmailService] = None,
    customer_lookup: CustomerLookup = StripeConfig.retrieve_customer,
) -> FastAPI:
    """Build the application and the single instance of each component it owns"""

    app = FastAPI(title=settings.SERVICE_NAME, version="1.0.0", lifespan=lifespan)

    if activity_log is None:
        activity_log = ActivityLogService()
    failed_payment_service = FailedPaymentService(
        activity_log=activity_log,
        email_service=email_service if email_service is not None else EmailService(),
        customer_lookup=customer_lookup,
        notification_email=settings.NOTIFICATION_EMAIL,
        display_timezone=settings.DISPLAY_TIMEZONE,
    )
    event_router = EventRouter(activity_log)
    event_router.register(StripeEventTypes.CHARGE_FAILED, failed_payment_service.handle_charge_failed)

    app.state.activity_log = activity_log
    app.state.failed_payment_service = failed_payment_service
    app.state.event_router = event_router
    app.state.webhook_verifier = WebhookVerifier(
        activity_log, settings.STRIPE_WEBHOOK_SECRET, tolerance=settings.STRIPE_WEBHOOK_TOLERANCE
    )

    # Include routers
    app.include_router(stripe_webhook_router)
    app.include_router(monitor_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
