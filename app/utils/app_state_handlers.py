from fastapi import Request
from app.services.activity_log_services import ActivityLogService
from app.services.stripe_webhook_services import WebhookVerifier, EventRouter
from app.services.failed_payment_services import FailedPaymentService

# every component is built once per application in create_app() and kept on app.state,
# so a test can build a fresh app and get a fresh activity log with it.
# these dependency functions hand the instances to the routes.


def get_activity_log(request: Request) -> ActivityLogService:
    """Dependency function to get the application's activity log"""
    return request.app.state.activity_log


def get_webhook_verifier(request: Request) -> WebhookVerifier:
    return request.app.state.webhook_verifier


def get_event_router(request: Request) -> EventRouter:
    return request.app.state.event_router


def get_failed_payment_service(request: Request) -> FailedPaymentService:
    return request.app.state.failed_payment_service
