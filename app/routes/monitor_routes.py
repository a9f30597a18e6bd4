from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging
from app.configs.app_settings import settings
from app.utils.app_state_handlers import get_activity_log, get_event_router, get_failed_payment_service
from app.services.activity_log_services import ActivityLogService, RECENT_LOGS_LIMIT
from app.services.stripe_webhook_services import EventRouter
from app.services.failed_payment_services import FailedPaymentService, build_test_charge
from app.models.activity_log_models import ActivityLogResponse
from app.models.notification_models import PaymentFailureRecord, TestNotificationResponse

monitor_router = APIRouter(tags=["Monitor"])
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "POST /webhook": "Receives Stripe webhook events",
    "GET /health": "Health check",
    "GET /logs": "View recent activity logs",
    "POST /test": "Test notification system",
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


@monitor_router.get("/")
async def service_status(event_router: EventRouter = Depends(get_event_router)):
    return {
        "service": settings.SERVICE_NAME,
        "status": "running",
        "endpoints": ENDPOINTS,
        "notification_email": settings.NOTIFICATION_EMAIL,
        "monitored_events": event_router.monitored_events,
        "timestamp": _now_iso(),
    }


@monitor_router.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": _now_iso(), "service": settings.SERVICE_NAME}


@monitor_router.get("/logs", response_model=ActivityLogResponse)
async def get_logs(activity_log: ActivityLogService = Depends(get_activity_log)):
    """Most recent activity entries, oldest first"""
    recent_logs, total_logs = activity_log.recent(RECENT_LOGS_LIMIT)
    return ActivityLogResponse(recent_logs=recent_logs, total_logs=total_logs)


@monitor_router.post("/test", response_model=TestNotificationResponse)
async def trigger_test_notification(
    activity_log: ActivityLogService = Depends(get_activity_log),
    failed_payment_service: FailedPaymentService = Depends(get_failed_payment_service),
):
    """Send a notification for a synthetic failed charge through the same path as a real webhook"""

    activity_log.add("Manual test initiated")
    record = PaymentFailureRecord.from_charge(build_test_charge())

    try:
        await failed_payment_service.send_failed_payment_notification(record)
    except Exception as e:
        logger.error(f"❌ Test notification failed: {str(e)}")
        activity_log.add(f"Test failed: {str(e)}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return TestNotificationResponse(
        success=True,
        message="Test notification sent successfully",
        test_charge_id=record.id,
        sent_to=failed_payment_service.notification_email,
    )
