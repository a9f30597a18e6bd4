import asyncio
import resend
import logging
from app.configs.app_settings import settings
from app.custom_error import NotificationDeliveryError

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = settings.RESEND_API_KEY


class EmailService:
    """Service for sending emails via Resend"""

    def __init__(self, sender: str = settings.EMAIL_FROM, timeout_seconds: float = settings.EMAIL_SEND_TIMEOUT_SECONDS):
        self.sender = sender
        self.timeout_seconds = timeout_seconds

    async def send_email(self, to: str, subject: str, html: str) -> bool:
        """
        Send exactly one email. There is no retry: any transport error or a send that
        outlives timeout_seconds is raised as NotificationDeliveryError.
        """

        params = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        try:
            # resend's client is blocking, run it off the event loop with a hard upper bound
            email = await asyncio.wait_for(asyncio.to_thread(resend.Emails.send, params), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(f"❌ Email to {to} timed out after {self.timeout_seconds}s")
            raise NotificationDeliveryError(f"Email send timed out after {self.timeout_seconds} seconds")
        except Exception as e:
            logger.error(f"❌ Failed to send email to {to}: {str(e)}")
            raise NotificationDeliveryError(str(e)) from e

        logger.info(f"✅ Email sent to {to}: {email}")
        return True
