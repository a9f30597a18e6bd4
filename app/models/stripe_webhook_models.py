from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any


class WebhookEvent(BaseModel):
    """A Stripe event whose signature has already been verified"""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    type: str
    created: Optional[int] = None
    data: Dict[str, Any] = {}

    @property
    def data_object(self) -> Dict[str, Any]:
        return self.data.get("object") or {}


class StripeWebhookEventResponse(BaseModel):
    """Response model for webhook processing"""

    received: bool = True
