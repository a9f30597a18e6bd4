from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any


class CardDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    last4: Optional[str] = None
    brand: Optional[str] = None
    decline_code: Optional[str] = None


class PaymentFailureRecord(BaseModel):
    """The failed charge fields the alert is built from"""

    model_config = ConfigDict(frozen=True)

    id: str
    amount: int = 0  # minor units (cents)
    currency: str = "usd"
    created: int
    failure_message: Optional[str] = None
    failure_code: Optional[str] = None
    seller_message: Optional[str] = None
    customer: Optional[str] = None
    billing_email: Optional[str] = None
    card: Optional[CardDetails] = None

    @classmethod
    def from_charge(cls, charge: Dict[str, Any]) -> "PaymentFailureRecord":
        """Build a record from the data.object of a charge.failed event.
        Any nested object may be missing or null in the payload."""

        billing_details = charge.get("billing_details") or {}
        outcome = charge.get("outcome") or {}
        card = (charge.get("payment_method_details") or {}).get("card")
        customer = charge.get("customer")
        if isinstance(customer, dict):
            # expanded customer object
            customer = customer.get("id")

        return cls(
            id=charge.get("id") or "unknown",
            amount=charge.get("amount") or 0,
            currency=charge.get("currency") or "usd",
            created=charge.get("created") or 0,
            failure_message=charge.get("failure_message"),
            failure_code=charge.get("failure_code"),
            seller_message=outcome.get("seller_message"),
            customer=customer,
            billing_email=billing_details.get("email"),
            card=(
                CardDetails(last4=card.get("last4"), brand=card.get("brand"), decline_code=card.get("decline_code"))
                if card
                else None
            ),
        )


class CustomerInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class FormattedNotification(BaseModel):
    subject: str
    html: str


class TestNotificationResponse(BaseModel):
    success: bool = True
    message: str
    test_charge_id: str
    sent_to: str
