import stripe
from typing import Optional
from app.configs.app_settings import settings
from app.models.notification_models import CustomerInfo

stripe.api_key = settings.STRIPE_SECRET_KEY


# Event constants for the monitor
class StripeEventTypes:
    CHARGE_FAILED = "charge.failed"


class StripeConfig:
    """Simple wrapper for the Stripe operations the monitor needs"""

    @staticmethod
    def retrieve_customer(customer_id: str) -> Optional[CustomerInfo]:
        """Retrieve a customer by ID and keep only the fields the alert shows.
        Raises stripe.StripeError on lookup failure; a deleted customer yields None."""

        customer = stripe.Customer.retrieve(customer_id)

        if getattr(customer, "deleted", False):
            return None

        return CustomerInfo(
            id=customer.id,
            name=getattr(customer, "name", None),
            email=getattr(customer, "email", None),
        )
