"""
Rendering of failed payment alerts.

Every optional field of a failed charge goes through its own resolve_* function that
always returns a displayable string, so building the alert never fails on missing data.
"""

from datetime import datetime, timezone
from html import escape
from typing import Optional
from zoneinfo import ZoneInfo
from app.models.notification_models import PaymentFailureRecord, CustomerInfo, FormattedNotification

UNKNOWN_CUSTOMER = "Unknown Customer"
NO_EMAIL = "No email provided"
UNKNOWN_REASON = "Unknown reason"
UNKNOWN_BRAND = "Unknown"
NOT_AVAILABLE = "N/A"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "MXN": "MX$",
    "BRL": "R$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "INR": "₹",
    "KRW": "₩",
    "ILS": "₪",
    "VND": "₫",
}

# currencies whose Stripe amounts are already whole units
ZERO_DECIMAL_CURRENCIES = {
    "BIF", "CLP", "DJF", "GNF", "JPY", "KMF", "KRW", "MGA", "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
}


# ------------------------------------------------------------------------------------------------------------------------------------------------------------
# value formatting


def format_currency(amount: int, currency: str) -> str:
    """2999, "usd" -> "$29.99"; unknown currencies render as "29.99 XYZ" """

    code = (currency or "usd").upper()

    if code in ZERO_DECIMAL_CURRENCIES:
        value = f"{amount:,}"
    else:
        value = f"{amount / 100:,.2f}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{value} {code}"
    if value.startswith("-"):
        return f"-{symbol}{value[1:]}"
    return f"{symbol}{value}"


def format_datetime(moment: datetime, tz_name: str = "UTC") -> str:
    """-> "October 17, 2026 at 02:30 PM UTC" in the given timezone"""

    tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)
    local = moment.astimezone(tz)
    return f"{local:%B} {local.day}, {local:%Y} at {local:%I:%M %p} {local.tzname()}"


def format_timestamp(timestamp: int, tz_name: str = "UTC") -> str:
    """Unix seconds -> human readable local date/time"""
    return format_datetime(datetime.fromtimestamp(timestamp, tz=timezone.utc), tz_name)


# ------------------------------------------------------------------------------------------------------------------------------------------------------------
# resolve-with-default


def resolve_customer_name(customer: Optional[CustomerInfo]) -> str:
    return (customer.name if customer else None) or UNKNOWN_CUSTOMER


def resolve_customer_email(customer: Optional[CustomerInfo], billing_email: Optional[str]) -> str:
    return (customer.email if customer else None) or billing_email or NO_EMAIL


def resolve_failure_reason(record: PaymentFailureRecord) -> str:
    return record.failure_message or record.seller_message or UNKNOWN_REASON


def resolve_failure_code(record: PaymentFailureRecord) -> str:
    return record.failure_code or NOT_AVAILABLE


def resolve_card_last4(record: PaymentFailureRecord) -> str:
    return (record.card.last4 if record.card else None) or NOT_AVAILABLE


def resolve_card_brand(record: PaymentFailureRecord) -> str:
    brand = record.card.brand if record.card else None
    return brand.upper() if brand else UNKNOWN_BRAND


def resolve_decline_code(record: PaymentFailureRecord) -> str:
    return (record.card.decline_code if record.card else None) or NOT_AVAILABLE


# ------------------------------------------------------------------------------------------------------------------------------------------------------------


def build_failed_payment_subject(record: PaymentFailureRecord) -> str:
    return f"🚨 Failed Payment Alert - {format_currency(record.amount, record.currency)}"


def build_failed_payment_notification(
    record: PaymentFailureRecord,
    customer: Optional[CustomerInfo] = None,
    tz_name: str = "UTC",
    generated_at: Optional[datetime] = None,
) -> FormattedNotification:
    """Render the subject and HTML body of a failed payment alert"""

    generated_at = generated_at or datetime.now(timezone.utc)
    amount = format_currency(record.amount, record.currency)

    customer_id_line = f"<p><strong>Customer ID:</strong> {escape(customer.id)}</p>" if customer else ""

    html_content = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; border: 1px solid #ddd; border-radius: 8px;">
        <h2 style="color: #d32f2f; margin-bottom: 20px;">💳 Payment Failed</h2>

        <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin-bottom: 20px;">
            <h3 style="margin-top: 0; color: #333;">Payment Details</h3>
            <p><strong>Amount:</strong> {escape(amount)}</p>
            <p><strong>Date:</strong> {escape(format_timestamp(record.created, tz_name))}</p>
            <p><strong>Charge ID:</strong> {escape(record.id)}</p>
            <p><strong>Failure Reason:</strong> {escape(resolve_failure_reason(record))}</p>
            <p><strong>Failure Code:</strong> {escape(resolve_failure_code(record))}</p>
        </div>

        <div style="background-color: #e3f2fd; padding: 15px; border-radius: 5px; margin-bottom: 20px;">
            <h3 style="margin-top: 0; color: #333;">Customer Information</h3>
            <p><strong>Name:</strong> {escape(resolve_customer_name(customer))}</p>
            <p><strong>Email:</strong> {escape(resolve_customer_email(customer, record.billing_email))}</p>
            {customer_id_line}
        </div>

        <div style="background-color: #fff3e0; padding: 15px; border-radius: 5px;">
            <h3 style="margin-top: 0; color: #333;">Card Information</h3>
            <p><strong>Last 4 digits:</strong> ****{escape(resolve_card_last4(record))}</p>
            <p><strong>Brand:</strong> {escape(resolve_card_brand(record))}</p>
            <p><strong>Decline Code:</strong> {escape(resolve_decline_code(record))}</p>
        </div>

        <div style="margin-top: 20px; padding-top: 15px; border-top: 1px solid #eee; font-size: 12px; color: #666;">
            <p>This notification was sent automatically by your Stripe Failed Payments Monitor.</p>
            <p>Timestamp: {escape(format_datetime(generated_at, tz_name))}</p>
        </div>
    </div>
    """

    return FormattedNotification(subject=build_failed_payment_subject(record), html=html_content)
