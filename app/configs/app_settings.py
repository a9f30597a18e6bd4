from pydantic_settings import BaseSettings
from typing import Optional

# pydantic_settings is not part of the core pydantic package anymore. Since Pydantic v2, the settings functionality has been split out into its own package.
# BaseSettings from pydantic-settings allow values to be pulled from the .env file (by its default), and provide defaults where applicable.


class Settings(BaseSettings):
    # Service identity
    SERVICE_NAME: str = "Stripe Failed Payments Monitor"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Stripe settings
    STRIPE_SECRET_KEY: str
    # a missing webhook secret means every incoming webhook is rejected
    STRIPE_WEBHOOK_SECRET: Optional[str] = None
    STRIPE_WEBHOOK_TOLERANCE: int = 300  # seconds

    # Resend API Key
    RESEND_API_KEY: str
    EMAIL_FROM: str = "Failed Payments Monitor <alerts@resend.dev>"
    EMAIL_SEND_TIMEOUT_SECONDS: float = 10.0

    # the one fixed recipient of every failed payment alert
    NOTIFICATION_EMAIL: str

    # timezone used when rendering charge dates inside the email
    DISPLAY_TIMEZONE: str = "UTC"

    class Config:
        # priority handling, the order is:
        # 1. System environment variables (highest priority)
        # 2. .env file (if it exists)
        # 3. Default values in the Settings class (lowest priority)
        env_file = ".env"
        case_sensitive = True


# the module is cached in sys.modules after the first import, so Settings() is read once per process
# and every "from app.configs.app_settings import settings" shares the same instance.
settings = Settings()
