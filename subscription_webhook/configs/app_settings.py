from pydantic_settings import BaseSettings

# BaseSettings from pydantic-settings pulls values from the process environment first, then the .env file, then the defaults below.
# A missing required value raises a pydantic ValidationError when this module is imported, so the service refuses to start without credentials.


class Settings(BaseSettings):
    # Stripe credentials
    STRIPE_API_KEY: str
    STRIPE_WEBHOOK_SECRET: str

    # Stripe client behaviour
    STRIPE_API_VERSION: str = "2023-10-16"
    STRIPE_TIMEOUT_SECONDS: float = 20
    STRIPE_MAX_NETWORK_RETRIES: int = 2

    # Webhook settings
    WEBHOOK_TOLERANCE_SECONDS: int = 600  # max skew between the signature timestamp and now
    WEBHOOK_PATH: str = "/webhook"

    # Server
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    class Config:
        # priority handling, the order is:
        # 1. System environment variables (highest priority)
        # 2. .env file (if it exists, relative to the CWD of the running process)
        # 3. Default values in the Settings class (lowest priority)
        env_file = ".env"
        case_sensitive = True


# module is executed once per process, every "from ... import settings" shares this instance
settings = Settings()
