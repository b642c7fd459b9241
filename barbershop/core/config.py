from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    SALON_NAME: str = "AI Barber"

    # Empty path keeps the ledger in memory only.
    LEDGER_PATH: str = "./data/ledger.json"
    LEDGER_SEED: bool = True
    LEDGER_RESEED_ON_CORRUPT: bool = False

    # How long a confirmed booking stays visible before the workflow starts over.
    BOOKING_RESET_DELAY_SECONDS: float = 0.0

    ADMIN_EMAIL: str = "admin@aibarber.com"
    ADMIN_PASSWORD: str | None = None

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_VISION: str = "gpt-4o-mini"
    OPENAI_MODEL_IMAGE: str = "gpt-image-1"
    OPENAI_TEMPERATURE: float = 0.4
    OPENAI_IMAGE_SIZE: str = "1024x1024"

    NOTIFY_WEBHOOK_URL: str | None = None
    NOTIFY_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
