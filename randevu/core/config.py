from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_TIMEZONE: str = "Europe/Istanbul"

    SLOT_STEP_MINUTES: int = 30
    STORE_TIMEOUT_SECONDS: float = 5.0

    DATA_DIR: str = "./data/appointments"
    USERS_FILE: str = "./data/users.json"

    NOTIFICATION_WEBHOOK_URL: str | None = None
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
