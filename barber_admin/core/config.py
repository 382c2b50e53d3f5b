from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BACKEND_PROVIDER: str = "http"
    BACKEND_BASE_URL: str | None = None
    BACKEND_API_TOKEN: str | None = None
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DEFAULT_SERVICE_DURATION_MINUTES: int = 60
    # Day-of-week filtering is evaluated in this zone. Some deployed copies used local time.
    DAY_OF_WEEK_TIMEZONE: str = "UTC"
    FALLBACK_STAFF_COLOR: str = "#4B5563"


settings = Settings()
