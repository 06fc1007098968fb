from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "127.0.0.1"
    app_port: int = 8080
    debug: bool = True
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Storage
    csv_path: str = "rsvp.csv"

    # Email
    # In test mode notifications are logged instead of sent
    test_mode: bool = False
    emails_from: str = "rsvp@example.com"
    admin_emails: list[str] = []

    # Email (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_user: str = ""
    smtp_password: str = ""

    # Email (Resend) - if set, use Resend API instead of SMTP
    resend_api_key: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
