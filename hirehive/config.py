"""
Configuration management for the HireHive backend.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Logging
    log_level: str = "INFO"

    # Notifications (delivery happens outside this service)
    notification_webhook_url: str = ""
    notification_timeout: float = 5.0

    # Operator alerting for inconsistent ledger state
    alert_webhook_url: str = ""

    # API
    cors_origins: str = "http://localhost:5173"
    posting_rate_limit: str = "10/minute"
    apply_rate_limit: str = "20/minute"
    recent_jobs_limit: int = 6

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
