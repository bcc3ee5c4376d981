from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "QuotaLink URL Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    base_url: str = "http://127.0.0.1:8000"

    # Short code generation
    short_code_strategy: str = "hash"  # Options: "hash", "random"
    short_code_length: int = 7
    short_code_hash_attempts: int = 10  # Seeded retries before random fallback
    short_code_hash_algorithm: str = "md5"

    # Record defaults
    default_max_clicks: int = 100
    default_expiration_hours: int = 24

    # Expiry sweeper
    sweeper_enabled: bool = True
    sweep_interval_seconds: float = 300  # 5 minutes
    sweep_shutdown_timeout_seconds: float = 5

    # Notifications
    notification_backend: str = "logging"  # Options: "logging", "memory", "null"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
