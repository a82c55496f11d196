"""
Application configuration settings.

Centralized configuration using Pydantic Settings for type safety and validation.

Decision: Using pydantic-settings for:
1. Type-safe configuration
2. Environment variable loading
3. Easy testing with different configs
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "newsletter-api"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False

    # Public URL used to build confirmation links sent by email
    application_base_url: str = "http://127.0.0.1:8000"

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "newsletter"
    database_user: str = "postgres"
    database_password: str = "postgres"
    database_min_connections: int = 1
    database_max_connections: int = 10

    # Email Service (SMTP)
    smtp_host: str = "mailhog"
    smtp_port: int = 1025
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_from_email: str = "newsletter@example.com"
    smtp_use_tls: bool = False
    smtp_timeout_seconds: float = 10.0


# Global settings instance
settings = Settings()
