from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Companies Directory"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Security
    cors_origins: list[str] = []  # Empty by default for security

    # Sentry
    sentry_dsn: str | None = None

    # Directory cache
    cache_ttl_seconds: int = 3600
    refresh_single_flight: bool = True
    synthesizer_seed: int | None = None

    # Primary registry (SEC EDGAR company tickers)
    registry_url: str = "https://www.sec.gov/files/company_tickers.json"
    registry_timeout_seconds: float = 5.0
    registry_user_agent: str = "Companies-Directory-App (student@example.com)"
    registry_limit: int = 20

    # Client session / CLI
    page_size: int = 6
    directory_api_base_url: str = "http://localhost:5000"
    directory_api_timeout_seconds: float = 10.0

    # Metrics
    metrics_backend: str = "stdout"
    metrics_namespace: str = "directory"
    metrics_disable: bool = False
    metrics_statsd_host: str = "127.0.0.1"
    metrics_statsd_port: int = 8125

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
