"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_base_url: str = "https://api.rawg.io/api"
    api_key: str = ""
    mandatory_genre: str = "indie"
    cache_ttl_seconds: float = 600.0
    cache_max_entries: int | None = 1000  # None keeps every entry
    request_timeout: float | None = 30.0
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    environment: str = "development"  # "production" switches logs to JSON
    validation_errors_as_client_errors: bool = False  # Opt-in: answer 400 instead of 500
